"""
Core data structures for the scheduling simulator.
Includes the ProcessRecord entity, the error hierarchy and the ReadyQueue.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Set


class SchedulingError(ValueError):
    """Base class for precondition violations caught at the boundary."""


class InvalidProcess(SchedulingError):
    """A process record was constructed with out-of-domain values."""


class InvalidParameter(SchedulingError):
    """An engine or generator parameter is out of range."""


class InvalidBatch(SchedulingError):
    """A batch violates the caller contract (e.g. duplicate pids)."""


class ProcessState(Enum):
    """Lifecycle of a process inside one simulation run."""
    NEW = "NEW"
    READY = "READY"
    RUNNING = "RUNNING"
    TERMINATED = "TERMINATED"


@dataclass
class ProcessRecord:
    """One schedulable unit of work.

    ``execution_time`` holds the remaining service time and is zeroed the
    instant the process is dispatched. ``burst_time`` keeps the value seen
    at construction so reports can still show the original demand.
    """
    pid: int
    arrival_time: int
    execution_time: int
    priority: int
    start_time: int = -1
    end_time: int = -1
    waiting_time: int = 0
    state: ProcessState = ProcessState.NEW
    burst_time: int = field(init=False)

    def __post_init__(self):
        if self.pid < 1:
            raise InvalidProcess(f"pid must be positive, got {self.pid}")
        if self.arrival_time < 0:
            raise InvalidProcess(f"process {self.pid}: arrival_time must be >= 0, got {self.arrival_time}")
        if self.execution_time <= 0:
            raise InvalidProcess(f"process {self.pid}: execution_time must be > 0, got {self.execution_time}")
        if self.priority < 1:
            raise InvalidProcess(f"process {self.pid}: priority must be >= 1, got {self.priority}")
        self.burst_time = self.execution_time

    @property
    def completed(self) -> bool:
        return self.execution_time == 0

    @property
    def turnaround_time(self) -> Optional[int]:
        if self.end_time < 0:
            return None
        return self.end_time - self.arrival_time


class ReadyQueue:
    """Ready set over a fixed batch.

    Members are stored as indices into the batch rather than as records,
    and selection goes through a total-order key so insertion order never
    influences which process is dispatched.
    """
    def __init__(self, batch: List[ProcessRecord]):
        self._batch = batch
        self._items: List[int] = []
        self._members: Set[int] = set()

    def admit(self, now: int) -> List[ProcessRecord]:
        """Admit every arrived, unfinished process not already queued.

        Returns the records added by this call; calling it again at the
        same ``now`` adds nothing.
        """
        admitted = []
        for idx, proc in enumerate(self._batch):
            if proc.arrival_time <= now and proc.execution_time > 0 and idx not in self._members:
                self._items.append(idx)
                self._members.add(idx)
                proc.state = ProcessState.READY
                admitted.append(proc)
        return admitted

    def _select_index(self, mode: str = 'sjf') -> Optional[int]:
        """Return the position in _items of the next process for mode."""
        if not self._items:
            return None

        batch = self._batch
        if mode == 'sjf':
            # shortest execution time, then earliest arrival, then lowest pid
            return min(range(len(self._items)),
                       key=lambda i: (batch[self._items[i]].execution_time,
                                      batch[self._items[i]].arrival_time,
                                      batch[self._items[i]].pid))
        elif mode == 'priority':
            # highest priority number, then earliest arrival, then lowest pid
            return max(range(len(self._items)),
                       key=lambda i: (batch[self._items[i]].priority,
                                      -batch[self._items[i]].arrival_time,
                                      -batch[self._items[i]].pid))
        raise ValueError(f"unknown selection mode: {mode!r}")

    def pop(self, mode: str = 'sjf') -> Optional[ProcessRecord]:
        """Remove and return the next process according to mode."""
        pos = self._select_index(mode)
        if pos is None:
            return None
        idx = self._items.pop(pos)
        self._members.discard(idx)
        return self._batch[idx]

    def peek(self, mode: str = 'sjf') -> Optional[ProcessRecord]:
        """View the next process according to mode without removing it."""
        pos = self._select_index(mode)
        if pos is None:
            return None
        return self._batch[self._items[pos]]

    def remove(self, pid: int) -> Optional[ProcessRecord]:
        """Remove a specific process by pid."""
        for pos, idx in enumerate(self._items):
            if self._batch[idx].pid == pid:
                del self._items[pos]
                self._members.discard(idx)
                return self._batch[idx]
        return None

    def is_empty(self) -> bool:
        return len(self._items) == 0

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, pid: int) -> bool:
        return any(self._batch[idx].pid == pid for idx in self._items)

    def get_all_processes(self) -> List[ProcessRecord]:
        return [self._batch[idx] for idx in self._items]
