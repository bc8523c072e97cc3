"""
Scheduling engines: non-preemptive SJF and priority scheduling with aging.

Both engines share one discrete-time loop. On each iteration every arrived,
unfinished process is admitted to the ready set; if the set is non-empty
one process is selected and run to completion in a single step, otherwise
the virtual clock advances by one idle tick.
"""

from abc import ABC, abstractmethod
from typing import Iterable, List
import copy
import logging

from .core import ProcessRecord, ReadyQueue, ProcessState, InvalidParameter
from .utils import EventLogger, validate_batch

logger = logging.getLogger(__name__)


class BaseEngine(ABC):
    """Abstract base class for the scheduling engines."""

    policy_name = "BASE"

    def __init__(self):
        self.logger = EventLogger()
        self.current_time = 0
        self.idle_time = 0
        self.dispatch_order: List[int] = []

    @abstractmethod
    def select(self, ready_queue: ReadyQueue) -> ProcessRecord:
        """Remove and return the process to dispatch from a non-empty queue."""
        pass

    def before_select(self, ready_queue: ReadyQueue) -> None:
        """Hook run on every iteration after admission, before selection."""

    def run(self, processes: Iterable[ProcessRecord]) -> List[ProcessRecord]:
        """Simulate the batch and return the fully-updated copy.

        The input records are left untouched. The returned list is sorted
        by arrival time (stable with respect to the input order).
        """
        processes = list(processes)
        validate_batch(processes)
        batch = sorted(copy.deepcopy(processes), key=lambda p: p.arrival_time)

        self.logger = EventLogger()
        self.current_time = 0
        self.idle_time = 0
        self.dispatch_order = []

        ready_queue = ReadyQueue(batch)
        completed = 0
        while completed < len(batch):
            for proc in ready_queue.admit(self.current_time):
                self.logger.log_process_event(self.current_time, proc.pid, "admit")

            self.before_select(ready_queue)

            if not ready_queue.is_empty():
                self.dispatch(self.select(ready_queue))
                completed += 1
            else:
                # CPU idle until the next arrival
                self.logger.log_timeline_slice(self.current_time, self.current_time + 1, None, self.policy_name)
                self.current_time += 1
                self.idle_time += 1

        logger.debug("%s finished %d processes at t=%d (idle %d)",
                     self.policy_name, len(batch), self.current_time, self.idle_time)
        return batch

    def dispatch(self, proc: ProcessRecord) -> None:
        """Start the selected process and run it to completion."""
        proc.start_time = self.current_time
        proc.waiting_time = proc.start_time - proc.arrival_time
        self._run_to_completion(proc)

    def _run_to_completion(self, proc: ProcessRecord) -> None:
        start = self.current_time
        proc.state = ProcessState.RUNNING
        self.logger.log_process_event(start, proc.pid, "start")
        logger.debug("%s t=%d dispatch pid=%d exec=%d prio=%d",
                     self.policy_name, start, proc.pid, proc.execution_time, proc.priority)

        self.current_time += proc.execution_time
        proc.execution_time = 0
        proc.end_time = self.current_time
        proc.state = ProcessState.TERMINATED

        self.logger.log_timeline_slice(start, self.current_time, proc.pid, self.policy_name)
        self.logger.log_process_event(self.current_time, proc.pid, "complete")
        self.dispatch_order.append(proc.pid)


class SJFEngine(BaseEngine):
    """Non-preemptive Shortest Job First.

    Ties on execution time go to the earliest arrival, then the lowest pid.
    """

    policy_name = "SJF"

    def select(self, ready_queue: ReadyQueue) -> ProcessRecord:
        return ready_queue.pop(mode='sjf')


class AgingPriorityEngine(BaseEngine):
    """Non-preemptive priority scheduling with aging.

    On every loop iteration each ready process that has been in the system
    for at least ``aging_threshold`` time units has its priority number
    lowered by one (floor 1). Dispatch picks the HIGHEST priority number,
    so aged processes become less competitive under this comparator.
    Ties go to the earliest arrival, then the lowest pid.
    """

    policy_name = "AGING"

    def __init__(self, aging_threshold: int = 5):
        super().__init__()
        if aging_threshold < 0:
            raise InvalidParameter(f"aging_threshold must be >= 0, got {aging_threshold}")
        self.aging_threshold = aging_threshold

    def before_select(self, ready_queue: ReadyQueue) -> None:
        for proc in ready_queue.get_all_processes():
            if self.current_time - proc.arrival_time >= self.aging_threshold:
                old = proc.priority
                proc.priority = max(1, proc.priority - 1)
                if proc.priority != old:
                    self.logger.log_process_event(self.current_time, proc.pid, "age", f"{old}->{proc.priority}")
                    logger.debug("AGING t=%d pid=%d priority %d -> %d",
                                 self.current_time, proc.pid, old, proc.priority)

    def select(self, ready_queue: ReadyQueue) -> ProcessRecord:
        return ready_queue.pop(mode='priority')

    def dispatch(self, proc: ProcessRecord) -> None:
        # only the first dispatch fixes start and waiting time
        if proc.start_time == -1:
            proc.start_time = self.current_time
            proc.waiting_time = self.current_time - proc.arrival_time
        self._run_to_completion(proc)
