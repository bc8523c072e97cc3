from __future__ import annotations

from typing import List, Dict, Optional, Any, Tuple, Iterable
import json
import csv

import numpy as np

from .core import ProcessRecord, InvalidBatch, InvalidParameter


class EventLogger:
    def __init__(self) -> None:
        self.process_events: List[Dict[str, Any]] = []
        self.timeline: List[Dict[str, Any]] = []

    def log_process_event(self, time_s: int, pid: int, event: str, detail: Optional[str] = None) -> None:
        self.process_events.append({
            "time": time_s,
            "pid": pid,
            "event": event,
            "detail": detail,
        })

    def log_timeline_slice(self, start: int, end: int, pid: Optional[int], policy: str) -> None:
        # consecutive idle ticks collapse into a single slice
        if pid is None and self.timeline:
            last = self.timeline[-1]
            if last["pid"] is None and last["end"] == start and last["policy"] == policy:
                last["end"] = end
                return
        self.timeline.append({
            "start": start,
            "end": end,
            "pid": pid,
            "policy": policy,
        })

    def events_for(self, pid: int) -> List[Dict[str, Any]]:
        return [e for e in self.process_events if e["pid"] == pid]

    def export_json(self, path: str) -> None:
        data = {
            "process_events": self.process_events,
            "timeline": self.timeline,
        }
        with open(path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2)

    def export_csv(self, base_path_no_ext: str) -> None:
        with open(f"{base_path_no_ext}_events.csv", "w", newline="", encoding="utf-8") as f:
            writer = csv.DictWriter(f, fieldnames=["time", "pid", "event", "detail"])
            writer.writeheader()
            for row in self.process_events:
                writer.writerow(row)
        with open(f"{base_path_no_ext}_timeline.csv", "w", newline="", encoding="utf-8") as f:
            writer = csv.DictWriter(f, fieldnames=["start", "end", "pid", "policy"])
            writer.writeheader()
            for row in self.timeline:
                writer.writerow(row)


def generate_processes(
    count: int,
    seed: Optional[int] = None,
    arrival_range: Tuple[int, int] = (0, 10),
    execution_range: Tuple[int, int] = (1, 10),
    priority_range: Tuple[int, int] = (1, 5),
) -> List[ProcessRecord]:
    """Draw a synthetic batch with uniformly distributed integer fields.

    Ranges are inclusive on both ends. Pids run from 1 to ``count``.
    """
    if count < 0:
        raise InvalidParameter(f"process count must be >= 0, got {count}")
    rng = np.random.default_rng(seed)
    procs: List[ProcessRecord] = []
    for i in range(count):
        procs.append(ProcessRecord(
            pid=i + 1,
            arrival_time=int(rng.integers(arrival_range[0], arrival_range[1], endpoint=True)),
            execution_time=int(rng.integers(execution_range[0], execution_range[1], endpoint=True)),
            priority=int(rng.integers(priority_range[0], priority_range[1], endpoint=True)),
        ))
    return procs


def validate_batch(processes: Iterable[Any]) -> None:
    seen = set()
    for p in processes:
        if not isinstance(p, ProcessRecord):
            raise InvalidBatch(f"batch entries must be ProcessRecord, got {type(p).__name__}")
        if p.pid in seen:
            raise InvalidBatch(f"duplicate pid {p.pid} in batch")
        # finished records would never be admitted and the run would not end
        if p.execution_time <= 0 or p.priority < 1 or p.start_time != -1:
            raise InvalidBatch(f"process {p.pid} has already been scheduled; pass unscheduled records")
        seen.add(p.pid)


def compute_waiting_times(processes: List[ProcessRecord]) -> Dict[int, int]:
    return {p.pid: p.waiting_time for p in processes if p.start_time >= 0}


def compute_turnaround_times(processes: List[ProcessRecord]) -> Dict[int, int]:
    tat: Dict[int, int] = {}
    for p in processes:
        if p.end_time < 0:
            continue
        tat[p.pid] = p.end_time - p.arrival_time
    return tat


def compute_avg(values: List[float]) -> float:
    return sum(values) / len(values) if values else 0.0


def compute_throughput(processes: List[ProcessRecord], total_time: float) -> float:
    if total_time <= 0:
        return 0.0
    completed = len([p for p in processes if p.end_time >= 0])
    return completed / total_time


def compute_cpu_utilization(busy_time: float, total_time: float) -> float:
    if total_time <= 0:
        return 0.0
    return (busy_time / total_time) * 100
