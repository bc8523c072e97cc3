from __future__ import annotations

from typing import List, Dict, Iterable
from dataclasses import dataclass

from .core import ProcessRecord, InvalidParameter
from .schedulers import BaseEngine, SJFEngine, AgingPriorityEngine
from .utils import (
    EventLogger,
    compute_waiting_times,
    compute_turnaround_times,
    compute_avg,
    compute_throughput,
    compute_cpu_utilization,
)


@dataclass
class SimulationResult:
    policy: str
    processes: List[ProcessRecord]
    total_time: int
    idle_time: int
    dispatch_order: List[int]
    waiting_times: Dict[int, int]
    turnaround_times: Dict[int, int]
    avg_waiting_time: float
    avg_turnaround_time: float
    throughput: float
    cpu_utilization: float
    logger: EventLogger


class Scheduler:
    SJF = "SJF"       # non-preemptive shortest job first
    AGING = "AGING"   # non-preemptive priority with aging (max priority value wins)

    ALL = (SJF, AGING)


def make_engine(policy: str, aging_threshold: int = 5) -> BaseEngine:
    key = policy.upper()
    if key == Scheduler.SJF:
        return SJFEngine()
    if key == Scheduler.AGING:
        return AgingPriorityEngine(aging_threshold)
    raise InvalidParameter(f"unknown policy {policy!r}; expected one of {', '.join(Scheduler.ALL)}")


def simulate(
    processes: Iterable[ProcessRecord],
    policy: str = Scheduler.SJF,
    aging_threshold: int = 5,
) -> SimulationResult:
    engine = make_engine(policy, aging_threshold)
    finished = engine.run(processes)

    total_time = engine.current_time
    waiting_times = compute_waiting_times(finished)
    turnaround_times = compute_turnaround_times(finished)

    return SimulationResult(
        policy=engine.policy_name,
        processes=finished,
        total_time=total_time,
        idle_time=engine.idle_time,
        dispatch_order=list(engine.dispatch_order),
        waiting_times=waiting_times,
        turnaround_times=turnaround_times,
        avg_waiting_time=compute_avg(list(waiting_times.values())),
        avg_turnaround_time=compute_avg(list(turnaround_times.values())),
        throughput=compute_throughput(finished, total_time),
        cpu_utilization=compute_cpu_utilization(total_time - engine.idle_time, total_time),
        logger=engine.logger,
    )


def compare_policies(processes: Iterable[ProcessRecord], aging_threshold: int = 5) -> Dict[str, SimulationResult]:
    """Run both policies over the same batch; the input is not modified."""
    procs = list(processes)
    return {
        Scheduler.SJF: simulate(procs, Scheduler.SJF),
        Scheduler.AGING: simulate(procs, Scheduler.AGING, aging_threshold=aging_threshold),
    }
