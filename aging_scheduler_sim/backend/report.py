"""
Tabular views of a batch and of finished simulations.
"""

from __future__ import annotations

from typing import Dict, List

import pandas as pd

from .core import ProcessRecord
from .simulator import SimulationResult


PROCESS_COLUMNS = ["ID", "Arrival", "Exec", "Priority", "Start", "End", "Wait"]
SUMMARY_COLUMNS = ["avg_waiting", "avg_turnaround", "throughput", "cpu_utilization", "total_time", "order"]


def process_table(processes: List[ProcessRecord]) -> pd.DataFrame:
    """One row per process, in batch order.

    ``Exec`` shows the current remaining execution time, which is 0 for
    every process once a run has finished.
    """
    rows = [
        [p.pid, p.arrival_time, p.execution_time, p.priority, p.start_time, p.end_time, p.waiting_time]
        for p in processes
    ]
    return pd.DataFrame(rows, columns=PROCESS_COLUMNS)


def format_process_table(processes: List[ProcessRecord]) -> str:
    if not processes:
        return "(no processes)"
    return process_table(processes).to_string(index=False)


def summary_table(results: Dict[str, SimulationResult]) -> pd.DataFrame:
    data = {
        name: [
            round(r.avg_waiting_time, 3),
            round(r.avg_turnaround_time, 3),
            round(r.throughput, 3),
            round(r.cpu_utilization, 1),
            r.total_time,
            " ".join(str(pid) for pid in r.dispatch_order),
        ]
        for name, r in results.items()
    }
    return pd.DataFrame.from_dict(data, orient="index", columns=SUMMARY_COLUMNS)
