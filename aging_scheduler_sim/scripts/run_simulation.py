from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import List, Optional

# Ensure repo root is on sys.path so this script can be executed directly
SCRIPT_DIR = os.path.dirname(os.path.abspath(__file__))
REPO_ROOT = os.path.abspath(os.path.join(SCRIPT_DIR, os.pardir, os.pardir))
if REPO_ROOT not in sys.path:
    sys.path.insert(0, REPO_ROOT)

from aging_scheduler_sim.backend.core import SchedulingError
from aging_scheduler_sim.backend.os_kernel import OSKernel, KernelConfig
from aging_scheduler_sim.backend.simulator import Scheduler, SimulationResult
from aging_scheduler_sim.backend.report import format_process_table, summary_table
from aging_scheduler_sim.backend.visualizer import plot_gantt


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="SJF vs priority-with-aging scheduling simulator")
    p.add_argument("--n", type=int, default=5, help="Number of synthetic processes per batch")
    p.add_argument("--aging-threshold", type=int, default=5, help="Wait (in ticks since arrival) before a process ages")
    p.add_argument("--policy", choices=["sjf", "aging", "both"], default="both")
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--out", type=str, default=None, help="Save Gantt chart(s) to this PNG path")
    p.add_argument("--export", type=str, default=None, help="Base path for JSON/CSV event logs")
    p.add_argument("--verbose", action="store_true", help="Print engine debug trace")
    return p.parse_args(argv)


def _suffixed(path: str, suffix: str) -> str:
    root, ext = os.path.splitext(path)
    return f"{root}_{suffix}{ext}"


def _emit(title: str, result: SimulationResult, args: argparse.Namespace) -> None:
    print(f"\nSimulating {title}:")
    print(format_process_table(result.processes))
    name = result.policy.lower()
    if args.out:
        out = _suffixed(args.out, name) if args.policy == "both" else args.out
        plot_gantt(result.processes, result.logger, out, title=title)
        print(f"Saved plot to {out}")
    if args.export:
        base = f"{args.export}_{name}"
        result.logger.export_json(base + ".json")
        result.logger.export_csv(base)
        print(f"Logs written to {base}.json / {base}_*.csv")


def main(argv: Optional[List[str]] = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        kernel = OSKernel(KernelConfig(process_count=args.n, aging_threshold=args.aging_threshold, seed=args.seed))
        results = {}
        if args.policy == "both":
            run = kernel.run_reference_flow()
            print("Generated Processes:")
            print(format_process_table(run.initial))
            _emit("Shortest Job First (SJF)", run.sjf, args)
            print("\nRegenerated Processes:")
            print(format_process_table(run.aging_initial))
            _emit("Priority Scheduling with Aging", run.aging, args)
            results = {Scheduler.SJF: run.sjf, Scheduler.AGING: run.aging}
        else:
            procs = kernel.generate()
            print("Generated Processes:")
            print(format_process_table(procs))
            if args.policy == "sjf":
                result = kernel.run(procs, Scheduler.SJF)
                _emit("Shortest Job First (SJF)", result, args)
            else:
                result = kernel.run(procs, Scheduler.AGING)
                _emit("Priority Scheduling with Aging", result, args)
            results = {result.policy: result}
    except SchedulingError as e:
        raise SystemExit(f"error: {e}")

    if args.n > 0:
        print("\nSummary:")
        print(summary_table(results).to_string())


if __name__ == "__main__":
    main()
