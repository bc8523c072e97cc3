from __future__ import annotations

import shlex
from typing import List, Optional
from colorama import Fore, Style, init as colorama_init

from .core import ProcessRecord, SchedulingError
from .utils import generate_processes
from .simulator import simulate, Scheduler, SimulationResult
from .report import format_process_table
from .visualizer import plot_gantt


class ManualTerminal:
    def __init__(self) -> None:
        colorama_init(autoreset=True)
        self.processes: List[ProcessRecord] = []
        self.last_result: Optional[SimulationResult] = None

    def prompt(self) -> None:
        print(Fore.CYAN + "Scheduling simulator terminal. Type 'help' for commands.")
        while True:
            try:
                raw = input(Fore.GREEN + "> ")
            except (EOFError, KeyboardInterrupt):
                print()
                break
            if not raw.strip():
                continue
            self.handle_command(raw)

    def handle_command(self, raw: str) -> None:
        try:
            parts = shlex.split(raw)
        except ValueError as e:
            print(Fore.RED + f"Parse error: {e}")
            return
        if not parts:
            return
        cmd, *args = parts
        cmd = cmd.lower()
        try:
            if cmd == "help":
                self._help()
            elif cmd == "add":
                self._add(args)
            elif cmd == "gen":
                self._gen(args)
            elif cmd == "list":
                self._list()
            elif cmd == "run":
                self._run(args)
            elif cmd == "stats":
                self._stats()
            elif cmd == "clear":
                self.processes = []
                self.last_result = None
                print("Batch cleared")
            elif cmd == "exit" or cmd == "quit":
                raise SystemExit(0)
            else:
                print(Fore.YELLOW + "Unknown command. Type 'help'.")
        except SchedulingError as e:
            print(Fore.RED + f"Error: {e}")

    def _help(self) -> None:
        print("Commands:")
        print("  add <pid> <arrival> <exec> <priority>")
        print("  gen <n> [seed]")
        print("  list")
        print("  run sjf|aging [--threshold T] [--out path]")
        print("  stats")
        print("  clear")
        print("  exit")

    def _add(self, args: List[str]) -> None:
        if len(args) < 4:
            print(Fore.RED + "Usage: add <pid> <arrival> <exec> <priority>")
            return
        try:
            pid, arrival, execution, priority = (int(a) for a in args[:4])
        except ValueError:
            print(Fore.RED + "Invalid numeric values")
            return
        if any(p.pid == pid for p in self.processes):
            print(Fore.RED + f"Process {pid} already exists")
            return
        self.processes.append(ProcessRecord(pid=pid, arrival_time=arrival, execution_time=execution, priority=priority))
        print(Fore.CYAN + f"Process {pid} added: arrival={arrival}, exec={execution}, priority={priority}")

    def _gen(self, args: List[str]) -> None:
        if not args:
            print(Fore.RED + "Usage: gen <n> [seed]")
            return
        try:
            count = int(args[0])
            seed = int(args[1]) if len(args) >= 2 else None
        except ValueError:
            print(Fore.RED + "Invalid numeric values")
            return
        self.processes = generate_processes(count, seed=seed)
        print(Fore.CYAN + f"Generated {count} processes")
        print(format_process_table(self.processes))

    def _list(self) -> None:
        if not self.processes:
            print("No processes yet")
            return
        print(format_process_table(self.processes))

    def _run(self, args: List[str]) -> None:
        if not self.processes:
            print(Fore.YELLOW + "No processes to run. Use 'add' or 'gen' first.")
            return
        policy = Scheduler.SJF
        threshold = 5
        out_path: Optional[str] = None
        it = iter(args)
        for token in it:
            if token == "--threshold":
                value = next(it, None)
                try:
                    threshold = int(value)
                except (TypeError, ValueError):
                    print(Fore.RED + "Invalid threshold")
                    return
            elif token == "--out":
                out_path = next(it, None)
            else:
                policy = token

        result = simulate(self.processes, policy=policy, aging_threshold=threshold)
        self.last_result = result
        print(Style.BRIGHT + f"{result.policy} finished at t={result.total_time}")
        print(format_process_table(result.processes))
        print(f"Avg waiting: {result.avg_waiting_time:.2f}, Avg turnaround: {result.avg_turnaround_time:.2f}")
        if out_path:
            plot_gantt(result.processes, result.logger, out_path, title=f"{result.policy} schedule")
            print(Fore.CYAN + f"Saved plot to {out_path}")

    def _stats(self) -> None:
        if not self.last_result:
            print("No simulation yet")
            return
        r = self.last_result
        print(f"Policy: {r.policy}")
        print(f"Dispatch order: {' '.join(str(pid) for pid in r.dispatch_order)}")
        print(f"Avg waiting time: {r.avg_waiting_time:.3f}")
        print(f"Avg turnaround time: {r.avg_turnaround_time:.3f}")
        print(f"Throughput: {r.throughput:.3f} jobs/tick")
        print(f"CPU utilization: {r.cpu_utilization:.1f}%")


def main() -> None:
    ManualTerminal().prompt()


if __name__ == "__main__":
    main()
