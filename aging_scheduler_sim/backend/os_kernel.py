from __future__ import annotations

from typing import List, Optional, Tuple
from dataclasses import dataclass

from .core import ProcessRecord, InvalidParameter
from .utils import generate_processes
from .simulator import simulate, Scheduler, SimulationResult


@dataclass
class KernelConfig:
    process_count: int = 5
    aging_threshold: int = 5
    seed: Optional[int] = None
    arrival_range: Tuple[int, int] = (0, 10)
    execution_range: Tuple[int, int] = (1, 10)
    priority_range: Tuple[int, int] = (1, 5)

    def __post_init__(self) -> None:
        if self.process_count < 0:
            raise InvalidParameter(f"process_count must be >= 0, got {self.process_count}")
        if self.aging_threshold < 0:
            raise InvalidParameter(f"aging_threshold must be >= 0, got {self.aging_threshold}")
        for name in ("arrival_range", "execution_range", "priority_range"):
            low, high = getattr(self, name)
            if low > high:
                raise InvalidParameter(f"{name} is empty: {low} > {high}")
        if self.arrival_range[0] < 0:
            raise InvalidParameter("arrival_range must start at 0 or later")
        if self.execution_range[0] < 1:
            raise InvalidParameter("execution_range must start at 1 or later")
        if self.priority_range[0] < 1:
            raise InvalidParameter("priority_range must start at 1 or later")


@dataclass
class ReferenceRun:
    initial: List[ProcessRecord]
    sjf: SimulationResult
    aging_initial: List[ProcessRecord]
    aging: SimulationResult


class OSKernel:
    """Drives the two scheduling policies from a single configuration.

    ``run_reference_flow`` generates one batch for SJF and a fresh,
    independently drawn batch for priority-with-aging. When a seed is
    configured the second batch uses ``seed + 1`` so both stay reproducible.
    """

    def __init__(self, config: KernelConfig | None = None):
        self.config = config or KernelConfig()

    def generate(self, seed: Optional[int] = None) -> List[ProcessRecord]:
        cfg = self.config
        return generate_processes(
            cfg.process_count,
            seed=cfg.seed if seed is None else seed,
            arrival_range=cfg.arrival_range,
            execution_range=cfg.execution_range,
            priority_range=cfg.priority_range,
        )

    def run(self, processes: List[ProcessRecord], policy: str = Scheduler.SJF) -> SimulationResult:
        return simulate(processes, policy=policy, aging_threshold=self.config.aging_threshold)

    def run_reference_flow(self) -> ReferenceRun:
        initial = self.generate()
        sjf = self.run(initial, Scheduler.SJF)
        second_seed = None if self.config.seed is None else self.config.seed + 1
        aging_initial = self.generate(seed=second_seed)
        aging = self.run(aging_initial, Scheduler.AGING)
        return ReferenceRun(initial=initial, sjf=sjf, aging_initial=aging_initial, aging=aging)
