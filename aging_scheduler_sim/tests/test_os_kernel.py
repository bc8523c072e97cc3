from __future__ import annotations

import pytest

from aging_scheduler_sim.backend.core import ProcessRecord, InvalidParameter
from aging_scheduler_sim.backend.os_kernel import OSKernel, KernelConfig
from aging_scheduler_sim.backend.simulator import Scheduler


def test_reference_flow_uses_two_fresh_batches():
    kernel = OSKernel(KernelConfig(process_count=5, aging_threshold=5, seed=7))
    run = kernel.run_reference_flow()

    assert [p.pid for p in run.initial] == [1, 2, 3, 4, 5]
    assert sorted(p.pid for p in run.aging_initial) == [1, 2, 3, 4, 5]
    assert len(run.sjf.processes) == 5
    assert len(run.aging.processes) == 5
    assert run.sjf.policy == Scheduler.SJF
    assert run.aging.policy == Scheduler.AGING
    # generated batches are returned untouched
    assert all(p.start_time == -1 for p in run.initial + run.aging_initial)
    assert all(p.end_time >= 0 for p in run.sjf.processes + run.aging.processes)


def test_seeded_runs_are_reproducible():
    a = OSKernel(KernelConfig(seed=3)).run_reference_flow()
    b = OSKernel(KernelConfig(seed=3)).run_reference_flow()
    key = lambda ps: [(p.pid, p.arrival_time, p.start_time, p.end_time, p.priority) for p in ps]
    assert key(a.sjf.processes) == key(b.sjf.processes)
    assert key(a.aging.processes) == key(b.aging.processes)


def test_kernel_respects_configured_ranges():
    kernel = OSKernel(KernelConfig(process_count=20, seed=1, arrival_range=(2, 4), execution_range=(3, 3), priority_range=(2, 2)))
    procs = kernel.generate()
    assert all(2 <= p.arrival_time <= 4 for p in procs)
    assert all(p.execution_time == 3 and p.priority == 2 for p in procs)


def test_kernel_run_uses_configured_threshold():
    kernel = OSKernel(KernelConfig(aging_threshold=0))
    procs = [
        ProcessRecord(pid=1, arrival_time=0, execution_time=1, priority=5),
        ProcessRecord(pid=2, arrival_time=0, execution_time=1, priority=5),
    ]
    result = kernel.run(procs, Scheduler.AGING)
    done = {p.pid: p for p in result.processes}
    # both age at t=0, pid 2 ages again at t=1
    assert done[1].priority == 4
    assert done[2].priority == 3


@pytest.mark.parametrize("kwargs", [
    dict(process_count=-1),
    dict(aging_threshold=-2),
    dict(arrival_range=(5, 1)),
    dict(execution_range=(0, 4)),
    dict(priority_range=(0, 5)),
    dict(arrival_range=(-1, 3)),
])
def test_invalid_config(kwargs):
    with pytest.raises(InvalidParameter):
        KernelConfig(**kwargs)
