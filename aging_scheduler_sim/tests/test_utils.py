import csv
import json

import pytest

from aging_scheduler_sim.backend.core import ProcessRecord, InvalidParameter, InvalidBatch
from aging_scheduler_sim.backend.utils import (
    EventLogger,
    generate_processes,
    validate_batch,
    compute_avg,
    compute_throughput,
    compute_cpu_utilization,
)


class TestGenerateProcesses:

    def test_default_domains(self):
        procs = generate_processes(50, seed=123)
        assert [p.pid for p in procs] == list(range(1, 51))
        assert all(0 <= p.arrival_time <= 10 for p in procs)
        assert all(1 <= p.execution_time <= 10 for p in procs)
        assert all(1 <= p.priority <= 5 for p in procs)
        assert all(isinstance(p.arrival_time, int) for p in procs)

    def test_seed_is_reproducible(self):
        a = generate_processes(5, seed=42)
        b = generate_processes(5, seed=42)
        assert [(p.arrival_time, p.execution_time, p.priority) for p in a] == \
            [(p.arrival_time, p.execution_time, p.priority) for p in b]

    def test_zero_and_negative_count(self):
        assert generate_processes(0) == []
        with pytest.raises(InvalidParameter):
            generate_processes(-1)


class TestEventLogger:

    def test_idle_slices_merge(self):
        log = EventLogger()
        log.log_timeline_slice(0, 1, None, "SJF")
        log.log_timeline_slice(1, 2, None, "SJF")
        log.log_timeline_slice(2, 5, 1, "SJF")
        log.log_timeline_slice(5, 6, None, "SJF")
        assert [(s["start"], s["end"], s["pid"]) for s in log.timeline] == [(0, 2, None), (2, 5, 1), (5, 6, None)]

    def test_events_for(self):
        log = EventLogger()
        log.log_process_event(0, 1, "admit")
        log.log_process_event(0, 2, "admit")
        log.log_process_event(3, 1, "start")
        assert [e["event"] for e in log.events_for(1)] == ["admit", "start"]

    def test_export(self, tmp_path):
        log = EventLogger()
        log.log_process_event(0, 1, "start")
        log.log_timeline_slice(0, 2, 1, "AGING")
        log.export_json(str(tmp_path / "run.json"))
        log.export_csv(str(tmp_path / "run"))

        data = json.loads((tmp_path / "run.json").read_text(encoding="utf-8"))
        assert data["timeline"][0]["pid"] == 1
        with open(tmp_path / "run_events.csv", newline="", encoding="utf-8") as f:
            rows = list(csv.DictReader(f))
        assert rows[0]["event"] == "start"
        assert (tmp_path / "run_timeline.csv").exists()


def test_validate_batch():
    ok = [ProcessRecord(pid=1, arrival_time=0, execution_time=1, priority=1),
          ProcessRecord(pid=2, arrival_time=0, execution_time=1, priority=1)]
    validate_batch(ok)
    with pytest.raises(InvalidBatch):
        validate_batch(ok + [ProcessRecord(pid=2, arrival_time=4, execution_time=1, priority=1)])


def test_metric_helpers():
    assert compute_avg([]) == 0.0
    assert compute_avg([1, 2, 3]) == pytest.approx(2.0)
    assert compute_throughput([], 0) == 0.0
    assert compute_cpu_utilization(3, 0) == 0.0
    assert compute_cpu_utilization(3, 4) == pytest.approx(75.0)


def test_validate_batch_rejects_scheduled_records():
    zeroed = ProcessRecord(pid=1, arrival_time=0, execution_time=2, priority=1)
    zeroed.execution_time = 0
    with pytest.raises(InvalidBatch):
        validate_batch([zeroed])
    demoted = ProcessRecord(pid=2, arrival_time=0, execution_time=2, priority=1)
    demoted.priority = 0
    with pytest.raises(InvalidBatch):
        validate_batch([demoted])
