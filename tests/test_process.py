from unittest.mock import patch

from kernelwire.process import (
    Pcb,
    ProcessState,
    StateMetric,
    TimeMetric,
)


def test_metrics_follow_state_declaration_order():
    pcb = Pcb.create(1, "p", 10, 1.0)
    assert [m.state.name for m in pcb.state_metrics] == [
        "NEW",
        "READY",
        "RUNNING",
        "BLOCKED",
        "SUSP_BLOCKED",
        "SUSP_READY",
        "EXIT",
    ]
    assert pcb.state == 0
    assert pcb.time_metrics[-1].state == len(ProcessState) - 1


def test_create_sets_fields():
    pcb = Pcb.create(7, "proceso1", 256, 10000.0)
    assert pcb.pid == 7
    assert pcb.pseudocode_file == "proceso1"
    assert pcb.process_size == 256
    assert pcb.next_estimate == 10000.0
    assert pcb.state is ProcessState.NEW
    assert pcb.pc == 0
    assert pcb.previous_real_burst == 0
    assert pcb.previous_burst_estimate == 0


def test_create_metrics():
    pcb = Pcb.create(1, "p", 10, 1.0)
    assert [m.state for m in pcb.state_metrics] == list(ProcessState)
    assert [m.state for m in pcb.time_metrics] == list(ProcessState)
    assert pcb.state_metrics[ProcessState.NEW] == StateMetric(ProcessState.NEW, 1)
    assert all(m.count == 0 for m in pcb.state_metrics[1:])
    assert all(m == TimeMetric(m.state, 0.0) for m in pcb.time_metrics)


def test_metrics_are_not_shared():
    first = Pcb.create(1, "a", 1, 1.0)
    second = Pcb.create(2, "b", 1, 1.0)
    first.state_metrics[ProcessState.READY].count += 3
    assert second.state_metrics[ProcessState.READY].count == 0
    assert first.state_lock is not second.state_lock


def test_elapsed_in_state_measures_milliseconds():
    with patch("kernelwire.process.time.monotonic", side_effect=[10.0, 10.25]):
        pcb = Pcb.create(3, "p", 1, 1.0)
        assert pcb.elapsed_in_state() == 250


def test_elapsed_in_state_is_monotonic():
    pcb = Pcb.create(4, "p", 1, 1.0)
    first = pcb.elapsed_in_state()
    second = pcb.elapsed_in_state()
    assert 0 <= first <= second


def test_lock_guards_state_change():
    pcb = Pcb.create(5, "p", 1, 1.0)
    with pcb.state_lock:
        pcb.state = ProcessState.READY
        assert pcb.state_lock.locked()
    assert pcb.state is ProcessState.READY
    assert not pcb.state_lock.locked()