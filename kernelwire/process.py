"""Process control block and related enums."""

from __future__ import annotations

import threading
import time
from dataclasses import dataclass, field
from enum import IntEnum


class ProcessState(IntEnum):
    NEW = 0
    READY = 1
    RUNNING = 2
    BLOCKED = 3
    SUSP_BLOCKED = 4
    SUSP_READY = 5
    EXIT = 6


class SyncEvent(IntEnum):
    MEMORY_AVAILABLE = 0


@dataclass
class StateMetric:
    """How many times a process has entered a state."""

    state: ProcessState
    count: int = 0


@dataclass
class TimeMetric:
    """Time accumulated by a process in a state."""

    state: ProcessState
    accumulated_time: float = 0.0


def _new_state_metrics() -> list[StateMetric]:
    return [StateMetric(state) for state in ProcessState]


def _new_time_metrics() -> list[TimeMetric]:
    return [TimeMetric(state) for state in ProcessState]


@dataclass
class Pcb:
    """Process control block."""

    pid: int
    pseudocode_file: str = ""
    process_size: int = 0
    pc: int = 0
    state: ProcessState = ProcessState.NEW
    next_estimate: float = 0.0
    previous_real_burst: float = 0.0
    previous_burst_estimate: float = 0.0
    state_metrics: list[StateMetric] = field(default_factory=_new_state_metrics)
    time_metrics: list[TimeMetric] = field(default_factory=_new_time_metrics)
    state_lock: threading.Lock = field(
        default_factory=threading.Lock, compare=False, repr=False
    )
    state_started_at: float = field(
        init=False, compare=False, repr=False, default_factory=lambda: time.monotonic()
    )

    @classmethod
    def create(
        cls, pid: int, pseudocode_file: str, process_size: int, initial_estimate: float
    ) -> "Pcb":
        """Build a PCB in state NEW, counted once in NEW."""
        pcb = cls(
            pid=pid,
            pseudocode_file=pseudocode_file,
            process_size=process_size,
            next_estimate=initial_estimate,
        )
        pcb.state_metrics[ProcessState.NEW].count = 1
        return pcb

    def elapsed_in_state(self) -> int:
        """Milliseconds elapsed since the state timer started."""
        return int((time.monotonic() - self.state_started_at) * 1000)