from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple

# A timeline slot: the pid that ran during that time unit, or None when idle.
TimelineEntry = Optional[str]


class Algorithm(Enum):
    FCFS = "fcfs"
    SJF = "sjf"
    ROUND_ROBIN = "rr"

    @property
    def label(self) -> str:
        return _LABELS[self]

    @classmethod
    def from_name(cls, name: str) -> "Algorithm":
        """
        Accept short names (fcfs, sjf, rr, round-robin) as well as the
        display labels or any prefix of them ("First-Come", "Round Robin").
        """
        if isinstance(name, Algorithm):
            return name
        key = (name or "").strip().lower()
        if key in _ALIASES:
            return _ALIASES[key]
        if key:
            for algorithm, label in _LABELS.items():
                if label.lower().startswith(key):
                    return algorithm
        raise ValueError(f"Unknown algorithm '{name}' (use fcfs, sjf or rr)")


_LABELS = {
    Algorithm.FCFS: "First-Come-First-Served (non-preemptive)",
    Algorithm.SJF: "Shortest Job First (non-preemptive)",
    Algorithm.ROUND_ROBIN: "Round Robin (preemptive)",
}

_ALIASES = {
    "fcfs": Algorithm.FCFS,
    "sjf": Algorithm.SJF,
    "rr": Algorithm.ROUND_ROBIN,
    "round-robin": Algorithm.ROUND_ROBIN,
    "round_robin": Algorithm.ROUND_ROBIN,
}


@dataclass
class Process:
    """
    A process definition (pid, arrival, burst, creation order) plus the
    runtime fields the tick engine mutates while simulating it.
    """

    pid: str
    arrival_time: int
    burst_time: int
    creation_order: int = 0

    remaining_time: int = field(init=False)
    start_time: int = field(default=-1, init=False)
    finish_time: int = field(default=-1, init=False)
    enqueued: bool = field(default=False, init=False)
    completed: bool = field(default=False, init=False)
    # consecutive units used since last dispatch (Round Robin)
    slice_used: int = field(default=0, init=False)

    def __post_init__(self) -> None:
        self.remaining_time = self.burst_time

    def reset(self) -> None:
        self.remaining_time = self.burst_time
        self.start_time = -1
        self.finish_time = -1
        self.enqueued = False
        self.completed = False
        self.slice_used = 0

    def clone(self) -> "Process":
        """Same definition and creation order, fresh runtime state."""
        return Process(
            pid=self.pid,
            arrival_time=self.arrival_time,
            burst_time=self.burst_time,
            creation_order=self.creation_order,
        )

    @property
    def turnaround_time(self) -> int:
        if self.finish_time >= 0:
            return self.finish_time - self.arrival_time
        return -1

    @property
    def waiting_time(self) -> int:
        if self.finish_time >= 0:
            return self.turnaround_time - self.burst_time
        return -1

    def waiting_time_at(self, now: int) -> int:
        """
        Waiting time observed at `now`: final once finished, provisional
        (time since arrival minus executed units) once started, -1 before.
        """
        if self.finish_time >= 0:
            return self.waiting_time
        if self.start_time >= 0:
            executed = self.burst_time - max(0, self.remaining_time)
            return max(0, (now - self.arrival_time) - executed)
        return -1

    def turnaround_time_at(self, now: int) -> int:
        if self.finish_time >= 0:
            return self.turnaround_time
        if self.start_time >= 0:
            return max(0, now - self.arrival_time)
        return -1

    def snapshot(self) -> "ProcessSnapshot":
        return ProcessSnapshot(
            pid=self.pid,
            arrival_time=self.arrival_time,
            burst_time=self.burst_time,
            creation_order=self.creation_order,
            remaining_time=self.remaining_time,
            start_time=self.start_time,
            finish_time=self.finish_time,
            completed=self.completed,
        )

    def describe(self) -> str:
        return f"{self.pid} (arrival:{self.arrival_time}, burst:{self.burst_time})"


@dataclass(frozen=True)
class ProcessSnapshot:
    """Read-only copy of a process handed out to callers."""

    pid: str
    arrival_time: int
    burst_time: int
    creation_order: int
    remaining_time: int
    start_time: int
    finish_time: int
    completed: bool


@dataclass
class ScheduleSegment:
    """
    One maximal run of identical timeline entries. `pid` is None for idle
    time; `end_time` is exclusive.
    """

    pid: Optional[str]
    start_time: int
    end_time: int
    index: int

    @property
    def duration(self) -> int:
        return self.end_time - self.start_time

    @property
    def is_idle(self) -> bool:
        return self.pid is None


@dataclass
class ProcessStats:
    pid: str
    arrival_time: int
    burst_time: int
    remaining_time: int
    start_time: int
    finish_time: int
    waiting_time: int
    turnaround_time: int
    final: bool = False


@dataclass
class SystemMetrics:
    cpu_busy_time: int
    makespan: int
    throughput: float
    cpu_utilization: float
    avg_waiting: Optional[float] = None
    avg_turnaround: Optional[float] = None


@dataclass
class ScheduleResult:
    algorithm: Algorithm
    quantum: Optional[int]
    timeline: Tuple[TimelineEntry, ...] = ()
    segments: List[ScheduleSegment] = field(default_factory=list)
    processes: List[ProcessStats] = field(default_factory=list)
    system: Optional[SystemMetrics] = None
