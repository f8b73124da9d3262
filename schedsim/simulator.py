from __future__ import annotations

import logging
import threading
from typing import List, Optional, Tuple, Union

from .config import DEFAULT_QUANTUM, ID_PREFIX, SAMPLE_WORKLOAD
from .engine import TickEngine
from .metrics import average_times, build_result, coalesce_timeline, process_stats
from .models import (
    Algorithm,
    Process,
    ProcessSnapshot,
    ProcessStats,
    ScheduleResult,
    ScheduleSegment,
    TimelineEntry,
)
from .preview import run_preview

logger = logging.getLogger(__name__)


class Simulator:
    """
    The boundary a presentation layer talks to: define processes, pick an
    algorithm, start/pause/reset a run, step it tick by tick and query
    snapshots of the timeline and statistics.

    Every mutation and every tick happens under one lock, so ticks coming
    from a timer thread never interleave with each other or with edits.
    Callers only ever receive copies of process state.
    """

    def __init__(self, algorithm: Union[Algorithm, str] = Algorithm.FCFS, quantum: int = DEFAULT_QUANTUM) -> None:
        self._lock = threading.RLock()
        self._engine = TickEngine(algorithm=Algorithm.from_name(algorithm), quantum=DEFAULT_QUANTUM)
        self._counter = 0
        self._running = False
        self.last_process_id = ""
        self.set_quantum(quantum)

    # -- process definitions ----------------------------------------------

    def add_process(self, arrival_time: int, burst_time: int) -> ProcessSnapshot:
        if isinstance(arrival_time, bool) or not isinstance(arrival_time, int) or arrival_time < 0:
            raise ValueError(f"Arrival time must be a non-negative integer, got {arrival_time!r}")
        if isinstance(burst_time, bool) or not isinstance(burst_time, int) or burst_time <= 0:
            raise ValueError(f"Burst time must be a positive integer, got {burst_time!r}")

        with self._lock:
            self._counter += 1
            process = Process(
                pid=f"{ID_PREFIX}{self._counter}",
                arrival_time=arrival_time,
                burst_time=burst_time,
                creation_order=self._counter,
            )
            self._engine.add_process(process)
            self.last_process_id = process.pid
            logger.info("Added %s", process.describe())
            return process.snapshot()

    def remove_process(self, target: Union[int, str]) -> Optional[str]:
        """
        Remove by position in the displayed list (see `processes`) or by
        pid. Returns the removed pid, or None if nothing matched.
        """
        with self._lock:
            if isinstance(target, int) and not isinstance(target, bool):
                ordered = self._ordered()
                if target < 0 or target >= len(ordered):
                    return None
                pid = ordered[target].pid
            else:
                pid = str(target)

            removed = self._engine.remove_process(pid)
            if removed is None:
                return None
            if self.last_process_id == removed.pid:
                self.last_process_id = ""
            if not self._engine.processes or self._engine.is_complete:
                self._running = False
            logger.info("Removed %s", removed.pid)
            return removed.pid

    def clear(self) -> None:
        """Stop any run, drop every process and restart numbering at 1."""
        with self._lock:
            self._running = False
            self._engine.clear()
            self._counter = 0
            self.last_process_id = ""

    def load_sample(self) -> List[ProcessSnapshot]:
        with self._lock:
            self.clear()
            return [self.add_process(arrival, burst) for arrival, burst in SAMPLE_WORKLOAD]

    # -- configuration -----------------------------------------------------

    @property
    def algorithm(self) -> Algorithm:
        return self._engine.algorithm

    def set_algorithm(self, algorithm: Union[Algorithm, str]) -> None:
        with self._lock:
            self._engine.algorithm = Algorithm.from_name(algorithm)

    @property
    def quantum(self) -> int:
        return self._engine.quantum

    def set_quantum(self, quantum: int) -> None:
        if isinstance(quantum, bool) or not isinstance(quantum, int) or quantum <= 0:
            raise ValueError(f"Quantum must be a positive integer, got {quantum!r}")
        with self._lock:
            self._engine.quantum = quantum

    # -- run control -------------------------------------------------------

    def start(self) -> None:
        """Reset runtime state and begin accepting timer ticks."""
        with self._lock:
            self.reset()
            self._running = bool(self._engine.processes)

    def pause(self) -> None:
        with self._lock:
            self._running = False

    def resume(self) -> None:
        with self._lock:
            self._running = bool(self._engine.processes) and not self._engine.is_complete

    def reset(self) -> None:
        with self._lock:
            self._running = False
            self._engine.reset()

    def step(self) -> bool:
        """
        Advance exactly one tick regardless of the run state. Returns False
        when there was nothing to do.
        """
        with self._lock:
            advanced = self._engine.advance()
            if not advanced or self._engine.is_complete:
                self._running = False
            return advanced

    def tick(self) -> bool:
        """
        Timer entry point: advance one tick only while the simulation is
        running. The run stops by itself once every process has completed.
        """
        with self._lock:
            if not self._running:
                return False
            return self.step()

    def preview(self) -> ScheduleResult:
        """
        Schedule the current definitions to completion on clones. Live state
        is left exactly as it was.
        """
        with self._lock:
            definitions = [p.clone() for p in self._ordered()]
            algorithm = self._engine.algorithm
            quantum = self._engine.quantum
        return run_preview(definitions, algorithm, quantum)

    # -- queries -----------------------------------------------------------

    @property
    def is_running(self) -> bool:
        return self._running

    @property
    def is_complete(self) -> bool:
        with self._lock:
            return self._engine.is_complete

    @property
    def current_time(self) -> int:
        with self._lock:
            return self._engine.current_time

    @property
    def running_pid(self) -> Optional[str]:
        with self._lock:
            running = self._engine.running
            return running.pid if running else None

    @property
    def ready_queue(self) -> List[str]:
        with self._lock:
            return self._engine.ready_pids

    @property
    def timeline(self) -> Tuple[TimelineEntry, ...]:
        with self._lock:
            return self._engine.timeline

    @property
    def segments(self) -> List[ScheduleSegment]:
        return coalesce_timeline(self.timeline)

    @property
    def processes(self) -> List[ProcessSnapshot]:
        with self._lock:
            return [p.snapshot() for p in self._ordered()]

    def describe_processes(self) -> List[str]:
        with self._lock:
            return [p.describe() for p in self._ordered()]

    def stats(self) -> List[ProcessStats]:
        """Per-process statistics, provisional for unfinished processes."""
        with self._lock:
            now = self._engine.current_time
            return [process_stats(p, now) for p in self._ordered()]

    def averages(self) -> Optional[Tuple[float, float]]:
        with self._lock:
            return average_times(self._engine.processes)

    def result(self) -> ScheduleResult:
        with self._lock:
            engine = self._engine
            return build_result(engine.algorithm, engine.quantum, engine.timeline, self._ordered(), engine.current_time)

    def _ordered(self) -> List[Process]:
        # display order: by arrival, creation order among equal arrivals
        return sorted(self._engine.processes, key=lambda p: (p.arrival_time, p.creation_order))
