from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional, Tuple

from .config import DEFAULT_QUANTUM
from .models import Algorithm, Process, TimelineEntry
from .policies import is_preemptive, new_ready_queue, select_next

logger = logging.getLogger(__name__)


class TickEngine:
    """
    Discrete-time CPU simulation. Each call to `advance()` applies exactly
    one time unit: admit arrivals, dispatch if the CPU is free, execute one
    unit (or record idle), then check completion and quantum expiry.

    The engine holds no timer; whoever drives it decides when ticks happen.
    """

    def __init__(
        self,
        processes: Iterable[Process] = (),
        algorithm: Algorithm = Algorithm.FCFS,
        quantum: int = DEFAULT_QUANTUM,
    ) -> None:
        self.algorithm = algorithm
        self.quantum = quantum
        self._processes: Dict[str, Process] = {}
        self._ready = new_ready_queue()
        self._running: Optional[Process] = None
        self._timeline: List[TimelineEntry] = []
        self.current_time = 0
        for p in processes:
            self.add_process(p)

    # -- process set -------------------------------------------------------

    def add_process(self, process: Process) -> None:
        if process.pid in self._processes:
            raise ValueError(f"Duplicate process id '{process.pid}'")
        self._processes[process.pid] = process

    def remove_process(self, pid: str) -> Optional[Process]:
        process = self._processes.pop(pid, None)
        if process is None:
            return None
        if self._running is process:
            self._running = None
        if process in self._ready:
            self._ready.remove(process)
        return process

    def clear(self) -> None:
        self._processes.clear()
        self.reset()

    def get(self, pid: str) -> Optional[Process]:
        return self._processes.get(pid)

    @property
    def processes(self) -> List[Process]:
        """Processes in creation order."""
        return sorted(self._processes.values(), key=lambda p: p.creation_order)

    # -- state -------------------------------------------------------------

    @property
    def timeline(self) -> Tuple[TimelineEntry, ...]:
        return tuple(self._timeline)

    @property
    def running(self) -> Optional[Process]:
        return self._running

    @property
    def ready_pids(self) -> List[str]:
        return [p.pid for p in self._ready]

    @property
    def is_complete(self) -> bool:
        return bool(self._processes) and all(p.completed for p in self._processes.values())

    def reset(self) -> None:
        """Restore runtime state; process definitions are kept."""
        self.current_time = 0
        self._ready.clear()
        self._running = None
        self._timeline.clear()
        for p in self._processes.values():
            p.reset()

    # -- ticking -----------------------------------------------------------

    def advance(self) -> bool:
        """
        Apply one tick. Returns False (and changes nothing) when there is
        nothing to simulate or every process has already completed.
        """
        if not self._processes or self.is_complete:
            return False

        now = self.current_time
        self._admit_arrivals(now)

        if self._running is None:
            self._dispatch(now)

        if self._running is None:
            self._timeline.append(None)
            self.current_time = now + 1
            return True

        running = self._running
        running.remaining_time -= 1
        running.slice_used += 1
        self._timeline.append(running.pid)

        if running.remaining_time == 0:
            running.completed = True
            running.finish_time = now + 1
            self._running = None
            logger.debug(
                "t=%d: %s finished (turnaround=%d, waiting=%d)",
                now + 1,
                running.pid,
                running.turnaround_time,
                running.waiting_time,
            )
        elif is_preemptive(self.algorithm) and running.slice_used >= self.quantum:
            self._ready.append(running)
            self._running = None
            logger.debug("t=%d: %s quantum expired, moved to back of ready queue", now + 1, running.pid)

        self.current_time = now + 1

        if self.is_complete:
            logger.info("All processes finished at t=%d", self.current_time)
        return True

    def run_to_completion(self, max_ticks: Optional[int] = None) -> int:
        """
        Advance until every process has completed. Returns the number of
        ticks applied.
        """
        if max_ticks is None:
            max_ticks = self._tick_bound()
        ticks = 0
        while self.advance():
            ticks += 1
            if ticks > max_ticks:
                raise RuntimeError(f"Simulation did not finish within {max_ticks} ticks")
        return ticks

    def _tick_bound(self) -> int:
        if not self._processes:
            return 0
        values = self._processes.values()
        return max(p.arrival_time for p in values) + sum(p.burst_time for p in values)

    def _admit_arrivals(self, now: int) -> None:
        arrivals = [p for p in self._processes.values() if not p.enqueued and p.arrival_time <= now]
        arrivals.sort(key=lambda p: (p.arrival_time, p.creation_order))
        for p in arrivals:
            p.enqueued = True
            self._ready.append(p)
            logger.debug("t=%d: %s arrived and joined the ready queue", now, p.pid)

    def _dispatch(self, now: int) -> None:
        chosen = select_next(self.algorithm, self._ready)
        if chosen is None:
            return
        chosen.slice_used = 0
        if chosen.start_time < 0:
            chosen.start_time = now
        self._running = chosen
        logger.debug("t=%d: %s started executing under %s", now, chosen.pid, self.algorithm.label)
