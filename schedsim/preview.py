from __future__ import annotations

import logging
from typing import Iterable

from .config import DEFAULT_QUANTUM
from .engine import TickEngine
from .metrics import build_result
from .models import Algorithm, Process, ScheduleResult

logger = logging.getLogger(__name__)


def run_preview(
    processes: Iterable[Process],
    algorithm: Algorithm = Algorithm.FCFS,
    quantum: int = DEFAULT_QUANTUM,
) -> ScheduleResult:
    """
    Compute the full schedule the live engine would produce, without
    touching the given processes.

    The processes are cloned (same pid, arrival, burst and creation order,
    fresh runtime state) and a private TickEngine runs them to completion.
    Statistics come back in the same order as the input.
    """
    originals = list(processes)
    clones = [p.clone() for p in originals]

    engine = TickEngine(clones, algorithm=algorithm, quantum=quantum)
    ticks = engine.run_to_completion()
    logger.debug("Preview of %d process(es) under %s took %d tick(s)", len(clones), algorithm.label, ticks)

    return build_result(algorithm, quantum, engine.timeline, clones, now=engine.current_time)
