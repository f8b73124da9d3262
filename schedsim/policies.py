from __future__ import annotations

from collections import deque
from typing import Callable, Deque, Dict, Optional

from .models import Algorithm, Process

ReadyQueue = Deque[Process]
Policy = Callable[[ReadyQueue], Optional[Process]]


def select_fcfs(ready: ReadyQueue) -> Optional[Process]:
    """
    First-Come First-Serve (non-preemptive).

    The ready queue is filled in arrival order, creation order breaking
    ties, so the head is always the next process to run.
    """
    if not ready:
        return None
    return ready.popleft()


def select_sjf(ready: ReadyQueue) -> Optional[Process]:
    """
    Shortest Job First (non-preemptive).

    Choose the candidate with the smallest original burst time (tie-breaker:
    earlier arrival, then creation order) and take it out of the pool.
    """
    if not ready:
        return None
    best = min(ready, key=lambda p: (p.burst_time, p.arrival_time, p.creation_order))
    ready.remove(best)
    return best


def select_round_robin(ready: ReadyQueue) -> Optional[Process]:
    """
    Round Robin: FIFO selection. Quantum expiry and re-queueing at the tail
    are handled by the engine after each executed unit.
    """
    if not ready:
        return None
    return ready.popleft()


POLICIES: Dict[Algorithm, Policy] = {
    Algorithm.FCFS: select_fcfs,
    Algorithm.SJF: select_sjf,
    Algorithm.ROUND_ROBIN: select_round_robin,
}


def is_preemptive(algorithm: Algorithm) -> bool:
    return algorithm is Algorithm.ROUND_ROBIN


def select_next(algorithm: Algorithm, ready: ReadyQueue) -> Optional[Process]:
    """
    Dispatch to the policy for `algorithm`.
    """
    return POLICIES[algorithm](ready)


def new_ready_queue() -> ReadyQueue:
    return deque()
