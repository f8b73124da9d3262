from __future__ import annotations

from typing import Iterable, List, Optional, Sequence, Tuple

from .models import (
    Algorithm,
    Process,
    ProcessStats,
    ScheduleResult,
    ScheduleSegment,
    SystemMetrics,
    TimelineEntry,
)


def coalesce_timeline(timeline: Sequence[TimelineEntry]) -> List[ScheduleSegment]:
    """
    Collapse the per-tick timeline into maximal runs of the same pid (or of
    idle time) in a single pass.
    """
    segments: List[ScheduleSegment] = []
    if not timeline:
        return segments

    start = 0
    current = timeline[0]
    for t in range(1, len(timeline)):
        if timeline[t] != current:
            segments.append(ScheduleSegment(pid=current, start_time=start, end_time=t, index=len(segments)))
            start = t
            current = timeline[t]
    segments.append(ScheduleSegment(pid=current, start_time=start, end_time=len(timeline), index=len(segments)))
    return segments


def process_stats(process: Process, now: Optional[int] = None) -> ProcessStats:
    """
    Final statistics for a finished process. For an unfinished one, pass
    the current time to get provisional waiting/turnaround (-1 until the
    process has started); without `now` they stay at -1.
    """
    final = process.finish_time >= 0
    if final or now is None:
        waiting = process.waiting_time
        turnaround = process.turnaround_time
    else:
        waiting = process.waiting_time_at(now)
        turnaround = process.turnaround_time_at(now)

    return ProcessStats(
        pid=process.pid,
        arrival_time=process.arrival_time,
        burst_time=process.burst_time,
        remaining_time=process.remaining_time,
        start_time=process.start_time,
        finish_time=process.finish_time,
        waiting_time=waiting,
        turnaround_time=turnaround,
        final=final,
    )


def average_times(processes: Iterable[Process]) -> Optional[Tuple[float, float]]:
    """
    Return (avg_waiting, avg_turnaround), or None unless every process
    has completed.
    """
    processes = list(processes)
    if not processes or not all(p.completed for p in processes):
        return None
    n = len(processes)
    avg_waiting = sum(p.waiting_time for p in processes) / n
    avg_turnaround = sum(p.turnaround_time for p in processes) / n
    return avg_waiting, avg_turnaround


def compute_system_metrics(result: ScheduleResult) -> SystemMetrics:
    """
    Compute makespan, throughput and CPU utilization from the segments of
    a populated result. Averages are only filled in once every process
    has a final waiting/turnaround time.
    """
    makespan = len(result.timeline)
    cpu_busy_time = sum(s.duration for s in result.segments if not s.is_idle)

    finished = [p for p in result.processes if p.final]
    throughput = len(finished) / makespan if makespan > 0 else 0.0
    cpu_utilization = cpu_busy_time / makespan if makespan > 0 else 0.0

    avg_waiting = avg_turnaround = None
    if result.processes and len(finished) == len(result.processes):
        n = len(finished)
        avg_waiting = sum(p.waiting_time for p in finished) / n
        avg_turnaround = sum(p.turnaround_time for p in finished) / n

    system = SystemMetrics(
        cpu_busy_time=cpu_busy_time,
        makespan=makespan,
        throughput=throughput,
        cpu_utilization=cpu_utilization,
        avg_waiting=avg_waiting,
        avg_turnaround=avg_turnaround,
    )
    result.system = system
    return system


def build_result(
    algorithm: Algorithm,
    quantum: Optional[int],
    timeline: Sequence[TimelineEntry],
    processes: Iterable[Process],
    now: Optional[int] = None,
) -> ScheduleResult:
    result = ScheduleResult(
        algorithm=algorithm,
        quantum=quantum if algorithm is Algorithm.ROUND_ROBIN else None,
        timeline=tuple(timeline),
        segments=coalesce_timeline(timeline),
        processes=[process_stats(p, now) for p in processes],
    )
    compute_system_metrics(result)
    return result
