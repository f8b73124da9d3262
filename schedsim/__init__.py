"""
CPU scheduling simulator package.

Provides a tick-driven simulation engine for FCFS, SJF and Round Robin
scheduling, a synchronous preview runner, and a command-line interface
for inspecting the resulting timelines and statistics.
"""

from .models import Algorithm, Process, ScheduleResult, ScheduleSegment
from .simulator import Simulator

__all__ = [
    "Algorithm",
    "Process",
    "ScheduleResult",
    "ScheduleSegment",
    "Simulator",
]
