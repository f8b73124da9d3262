from __future__ import annotations

from typing import Dict, List

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .models import ScheduleSegment

IDLE_LABEL = "idle"


def _time_marks(segments: List[ScheduleSegment]) -> str:
    marks = "0"
    for seg in segments:
        marks += f"{seg.end_time:>{max(3, seg.duration)}}"
    return marks


def render_gantt(segments: List[ScheduleSegment]) -> str:
    """
    Plain-text Gantt chart. Idle time is drawn with dots.
    """
    if not segments:
        return "(no execution)"

    line = "|"
    labels = " "
    for seg in segments:
        width = max(3, seg.duration)
        if seg.is_idle:
            line += "." * width
            labels += " " * width
        else:
            line += "=" * width
            labels += seg.pid[-width:].ljust(width)
    line += "|"

    return "\n".join(
        [
            "Gantt Chart:",
            line,
            labels,
            _time_marks(segments),
        ]
    )


def build_rich_gantt(segments: List[ScheduleSegment]) -> tuple[Panel, str]:
    """
    Build a Rich Panel containing a colored Gantt chart and a string with time marks.
    """
    if not segments:
        panel = Panel("No execution", title="Gantt Chart")
        return panel, ""

    colors = ["red", "green", "yellow", "blue", "magenta", "cyan"]
    pid_to_color: Dict[str, str] = {}

    def pid_color(pid: str) -> str:
        if pid not in pid_to_color:
            idx = len(pid_to_color) % len(colors)
            pid_to_color[pid] = colors[idx]
        return pid_to_color[pid]

    timeline = Text()
    labels = Text()

    for seg in segments:
        width = max(3, seg.duration)
        if seg.is_idle:
            timeline.append("." * width, style="dim")
            labels.append(IDLE_LABEL[:width].ljust(width), style="dim")
            continue

        # "Process12" is too wide for short bursts; keep the distinguishing tail
        timeline.append(" " * width, style=f"on {pid_color(seg.pid)}")
        labels.append(seg.pid[-width:].ljust(width), style="bold")

    table = Table.grid(padding=(0, 0))
    table.add_row(timeline)
    table.add_row(labels)

    panel = Panel.fit(table, title="Gantt Chart")
    return panel, _time_marks(segments)
