from __future__ import annotations

from typing import Dict, List, Tuple

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .models import ScheduledSlice

COLORS = ["red", "green", "yellow", "blue", "magenta", "cyan"]


def merge_slices(slices: List[ScheduledSlice]) -> List[ScheduledSlice]:
    """
    Join back-to-back slices of the same process, e.g. a Round Robin
    process that is the only one left and runs several quanta in a row.
    """
    merged: List[ScheduledSlice] = []
    for sl in sorted(slices, key=lambda s: (s.start_time, s.end_time)):
        if merged and merged[-1].pid == sl.pid and merged[-1].end_time == sl.start_time:
            merged[-1] = ScheduledSlice(pid=sl.pid, start_time=merged[-1].start_time, end_time=sl.end_time)
        else:
            merged.append(sl)
    return merged


def build_rich_gantt(slices: List[ScheduledSlice], title: str = "Gantt Chart") -> Tuple[Panel, str]:
    """
    Build a Rich Panel containing a colored Gantt chart and a string with time marks.
    """
    if not slices:
        return Panel("No execution", title=title), ""

    pid_to_color: Dict[int, str] = {}

    def pid_color(pid: int) -> str:
        if pid not in pid_to_color:
            pid_to_color[pid] = COLORS[len(pid_to_color) % len(COLORS)]
        return pid_to_color[pid]

    timeline = Text()
    labels = Text()
    time_marks = "0"

    for sl in merge_slices(slices):
        width = max(1, sl.end_time - sl.start_time)
        timeline.append(" " * width, style=f"on {pid_color(sl.pid)}")
        labels.append(f"P{sl.pid}"[:width].ljust(width), style="bold")
        time_marks += f"{sl.end_time:>{max(width, 3)}}"

    table = Table.grid(padding=(0, 0))
    table.add_row(timeline)
    table.add_row(labels)

    return Panel.fit(table, title=title), time_marks
