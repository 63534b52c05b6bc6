from __future__ import annotations

from typing import Dict, Iterable, List, Optional, Tuple

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .models import Idle, ScheduleResult

TASK_COLORS = ["red", "green", "yellow", "blue", "magenta", "cyan"]

# (start, end, task_id, preempted); task_id is None while the CPU idles.
Segment = Tuple[int, int, Optional[int], bool]


def gantt_segments(result: ScheduleResult) -> List[Segment]:
    """
    Execution slices from the timeline merged with the engine's Idle events,
    in time order.
    """
    segments: List[Segment] = [(s.start_time, s.end_time, s.task_id, s.preempted) for s in result.timeline]
    segments.extend((e.time, e.end, None, False) for e in result.events if isinstance(e, Idle) and e.end > e.time)
    return sorted(segments, key=lambda seg: (seg[0], seg[1]))


def time_axis(boundaries: Iterable[int]) -> str:
    """
    One character per time unit, each boundary written at its own column.
    A label that would touch the previous one is dropped.
    """
    axis: List[str] = []
    for t in sorted(set(boundaries)):
        label = str(t)
        if len(axis) > t:
            continue
        axis.extend(" " * (t - len(axis)))
        axis.extend(label)
        axis.append(" ")
    return "".join(axis).rstrip()


def build_rich_gantt(result: ScheduleResult) -> Panel:
    """
    Colored Gantt chart for one run. Idle time is dotted and a ``^`` marks
    each point where a task was preempted.
    """
    segments = gantt_segments(result)
    title = f"Gantt Chart: {result.algorithm}"
    if not segments:
        return Panel("No execution", title=title)

    task_colors: Dict[int, str] = {}

    bars = Text()
    labels = Text()
    preemptions = Text()
    boundaries = {0}

    for start, end, task_id, preempted in segments:
        width = end - start
        boundaries.update((start, end))

        if task_id is None:
            bars.append("·" * width, style="dim")
            labels.append(" " * width)
            preemptions.append(" " * width)
            continue

        color = task_colors.setdefault(task_id, TASK_COLORS[len(task_colors) % len(TASK_COLORS)])
        bars.append(" " * width, style=f"on {color}")
        labels.append(str(task_id)[:width].ljust(width), style="bold")
        if preempted:
            preemptions.append(" " * (width - 1))
            preemptions.append("^", style="yellow")
        else:
            preemptions.append(" " * width)

    table = Table.grid(padding=(0, 0))
    table.add_row(bars)
    table.add_row(labels)
    if any(seg[3] for seg in segments):
        table.add_row(preemptions)
    table.add_row(Text(time_axis(boundaries), style="dim"))

    return Panel.fit(table, title=title)
