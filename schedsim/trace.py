from __future__ import annotations

from typing import Callable, Dict, Iterable, List, Optional

from rich.console import Console

from .models import Arrive, Finish, Idle, Pause, Resume, ScheduledSlice, Start, TraceEvent

TraceSink = Callable[[TraceEvent], None]


class Tracer:
    """
    Records every event an engine emits and forwards it to an optional sink.
    """

    def __init__(self, sink: Optional[TraceSink] = None) -> None:
        self.sink = sink
        self.events: List[TraceEvent] = []

    def emit(self, event: TraceEvent) -> None:
        self.events.append(event)
        if self.sink is not None:
            self.sink(event)


def describe(event: TraceEvent) -> str:
    """
    Human-readable trace line for one event.
    """
    if isinstance(event, Idle):
        return f"Time {event.time}: CPU idle until {event.end}"
    if isinstance(event, Arrive):
        return f"Time {event.time}: Task {event.task_id} arrived"
    if isinstance(event, Start):
        return f"Time {event.time}: Task {event.task_id} starts"
    if isinstance(event, Resume):
        return f"Time {event.time}: Task {event.task_id} resumes"
    if isinstance(event, Pause):
        return f"Time {event.time}: Task {event.task_id} paused"
    if isinstance(event, Finish):
        return f"Time {event.time}: Task {event.task_id} finishes"
    raise TypeError(f"Unknown trace event: {event!r}")


_STYLES = {
    Idle: "dim",
    Arrive: "cyan",
    Start: "green",
    Resume: "green",
    Pause: "yellow",
    Finish: "bold",
}


class ConsoleTraceSink:
    """
    Trace sink that prints each event on a rich console.
    """

    def __init__(self, console: Optional[Console] = None) -> None:
        self.console = console or Console()

    def __call__(self, event: TraceEvent) -> None:
        self.console.print(describe(event), style=_STYLES.get(type(event)), highlight=False)


def slices_from_events(events: Iterable[TraceEvent]) -> List[ScheduledSlice]:
    """
    Rebuild execution slices from a trace: a Start/Resume opens a slice and the
    matching Pause/Finish closes it.
    """
    open_at: Dict[int, int] = {}
    slices: List[ScheduledSlice] = []

    for event in events:
        if isinstance(event, (Start, Resume)):
            open_at[event.task_id] = event.time
        elif isinstance(event, (Pause, Finish)):
            start = open_at.pop(event.task_id, None)
            if start is not None and event.time > start:
                slices.append(
                    ScheduledSlice(
                        task_id=event.task_id,
                        start_time=start,
                        end_time=event.time,
                        preempted=isinstance(event, Pause),
                    )
                )

    return slices
