from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from .errors import IncompleteTaskError, SimulationError


@dataclass
class Task:
    """
    One unit of schedulable work.

    ``id``, ``arrival_time`` and ``burst_time`` come from the workload and never
    change. ``remaining_time``, ``start_time`` and ``finish_time`` are filled in
    by an engine while it simulates its own copy of the task.
    """

    id: int
    arrival_time: int
    burst_time: int
    remaining_time: int = field(init=False)
    start_time: Optional[int] = field(default=None, init=False)
    finish_time: Optional[int] = field(default=None, init=False)

    def __post_init__(self) -> None:
        if self.id < 0:
            raise ValueError(f"Task id cannot be negative (got {self.id})")
        if self.arrival_time < 0:
            raise ValueError(f"Task {self.id}: arrival_time cannot be negative")
        if self.burst_time <= 0:
            raise ValueError(f"Task {self.id}: burst_time must be positive")
        self.remaining_time = self.burst_time

    def clone(self) -> "Task":
        """Fresh, unsimulated copy of this task."""
        return Task(id=self.id, arrival_time=self.arrival_time, burst_time=self.burst_time)

    @property
    def is_complete(self) -> bool:
        return self.finish_time is not None

    def dispatch(self, now: int) -> bool:
        """
        Record that the task got the processor at ``now``.

        Returns True on the very first dispatch.
        """
        if self.start_time is not None:
            return False
        if now < self.arrival_time:
            raise SimulationError(f"Task {self.id} dispatched at {now} before arrival {self.arrival_time}")
        self.start_time = now
        return True

    def execute(self, units: int = 1) -> None:
        if units > self.remaining_time:
            raise SimulationError(
                f"Task {self.id}: cannot run {units} units with {self.remaining_time} remaining"
            )
        self.remaining_time -= units

    def complete(self, now: int) -> None:
        if self.remaining_time != 0 or self.finish_time is not None:
            raise SimulationError(f"Task {self.id} cannot finish at {now}")
        self.finish_time = now

    def _require_finish(self) -> int:
        if self.finish_time is None:
            raise IncompleteTaskError(f"Task {self.id} has not finished")
        return self.finish_time

    @property
    def turnaround_time(self) -> int:
        return self._require_finish() - self.arrival_time

    @property
    def waiting_time(self) -> int:
        return self.turnaround_time - self.burst_time

    @property
    def response_time(self) -> int:
        if self.start_time is None:
            raise IncompleteTaskError(f"Task {self.id} never started")
        return self.start_time - self.arrival_time


@dataclass(frozen=True)
class TraceEvent:
    time: int


@dataclass(frozen=True)
class Idle(TraceEvent):
    """Processor idle from ``time`` until ``end``."""

    end: int


@dataclass(frozen=True)
class Arrive(TraceEvent):
    task_id: int


@dataclass(frozen=True)
class Start(TraceEvent):
    task_id: int


@dataclass(frozen=True)
class Resume(TraceEvent):
    task_id: int


@dataclass(frozen=True)
class Pause(TraceEvent):
    task_id: int


@dataclass(frozen=True)
class Finish(TraceEvent):
    task_id: int


@dataclass
class ScheduledSlice:
    """
    One contiguous slice of execution for a task in the Gantt chart.

    ``preempted`` is set when the slice ended with the task paused rather
    than finished.
    """

    task_id: int
    start_time: int
    end_time: int
    preempted: bool = False


@dataclass
class SystemMetrics:
    cpu_busy_time: int
    makespan: int
    throughput: float
    cpu_utilization: float


@dataclass
class ScheduleResult:
    algorithm: str
    quantum: Optional[int]
    tasks: List[Task] = field(default_factory=list)
    events: List[TraceEvent] = field(default_factory=list)
    timeline: List[ScheduledSlice] = field(default_factory=list)
    system: Optional[SystemMetrics] = None
