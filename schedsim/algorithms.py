from __future__ import annotations

import logging
from collections import deque
from typing import Deque, List, Optional, Sequence, Tuple

from .errors import InvalidConfigurationError
from .metrics import compute_system_metrics
from .models import Arrive, Finish, Idle, Pause, Resume, ScheduleResult, Start, Task
from .trace import TraceSink, Tracer, slices_from_events

logger = logging.getLogger(__name__)


def _arrival_pool(tasks: Sequence[Task]) -> Deque[Tuple[int, Task]]:
    """
    Fresh copies of ``tasks`` paired with their input index, ordered by arrival.

    ``sorted`` is stable, so equal arrivals keep input order.
    """
    indexed = [(i, t.clone()) for i, t in enumerate(tasks)]
    return deque(sorted(indexed, key=lambda item: item[1].arrival_time))


def _finish(algorithm: str, quantum: Optional[int], completed: List[Task], tracer: Tracer) -> ScheduleResult:
    result = ScheduleResult(
        algorithm=algorithm,
        quantum=quantum,
        tasks=completed,
        events=tracer.events,
        timeline=slices_from_events(tracer.events),
    )
    compute_system_metrics(result)
    logger.debug("%s finished %d task(s) in %d event(s)", algorithm, len(completed), len(tracer.events))
    return result


def schedule_fcfs(tasks: Sequence[Task], quantum: Optional[int] = None, sink: Optional[TraceSink] = None) -> ScheduleResult:
    """
    First-Come First-Serve (non-preemptive) scheduling.
    """
    tracer = Tracer(sink)
    time = 0
    completed: List[Task] = []

    for _, task in _arrival_pool(tasks):
        if time < task.arrival_time:
            tracer.emit(Idle(time=time, end=task.arrival_time))
            time = task.arrival_time

        task.dispatch(time)
        tracer.emit(Start(time=time, task_id=task.id))

        task.execute(task.burst_time)
        time += task.burst_time

        task.complete(time)
        tracer.emit(Finish(time=time, task_id=task.id))
        completed.append(task)

    return _finish("FCFS", quantum, completed, tracer)


def schedule_rr(tasks: Sequence[Task], quantum: Optional[int] = None, sink: Optional[TraceSink] = None) -> ScheduleResult:
    """
    Round Robin scheduling with a fixed time quantum.

    Arrivals are admitted after every simulated time unit, so a task arriving
    mid-slice is queued ahead of the task whose slice just ended.
    """
    if quantum is None or quantum <= 0:
        raise InvalidConfigurationError("Round Robin requires a positive quantum (use --quantum)")

    tracer = Tracer(sink)
    pool = _arrival_pool(tasks)
    ready: Deque[Task] = deque()
    completed: List[Task] = []
    time = 0

    def admit(now: int) -> None:
        while pool and pool[0][1].arrival_time <= now:
            _, task = pool.popleft()
            tracer.emit(Arrive(time=now, task_id=task.id))
            ready.append(task)

    while pool or ready:
        admit(time)

        if not ready:
            next_arrival = pool[0][1].arrival_time
            tracer.emit(Idle(time=time, end=next_arrival))
            time = next_arrival
            continue

        task = ready.popleft()
        if task.dispatch(time):
            tracer.emit(Start(time=time, task_id=task.id))
        else:
            tracer.emit(Resume(time=time, task_id=task.id))

        for _ in range(min(task.remaining_time, quantum)):
            task.execute()
            time += 1
            admit(time)

        if task.remaining_time > 0:
            tracer.emit(Pause(time=time, task_id=task.id))
            ready.append(task)
        else:
            task.complete(time)
            tracer.emit(Finish(time=time, task_id=task.id))
            completed.append(task)

    return _finish("Round Robin", quantum, completed, tracer)


def schedule_srtf(tasks: Sequence[Task], quantum: Optional[int] = None, sink: Optional[TraceSink] = None) -> ScheduleResult:
    """
    Shortest Remaining Time First (preemptive SJF).

    The choice is re-evaluated every time unit. Ties go to the earlier arrival,
    then to the task listed first in the input.
    """
    tracer = Tracer(sink)
    pool = _arrival_pool(tasks)
    active: List[Tuple[int, Task]] = []
    completed: List[Task] = []
    running: Optional[Task] = None
    time = 0

    while pool or active:
        while pool and pool[0][1].arrival_time <= time:
            index, task = pool.popleft()
            tracer.emit(Arrive(time=time, task_id=task.id))
            active.append((index, task))

        if not active:
            next_arrival = pool[0][1].arrival_time
            tracer.emit(Idle(time=time, end=next_arrival))
            time = next_arrival
            continue

        index, task = min(active, key=lambda item: (item[1].remaining_time, item[1].arrival_time, item[0]))

        if task is not running:
            if running is not None:
                tracer.emit(Pause(time=time, task_id=running.id))
            if task.dispatch(time):
                tracer.emit(Start(time=time, task_id=task.id))
            else:
                tracer.emit(Resume(time=time, task_id=task.id))
            running = task

        task.execute()
        time += 1

        if task.remaining_time == 0:
            task.complete(time)
            tracer.emit(Finish(time=time, task_id=task.id))
            active.remove((index, task))
            completed.append(task)
            running = None

    return _finish("SRTF", quantum, completed, tracer)


ALGORITHMS = {
    "fcfs": schedule_fcfs,
    "rr": schedule_rr,
    "srtf": schedule_srtf,
}


def run_algorithm(
    name: str,
    tasks: Sequence[Task],
    quantum: Optional[int] = None,
    sink: Optional[TraceSink] = None,
) -> ScheduleResult:
    """
    Dispatch to the requested algorithm. Quantum is only used by round-robin.
    """
    name = name.lower()
    if name not in ALGORITHMS:
        raise InvalidConfigurationError(f"Unknown algorithm '{name}' (choose from {', '.join(ALGORITHMS)})")

    func = ALGORITHMS[name]
    return func(tasks, quantum=quantum, sink=sink)
