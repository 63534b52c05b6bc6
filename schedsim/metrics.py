from __future__ import annotations

from typing import List, Sequence, Tuple

from .models import ScheduleResult, SystemMetrics, Task


def compute_metrics(tasks: Sequence[Task]) -> Tuple[float, float]:
    """
    Average waiting time and average turnaround time over completed tasks.

    An empty sequence yields ``(0.0, 0.0)``. A task that never finished raises
    ``IncompleteTaskError``.
    """
    if not tasks:
        return 0.0, 0.0

    n = len(tasks)
    total_waiting = sum(t.waiting_time for t in tasks)
    total_turnaround = sum(t.turnaround_time for t in tasks)
    return total_waiting / n, total_turnaround / n


def summarize(tasks: List[Task]) -> dict:
    """
    Return averages of the key per-task metrics for quick comparison.
    """
    if not tasks:
        return {"avg_waiting": 0.0, "avg_turnaround": 0.0, "avg_response": 0.0}

    avg_waiting, avg_turnaround = compute_metrics(tasks)
    return {
        "avg_waiting": avg_waiting,
        "avg_turnaround": avg_turnaround,
        "avg_response": sum(t.response_time for t in tasks) / len(tasks),
    }


def compute_system_metrics(result: ScheduleResult) -> SystemMetrics:
    """
    Compute throughput and CPU utilization given completed tasks and timeline
    slices.
    """
    if not result.tasks:
        system = SystemMetrics(cpu_busy_time=0, makespan=0, throughput=0.0, cpu_utilization=0.0)
        result.system = system
        return system

    makespan = max(t.finish_time for t in result.tasks)
    cpu_busy_time = sum(slice_.end_time - slice_.start_time for slice_ in result.timeline)

    system = SystemMetrics(
        cpu_busy_time=cpu_busy_time,
        makespan=makespan,
        throughput=len(result.tasks) / makespan if makespan > 0 else 0.0,
        cpu_utilization=cpu_busy_time / makespan if makespan > 0 else 0.0,
    )
    result.system = system
    return system
