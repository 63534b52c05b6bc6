"""
schedsim package.

Simulates single-CPU scheduling (FCFS, Round Robin, SRTF) over a fixed task
list and reports average waiting and turnaround times.
"""

from .algorithms import ALGORITHMS, run_algorithm, schedule_fcfs, schedule_rr, schedule_srtf
from .metrics import compute_metrics
from .models import ScheduleResult, Task

__all__ = [
    "ALGORITHMS",
    "ScheduleResult",
    "Task",
    "compute_metrics",
    "run_algorithm",
    "schedule_fcfs",
    "schedule_rr",
    "schedule_srtf",
]
