from rich.console import Console

from schedsim.algorithms import schedule_fcfs, schedule_rr
from schedsim.gantt import build_rich_gantt, gantt_segments, time_axis
from schedsim.models import Finish, Idle, Pause, Resume, ScheduledSlice, Start, Task
from schedsim.trace import ConsoleTraceSink, describe, slices_from_events


def test_describe():
    assert describe(Start(time=0, task_id=1)) == "Time 0: Task 1 starts"
    assert describe(Pause(time=2, task_id=1)) == "Time 2: Task 1 paused"
    assert describe(Idle(time=2, end=5)) == "Time 2: CPU idle until 5"


def test_slices_from_events():
    events = [
        Start(time=0, task_id=1),
        Pause(time=2, task_id=1),
        Start(time=2, task_id=2),
        Finish(time=3, task_id=2),
        Resume(time=3, task_id=1),
        Finish(time=4, task_id=1),
    ]
    assert slices_from_events(events) == [
        ScheduledSlice(1, 0, 2, preempted=True),
        ScheduledSlice(2, 2, 3),
        ScheduledSlice(1, 3, 4),
    ]


def test_console_sink_prints_trace():
    console = Console(record=True, width=80)
    schedule_rr([Task(1, 0, 3), Task(2, 4, 1)], quantum=2, sink=ConsoleTraceSink(console))
    text = console.export_text()
    assert "Time 0: Task 1 starts" in text
    assert "Time 2: Task 1 paused" in text
    assert "Time 2: Task 1 resumes" in text
    assert "Time 3: CPU idle until 4" in text
    assert "Time 5: Task 2 finishes" in text


def test_gantt_segments_include_idle_and_preemption():
    res = schedule_rr([Task(1, 0, 3), Task(2, 4, 1)], quantum=2)
    assert gantt_segments(res) == [
        (0, 2, 1, True),
        (2, 3, 1, False),
        (3, 4, None, False),
        (4, 5, 2, False),
    ]


def test_time_axis_places_marks_at_their_column():
    assert time_axis([0, 2, 3, 4, 5]) == "0 2 4"
    assert time_axis([12, 0, 2, 10]) == "0 2" + " " * 7 + "10"


def test_rich_gantt_shows_idle_and_preemption():
    console = Console(record=True, width=60)
    console.print(build_rich_gantt(schedule_rr([Task(1, 0, 3), Task(2, 4, 1)], quantum=2)))
    text = console.export_text()
    assert "·" in text
    assert "^" in text
    assert "0 2 4" in text


def test_rich_gantt_without_preemption_has_no_marker():
    console = Console(record=True, width=60)
    console.print(build_rich_gantt(schedule_fcfs([Task(1, 0, 2), Task(2, 1, 2)])))
    assert "^" not in console.export_text()


def test_rich_gantt_empty():
    console = Console(record=True, width=60)
    console.print(build_rich_gantt(schedule_fcfs([])))
    assert "No execution" in console.export_text()
