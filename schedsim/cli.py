from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import List, Optional

from rich import box
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from .algorithms import ALGORITHMS, run_algorithm
from .errors import SchedulerError
from .gantt import build_rich_gantt
from .metrics import summarize
from .models import ScheduleResult, Task
from .trace import ConsoleTraceSink
from .workload_io import load_tasks

logger = logging.getLogger(__name__)

DEFAULT_WORKLOAD = "input.txt"
DEFAULT_QUANTUM = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="schedsim",
        description="Single-CPU scheduling simulator (FCFS, RR, SRTF).",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable debug logging.",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    run_parser = subparsers.add_parser("run", help="Run one scheduling algorithm on a workload file.")
    run_parser.add_argument(
        "--algorithm",
        "-a",
        required=True,
        help=f"Algorithm to use ({', '.join(ALGORITHMS)}).",
    )
    _add_common_arguments(run_parser)

    compare_parser = subparsers.add_parser(
        "compare",
        help="Run several algorithms on the same workload and compare average metrics.",
    )
    compare_parser.add_argument(
        "--algorithms",
        "-a",
        nargs="+",
        default=list(ALGORITHMS),
        help=f"Algorithms to compare (default: {' '.join(ALGORITHMS)}).",
    )
    _add_common_arguments(compare_parser)

    return parser


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--workload",
        "-w",
        default=DEFAULT_WORKLOAD,
        help=f"Path to a text, JSON or CSV workload file (default: {DEFAULT_WORKLOAD}).",
    )
    parser.add_argument(
        "--quantum",
        "-q",
        type=int,
        default=DEFAULT_QUANTUM,
        help=f"Time quantum for round-robin (default: {DEFAULT_QUANTUM}).",
    )
    parser.add_argument(
        "--trace",
        action="store_true",
        help="Print the simulation trace (starts, pauses, finishes, idle time).",
    )


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(show_path=False)],
    )


def _print_result(result: ScheduleResult, console: Console) -> None:
    console.print(f"[bold]Algorithm:[/bold] {result.algorithm}")
    if result.quantum is not None:
        console.print(f"[bold]Quantum:[/bold] {result.quantum}")

    console.print()
    console.print(build_rich_gantt(result))
    console.print()

    headers = ["Task", "Arrive", "Burst", "Start", "Finish", "Wait", "Turnaround", "Response"]

    task_table = Table(title="Per-task metrics", box=box.SIMPLE_HEAVY)
    for h in headers:
        task_table.add_column(h, justify="center" if h == "Task" else "right")

    for t in result.tasks:
        task_table.add_row(
            str(t.id),
            str(t.arrival_time),
            str(t.burst_time),
            str(t.start_time),
            str(t.finish_time),
            str(t.waiting_time),
            str(t.turnaround_time),
            str(t.response_time),
        )

    console.print(task_table)
    console.print()

    summary = summarize(result.tasks)
    sys_table = Table(title="System metrics", box=box.SIMPLE_HEAVY)
    sys_table.add_column("Metric")
    sys_table.add_column("Value", justify="right")

    sys_table.add_row("Avg waiting", f"{summary['avg_waiting']:.2f}")
    sys_table.add_row("Avg turnaround", f"{summary['avg_turnaround']:.2f}")
    sys_table.add_row("Avg response", f"{summary['avg_response']:.2f}")
    if result.system:
        system = result.system
        sys_table.add_row("Throughput (tasks/time)", f"{system.throughput:.3f}")
        sys_table.add_row("CPU utilization", f"{system.cpu_utilization*100:.1f}%")

    console.print(sys_table)


def _run_compare(tasks: List[Task], algorithms: List[str], quantum: int, console: Console, trace: bool) -> None:
    summary_table = Table(title="Algorithm comparison", box=box.SIMPLE_HEAVY)
    summary_table.add_column("Algorithm")
    summary_table.add_column("Quantum", justify="right")
    summary_table.add_column("Avg waiting", justify="right")
    summary_table.add_column("Avg turnaround", justify="right")
    summary_table.add_column("Avg response", justify="right")

    for alg in algorithms:
        q = quantum if alg.lower() == "rr" else None
        sink = ConsoleTraceSink(console) if trace else None
        if trace:
            console.rule(alg.upper())
        result = run_algorithm(alg, tasks, quantum=q, sink=sink)
        summary = summarize(result.tasks)
        summary_table.add_row(
            result.algorithm,
            "" if result.quantum is None else str(result.quantum),
            f"{summary['avg_waiting']:.2f}",
            f"{summary['avg_turnaround']:.2f}",
            f"{summary['avg_response']:.2f}",
        )

    console.print(summary_table)


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    configure_logging(args.verbose)
    console = Console()

    try:
        tasks = load_tasks(Path(args.workload))
        if not tasks:
            logger.warning("Workload %s contains no tasks", args.workload)

        if args.command == "run":
            q = args.quantum if args.algorithm.lower() == "rr" else None
            sink = ConsoleTraceSink(console) if args.trace else None
            result = run_algorithm(args.algorithm, tasks, quantum=q, sink=sink)
            if args.trace:
                console.print()
            _print_result(result, console)
            return 0

        _run_compare(tasks, args.algorithms, args.quantum, console, args.trace)
        return 0
    except OSError as exc:
        console.print(f"[red]Failed to read tasks from {escape(args.workload)}: {escape(str(exc))}[/red]")
        return 1
    except SchedulerError as exc:
        console.print(f"[red]Error: {escape(str(exc))}[/red]")
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
