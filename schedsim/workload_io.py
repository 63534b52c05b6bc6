from __future__ import annotations

import csv
import json
import logging
from pathlib import Path
from typing import Iterable, List, Optional

from .errors import WorkloadError
from .models import Task

logger = logging.getLogger(__name__)


def load_tasks(path: str | Path) -> List[Task]:
    """
    Load a task list from a plain-text, JSON or CSV file.

    Plain text is the default format: one ``id arrival burst`` triple per line.
    """
    path = Path(path)
    suffix = path.suffix.lower()

    if suffix == ".json":
        return _load_json(path)
    if suffix == ".csv":
        return _load_csv(path)
    return _load_text(path)


def parse_line(line: str) -> Optional[Task]:
    """
    Parse one plain-text line, or return None when it is not a valid task.

    Only non-negative ASCII integer tokens count; the line is a task when
    exactly three of them are present.
    """
    numbers = [int(word) for word in line.split() if word.isascii() and word.isdigit()]
    if len(numbers) != 3:
        return None

    task_id, arrival_time, burst_time = numbers
    if burst_time == 0:
        return None
    return Task(id=task_id, arrival_time=arrival_time, burst_time=burst_time)


def _load_text(path: Path) -> List[Task]:
    tasks: List[Task] = []
    with path.open("rb") as f:
        for lineno, raw in enumerate(f, start=1):
            try:
                line = raw.decode("utf-8")
            except UnicodeDecodeError:
                logger.debug("%s:%d: skipping undecodable line", path, lineno)
                continue

            task = parse_line(line)
            if task is None:
                logger.debug("%s:%d: skipping line %r", path, lineno, line.rstrip("\r\n"))
                continue
            tasks.append(task)

    logger.debug("Loaded %d task(s) from %s", len(tasks), path)
    return tasks


def _load_json(path: Path) -> List[Task]:
    with path.open("r", encoding="utf-8") as f:
        try:
            raw = json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise WorkloadError(f"{path}: invalid JSON ({exc})") from exc

    if not isinstance(raw, Iterable) or isinstance(raw, (str, dict)):
        raise WorkloadError("JSON workload must be a list of task objects")

    return [_task_from_mapping(entry) for entry in raw]


def _load_csv(path: Path) -> List[Task]:
    tasks: List[Task] = []
    with path.open("r", encoding="utf-8", newline="") as f:
        try:
            for row in csv.DictReader(f):
                tasks.append(_task_from_mapping(row))
        except UnicodeDecodeError as exc:
            raise WorkloadError(f"{path}: not valid UTF-8 ({exc})") from exc
    return tasks


def _task_from_mapping(mapping) -> Task:
    try:
        return Task(
            id=int(mapping["id"]),
            arrival_time=int(mapping["arrival_time"]),
            burst_time=int(mapping["burst_time"]),
        )
    except (KeyError, TypeError, ValueError) as exc:
        raise WorkloadError(f"Invalid task entry: {mapping!r}") from exc
