"""Derived task statistics."""

from __future__ import annotations

from collections.abc import Iterable
from typing import NamedTuple

from .models import Task

COMPLETED_STATUS = "Completed"


class TaskCounts(NamedTuple):
    open: int
    completed: int
    total: int


def count_by_status(tasks: Iterable[Task]) -> TaskCounts:
    """Count completed vs open tasks.

    Only the exact status "Completed" counts as completed; any other value,
    including an empty or unknown status, counts as open.
    """
    open_count = 0
    completed = 0
    for task in tasks:
        if task.status == COMPLETED_STATUS:
            completed += 1
        else:
            open_count += 1
    return TaskCounts(open=open_count, completed=completed, total=open_count + completed)
