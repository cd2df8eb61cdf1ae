"""Async namespace classes for the Taskdeck client."""

from .auth import AsyncAuthNamespace
from .tasks import AsyncTasksNamespace

__all__ = [
    "AsyncAuthNamespace",
    "AsyncTasksNamespace",
]
