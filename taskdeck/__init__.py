"""Taskdeck - Python client for the Taskdeck task-tracking backend."""

from importlib.metadata import PackageNotFoundError, version

from .app import TaskdeckApp
from .async_client import AsyncTaskdeckClient
from .auth import CredentialPair, SecureCredentialStore, SessionState
from .config import ClientConfig
from .exceptions import APIError, AuthenticationError, NetworkError, TaskdeckError
from .executor import AuthenticatedExecutor
from .operations import OperationClient, OperationKind
from .result import ErrorKind, Failure, Result, Success
from .state import OperationSnapshot, OperationState
from .stats import TaskCounts, count_by_status

__all__ = [
    "TaskdeckApp",
    "AsyncTaskdeckClient",
    "AuthenticatedExecutor",
    "OperationClient",
    "OperationKind",
    "OperationState",
    "OperationSnapshot",
    "SessionState",
    "SecureCredentialStore",
    "CredentialPair",
    "ClientConfig",
    "Result",
    "Success",
    "Failure",
    "ErrorKind",
    "TaskCounts",
    "count_by_status",
    "TaskdeckError",
    "AuthenticationError",
    "NetworkError",
    "APIError",
]

try:
    __version__ = version("taskdeck")
except PackageNotFoundError:
    __version__ = "0.1.0"
