"""Custom exceptions raised by the Taskdeck transport layer."""

from __future__ import annotations

from typing import Any, Optional


class TaskdeckError(Exception):
    """Base exception for all client specific failures."""


class AuthenticationError(TaskdeckError):
    """Raised when the backend rejects the credential (HTTP 401) or none is stored."""


class NetworkError(TaskdeckError):
    """Raised when the backend cannot be reached."""


class APIError(TaskdeckError):
    """Raised when the backend returns a non-successful response."""

    def __init__(self, message: str, status_code: int, response: Optional[Any] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.response = response

    def __str__(self) -> str:  # pragma: no cover - repr helper
        return f"{self.status_code}: {self.message}"
