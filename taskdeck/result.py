"""Outcome of a single remote operation."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar, Union

T = TypeVar("T")


class ErrorKind(str, Enum):
    """How a failure may be recovered from."""

    AUTH_EXPIRED = "auth_expired"  # recoverable by refreshing the token pair
    OTHER = "other"


@dataclass(frozen=True)
class Success(Generic[T]):
    value: T


@dataclass(frozen=True)
class Failure:
    kind: ErrorKind
    message: str

    @property
    def is_auth_expired(self) -> bool:
        return self.kind is ErrorKind.AUTH_EXPIRED


Result = Union[Success[T], Failure]
