"""Per-operation state cells observed by the presentation layer."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Generic, Optional, TypeVar

from ._observable import Observable

T = TypeVar("T")


@dataclass(frozen=True)
class OperationSnapshot(Generic[T]):
    """Immutable view of one operation's state.

    ``has_succeeded`` is a one-shot flag: it stays True after a success until
    ``OperationState.consume_success`` is called, so a caller reacts to each
    success once.
    """

    is_loading: bool = False
    has_succeeded: bool = False
    error: Optional[str] = None
    last_response: Optional[T] = None


class OperationState(Observable[OperationSnapshot[T]]):
    """Mutable cell holding the snapshot of one operation kind.

    All primitives are total: none raises, and the clearing ones are no-ops
    when there is nothing to clear.
    """

    def __init__(self) -> None:
        super().__init__(OperationSnapshot())

    @property
    def snapshot(self) -> OperationSnapshot[T]:
        return self.value

    @property
    def is_loading(self) -> bool:
        return self.value.is_loading

    @property
    def has_succeeded(self) -> bool:
        return self.value.has_succeeded

    @property
    def error(self) -> Optional[str]:
        return self.value.error

    @property
    def last_response(self) -> Optional[T]:
        return self.value.last_response

    def start(self) -> None:
        """Enter loading. The previous response and success flag are kept until settle."""
        self._set(replace(self.value, is_loading=True, error=None))

    def succeed(self, response: T) -> None:
        self._set(
            replace(
                self.value,
                is_loading=False,
                has_succeeded=True,
                error=None,
                last_response=response,
            )
        )

    def fail(self, message: str) -> None:
        self._set(replace(self.value, is_loading=False, has_succeeded=False, error=message))

    def clear_error(self) -> None:
        self._set(replace(self.value, error=None))

    def clear_response(self) -> None:
        self._set(replace(self.value, last_response=None))

    def consume_success(self) -> None:
        self._set(replace(self.value, has_succeeded=False))
