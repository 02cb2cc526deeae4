import threading
import time
from dataclasses import dataclass, replace
from typing import Any, Callable, Iterator, Optional, Protocol, Sequence

from sqlrow.exceptions import StatementCancelledError


@dataclass(frozen=True)
class StatementOptions:
    """
    Per-call options threaded through to the execution layer.

    Attributes:
        deadline: time.monotonic() instant after which no round trip is issued
        cancel: Event which, once set, cancels the remaining round trips
        new_func: Factory used by select instead of the target passed in
    """

    deadline: Optional[float] = None
    cancel: Optional[threading.Event] = None
    new_func: Optional[Callable[[], Any]] = None

    @classmethod
    def with_timeout(cls, seconds: float, **kwargs: Any) -> "StatementOptions":
        """Options whose deadline is ``seconds`` from now."""
        return cls(deadline=time.monotonic() + seconds, **kwargs)

    def merge(self, other: Optional["StatementOptions"]) -> "StatementOptions":
        """Combine two option sets; fields set on ``other`` win."""
        if other is None:
            return self
        changes = {
            name: getattr(other, name)
            for name in ("deadline", "cancel", "new_func")
            if getattr(other, name) is not None
        }
        return replace(self, **changes)

    def check(self) -> None:
        """
        Raise if the call was cancelled or its deadline passed.

        Raises:
            StatementCancelledError: On cancellation or expired deadline
        """
        if self.cancel is not None and self.cancel.is_set():
            raise StatementCancelledError("Statement cancelled")
        if self.deadline is not None and time.monotonic() >= self.deadline:
            raise StatementCancelledError("Statement deadline exceeded")


class ExecResult(Protocol):
    """Outcome of a statement that returns no rows."""

    rowcount: int

    def last_insert_id(self) -> Optional[int]:
        """Driver-reported id of the inserted row, or None when unsupported."""
        ...


class Connection(Protocol):
    """Execution contract the statement layer calls outward."""

    def execute(
        self, sql: str, args: Sequence[Any], options: Optional[StatementOptions] = None
    ) -> ExecResult: ...

    def query(
        self, sql: str, args: Sequence[Any], options: Optional[StatementOptions] = None
    ) -> Iterator[Sequence[Any]]: ...

    def query_row(
        self, sql: str, args: Sequence[Any], options: Optional[StatementOptions] = None
    ) -> Optional[Sequence[Any]]: ...
