"""Cooperative cancellation for the mining loop."""

from __future__ import annotations

import threading
import time
from typing import Any, Protocol


class Cancellable(Protocol):
    """Anything the mining loop can poll for a cancellation request."""

    def is_cancelled(self) -> bool: ...

    @property
    def cause(self) -> Any: ...


class CancellationToken:
    """Thread-safe cancellation flag with an optional cause and deadline."""

    def __init__(self, deadline: float | None = None) -> None:
        self._event = threading.Event()
        self._cause: Any = None
        self._deadline = deadline

    @classmethod
    def with_timeout(cls, seconds: float) -> CancellationToken:
        """Return a token that cancels itself once `seconds` have elapsed."""
        return cls(deadline=time.monotonic() + seconds)

    def cancel(self, cause: Any = None) -> None:
        """Request cancellation; the first cause wins."""
        if not self._event.is_set():
            self._cause = cause
            self._event.set()

    def is_cancelled(self) -> bool:
        if self._event.is_set():
            return True
        if self._deadline is not None and time.monotonic() >= self._deadline:
            self.cancel(TimeoutError("deadline exceeded"))
            return True
        return False

    @property
    def cause(self) -> Any:
        return self._cause
