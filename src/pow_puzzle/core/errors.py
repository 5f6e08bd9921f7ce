"""Exception taxonomy for puzzle construction, solving and verification."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any


class PowError(Exception):
    """Base class for every error raised by this package."""


class ValidationFailure(PowError, ValueError):
    """Malformed or mutually inconsistent construction parameters.

    All violations found in one pass are kept in `errors`; the message joins
    them with newlines.
    """

    def __init__(self, errors: str | Iterable[str]) -> None:
        self.errors = [errors] if isinstance(errors, str) else list(errors)
        super().__init__("\n".join(self.errors))


class LayoutSelfCheckFailure(ValidationFailure):
    """The hash data layout cannot render the challenge it was built with."""


class TaskInterruption(PowError):
    """Mining stopped on purpose before a solution was found."""


class SolvingCancelled(TaskInterruption):
    """The cancellation token was triggered."""

    def __init__(self, cause: Any = None) -> None:
        self.cause = cause
        message = "solving was cancelled"
        if cause is not None:
            message = f"{message}: {cause}"
        super().__init__(message)


class AttemptBudgetExceeded(TaskInterruption):
    """The maximal attempt count was reached."""

    def __init__(self, max_attempt_count: int) -> None:
        self.max_attempt_count = max_attempt_count
        super().__init__(f"maximal attempt count is exceeded ({max_attempt_count})")


class EntropyIOError(PowError, OSError):
    """The entropy source failed while generating a random nonce."""


class FormatterError(PowError):
    """The hash data layout could not render the pre-image."""


class VerificationFailure(PowError):
    """A solution did not pass verification."""


class HashSumMismatch(VerificationFailure):
    """The recorded hash sum differs from the recomputed one."""


class TargetNotMet(VerificationFailure):
    """The hash sum does not satisfy the difficulty target."""
