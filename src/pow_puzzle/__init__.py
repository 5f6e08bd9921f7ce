"""Hashcash-style client puzzles: challenges, mining and verification."""

from pow_puzzle.core.cancellation import CancellationToken
from pow_puzzle.core.errors import (
    AttemptBudgetExceeded,
    EntropyIOError,
    FormatterError,
    HashSumMismatch,
    LayoutSelfCheckFailure,
    PowError,
    SolvingCancelled,
    TargetNotMet,
    TaskInterruption,
    ValidationFailure,
    VerificationFailure,
)
from pow_puzzle.models import (
    Challenge,
    ChallengeBuilder,
    ChallengeHashData,
    Solution,
    SolutionBuilder,
    SolveParams,
)

__all__ = [
    "AttemptBudgetExceeded",
    "CancellationToken",
    "Challenge",
    "ChallengeBuilder",
    "ChallengeHashData",
    "EntropyIOError",
    "FormatterError",
    "HashSumMismatch",
    "LayoutSelfCheckFailure",
    "PowError",
    "Solution",
    "SolutionBuilder",
    "SolveParams",
    "SolvingCancelled",
    "TargetNotMet",
    "TaskInterruption",
    "ValidationFailure",
    "VerificationFailure",
]
