"""Challenge entity and the mining loop."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from pow_puzzle.core.cancellation import Cancellable
from pow_puzzle.core.errors import (
    AttemptBudgetExceeded,
    FormatterError,
    SolvingCancelled,
    ValidationFailure,
)
from pow_puzzle.core.settings import Settings
from pow_puzzle.core.target import is_hash_sum_fit_target, make_target
from pow_puzzle.value_types import (
    TTL,
    CreatedAt,
    Hash,
    HashDataLayout,
    HashSum,
    LeadingZeroBitCount,
    Nonce,
    Payload,
    RandomNonceParams,
    Resource,
    SystemRandomReader,
    TargetBitIndex,
)

if TYPE_CHECKING:  # pragma: no cover - typing helper
    from pow_puzzle.models.solution import Solution

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ChallengeHashData:
    """The pair a hash data layout renders into pre-image bytes."""

    challenge: Challenge
    nonce: Nonce


@dataclass(frozen=True)
class SolveParams:
    """Optional limits and nonce seeding for `Challenge.solve`."""

    max_attempt_count: int | None = None
    random_initial_nonce_params: RandomNonceParams | None = None

    def __post_init__(self) -> None:
        if self.max_attempt_count is not None and self.max_attempt_count < 0:
            raise ValidationFailure("maximal attempt count cannot be negative")

    @classmethod
    def from_settings(cls, config: Settings, *, random_nonce: bool = False) -> SolveParams:
        """Build parameters from configuration, optionally with a random start."""
        random_params = None
        if random_nonce:
            random_params = RandomNonceParams(
                random_reader=SystemRandomReader(),
                min_raw_value=config.random_nonce_min,
                max_raw_value=config.random_nonce_max,
            )
        return cls(
            max_attempt_count=config.max_attempt_count,
            random_initial_nonce_params=random_params,
        )


@dataclass(frozen=True)
class Challenge:
    """A puzzle: a difficulty target plus opaque context.

    Instances are created through `ChallengeBuilder`, which enforces every
    invariant, and are immutable afterwards.
    """

    leading_zero_bit_count: LeadingZeroBitCount
    payload: Payload
    hash: Hash
    hash_data_layout: HashDataLayout
    created_at: CreatedAt | None = None
    ttl: TTL | None = None
    resource: Resource | None = None

    def target_bit_index(self) -> TargetBitIndex:
        return TargetBitIndex.from_leading_zero_bit_count(
            self.leading_zero_bit_count, self.hash.size_in_bits()
        )

    def is_alive(self, now: datetime | None = None) -> bool:
        """Return True unless both a timestamp and a TTL are set and have elapsed."""
        if self.created_at is None or self.ttl is None:
            return True
        current = now or datetime.now(UTC)
        return current - self.created_at.to_datetime() <= self.ttl.to_timedelta()

    def render_hash_data(self, nonce: Nonce) -> bytes:
        """Render the pre-image bytes for `nonce` via the layout."""
        try:
            return self.hash_data_layout.execute(ChallengeHashData(challenge=self, nonce=nonce))
        except FormatterError as err:
            raise FormatterError(f"unable to execute the hash data layout: {err}") from err

    def solve(
        self,
        token: Cancellable | None = None,
        params: SolveParams | None = None,
    ) -> Solution:
        """Search for a nonce whose hash sum fits the difficulty target.

        Args:
            token: Optional cancellation token, polled before every attempt.
            params: Optional attempt budget and random initial nonce parameters.

        Returns:
            The `Solution` carrying the winning nonce and its hash sum.

        Raises:
            SolvingCancelled: The token was cancelled.
            AttemptBudgetExceeded: `max_attempt_count` attempts were made.
            EntropyIOError: The random initial nonce could not be generated.
            FormatterError: The layout failed to render a pre-image.
            ValidationFailure: The target or the solution could not be built.
        """
        from pow_puzzle.models.solution_builder import SolutionBuilder

        params = params or SolveParams()
        if params.random_initial_nonce_params is not None:
            nonce = Nonce.random(params.random_initial_nonce_params)
        else:
            nonce = Nonce.zero()

        target = make_target(self.target_bit_index().to_int())
        max_attempt_count = params.max_attempt_count
        logger.debug(
            "Solving challenge: leading_zero_bit_count=%d hash=%s initial_nonce=%s",
            self.leading_zero_bit_count.to_int(),
            self.hash.name(),
            nonce,
        )

        hash_sum: HashSum
        attempt_index = 0
        while True:
            if token is not None and token.is_cancelled():
                logger.info("Solving cancelled after %d attempts", attempt_index)
                raise SolvingCancelled(token.cause)
            if max_attempt_count is not None and attempt_index >= max_attempt_count:
                logger.info("Solving stopped: attempt budget of %d exhausted", max_attempt_count)
                raise AttemptBudgetExceeded(max_attempt_count)

            hash_sum = self.hash.apply_to(self.render_hash_data(nonce))
            if is_hash_sum_fit_target(hash_sum.to_bytes(), target):
                break

            nonce = nonce.incremented()
            attempt_index += 1

        logger.debug("Solution found: nonce=%s attempts=%d", nonce, attempt_index + 1)
        return SolutionBuilder().set_challenge(self).set_nonce(nonce).set_hash_sum(hash_sum).build()
