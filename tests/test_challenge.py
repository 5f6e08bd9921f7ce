# tests/test_challenge.py
"""Tests for mining and liveness."""

from __future__ import annotations

import io
from datetime import UTC, datetime, timedelta
from unittest.mock import MagicMock

import pytest

from pow_puzzle.core.cancellation import CancellationToken
from pow_puzzle.core.errors import (
    AttemptBudgetExceeded,
    EntropyIOError,
    FormatterError,
    SolvingCancelled,
    TaskInterruption,
    ValidationFailure,
)
from pow_puzzle.core.settings import Settings
from pow_puzzle.models import Challenge, ChallengeBuilder, SolveParams
from pow_puzzle.value_types import (
    TTL,
    CreatedAt,
    Hash,
    HashSum,
    Nonce,
    RandomNonceParams,
    SystemRandomReader,
)
from tests.conftest import MINIMAL_HASH_SUM_HEX, MINIMAL_NONCE, ErrReader


def _counting_hash(hash_: Hash) -> tuple[Hash, MagicMock]:
    """Wrap a hash so its applications can be counted."""
    apply_to = MagicMock(side_effect=hash_.apply_to)
    counted = MagicMock(wraps=hash_)
    counted.apply_to = apply_to
    counted.size_in_bits.return_value = hash_.size_in_bits()
    counted.size_in_bytes.return_value = hash_.size_in_bytes()
    counted.name.return_value = hash_.name()
    return counted, apply_to


class TestSolve:
    """The mining loop."""

    def test_known_vector(self, minimal_challenge: Challenge) -> None:
        """The 5-bit "dummy" challenge is solved by nonce 37."""
        solution = minimal_challenge.solve()

        assert solution.challenge is minimal_challenge
        assert solution.nonce == Nonce(MINIMAL_NONCE)
        assert solution.hash_sum == HashSum.from_hex(MINIMAL_HASH_SUM_HEX)
        solution.verify()

    def test_random_initial_nonce(self, minimal_challenge: Challenge) -> None:
        """Mining continues upwards from the random start."""
        params = SolveParams(
            random_initial_nonce_params=RandomNonceParams(io.BytesIO(b"dummy"), 123, 142)
        )
        solution = minimal_challenge.solve(params=params)

        # the draw is 127; 129 is the first nonce above it that fits
        assert solution.nonce == Nonce(129)
        solution.verify()

    def test_zero_difficulty_takes_one_attempt(self, make_challenge) -> None:
        """Every digest fits when no zero bits are required."""
        solution = make_challenge(difficulty=0).solve(params=SolveParams(max_attempt_count=1))
        assert solution.nonce == Nonce.zero()
        solution.verify()

    def test_blake3_round_trip(self, minimal_builder: ChallengeBuilder) -> None:
        """Solving works for any supported hash."""
        challenge = minimal_builder.set_hash(Hash.from_name("blake3")).build()
        solution = challenge.solve()
        assert len(solution.hash_sum) == 32
        solution.verify()

    def test_zero_attempt_budget(self, sha256: Hash, minimal_builder: ChallengeBuilder) -> None:
        """A budget of zero interrupts before any hash application."""
        counted, apply_to = _counting_hash(sha256)
        challenge = minimal_builder.set_hash(counted).build()

        with pytest.raises(AttemptBudgetExceeded) as exc_info:
            challenge.solve(params=SolveParams(max_attempt_count=0))

        assert exc_info.value.max_attempt_count == 0
        apply_to.assert_not_called()

    def test_budget_exhausted(self, make_challenge) -> None:
        """An unreachable difficulty stops at the budget."""
        with pytest.raises(TaskInterruption, match="maximal attempt count"):
            make_challenge(difficulty=100).solve(params=SolveParams(max_attempt_count=1000))

    def test_budget_exact(self, minimal_challenge: Challenge) -> None:
        """Nonce 37 is the 38th attempt."""
        with pytest.raises(AttemptBudgetExceeded):
            minimal_challenge.solve(params=SolveParams(max_attempt_count=MINIMAL_NONCE))
        solution = minimal_challenge.solve(params=SolveParams(max_attempt_count=MINIMAL_NONCE + 1))
        assert solution.nonce == Nonce(MINIMAL_NONCE)

    def test_pre_cancelled_token(self, sha256: Hash, minimal_builder: ChallengeBuilder) -> None:
        """A cancelled token interrupts before any hash application."""
        counted, apply_to = _counting_hash(sha256)
        challenge = minimal_builder.set_hash(counted).build()
        token = CancellationToken()
        token.cancel("shutdown")

        with pytest.raises(SolvingCancelled) as exc_info:
            challenge.solve(token)

        assert exc_info.value.cause == "shutdown"
        assert isinstance(exc_info.value, TaskInterruption)
        apply_to.assert_not_called()

    def test_cancelled_mid_search(self, make_challenge) -> None:
        """The token is polled before every attempt."""
        token = MagicMock()
        token.is_cancelled.side_effect = [False, False, True]
        token.cause = None

        with pytest.raises(SolvingCancelled):
            make_challenge(difficulty=100).solve(token)
        assert token.is_cancelled.call_count == 3

    def test_expired_deadline(self, make_challenge) -> None:
        """A deadline-derived token reports a timeout cause."""
        token = CancellationToken.with_timeout(0)
        with pytest.raises(SolvingCancelled) as exc_info:
            make_challenge(difficulty=100).solve(token)
        assert isinstance(exc_info.value.cause, TimeoutError)

    def test_entropy_failure(self, minimal_challenge: Challenge) -> None:
        """A failing entropy source aborts before mining."""
        params = SolveParams(random_initial_nonce_params=RandomNonceParams(ErrReader(), 0, 10))
        with pytest.raises(EntropyIOError):
            minimal_challenge.solve(params=params)

    def test_formatter_failure(self, minimal_challenge: Challenge) -> None:
        """A layout failing mid-search aborts the loop."""
        layout = MagicMock()
        layout.execute.side_effect = [b"first", FormatterError("boom")]
        challenge = Challenge(
            leading_zero_bit_count=minimal_challenge.leading_zero_bit_count,
            payload=minimal_challenge.payload,
            hash=minimal_challenge.hash,
            hash_data_layout=layout,
        )
        with pytest.raises(FormatterError, match="boom"):
            challenge.solve()

    def test_negative_budget_is_rejected(self) -> None:
        with pytest.raises(ValidationFailure):
            SolveParams(max_attempt_count=-1)


class TestSolveParams:
    def test_from_settings(self) -> None:
        """Settings provide the budget and the random nonce range."""
        config = Settings(POW_MAX_ATTEMPT_COUNT=10, POW_RANDOM_NONCE_MIN=5, POW_RANDOM_NONCE_MAX=9)
        params = SolveParams.from_settings(config, random_nonce=True)

        assert params.max_attempt_count == 10
        random_params = params.random_initial_nonce_params
        assert isinstance(random_params.random_reader, SystemRandomReader)
        assert (random_params.min_raw_value, random_params.max_raw_value) == (5, 9)

    def test_from_settings_without_random_nonce(self) -> None:
        params = SolveParams.from_settings(Settings())
        assert params.random_initial_nonce_params is None


class TestIsAlive:
    """Advisory expiry."""

    CREATED_AT = datetime(2000, 1, 2, 3, 4, 5, tzinfo=UTC)

    def _challenge(self, builder: ChallengeBuilder) -> Challenge:
        return builder.set_created_at(CreatedAt(self.CREATED_AT)).set_ttl(
            TTL(timedelta(minutes=5))
        ).build()

    def test_without_expiry(self, minimal_challenge: Challenge) -> None:
        """No timestamp and TTL means the challenge never expires."""
        assert minimal_challenge.is_alive()

    def test_within_ttl(self, minimal_builder: ChallengeBuilder) -> None:
        challenge = self._challenge(minimal_builder)
        assert challenge.is_alive(self.CREATED_AT + timedelta(minutes=5))

    def test_expired(self, minimal_builder: ChallengeBuilder) -> None:
        challenge = self._challenge(minimal_builder)
        assert not challenge.is_alive(self.CREATED_AT + timedelta(minutes=5, seconds=1))
        assert not challenge.is_alive()

    def test_solve_ignores_expiry(self, minimal_builder: ChallengeBuilder) -> None:
        """Expiry is checked only when the caller asks for it."""
        solution = self._challenge(minimal_builder).solve()
        solution.verify()
