"""Validated construction of `Solution` instances."""

from __future__ import annotations

from pow_puzzle.core.errors import ValidationFailure
from pow_puzzle.models.challenge import Challenge
from pow_puzzle.models.solution import Solution
from pow_puzzle.value_types import HashSum, Nonce


class SolutionBuilder:
    """Fluent builder; the hash sum is mandatory and must match the digest size."""

    def __init__(self) -> None:
        self._challenge: Challenge | None = None
        self._nonce: Nonce | None = None
        self._hash_sum: HashSum | None = None

    def set_challenge(self, value: Challenge) -> SolutionBuilder:
        self._challenge = value
        return self

    def set_nonce(self, value: Nonce) -> SolutionBuilder:
        self._nonce = value
        return self

    def set_hash_sum(self, value: HashSum) -> SolutionBuilder:
        self._hash_sum = value
        return self

    def build(self) -> Solution:
        errors: list[str] = []

        if self._challenge is None:
            errors.append("challenge is required")
        if self._nonce is None:
            errors.append("nonce is required")
        if self._hash_sum is None:
            errors.append("hash sum is required")
        elif (
            self._challenge is not None
            and len(self._hash_sum) != self._challenge.hash.size_in_bytes()
        ):
            errors.append("hash sum length doesn't match the hash checksum size")

        if errors:
            raise ValidationFailure(errors)

        return Solution(challenge=self._challenge, nonce=self._nonce, hash_sum=self._hash_sum)
