"""Solution entity and its verification."""

from __future__ import annotations

import hmac
import logging
from dataclasses import dataclass

from pow_puzzle.core.errors import HashSumMismatch, TargetNotMet
from pow_puzzle.core.target import count_leading_zero_bits, is_hash_sum_fit_target, make_target
from pow_puzzle.models.challenge import Challenge
from pow_puzzle.value_types import HashSum, Nonce

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Solution:
    """A challenge paired with a winning nonce and the resulting hash sum."""

    challenge: Challenge
    nonce: Nonce
    hash_sum: HashSum

    def verify(self) -> None:
        """Re-derive the hash sum with a single hash application and check it.

        Raises:
            FormatterError: The layout failed to render the pre-image.
            HashSumMismatch: The recorded hash sum differs from the recomputed one.
            ValidationFailure: The target bit index could not be derived.
            TargetNotMet: The hash sum does not fit the difficulty target.
        """
        hash_data = self.challenge.render_hash_data(self.nonce)
        hash_sum = self.challenge.hash.apply_to(hash_data)

        if not hmac.compare_digest(hash_sum.to_bytes(), self.hash_sum.to_bytes()):
            logger.debug("Recorded hash sum %s != %s", self.hash_sum.to_hex(), hash_sum.to_hex())
            raise HashSumMismatch("hash sum doesn't match the expected one")

        target = make_target(self.challenge.target_bit_index().to_int())
        if not is_hash_sum_fit_target(hash_sum.to_bytes(), target):
            logger.debug(
                "Hash sum %s has %d leading zero bits, %d required",
                hash_sum.to_hex(),
                count_leading_zero_bits(hash_sum.to_bytes()),
                self.challenge.leading_zero_bit_count.to_int(),
            )
            raise TargetNotMet("hash sum doesn't fit the target")
