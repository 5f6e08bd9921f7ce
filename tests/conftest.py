# tests/conftest.py
from __future__ import annotations

from collections.abc import Callable

import pytest

from pow_puzzle.models import Challenge, ChallengeBuilder
from pow_puzzle.value_types import (
    Hash,
    LeadingZeroBitCount,
    Payload,
    TemplateHashDataLayout,
)

MINIMAL_LAYOUT = "{leading_zero_bit_count}:{payload}:{nonce}"
MINIMAL_NONCE = 37
MINIMAL_HASH_SUM_HEX = "005d372c56e6c6b52ad4a8325654692ec9aa3af5f73021748bc3fdb124ae9b20"


class ErrReader:
    """Entropy source that always fails."""

    def read(self, size: int, /) -> bytes:
        raise TimeoutError("entropy source timed out")


@pytest.fixture
def sha256() -> Hash:
    return Hash.from_name("sha256", "SHA-256")


@pytest.fixture
def minimal_layout() -> TemplateHashDataLayout:
    return TemplateHashDataLayout(MINIMAL_LAYOUT)


@pytest.fixture
def minimal_builder(sha256: Hash, minimal_layout: TemplateHashDataLayout) -> ChallengeBuilder:
    """Builder preloaded with the 5-bit SHA-256 "dummy" challenge."""
    return (
        ChallengeBuilder()
        .set_leading_zero_bit_count(LeadingZeroBitCount(5))
        .set_payload(Payload("dummy"))
        .set_hash(sha256)
        .set_hash_data_layout(minimal_layout)
    )


@pytest.fixture
def minimal_challenge(minimal_builder: ChallengeBuilder) -> Challenge:
    return minimal_builder.build()


@pytest.fixture
def make_challenge(sha256: Hash) -> Callable[..., Challenge]:
    """Factory building a SHA-256 challenge with the given difficulty and layout."""

    def _make(difficulty: int = 5, layout: str = MINIMAL_LAYOUT, payload: str = "dummy") -> Challenge:
        return (
            ChallengeBuilder()
            .set_leading_zero_bit_count(LeadingZeroBitCount(difficulty))
            .set_payload(Payload(payload))
            .set_hash(sha256)
            .set_hash_data_layout(TemplateHashDataLayout(layout))
            .build()
        )

    return _make
