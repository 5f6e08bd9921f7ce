# tests/test_schemas.py
"""Tests for the wire schemas."""

from __future__ import annotations

import io
import json
from datetime import UTC, datetime, timedelta

import pytest
from pydantic import ValidationError

from pow_puzzle.core.errors import HashSumMismatch, ValidationFailure
from pow_puzzle.models import Challenge, ChallengeBuilder, SolveParams
from pow_puzzle.schemas import ChallengeOut, SolutionOut
from pow_puzzle.value_types import TTL, CreatedAt, RandomNonceParams, Resource
from tests.conftest import MINIMAL_HASH_SUM_HEX, MINIMAL_LAYOUT


def test_minimal_challenge_out(minimal_challenge: Challenge) -> None:
    """Absent optional fields are serialized as null."""
    out = ChallengeOut.from_challenge(minimal_challenge)
    assert out.model_dump() == {
        "leading_zero_bit_count": 5,
        "created_at": None,
        "ttl": None,
        "resource": None,
        "payload": "dummy",
        "hash_name": "SHA-256",
        "hash_data_layout": MINIMAL_LAYOUT,
    }
    assert out.to_challenge() == minimal_challenge


def test_full_solution_json_round_trip(minimal_builder: ChallengeBuilder) -> None:
    """Timestamps, durations and URLs use their canonical text forms."""
    challenge = (
        minimal_builder.set_created_at(CreatedAt.parse("2000-01-02T03:04:05.000000006Z"))
        .set_ttl(TTL(timedelta(days=100 * 365)))
        .set_resource(Resource.parse("https://example.com/"))
        .build()
    )
    solution = challenge.solve(
        params=SolveParams(
            random_initial_nonce_params=RandomNonceParams(io.BytesIO(b"dummy"), 123, 142)
        )
    )

    document = json.loads(SolutionOut.from_solution(solution).model_dump_json())
    assert document["nonce"] == "129"
    assert document["challenge"]["created_at"] == "2000-01-02T03:04:05.000000006Z"
    assert document["challenge"]["ttl"] == "876000h0m0s"
    assert document["challenge"]["resource"] == "https://example.com/"

    received = SolutionOut.model_validate_json(json.dumps(document)).to_solution()
    assert received.challenge.created_at == challenge.created_at
    assert received.nonce == solution.nonce
    received.verify()


def test_tampered_wire_hash_sum(minimal_challenge: Challenge) -> None:
    """Tampering in transit is detected after decoding."""
    document = SolutionOut.from_solution(minimal_challenge.solve()).model_dump()
    assert document["hash_sum"] == MINIMAL_HASH_SUM_HEX
    document["hash_sum"] = "01" + MINIMAL_HASH_SUM_HEX[2:]

    with pytest.raises(HashSumMismatch):
        SolutionOut.model_validate(document).to_solution().verify()


@pytest.mark.parametrize(
    ("field", "value"),
    [("nonce", "-1"), ("nonce", "abc"), ("hash_sum", "xyz")],
)
def test_schema_validation(minimal_challenge: Challenge, field: str, value: str) -> None:
    """Malformed fields are rejected by pydantic."""
    document = SolutionOut.from_solution(minimal_challenge.solve()).model_dump()
    document[field] = value
    with pytest.raises(ValidationError):
        SolutionOut.model_validate(document)


def test_inconsistent_challenge_is_rejected(minimal_challenge: Challenge) -> None:
    """Decoded challenges pass through the builder invariants."""
    out = ChallengeOut.from_challenge(minimal_challenge).model_copy(
        update={"created_at": datetime(2000, 1, 2, tzinfo=UTC).isoformat()}
    )
    with pytest.raises(ValidationFailure, match="must be specified together"):
        out.to_challenge()


def test_unknown_hash_is_rejected(minimal_challenge: Challenge) -> None:
    out = ChallengeOut.from_challenge(minimal_challenge).model_copy(
        update={"hash_name": "no-such-hash"}
    )
    with pytest.raises(ValidationFailure, match="unsupported hash"):
        out.to_challenge()
