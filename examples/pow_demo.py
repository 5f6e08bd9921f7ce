#!/usr/bin/env python3
"""Demonstration of solving and verifying proof-of-work challenges.

This script shows how to:
1. Build a challenge with the builder
2. Solve it, optionally from a random initial nonce
3. Send the solution over the wire as JSON and verify it on the other side
4. Bound the search with an attempt budget

Usage:
    python examples/pow_demo.py
"""

import io
from datetime import UTC, datetime, timedelta

from pow_puzzle import ChallengeBuilder, SolveParams, TaskInterruption
from pow_puzzle.schemas import SolutionOut
from pow_puzzle.value_types import (
    TTL,
    CreatedAt,
    Hash,
    LeadingZeroBitCount,
    Payload,
    RandomNonceParams,
    Resource,
    TemplateHashDataLayout,
)


def demonstrate_minimal() -> None:
    """Solve the smallest possible challenge from nonce zero."""
    print("🔐 Minimal challenge")
    challenge = (
        ChallengeBuilder()
        .set_leading_zero_bit_count(LeadingZeroBitCount(5))
        .set_payload(Payload("dummy"))
        .set_hash(Hash.from_name("sha256", "SHA-256"))
        .set_hash_data_layout(
            TemplateHashDataLayout("{leading_zero_bit_count}:{payload}:{nonce}")
        )
        .build()
    )

    solution = challenge.solve()
    print(f"  nonce: {solution.nonce}")
    print(f"  hash sum: {solution.hash_sum.to_hex()}")

    solution.verify()
    print("  verification: OK")
    print()


def demonstrate_full() -> None:
    """Use every challenge field, a random start and a JSON round trip."""
    print("🌐 Full challenge")
    challenge = (
        ChallengeBuilder()
        .set_leading_zero_bit_count(LeadingZeroBitCount(5))
        .set_created_at(CreatedAt(datetime(2000, 1, 2, 3, 4, 5, tzinfo=UTC)))
        .set_ttl(TTL(timedelta(days=100 * 365)))
        .set_resource(Resource.parse("https://example.com/"))
        .set_payload(Payload("dummy"))
        .set_hash(Hash.from_name("sha256", "SHA-256"))
        .set_hash_data_layout(
            TemplateHashDataLayout(
                "{leading_zero_bit_count}:{created_at}:{ttl}:{resource}"
                ":{payload}:{hash_name}:{layout}:{nonce}"
            )
        )
        .build()
    )
    if not challenge.is_alive():
        raise SystemExit("challenge is outdated")

    solution = challenge.solve(
        params=SolveParams(
            random_initial_nonce_params=RandomNonceParams(
                # use SystemRandomReader() in production
                random_reader=io.BytesIO(b"dummy"),
                min_raw_value=123,
                max_raw_value=142,
            ),
        ),
    )

    wire = SolutionOut.from_solution(solution).model_dump_json(indent=2)
    print(f"  📦 wire payload: {wire}")

    received = SolutionOut.model_validate_json(wire).to_solution()
    received.verify()
    print("  verification: OK")
    print()


def demonstrate_interruption() -> None:
    """Show that an unreachable difficulty is bounded by the attempt budget."""
    print("⏱️  Interrupted challenge")
    challenge = (
        ChallengeBuilder()
        .set_leading_zero_bit_count(LeadingZeroBitCount(100))
        .set_payload(Payload("dummy"))
        .set_hash(Hash.from_name("sha256", "SHA-256"))
        .set_hash_data_layout(
            TemplateHashDataLayout("{leading_zero_bit_count}:{payload}:{nonce}")
        )
        .build()
    )

    try:
        challenge.solve(params=SolveParams(max_attempt_count=1000))
    except TaskInterruption as err:
        print(f"  solving: interrupted ({err})")
    else:
        raise SystemExit("solving must fail")


if __name__ == "__main__":
    demonstrate_minimal()
    demonstrate_full()
    demonstrate_interruption()
