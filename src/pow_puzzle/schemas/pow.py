"""Schemas related to proof-of-work challenges and solutions."""
from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

from pow_puzzle.models import Challenge, ChallengeBuilder, Solution, SolutionBuilder
from pow_puzzle.value_types import (
    TTL,
    CreatedAt,
    Hash,
    HashSum,
    LeadingZeroBitCount,
    Nonce,
    Payload,
    Resource,
    TemplateHashDataLayout,
)


class ChallengeOut(BaseModel):
    """Transport payload describing a challenge.

    Only challenges whose layout is a `TemplateHashDataLayout` and whose hash
    can be rebuilt by name are representable.
    """

    model_config = ConfigDict(frozen=True)

    leading_zero_bit_count: int = Field(ge=0)
    created_at: str | None = None
    ttl: str | None = None
    resource: str | None = None
    payload: str
    hash_name: str
    hash_data_layout: str

    @classmethod
    def from_challenge(cls, challenge: Challenge) -> ChallengeOut:
        return cls(
            leading_zero_bit_count=challenge.leading_zero_bit_count.to_int(),
            created_at=challenge.created_at.to_string() if challenge.created_at else None,
            ttl=challenge.ttl.to_string() if challenge.ttl else None,
            resource=challenge.resource.to_string() if challenge.resource else None,
            payload=challenge.payload.to_string(),
            hash_name=challenge.hash.name(),
            hash_data_layout=challenge.hash_data_layout.to_string(),
        )

    def to_challenge(self) -> Challenge:
        """Rebuild the challenge through the builder so every invariant is checked.

        Raises:
            ValidationFailure: If any field is malformed or inconsistent.
        """
        builder = (
            ChallengeBuilder()
            .set_leading_zero_bit_count(LeadingZeroBitCount(self.leading_zero_bit_count))
            .set_payload(Payload(self.payload))
            .set_hash(Hash.from_name(self.hash_name))
            .set_hash_data_layout(TemplateHashDataLayout(self.hash_data_layout))
        )
        if self.created_at is not None:
            builder.set_created_at(CreatedAt.parse(self.created_at))
        if self.ttl is not None:
            builder.set_ttl(TTL.parse(self.ttl))
        if self.resource is not None:
            builder.set_resource(Resource.parse(self.resource))
        return builder.build()


class SolutionOut(BaseModel):
    """Transport payload for a solved challenge."""

    model_config = ConfigDict(frozen=True)

    challenge: ChallengeOut
    nonce: str = Field(pattern=r"^[0-9]+$")
    hash_sum: str

    @field_validator("hash_sum")
    @classmethod
    def check_hash_sum_hex(cls, value: str) -> str:
        """Hash sums travel as lowercase hex."""
        try:
            bytes.fromhex(value)
        except ValueError as err:
            raise ValueError("hash_sum must be hex-encoded") from err
        return value.lower()

    @classmethod
    def from_solution(cls, solution: Solution) -> SolutionOut:
        return cls(
            challenge=ChallengeOut.from_challenge(solution.challenge),
            nonce=solution.nonce.to_string(),
            hash_sum=solution.hash_sum.to_hex(),
        )

    def to_solution(self) -> Solution:
        return (
            SolutionBuilder()
            .set_challenge(self.challenge.to_challenge())
            .set_nonce(Nonce.parse(self.nonce))
            .set_hash_sum(HashSum.from_hex(self.hash_sum))
            .build()
        )
