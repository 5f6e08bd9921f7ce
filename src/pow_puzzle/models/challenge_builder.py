"""Validated construction of `Challenge` instances."""

from __future__ import annotations

from pow_puzzle.core.errors import FormatterError, LayoutSelfCheckFailure, ValidationFailure
from pow_puzzle.models.challenge import Challenge
from pow_puzzle.value_types import (
    TTL,
    CreatedAt,
    Hash,
    HashDataLayout,
    LeadingZeroBitCount,
    Nonce,
    Payload,
    Resource,
    TargetBitIndex,
)


class ChallengeBuilder:
    """Fluent builder; `build()` reports every violation at once."""

    def __init__(self) -> None:
        self._leading_zero_bit_count: LeadingZeroBitCount | None = None
        self._target_bit_index: TargetBitIndex | None = None
        self._created_at: CreatedAt | None = None
        self._ttl: TTL | None = None
        self._resource: Resource | None = None
        self._payload: Payload | None = None
        self._hash: Hash | None = None
        self._hash_data_layout: HashDataLayout | None = None

    def set_leading_zero_bit_count(self, value: LeadingZeroBitCount) -> ChallengeBuilder:
        self._leading_zero_bit_count = value
        return self

    def set_target_bit_index(self, value: TargetBitIndex) -> ChallengeBuilder:
        self._target_bit_index = value
        return self

    def set_created_at(self, value: CreatedAt) -> ChallengeBuilder:
        self._created_at = value
        return self

    def set_ttl(self, value: TTL) -> ChallengeBuilder:
        self._ttl = value
        return self

    def set_resource(self, value: Resource) -> ChallengeBuilder:
        self._resource = value
        return self

    def set_payload(self, value: Payload) -> ChallengeBuilder:
        self._payload = value
        return self

    def set_hash(self, value: Hash) -> ChallengeBuilder:
        self._hash = value
        return self

    def set_hash_data_layout(self, value: HashDataLayout) -> ChallengeBuilder:
        self._hash_data_layout = value
        return self

    def build(self) -> Challenge:
        """Assemble the challenge.

        Raises:
            ValidationFailure: Listing every violated invariant.
            LayoutSelfCheckFailure: The layout cannot render against the
                assembled challenge.
        """
        errors: list[str] = []

        leading_zero_bit_count = self._leading_zero_bit_count
        has_count = leading_zero_bit_count is not None
        has_index = self._target_bit_index is not None
        if not has_count and not has_index:
            errors.append("leading zero bit count or target bit index is required")
        elif has_count and has_index:
            errors.append(
                "leading zero bit count and target bit index are specified at the same time"
            )

        if (self._created_at is None) != (self._ttl is None):
            errors.append("creation time and TTL must be specified together")

        if self._payload is None:
            errors.append("payload is required")

        if self._hash is None:
            errors.append("hash is required")
        elif has_count and not has_index:
            if leading_zero_bit_count.to_int() > self._hash.size_in_bits():
                errors.append("leading zero bit count exceeds the hash checksum size")
        elif has_index and not has_count:
            try:
                leading_zero_bit_count = LeadingZeroBitCount.from_target_bit_index(
                    self._target_bit_index, self._hash.size_in_bits()
                )
            except ValidationFailure as err:
                errors.extend(err.errors)

        if self._hash_data_layout is None:
            errors.append("hash data layout is required")

        if errors:
            raise ValidationFailure(errors)

        challenge = Challenge(
            leading_zero_bit_count=leading_zero_bit_count,
            payload=self._payload,
            hash=self._hash,
            hash_data_layout=self._hash_data_layout,
            created_at=self._created_at,
            ttl=self._ttl,
            resource=self._resource,
        )

        try:
            challenge.render_hash_data(Nonce.zero())
        except FormatterError as err:
            raise LayoutSelfCheckFailure(
                f"hash data layout is not valid for the challenge: {err}"
            ) from err

        return challenge
