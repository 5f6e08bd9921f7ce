"""Bounded integers describing puzzle difficulty."""

from __future__ import annotations

from dataclasses import dataclass

from pow_puzzle.core.errors import ValidationFailure
from pow_puzzle.core.target import target_bit_index_for


@dataclass(frozen=True)
class LeadingZeroBitCount:
    """Number of most significant zero bits a satisfying digest must have."""

    value: int

    def __post_init__(self) -> None:
        if self.value < 0:
            raise ValidationFailure("leading zero bit count cannot be negative")

    @classmethod
    def from_target_bit_index(
        cls, target_bit_index: TargetBitIndex, size_in_bits: int
    ) -> LeadingZeroBitCount:
        try:
            return cls(target_bit_index_for(target_bit_index.to_int(), size_in_bits))
        except ValidationFailure as err:
            raise ValidationFailure(
                f"unable to construct the leading zero bit count: {err}"
            ) from err

    def to_int(self) -> int:
        return self.value

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class TargetBitIndex:
    """Position of the single set bit of the target threshold."""

    value: int

    def __post_init__(self) -> None:
        if self.value < 0:
            raise ValidationFailure("target bit index cannot be negative")

    @classmethod
    def from_leading_zero_bit_count(
        cls, leading_zero_bit_count: LeadingZeroBitCount, size_in_bits: int
    ) -> TargetBitIndex:
        try:
            return cls(target_bit_index_for(leading_zero_bit_count.to_int(), size_in_bits))
        except ValidationFailure as err:
            raise ValidationFailure(f"unable to construct the target bit index: {err}") from err

    def to_int(self) -> int:
        return self.value

    def __str__(self) -> str:
        return str(self.value)
