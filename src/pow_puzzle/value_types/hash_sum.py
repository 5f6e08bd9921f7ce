"""Digest bytes produced by a hash application."""

from __future__ import annotations

import binascii
from dataclasses import dataclass

from pow_puzzle.core.errors import ValidationFailure


@dataclass(frozen=True)
class HashSum:
    value: bytes = b""

    def __post_init__(self) -> None:
        object.__setattr__(self, "value", bytes(self.value))

    @classmethod
    def from_hex(cls, raw_value: str) -> HashSum:
        try:
            return cls(binascii.unhexlify(raw_value))
        except (binascii.Error, ValueError) as err:
            raise ValidationFailure(f"unable to decode the hash sum: {err}") from err

    def __len__(self) -> int:
        return len(self.value)

    def to_bytes(self) -> bytes:
        return self.value

    def to_hex(self) -> str:
        return self.value.hex()
