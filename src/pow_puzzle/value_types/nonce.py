"""Arbitrary-precision nonce searched over while mining."""

from __future__ import annotations

import os
import re
from dataclasses import dataclass
from typing import Protocol

from pow_puzzle.core.errors import EntropyIOError, ValidationFailure

NONCE_REPRESENTATION_BASE = 10
_NONCE_PATTERN = re.compile(r"[+-]?[0-9]+")


class RandomReader(Protocol):
    """Binary stream used as an entropy source."""

    def read(self, size: int, /) -> bytes: ...


class SystemRandomReader:
    """Entropy source backed by the operating system CSPRNG."""

    def read(self, size: int, /) -> bytes:
        return os.urandom(size)


@dataclass(frozen=True)
class RandomNonceParams:
    """Parameters for drawing a random initial nonce in `[min, max)`."""

    random_reader: RandomReader
    min_raw_value: int
    max_raw_value: int


def _read_exactly(reader: RandomReader, size: int) -> bytes:
    try:
        data = reader.read(size)
    except OSError as err:
        raise EntropyIOError(f"unable to read from the entropy source: {err}") from err
    if data is None or len(data) < size:
        raise EntropyIOError("entropy source is exhausted")
    return bytes(data)


def _random_below(reader: RandomReader, upper: int) -> int:
    """Draw a uniformly distributed integer in `[0, upper)` by rejection sampling."""
    max_value = upper - 1
    bit_length = max_value.bit_length()
    if bit_length == 0:
        return 0

    byte_count = (bit_length + 7) // 8
    top_bits = bit_length % 8 or 8
    while True:
        candidate = bytearray(_read_exactly(reader, byte_count))
        # Clear the excess bits of the first byte to raise the acceptance rate
        candidate[0] &= (1 << top_bits) - 1
        value = int.from_bytes(candidate, "big")
        if value < upper:
            return value


@dataclass(frozen=True, order=True)
class Nonce:
    """Non-negative counter; all arithmetic is exact."""

    value: int

    def __post_init__(self) -> None:
        if self.value < 0:
            raise ValidationFailure("nonce cannot be negative")

    @classmethod
    def zero(cls) -> Nonce:
        return cls(0)

    @classmethod
    def random(cls, params: RandomNonceParams) -> Nonce:
        """Draw `min + uniform(0, max - min)` from the supplied entropy source.

        Raises:
            ValidationFailure: If the range is empty or the result is negative.
            EntropyIOError: If the entropy source fails or runs dry.
        """
        value_range = params.max_raw_value - params.min_raw_value
        if value_range < 0:
            raise ValidationFailure("raw value range cannot be negative")
        if value_range == 0:
            raise ValidationFailure("raw value range cannot be zero")

        offset = _random_below(params.random_reader, value_range)
        return cls(params.min_raw_value + offset)

    @classmethod
    def parse(cls, raw_value: str) -> Nonce:
        if not _NONCE_PATTERN.fullmatch(raw_value):
            raise ValidationFailure(f"unable to parse the nonce {raw_value!r}")
        return cls(int(raw_value, NONCE_REPRESENTATION_BASE))

    def incremented(self) -> Nonce:
        return Nonce(self.value + 1)

    def to_int(self) -> int:
        return self.value

    def to_string(self) -> str:
        return str(self.value)

    def __str__(self) -> str:
        return self.to_string()
