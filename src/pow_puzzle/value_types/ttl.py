"""Lifetime of a challenge, written as a Go-style duration string."""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import timedelta
from decimal import Decimal, InvalidOperation

from pow_puzzle.core.errors import ValidationFailure

_UNIT_NANOSECONDS = {
    "ns": 1,
    "us": 1_000,
    "µs": 1_000,
    "μs": 1_000,
    "ms": 1_000_000,
    "s": 1_000_000_000,
    "m": 60 * 1_000_000_000,
    "h": 3600 * 1_000_000_000,
}
_COMPONENT_PATTERN = re.compile(r"(\d+(?:\.\d*)?|\.\d+)(ns|us|µs|μs|ms|s|m|h)")
_NANOSECONDS_PER_MICROSECOND = 1_000
_NANOSECONDS_PER_SECOND = 1_000_000_000
_MAX_DURATION_NANOSECONDS = 2**63 - 1


def _format_fraction(whole: int, fraction: int, digits: int) -> str:
    if not fraction:
        return str(whole)
    return f"{whole}." + f"{fraction:0{digits}d}".rstrip("0")


def parse_duration(raw_value: str) -> int:
    """Parse a duration such as `"1h30m"` or `"1.5s"` into nanoseconds."""
    text = raw_value.strip()
    sign = 1
    if text[:1] in ("+", "-"):
        sign = -1 if text[0] == "-" else 1
        text = text[1:]
    if text == "0":
        return 0
    if not text:
        raise ValidationFailure(f"invalid duration {raw_value!r}")

    total = Decimal(0)
    position = 0
    while position < len(text):
        match = _COMPONENT_PATTERN.match(text, position)
        if match is None:
            raise ValidationFailure(f"invalid duration {raw_value!r}")
        number, unit = match.groups()
        try:
            total += Decimal(number) * _UNIT_NANOSECONDS[unit]
        except InvalidOperation as err:
            raise ValidationFailure(f"invalid duration {raw_value!r}") from err
        position = match.end()
    if total > _MAX_DURATION_NANOSECONDS:
        raise ValidationFailure(f"invalid duration {raw_value!r}: out of range")
    return sign * int(total)


def format_duration(nanoseconds: int) -> str:
    """Format nanoseconds the way Go's `time.Duration.String` does."""
    if nanoseconds == 0:
        return "0s"

    sign = "-" if nanoseconds < 0 else ""
    value = abs(nanoseconds)
    if value < _NANOSECONDS_PER_SECOND:
        if value < 1_000:
            return f"{sign}{value}ns"
        if value < 1_000_000:
            return sign + _format_fraction(*divmod(value, 1_000), 3) + "µs"
        return sign + _format_fraction(*divmod(value, 1_000_000), 6) + "ms"

    hours, value = divmod(value, _UNIT_NANOSECONDS["h"])
    minutes, value = divmod(value, _UNIT_NANOSECONDS["m"])
    seconds = _format_fraction(*divmod(value, _NANOSECONDS_PER_SECOND), 9) + "s"
    if hours:
        return f"{sign}{hours}h{minutes}m{seconds}"
    if minutes:
        return f"{sign}{minutes}m{seconds}"
    return sign + seconds


@dataclass(frozen=True)
class TTL:
    value: timedelta

    def __post_init__(self) -> None:
        if self.value < timedelta(0):
            raise ValidationFailure("TTL cannot be negative")

    @classmethod
    def parse(cls, raw_value: str) -> TTL:
        nanoseconds = parse_duration(raw_value)
        return cls(timedelta(microseconds=nanoseconds // _NANOSECONDS_PER_MICROSECOND))

    def to_timedelta(self) -> timedelta:
        return self.value

    def to_string(self) -> str:
        return format_duration(self.value // timedelta(microseconds=1) * _NANOSECONDS_PER_MICROSECOND)

    def __str__(self) -> str:
        return self.to_string()
