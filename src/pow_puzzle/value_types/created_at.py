"""Issuance timestamp of a challenge."""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta, timezone

from pow_puzzle.core.errors import ValidationFailure

NANOSECONDS_PER_MICROSECOND = 1000
_RFC3339_PATTERN = re.compile(
    r"(?P<base>\d{4}-\d{2}-\d{2}[Tt]\d{2}:\d{2}:\d{2})"
    r"(?:\.(?P<fraction>\d{1,9}))?"
    r"(?P<offset>[Zz]|[+-]\d{2}:\d{2})"
)


@dataclass(frozen=True)
class CreatedAt:
    """A timezone-aware instant with nanosecond text precision.

    `datetime` stops at microseconds, so the remaining nanoseconds are kept in
    `extra_nanoseconds` to round-trip the RFC 3339 representation exactly.
    """

    value: datetime
    extra_nanoseconds: int = 0

    def __post_init__(self) -> None:
        if self.value.tzinfo is None or self.value.utcoffset() is None:
            raise ValidationFailure("`CreatedAt` timestamp must be timezone-aware")
        if self.value.replace(tzinfo=None) == datetime.min:
            raise ValidationFailure("`CreatedAt` timestamp cannot be zero time")
        if not 0 <= self.extra_nanoseconds < NANOSECONDS_PER_MICROSECOND:
            raise ValidationFailure("extra nanoseconds must be in [0, 1000)")

    @classmethod
    def now(cls) -> CreatedAt:
        return cls(datetime.now(UTC))

    @classmethod
    def parse(cls, raw_value: str) -> CreatedAt:
        """Parse an RFC 3339 timestamp with an optional nanosecond fraction."""
        match = _RFC3339_PATTERN.fullmatch(raw_value.strip())
        if match is None:
            raise ValidationFailure(f"unable to parse the time {raw_value!r}")

        offset = match.group("offset")
        try:
            base = datetime.fromisoformat(match.group("base").upper())
            if offset in ("Z", "z"):
                tz = UTC
            else:
                sign = -1 if offset[0] == "-" else 1
                hours, minutes = int(offset[1:3]), int(offset[4:6])
                tz = timezone(sign * timedelta(hours=hours, minutes=minutes))
        except ValueError as err:
            raise ValidationFailure(f"unable to parse the time {raw_value!r}: {err}") from err

        nanoseconds = int((match.group("fraction") or "0").ljust(9, "0"))
        microseconds, extra = divmod(nanoseconds, NANOSECONDS_PER_MICROSECOND)
        return cls(base.replace(microsecond=microseconds, tzinfo=tz), extra)

    def to_datetime(self) -> datetime:
        return self.value

    def to_string(self) -> str:
        """Format as RFC 3339 with trailing zeros of the fraction trimmed."""
        value = self.value
        text = (
            f"{value.year:04d}-{value.month:02d}-{value.day:02d}"
            f"T{value.hour:02d}:{value.minute:02d}:{value.second:02d}"
        )
        nanoseconds = self.value.microsecond * NANOSECONDS_PER_MICROSECOND + self.extra_nanoseconds
        if nanoseconds:
            text += "." + f"{nanoseconds:09d}".rstrip("0")

        offset = self.value.utcoffset()
        if not offset:
            return text + "Z"
        total_minutes = int(offset.total_seconds()) // 60
        sign = "-" if total_minutes < 0 else "+"
        hours, minutes = divmod(abs(total_minutes), 60)
        return f"{text}{sign}{hours:02d}:{minutes:02d}"

    def __str__(self) -> str:
        return self.to_string()
