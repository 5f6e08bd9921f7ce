"""Free-form resource identifier attached to a challenge."""

from __future__ import annotations

from dataclasses import dataclass
from urllib.parse import SplitResult, urlsplit, urlunsplit

from pow_puzzle.core.errors import ValidationFailure


@dataclass(frozen=True)
class Resource:
    value: SplitResult

    @classmethod
    def parse(cls, raw_value: str) -> Resource:
        if any(ord(char) < 0x20 or ord(char) == 0x7F for char in raw_value):
            raise ValidationFailure("unable to parse the URL: invalid control character")
        try:
            return cls(urlsplit(raw_value))
        except ValueError as err:
            raise ValidationFailure(f"unable to parse the URL: {err}") from err

    def to_url(self) -> SplitResult:
        return self.value

    def to_string(self) -> str:
        return urlunsplit(self.value)

    def __str__(self) -> str:
        return self.to_string()
