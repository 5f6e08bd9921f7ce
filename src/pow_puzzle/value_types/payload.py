"""Opaque application data carried by a challenge."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Payload:
    """Serialized application payload; the core never interprets it."""

    value: str

    def to_string(self) -> str:
        return self.value

    def to_bytes(self) -> bytes:
        return self.value.encode()

    def __str__(self) -> str:
        return self.value
