"""Pluggable rendering of a (challenge, nonce) pair into hash pre-image bytes.

`HashDataLayout` is the capability the entities depend on: any object with a
pure, deterministic `execute(data) -> bytes` and a `to_string()` source form
will do. `TemplateHashDataLayout` is the stock implementation, based on
`str.format` templates restricted to a fixed set of plain field names:

    "{leading_zero_bit_count}:{payload}:{nonce}"

Numeric fields (`leading_zero_bit_count`, `target_bit_index`, `nonce`) are
integers, so format specs such as `{nonce:016x}` work as expected.
"""

from __future__ import annotations

import string
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, Protocol

from pow_puzzle.core.errors import FormatterError, ValidationFailure

if TYPE_CHECKING:  # pragma: no cover - typing helper
    from pow_puzzle.models.challenge import ChallengeHashData

LAYOUT_FIELDS: tuple[str, ...] = (
    "leading_zero_bit_count",
    "target_bit_index",
    "created_at",
    "ttl",
    "resource",
    "payload",
    "hash_name",
    "layout",
    "nonce",
)


class HashDataLayout(Protocol):
    """Pure renderer of the bytes that get hashed for one attempt."""

    def execute(self, data: ChallengeHashData) -> bytes: ...

    def to_string(self) -> str: ...


class _HashDataFields(Mapping[str, Any]):
    """Lazy view of the fields a template may reference."""

    def __init__(self, data: ChallengeHashData) -> None:
        self._data = data

    def __getitem__(self, key: str) -> Any:
        challenge = self._data.challenge
        if key == "nonce":
            return self._data.nonce.to_int()
        if key == "leading_zero_bit_count":
            return challenge.leading_zero_bit_count.to_int()
        if key == "target_bit_index":
            return challenge.target_bit_index().to_int()
        if key == "payload":
            return challenge.payload.to_string()
        if key == "hash_name":
            return challenge.hash.name()
        if key == "layout":
            return challenge.hash_data_layout.to_string()
        if key in ("created_at", "ttl", "resource"):
            value = getattr(challenge, key)
            if value is None:
                raise FormatterError(f"challenge has no {key} to render")
            return value.to_string()
        raise FormatterError(f"unknown layout field {key!r}")

    def __iter__(self):
        return iter(LAYOUT_FIELDS)

    def __len__(self) -> int:
        return len(LAYOUT_FIELDS)


class TemplateHashDataLayout:
    """A parsed `str.format` template over the challenge fields."""

    def __init__(self, template: str) -> None:
        self._template = template
        self._field_names = self._validate(template)

    @staticmethod
    def _validate(template: str) -> frozenset[str]:
        errors: list[str] = []
        field_names: set[str] = set()
        try:
            parsed = list(string.Formatter().parse(template))
        except ValueError as err:
            raise ValidationFailure(f"unable to parse the layout template: {err}") from err

        for _, field_name, format_spec, _ in parsed:
            if field_name is None:
                continue
            if field_name not in LAYOUT_FIELDS:
                errors.append(f"unknown layout field {field_name!r}")
            if format_spec and ("{" in format_spec or "}" in format_spec):
                errors.append(f"nested replacement fields are not allowed in {field_name!r}")
            field_names.add(field_name)

        if errors:
            raise ValidationFailure(errors)
        return frozenset(field_names)

    @property
    def field_names(self) -> frozenset[str]:
        return self._field_names

    def execute(self, data: ChallengeHashData) -> bytes:
        try:
            rendered = self._template.format_map(_HashDataFields(data))
        except FormatterError:
            raise
        except (ValueError, TypeError) as err:
            raise FormatterError(f"unable to execute the layout template: {err}") from err
        return rendered.encode()

    def to_string(self) -> str:
        return self._template

    def __str__(self) -> str:
        return self._template

    def __repr__(self) -> str:
        return f"TemplateHashDataLayout({self._template!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TemplateHashDataLayout):
            return NotImplemented
        return self._template == other._template

    def __hash__(self) -> int:
        return hash(self._template)


def parse_hash_data_layout(template: str) -> TemplateHashDataLayout:
    """Parse a layout template, raising `ValidationFailure` if it is malformed."""
    return TemplateHashDataLayout(template)
