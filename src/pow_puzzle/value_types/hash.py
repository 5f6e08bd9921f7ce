"""Hash algorithm capability used for mining and verification."""

from __future__ import annotations

import functools
import hashlib
from collections.abc import Callable
from dataclasses import dataclass
from typing import Protocol

import blake3

from pow_puzzle.core.errors import ValidationFailure
from pow_puzzle.core.target import BITS_PER_BYTE
from pow_puzzle.value_types.hash_sum import HashSum

BLAKE3_NAME = "blake3"
_VARIABLE_LENGTH_ALGORITHMS = frozenset({"shake_128", "shake_256"})
_ALIASES = {
    "sha-1": "sha1",
    "sha-224": "sha224",
    "sha-256": "sha256",
    "sha-384": "sha384",
    "sha-512": "sha512",
    "sha3-224": "sha3_224",
    "sha3-256": "sha3_256",
    "sha3-384": "sha3_384",
    "sha3-512": "sha3_512",
}


class Hasher(Protocol):
    """Subset of the hashlib object API we rely on."""

    name: str
    digest_size: int

    def update(self, data: bytes, /) -> None: ...

    def digest(self) -> bytes: ...


HasherFactory = Callable[[], Hasher]


@functools.cache
def _hashlib_factory(name: str) -> HasherFactory:
    # One shared factory per algorithm keeps equal hashes comparing equal
    return functools.partial(hashlib.new, name)


def available_hash_algorithms() -> list[str]:
    """Return every algorithm name accepted by `Hash.from_name`."""
    names = {
        name.lower()
        for name in hashlib.algorithms_available
        if name.lower() not in _VARIABLE_LENGTH_ALGORITHMS
    }
    names.add(BLAKE3_NAME)
    return sorted(names)


@dataclass(frozen=True)
class Hash:
    """A named factory of one-shot hashers.

    Every `apply_to` call gets a fresh hasher, so one `Hash` can be shared by
    concurrent solving and verification calls.
    """

    factory: HasherFactory
    explicit_name: str | None = None

    def __post_init__(self) -> None:
        if self.explicit_name is not None and not self.explicit_name:
            raise ValidationFailure("hash name cannot be empty")

    @classmethod
    def from_name(cls, name: str, display_name: str | None = None) -> Hash:
        """Build a hash from a hashlib algorithm name or `blake3`.

        The given spelling is kept as the hash name unless `display_name` is set,
        so `Hash.from_name(h.name())` rebuilds an equivalent hash.
        """
        display_name = display_name or name.strip()
        normalized = name.strip().lower()
        normalized = _ALIASES.get(normalized, normalized)
        if normalized == BLAKE3_NAME:
            return cls(blake3.blake3, display_name)
        if normalized in _VARIABLE_LENGTH_ALGORITHMS:
            raise ValidationFailure(f"variable-length hash is not supported: {name}")
        try:
            hashlib.new(normalized)
        except ValueError as err:
            raise ValidationFailure(f"unsupported hash algorithm: {name}") from err

        return cls(_hashlib_factory(normalized), display_name)

    def name(self) -> str:
        if self.explicit_name is not None:
            return self.explicit_name
        return self.factory().name

    def size_in_bytes(self) -> int:
        return self.factory().digest_size

    def size_in_bits(self) -> int:
        return self.size_in_bytes() * BITS_PER_BYTE

    def apply_to(self, data: bytes) -> HashSum:
        hasher = self.factory()
        hasher.update(data)
        return HashSum(hasher.digest())
