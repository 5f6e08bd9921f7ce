"""Immutable value types validated on construction."""

from .created_at import CreatedAt
from .difficulty import LeadingZeroBitCount, TargetBitIndex
from .hash import Hash, available_hash_algorithms
from .hash_sum import HashSum
from .layout import HashDataLayout, TemplateHashDataLayout, parse_hash_data_layout
from .nonce import Nonce, RandomNonceParams, SystemRandomReader
from .payload import Payload
from .resource import Resource
from .ttl import TTL

__all__ = [
    "CreatedAt",
    "Hash",
    "HashDataLayout",
    "HashSum",
    "LeadingZeroBitCount",
    "Nonce",
    "Payload",
    "RandomNonceParams",
    "Resource",
    "SystemRandomReader",
    "TTL",
    "TargetBitIndex",
    "TemplateHashDataLayout",
    "available_hash_algorithms",
    "parse_hash_data_layout",
]
