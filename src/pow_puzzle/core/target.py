"""Difficulty algebra: target thresholds and leading zero bits.

A digest fits the target `1 << target_bit_index` iff its big-endian unsigned
value is strictly below it, i.e. iff the digest has at least
`size_in_bits - target_bit_index` leading zero bits.
"""

from __future__ import annotations

BITS_PER_BYTE = 8


def make_target(target_bit_index: int) -> int:
    """Return the threshold with exactly one bit set at `target_bit_index`."""
    if target_bit_index < 0:
        raise ValueError("target bit index cannot be negative")
    return 1 << target_bit_index


def is_hash_sum_fit_target(hash_sum: bytes, target: int) -> bool:
    """Return True if the digest, read as a big-endian integer, is below `target`."""
    return int.from_bytes(hash_sum, "big") < target


def count_leading_zero_bits(hash_bytes: bytes) -> int:
    """Count the number of leading zero bits in a digest.

    Args:
        hash_bytes: Digest bytes to analyze

    Returns:
        Number of leading zero bits
    """
    zeros = 0
    for byte in hash_bytes:
        if byte == 0:
            zeros += BITS_PER_BYTE
            continue
        # Count bits in first non-zero byte
        zeros += BITS_PER_BYTE - byte.bit_length()
        break
    return zeros


def target_bit_index_for(leading_zero_bit_count: int, size_in_bits: int) -> int:
    """Convert a leading zero bit count into a target bit index.

    The conversion is its own inverse: applying it to the result with the same
    digest size gives the original count back.
    """
    return size_in_bits - leading_zero_bit_count
