"""
Bit and nibble helpers for single-byte advertisement fields.
"""

from __future__ import annotations


def is_bit_set(value: int, index: int) -> bool:
    """Return True if bit ``index`` (0 = least significant) of ``value`` is 1."""
    if not 0 <= index <= 7:
        raise ValueError(f"bit index out of range: {index}")
    return (value >> index) & 0x01 == 1


def lower_nibble(value: int) -> int:
    """Bits 0–3 of a byte."""
    return value & 0x0F


def upper_nibble(value: int) -> int:
    """Bits 4–7 of a byte, shifted down."""
    return (value >> 4) & 0x0F
