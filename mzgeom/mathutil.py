"""Small numeric helpers."""

from __future__ import annotations


def pwr2(x: int) -> int:
    """Return the smallest power of two not less than ``x``; 0 maps to 0."""
    if x < 0:
        raise ValueError("pwr2 needs a non-negative integer")
    if x == 0:
        return 0
    return 1 << (x - 1).bit_length()