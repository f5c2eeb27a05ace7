"""Seeded round function for the Feistel network.

All arithmetic is pinned to unsigned 32-bit wraparound so the key
schedule is identical to the JavaScript generator that issued the
first codes. Changing anything here invalidates every code in the field.
"""

from __future__ import annotations

from collections.abc import Callable

MASK32 = 0xFFFFFFFF


def _imul(a: int, b: int) -> int:
    """32-bit integer multiply, low word only."""
    return (a * b) & MASK32


def string_to_seed(text: str) -> int:
    """Polynomial hash ``h = h * 31 + unit`` over UTF-16 code units."""
    data = text.encode("utf-16-le")
    h = 0
    for i in range(0, len(data), 2):
        unit = data[i] | (data[i + 1] << 8)
        h = (h * 31 + unit) & MASK32
    return h


def mulberry32(state: int) -> Callable[[], int]:
    """Return a generator of raw 32-bit mulberry32 samples."""
    state &= MASK32

    def next_u32() -> int:
        nonlocal state
        state = (state + 0x6D2B79F5) & MASK32
        t = state
        t = _imul(t ^ (t >> 15), t | 1)
        t ^= (t + _imul(t ^ (t >> 7), t | 61)) & MASK32
        return (t ^ (t >> 14)) & MASK32

    return next_u32


def round_value(right: int, round_index: int, seed: str, modulus: int) -> int:
    """Keyed pseudo-random value in ``[0, modulus)``.

    Equal to ``floor(sample / 2**32 * modulus)``; the integer form avoids
    relying on float rounding.
    """
    key = f"{seed}-{round_index}-{right}"
    sample = mulberry32(string_to_seed(key))()
    return (sample * modulus) >> 32
