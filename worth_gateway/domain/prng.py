"""Seedable pseudo-random numbers for reproducible demo data"""

import math

_MASK_32 = 0xFFFFFFFF

FNV_OFFSET_BASIS = 0x811C9DC5
FNV_PRIME = 0x01000193


def fnv1a_32(text: str) -> int:
    """32-bit FNV-1a hash of the UTF-8 bytes of `text`"""
    acc = FNV_OFFSET_BASIS
    for byte in text.encode("utf-8"):
        acc ^= byte
        acc = (acc * FNV_PRIME) & _MASK_32
    return acc


def account_seed(account_id: int) -> int:
    """Stable 32-bit seed for an account id"""
    return fnv1a_32(f"account:{account_id}")


def _imul(a: int, b: int) -> int:
    return (a * b) & _MASK_32


class Mulberry32:
    """
    Mulberry32 generator: 32 bits of state, period 2**32.

    Not cryptographically secure. One instance per generation call; the
    draw sequence depends only on the seed and the number of draws taken.
    """

    def __init__(self, seed: int):
        self._state = seed & _MASK_32

    def next_float(self) -> float:
        """Uniform draw in [0, 1)"""
        self._state = (self._state + 0x6D2B79F5) & _MASK_32
        t = self._state
        t = _imul(t ^ (t >> 15), t | 1)
        t = ((t + _imul(t ^ (t >> 7), t | 61)) & _MASK_32) ^ t
        return ((t ^ (t >> 14)) & _MASK_32) / 4294967296

    def randint(self, min_value: int, max_value: int) -> int:
        """Integer in [min_value, max_value]; a degenerate range consumes no draw"""
        if min_value >= max_value:
            return min_value
        return math.floor(self.next_float() * (max_value - min_value + 1)) + min_value

    def noise(self) -> float:
        """Symmetric draw in (-1, 1); a draw of exactly 0 is redrawn"""
        draw = self.next_float()
        while draw == 0.0:
            draw = self.next_float()
        return draw * 2.0 - 1.0
