"""Feistel permutation over ``[0, left_range * right_range)``.

Additive Feistel: each round replaces ``(L, R)`` with
``(R, (L + F(R)) mod |L|)``. With unequal halves the two moduli trade
places every round, so decrypt must split with the moduli in force after
the last round.
"""

from __future__ import annotations

from htcode.errors import ConfigurationError
from htcode.rounds import round_value

MIN_ROUNDS = 3


class FeistelPermutation:
    """Keyed bijection on ``[0, size)`` where ``size = left_range * right_range``."""

    def __init__(self, left_range: int, right_range: int, seed: str, rounds: int = 4):
        if rounds < MIN_ROUNDS:
            raise ConfigurationError(f"Feistel needs at least {MIN_ROUNDS} rounds, got {rounds}")
        if right_range < 1 or left_range < right_range:
            raise ConfigurationError(
                f"Feistel halves must satisfy 1 <= right_range <= left_range "
                f"(got left={left_range}, right={right_range})"
            )
        self.left_range = left_range
        self.right_range = right_range
        self.seed = seed
        self.rounds = rounds

    @property
    def size(self) -> int:
        return self.left_range * self.right_range

    def _final_ranges(self) -> tuple[int, int]:
        if self.rounds % 2:
            return self.right_range, self.left_range
        return self.left_range, self.right_range

    def encrypt(self, value: int) -> int:
        left_mod, right_mod = self.left_range, self.right_range
        left, right = divmod(value, right_mod)
        for r in range(self.rounds):
            f = round_value(right, r, self.seed, left_mod)
            left, right = right, (left + f) % left_mod
            left_mod, right_mod = right_mod, left_mod
        return left * right_mod + right

    def decrypt(self, value: int) -> int:
        left_mod, right_mod = self._final_ranges()
        left, right = divmod(value, right_mod)
        for r in reversed(range(self.rounds)):
            left_mod, right_mod = right_mod, left_mod
            f = round_value(left, r, self.seed, left_mod)
            left, right = (right - f) % left_mod, left
        return left * right_mod + right
