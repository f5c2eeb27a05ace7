"""Restrict a permutation on ``[0, W)`` to a permutation on ``[0, N)``.

A bijection on a finite set is a union of disjoint cycles. Walking the
cycle from an in-domain value until the next in-domain value gives a
bijection on the subset; walking backwards with the inverse undoes it.
"""

from __future__ import annotations

import logging
from typing import Protocol

from htcode.errors import ConfigurationError, DomainExhaustedError, OutOfDomainError

logger = logging.getLogger("htcode.codec")

DEFAULT_MAX_WALK = 1000


class Permutation(Protocol):
    size: int

    def encrypt(self, value: int) -> int: ...

    def decrypt(self, value: int) -> int: ...


class CycleWalker:
    """Bijection on ``[0, domain_size)`` built from a larger permutation."""

    def __init__(
        self,
        permutation: Permutation,
        domain_size: int,
        max_walk: int = DEFAULT_MAX_WALK,
    ):
        if domain_size < 1:
            raise ConfigurationError(f"Domain size must be positive, got {domain_size}")
        if permutation.size < domain_size:
            raise ConfigurationError(
                f"Permutation domain {permutation.size} is smaller "
                f"than identifier domain {domain_size}"
            )
        if max_walk < 1:
            raise ConfigurationError(f"max_walk must be at least 1, got {max_walk}")
        self.permutation = permutation
        self.domain_size = domain_size
        self.max_walk = max_walk

    def _walk(self, step, value: int, direction: str) -> int:
        for steps in range(1, self.max_walk + 1):
            value = step(value)
            if value < self.domain_size:
                if steps > 1:
                    logger.debug("%s walked %d steps", direction, steps)
                return value
        raise DomainExhaustedError(
            f"{direction} did not re-enter [0, {self.domain_size}) within {self.max_walk} steps"
        )

    def encrypt(self, value: int) -> int:
        if not 0 <= value < self.domain_size:
            raise ValueError(f"Value {value} outside domain [0, {self.domain_size})")
        return self._walk(self.permutation.encrypt, value, "encrypt")

    def decrypt(self, value: int) -> int:
        if not 0 <= value < self.domain_size:
            raise OutOfDomainError(
                f"Value {value} is outside [0, {self.domain_size}) and was never issued"
            )
        return self._walk(self.permutation.decrypt, value, "decrypt")
