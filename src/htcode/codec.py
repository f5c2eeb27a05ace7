"""The product code pipeline.

encode: identifier -> domain value -> cycle-walked Feistel -> code
decode: the same stages, inverted, in reverse order.
"""

from __future__ import annotations

import logging
from functools import lru_cache

from htcode.alphabet import AlphabetCodec
from htcode.config import HtcodeConfig, load_config
from htcode.cyclewalk import CycleWalker
from htcode.errors import CodeOverflowError, ConfigurationError
from htcode.feistel import FeistelPermutation
from htcode.shape import IdentifierShape

logger = logging.getLogger("htcode.codec")


def _check_capacity(shape: IdentifierShape, alphabet: AlphabetCodec) -> None:
    if alphabet.capacity < shape.size:
        raise CodeOverflowError(
            f"{alphabet.length} base-{alphabet.base} symbols hold {alphabet.capacity} "
            f"codes but shape {shape.template} has {shape.size} identifiers"
        )


class ProductCodec:
    """Encode and decode product identifiers. Immutable; safe to share."""

    def __init__(
        self,
        shape: IdentifierShape,
        alphabet: AlphabetCodec,
        walker: CycleWalker,
    ):
        if walker.domain_size != shape.size:
            raise ConfigurationError(
                f"Permutation domain {walker.domain_size} does not match shape size {shape.size}"
            )
        self.shape = shape
        self.alphabet = alphabet
        self.walker = walker

    @classmethod
    def from_config(cls, config: HtcodeConfig) -> ProductCodec:
        shape = IdentifierShape(config.shape)
        alphabet = AlphabetCodec(config.alphabet, config.code_length, config.little_endian)
        _check_capacity(shape, alphabet)
        left_range, right_range = config.left_range, config.right_range
        if not left_range and not right_range:
            # Split the code space itself: base^ceil(L/2) x base^floor(L/2).
            left_range = alphabet.base ** ((alphabet.length + 1) // 2)
            right_range = alphabet.base ** (alphabet.length // 2)
        feistel = FeistelPermutation(left_range, right_range, config.seed, config.rounds)
        walker = CycleWalker(feistel, shape.size, config.max_walk)
        logger.info(
            "Codec ready: shape %s (N=%d), %d x %d Feistel, %d rounds, %d-symbol codes",
            shape.template,
            shape.size,
            left_range,
            right_range,
            config.rounds,
            alphabet.length,
        )
        return cls(shape, alphabet, walker)

    @property
    def domain_size(self) -> int:
        return self.shape.size

    def encode(self, identifier: str) -> str:
        value = self.shape.to_value(identifier)
        return self.alphabet.to_code(self.walker.encrypt(value))

    def decode(self, code: str) -> str:
        value = self.alphabet.to_value(code)
        return self.shape.from_value(self.walker.decrypt(value))


@lru_cache(maxsize=1)
def default_codec() -> ProductCodec:
    """Codec built once from the process configuration."""
    return ProductCodec.from_config(load_config())


def encode(identifier: str) -> str:
    return default_codec().encode(identifier)


def decode(code: str) -> str:
    return default_codec().decode(code)
