"""Fixed-width positional codes over a reduced alphabet."""

from __future__ import annotations

from htcode.errors import (
    CodeOverflowError,
    ConfigurationError,
    InvalidCharacterError,
    InvalidLengthError,
)

# No I, O, Q, 0 or 1: they are misread for each other when typed from a label.
UNAMBIGUOUS = "ABCDEFGHJKLMNPRSTUVWXYZ23456789"


class AlphabetCodec:
    """Integer in ``[0, base**length)`` <-> string of exactly ``length`` symbols.

    Codes are most significant symbol first unless ``little_endian`` is set,
    which is the order the legacy numeric codes were issued in.
    """

    def __init__(self, symbols: str = UNAMBIGUOUS, length: int = 6, little_endian: bool = False):
        if len(symbols) < 2:
            raise ConfigurationError("Alphabet needs at least two symbols")
        if len(set(symbols)) != len(symbols):
            raise ConfigurationError(f"Alphabet {symbols!r} has duplicate symbols")
        if length < 1:
            raise ConfigurationError(f"Code length must be positive, got {length}")
        self.symbols = symbols
        self.length = length
        self.little_endian = little_endian
        self._index = {ch: i for i, ch in enumerate(symbols)}

    @property
    def base(self) -> int:
        return len(self.symbols)

    @property
    def capacity(self) -> int:
        return self.base**self.length

    def to_code(self, value: int) -> str:
        if value < 0:
            raise CodeOverflowError(f"Cannot encode negative value {value}")
        digits = []
        rest = value
        for _ in range(self.length):
            rest, digit = divmod(rest, self.base)
            digits.append(self.symbols[digit])
        if rest:
            raise CodeOverflowError(
                f"Value {value} does not fit in {self.length} base-{self.base} symbols"
            )
        if not self.little_endian:
            digits.reverse()
        return "".join(digits)

    def to_value(self, code: str) -> int:
        if len(code) != self.length:
            raise InvalidLengthError(
                f"Code {code!r} has {len(code)} characters, expected {self.length}"
            )
        bad = [ch for ch in code if ch not in self._index]
        if bad:
            raise InvalidCharacterError(
                f"Code {code!r} contains characters outside the alphabet: {''.join(bad)!r}"
            )
        ordered = reversed(code) if self.little_endian else code
        value = 0
        for ch in ordered:
            value = value * self.base + self._index[ch]
        return value
