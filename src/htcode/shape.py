"""Identifier shape: structured identifier <-> dense integer.

A shape is written as a template, one character per position:
``9`` is a decimal digit, ``A`` an uppercase letter. Runs of the same
class form one field, so ``99AA9999`` is digits(2) + letters(2) + digits(4).
Fields combine as a mixed-radix number, first field most significant.
"""

from __future__ import annotations

import re
import string
from dataclasses import dataclass
from itertools import groupby

from htcode.errors import ConfigurationError, FormatError

_CLASSES = {
    "9": string.digits,
    "A": string.ascii_uppercase,
}


@dataclass(frozen=True)
class Field:
    """One fixed-width field of an identifier."""

    symbols: str
    width: int

    @property
    def radix(self) -> int:
        return len(self.symbols) ** self.width

    def parse(self, text: str) -> int:
        base = len(self.symbols)
        value = 0
        for ch in text:
            value = value * base + self.symbols.index(ch)
        return value

    def render(self, value: int) -> str:
        base = len(self.symbols)
        out = []
        for _ in range(self.width):
            value, digit = divmod(value, base)
            out.append(self.symbols[digit])
        return "".join(reversed(out))


class IdentifierShape:
    """Validates identifiers and maps them to ``[0, size)`` and back."""

    def __init__(self, template: str):
        if not template:
            raise ConfigurationError("Identifier shape template is empty")
        unknown = set(template) - set(_CLASSES)
        if unknown:
            raise ConfigurationError(
                f"Unknown shape characters {''.join(sorted(unknown))!r} in {template!r}; "
                "use '9' for digits and 'A' for letters"
            )
        self.template = template
        self.fields = tuple(
            Field(_CLASSES[cls], len(list(run))) for cls, run in groupby(template)
        )
        self._pattern = re.compile(
            "".join(f"[{re.escape(f.symbols)}]{{{f.width}}}" for f in self.fields)
        )
        size = 1
        for field in self.fields:
            size *= field.radix
        self.size = size

    def __repr__(self) -> str:
        return f"IdentifierShape({self.template!r})"

    @property
    def length(self) -> int:
        return len(self.template)

    def to_value(self, identifier: str) -> int:
        if not isinstance(identifier, str) or not self._pattern.fullmatch(identifier):
            raise FormatError(
                f"Identifier {identifier!r} does not match shape {self.template}"
            )
        value = 0
        pos = 0
        for field in self.fields:
            chunk = identifier[pos : pos + field.width]
            value = value * field.radix + field.parse(chunk)
            pos += field.width
        return value

    def from_value(self, value: int) -> str:
        if not 0 <= value < self.size:
            raise ValueError(f"Value {value} outside identifier domain [0, {self.size})")
        parts = []
        for field in reversed(self.fields):
            value, part = divmod(value, field.radix)
            parts.append(field.render(part))
        return "".join(reversed(parts))
