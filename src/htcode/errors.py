"""Error taxonomy for the product code pipeline.

Every failure is deterministic for a given input and seed, so none of
these are retryable.
"""

from __future__ import annotations


class CodecError(Exception):
    """Base class for all htcode errors."""


class ConfigurationError(CodecError):
    """Codec parameters are invalid or mutually inconsistent."""


class FormatError(CodecError):
    """Identifier does not match the configured shape."""


class InvalidCharacterError(CodecError):
    """Code contains a symbol outside the alphabet."""


class InvalidLengthError(CodecError):
    """Code is not exactly the configured length."""


class OutOfDomainError(CodecError):
    """Well-formed code that encode never produces under this seed."""


class DomainExhaustedError(OutOfDomainError):
    """Cycle walk did not re-enter the domain within the step cap."""


class CodeOverflowError(CodecError):
    """Value does not fit the fixed code width.

    Signals a mismatch between the identifier domain and the code space;
    raised when the pipeline is built, not per call.
    """
