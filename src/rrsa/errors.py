"""
Error Types

Every failure the library reports derives from RsaError.

Precondition violations (bad key size, wrong key variant, malformed key
text) also derive from ValueError, I/O failures from OSError, so callers
can catch them either by library type or by the builtin category.
"""

from enum import Enum
from typing import Optional


class RsaError(Exception):
    """Base class for all rrsa errors."""


class KeySizeError(RsaError, ValueError):
    """Requested key size is outside the supported range."""

    def __init__(self, key_size: int, minimum: int, maximum: int):
        self.key_size = key_size
        super().__init__(
            f"Key size not supported: {key_size} (must be in {minimum}..={maximum})"
        )


class KeyGenerationError(RsaError, RuntimeError):
    """Key generation cannot proceed with the requested parameters."""


class WrongKeyVariantError(RsaError, ValueError):
    """A public key was given where a private key is required, or vice versa."""

    def __init__(self, expected, actual):
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Expected a {expected.value} key but got a {actual.value} key"
        )


class KeyFormatProblem(Enum):
    """Which structural check of a serialized key failed."""

    HEADER = "header"
    FIELD_COUNT = "field_count"
    INVALID_CHARACTERS = "invalid_characters"
    FOOTER = "footer"
    ZERO_MODULUS = "zero_modulus"


class ImproperlyFormattedKeyError(RsaError, ValueError):
    """The string was not a properly formatted key."""

    def __init__(self, reason: KeyFormatProblem, detail: str):
        self.reason = reason
        self.detail = detail
        super().__init__(f"The string was not a properly formatted key {detail}")


class EncodingError(RsaError, ValueError):
    """A stream could not be encoded or decoded correctly."""


class StreamError(RsaError, OSError):
    """I/O failure while encoding or decoding a stream."""


class KeyFileError(RsaError, OSError):
    """I/O failure while reading or writing a key file."""

    def __init__(self, message: str, path: Optional[str] = None):
        self.path = path
        super().__init__(message if path is None else f"{message}: {path}")


class MissingKeyError(RsaError, FileNotFoundError):
    """No usable key file was found at the given location."""
