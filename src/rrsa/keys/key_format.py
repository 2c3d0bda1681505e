"""
Key Text Format

Public key, default exponent:
    "rrsa <hex modulus>\\n"
Public key, non default exponent:
    "rrsa-ndex <hex modulus> <hex exponent>\\n"
Private key:
    "-----BEGIN RSA-RUST PRIVATE KEY-----\\n"
    "<hex modulus>\\n"
    "<hex exponent>\\n"
    "-----END RSA-RUST PRIVATE KEY-----\\n"

Hex digits are lowercase without a 0x prefix.
"""

import re
from typing import List

from ..config import DEFAULT_EXPONENT
from ..errors import ImproperlyFormattedKeyError, KeyFormatProblem
from .key import Key, KeyVariant


PUBLIC_KEY_NORMAL_HEADER = "rrsa"
PUBLIC_KEY_NDEX_HEADER = "rrsa-ndex"
PUBLIC_KEY_SPLIT_CHAR = " "
PRIVATE_KEY_HEADER = "-----BEGIN RSA-RUST PRIVATE KEY-----"
PRIVATE_KEY_FOOTER = "-----END RSA-RUST PRIVATE KEY-----"
PRIVATE_KEY_SPLIT_CHAR = "\n"

HEX_PATTERN = re.compile(r"[0-9a-f]+")


def _hex(value: int) -> str:
    return format(value, "x")


def key_to_str(key: Key) -> str:
    """
    Format a key as the text content of its key file.

    Args:
        key: Public or private key

    Returns:
        The serialized key, newline terminated
    """
    if key.variant is KeyVariant.PUBLIC:
        if key.has_default_exponent():
            return f"{PUBLIC_KEY_NORMAL_HEADER} {_hex(key.modulus)}\n"
        return f"{PUBLIC_KEY_NDEX_HEADER} {_hex(key.modulus)} {_hex(key.exponent)}\n"

    return (
        f"{PRIVATE_KEY_HEADER}\n"
        f"{_hex(key.modulus)}\n"
        f"{_hex(key.exponent)}\n"
        f"{PRIVATE_KEY_FOOTER}\n"
    )


def _parse_hex_fields(fields: List[str], what: str) -> List[int]:
    values = []
    for field in fields:
        field = field.strip()
        if not HEX_PATTERN.fullmatch(field):
            raise ImproperlyFormattedKeyError(
                KeyFormatProblem.INVALID_CHARACTERS,
                f"because the {what} values had invalid characters",
            )
        values.append(int(field, 16))
    return values


def _build_key(exponent: int, modulus: int, variant: KeyVariant) -> Key:
    if modulus == 0:
        raise ImproperlyFormattedKeyError(
            KeyFormatProblem.ZERO_MODULUS, "because its modulus was zero"
        )
    return Key(exponent=exponent, modulus=modulus, variant=variant)


def _public_ndex_key_from_str(text: str) -> Key:
    # example: "rrsa-ndex 11c68c75 5b97\n"
    pieces = text.split(PUBLIC_KEY_SPLIT_CHAR)
    if len(pieces) != 3:
        raise ImproperlyFormattedKeyError(
            KeyFormatProblem.FIELD_COUNT,
            "because it had the wrong number of pieces for a public ndex key",
        )
    if pieces[0] != PUBLIC_KEY_NDEX_HEADER:
        raise ImproperlyFormattedKeyError(
            KeyFormatProblem.HEADER, "because it did not start with a correct header"
        )
    modulus, exponent = _parse_hex_fields(pieces[1:], "exponent and/or modulus")
    return _build_key(exponent, modulus, KeyVariant.PUBLIC)


def _public_key_from_str(text: str) -> Key:
    # example: "rrsa 9668f701\n"
    pieces = text.split(PUBLIC_KEY_SPLIT_CHAR)
    if len(pieces) != 2:
        raise ImproperlyFormattedKeyError(
            KeyFormatProblem.FIELD_COUNT,
            "because it had the wrong number of pieces for a public key",
        )
    if pieces[0] != PUBLIC_KEY_NORMAL_HEADER:
        raise ImproperlyFormattedKeyError(
            KeyFormatProblem.HEADER, "because it did not start with a correct header"
        )
    (modulus,) = _parse_hex_fields(pieces[1:], "modulus")
    return _build_key(DEFAULT_EXPONENT, modulus, KeyVariant.PUBLIC)


def _private_key_from_str(text: str) -> Key:
    pieces = text.split(PRIVATE_KEY_SPLIT_CHAR)
    # header, modulus, exponent, footer and the empty piece after the last newline
    if len(pieces) != 5 or pieces[4] != "":
        raise ImproperlyFormattedKeyError(
            KeyFormatProblem.FIELD_COUNT,
            "because it had the wrong number of pieces for a private key",
        )
    if pieces[0] != PRIVATE_KEY_HEADER:
        raise ImproperlyFormattedKeyError(
            KeyFormatProblem.HEADER,
            "because it didn't have correct header for a private key",
        )
    if pieces[3] != PRIVATE_KEY_FOOTER:
        raise ImproperlyFormattedKeyError(
            KeyFormatProblem.FOOTER,
            "because it didn't have correct footer for a private key",
        )
    modulus, exponent = _parse_hex_fields(pieces[1:3], "exponent and/or modulus")
    return _build_key(exponent, modulus, KeyVariant.PRIVATE)


def key_from_str(text: str) -> Key:
    """
    Parse a key from the text content of its key file.

    Args:
        text: Serialized key

    Returns:
        The parsed Key

    Raises:
        ImproperlyFormattedKeyError: If a structural check fails; ``reason``
            tells which one (header, field count, invalid characters, footer,
            zero modulus)
    """
    if text.startswith(PUBLIC_KEY_NDEX_HEADER):
        return _public_ndex_key_from_str(text)
    if text.startswith(PUBLIC_KEY_NORMAL_HEADER):
        return _public_key_from_str(text)
    if text.startswith(PRIVATE_KEY_HEADER):
        return _private_key_from_str(text)
    raise ImproperlyFormattedKeyError(
        KeyFormatProblem.HEADER, "because it did not start with a correct header"
    )
