"""
rrsa - RSA key generation, encoding and decoding, for learning purposes only.

It should not be used for real world applications: there is no padding
scheme and nothing is constant-time.
"""

from .errors import (
    RsaError,
    KeySizeError,
    KeyGenerationError,
    WrongKeyVariantError,
    KeyFormatProblem,
    ImproperlyFormattedKeyError,
    EncodingError,
    StreamError,
    KeyFileError,
    MissingKeyError,
)
from .keys import Key, KeyPair, KeyVariant, generate_key_pair, key_from_str, key_to_str
from .codec.block_codec import (
    encode_stream,
    decode_stream,
    encode_bytes,
    decode_bytes,
    encode_file,
    decode_file,
)

__version__ = "0.2.0"

__all__ = [
    'Key',
    'KeyPair',
    'KeyVariant',
    'generate_key_pair',
    'key_from_str',
    'key_to_str',
    'encode_stream',
    'decode_stream',
    'encode_bytes',
    'decode_bytes',
    'encode_file',
    'decode_file',
    'RsaError',
    'KeySizeError',
    'KeyGenerationError',
    'WrongKeyVariantError',
    'KeyFormatProblem',
    'ImproperlyFormattedKeyError',
    'EncodingError',
    'StreamError',
    'KeyFileError',
    'MissingKeyError',
]
