# Keys Module
"""
Key model, generation, text format and key files.

- Key / KeyPair / KeyVariant - key.py
- generate_key_pair - generation.py
- key_to_str / key_from_str - key_format.py
- read_key / write_key and friends - key_files.py
"""

from .key import Key, KeyPair, KeyVariant

from .generation import generate_key_pair, check_key_size

from .key_format import key_to_str, key_from_str

from .key_files import (
    read_key,
    read_key_default,
    read_key_pair,
    read_key_pair_default,
    write_key,
    write_key_default,
    write_key_pair,
    write_key_pair_default,
)

__all__ = [
    # Model
    'Key',
    'KeyPair',
    'KeyVariant',
    # Generation
    'generate_key_pair',
    'check_key_size',
    # Text format
    'key_to_str',
    'key_from_str',
    # Files
    'read_key',
    'read_key_default',
    'read_key_pair',
    'read_key_pair_default',
    'write_key',
    'write_key_default',
    'write_key_pair',
    'write_key_pair_default',
]
