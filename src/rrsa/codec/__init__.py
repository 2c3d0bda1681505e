# Block Codec Module
"""
Block-wise encode/decode of byte streams with RSA keys.

No padding scheme is applied; this is a learning implementation.
"""

# Lazy imports to avoid RuntimeWarning when running module directly
def __getattr__(name):
    """Lazy import of the codec functions."""
    from . import block_codec
    return getattr(block_codec, name)

__all__ = [
    'encode_stream',
    'decode_stream',
    'encode_bytes',
    'decode_bytes',
    'encode_file',
    'decode_file',
    'block_sizes',
]
