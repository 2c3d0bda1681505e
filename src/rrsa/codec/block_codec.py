"""
Block Codec

Encodes a byte stream with a public key and decodes it with the matching
private key, one fixed-size block at a time. There is no padding scheme:
each block is raised to the key exponent as a plain integer.

Wire format:
    Let W = size_in_bytes(N), the bytes needed to hold N, so any value
    below N fits as well.

    Encode reads plaintext blocks of W - 1 bytes (the last one may be
    shorter), reads each as a little-endian integer, raises it to E mod N
    and writes the result as exactly W little-endian bytes (zero-filled
    at the high end).

    Decode reads W-byte blocks, raises each to D mod N and writes the
    little-endian result. Every block except the last is written at the
    full plaintext width W - 1; the last one is written at its natural
    length, so trailing zero bytes at the very end of the plaintext are
    not restored.
"""

import io
import logging
from pathlib import Path
from typing import BinaryIO, Callable, Optional, Union

from ..config import DECODED_FILE_NAME, ENCODED_FILE_NAME
from ..core_math.rsa_math import bytes_to_int_le, int_to_bytes_le, mod_pow, size_in_bytes
from ..errors import EncodingError, StreamError
from ..keys.key import Key, KeyVariant

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]

# Plaintext blocks are this many bytes shorter than ciphertext blocks
ENCRYPTION_BYTE_OFFSET = 1


def block_sizes(key: Key):
    """
    Return (plaintext_block_size, ciphertext_block_size) for a key.

    Raises:
        EncodingError: If the modulus is too small to carry a whole byte
    """
    cipher_size = size_in_bytes(key.modulus)
    plain_size = cipher_size - ENCRYPTION_BYTE_OFFSET
    if plain_size < 1:
        raise EncodingError("Modulus is too small to encode any data")
    return plain_size, cipher_size


def _read_block(stream: BinaryIO, size: int) -> bytes:
    """Read up to ``size`` bytes, stopping early only at end of stream."""
    block = stream.read(size)
    if not block or len(block) == size:
        return block
    parts = [block]
    remaining = size - len(block)
    while remaining:
        chunk = stream.read(remaining)
        if not chunk:
            break
        parts.append(chunk)
        remaining -= len(chunk)
    return b"".join(parts)


def _run(operation: Callable[[], int], what: str) -> int:
    """Run a stream loop, converting I/O failures to StreamError."""
    try:
        return operation()
    except OSError as exc:
        raise StreamError(f"I/O error while {what}: {exc}") from exc


def encode_stream(input_stream: BinaryIO, output_stream: BinaryIO, public_key: Key) -> int:
    """
    Encode a stream with a public key.

    Args:
        input_stream: Readable binary stream (plaintext)
        output_stream: Writable binary stream (receives ciphertext)
        public_key: Public key to encode with

    Returns:
        Number of blocks written

    Raises:
        WrongKeyVariantError: If public_key is a private key
        StreamError: On any I/O failure
    """
    public_key.require_variant(KeyVariant.PUBLIC)
    max_bytes_read, max_bytes_write = block_sizes(public_key)
    exponent, modulus = public_key.exponent, public_key.modulus

    def loop() -> int:
        blocks = 0
        bytes_read = max_bytes_read
        while bytes_read == max_bytes_read:
            source = _read_block(input_stream, max_bytes_read)
            bytes_read = len(source)
            if bytes_read == 0:
                break
            message = bytes_to_int_le(source)
            encoded = mod_pow(message, exponent, modulus)
            output_stream.write(int_to_bytes_le(encoded, max_bytes_write))
            blocks += 1
        output_stream.flush()
        return blocks

    blocks = _run(loop, "encoding")
    logger.debug("Encoded %d block(s) of %d bytes", blocks, max_bytes_write)
    return blocks


def decode_stream(input_stream: BinaryIO, output_stream: BinaryIO, private_key: Key) -> int:
    """
    Decode a stream produced by ``encode_stream``.

    Args:
        input_stream: Readable binary stream (ciphertext)
        output_stream: Writable binary stream (receives plaintext)
        private_key: Private key matching the encoding public key

    Returns:
        Number of blocks decoded

    Raises:
        WrongKeyVariantError: If private_key is a public key
        EncodingError: If the ciphertext is truncated or does not decode
            to plaintext-sized blocks (usually the wrong key)
        StreamError: On any I/O failure
    """
    private_key.require_variant(KeyVariant.PRIVATE)
    max_bytes_write, max_bytes = block_sizes(private_key)
    exponent, modulus = private_key.exponent, private_key.modulus

    def decode_block(block: bytes) -> int:
        return mod_pow(bytes_to_int_le(block), exponent, modulus)

    def loop() -> int:
        blocks = 0
        pending = None
        while True:
            source = _read_block(input_stream, max_bytes)
            if not source:
                break
            if len(source) != max_bytes:
                raise EncodingError(
                    f"Truncated ciphertext: last block has {len(source)} of {max_bytes} bytes"
                )
            if pending is not None:
                try:
                    output_stream.write(int_to_bytes_le(decode_block(pending), max_bytes_write))
                except OverflowError as exc:
                    raise EncodingError(
                        "Decoded block does not fit the plaintext block size (wrong key?)"
                    ) from exc
            pending = source
            blocks += 1

        if pending is not None:
            output_stream.write(int_to_bytes_le(decode_block(pending)))
        output_stream.flush()
        return blocks

    blocks = _run(loop, "decoding")
    logger.debug("Decoded %d block(s) of %d bytes", blocks, max_bytes)
    return blocks


def encode_bytes(data: bytes, public_key: Key) -> bytes:
    """Encode an in-memory byte string with a public key."""
    output = io.BytesIO()
    encode_stream(io.BytesIO(data), output, public_key)
    return output.getvalue()


def decode_bytes(data: bytes, private_key: Key) -> bytes:
    """Decode an in-memory byte string with a private key."""
    output = io.BytesIO()
    decode_stream(io.BytesIO(data), output, private_key)
    return output.getvalue()


def _resolve_output(out_path: Optional[PathLike], default_name: str) -> Path:
    if out_path is None:
        return Path.cwd() / default_name
    out_path = Path(out_path)
    if out_path.is_dir():
        return out_path / default_name
    return out_path


def _process_file(in_path: PathLike, out_path: Path, key: Key, expected: KeyVariant,
                  operation: Callable[[BinaryIO, BinaryIO, Key], int], what: str) -> dict:
    # Checked before the output file is created
    key.require_variant(expected)
    if Path(in_path).resolve() == out_path.resolve():
        raise StreamError(f"Output file would overwrite the input file: {in_path}")
    try:
        with open(in_path, 'rb') as fin, open(out_path, 'wb') as fout:
            blocks = operation(fin, fout, key)
    except StreamError:
        raise
    except OSError as exc:
        raise StreamError(f"I/O error while {what}: {exc}") from exc

    return {
        'input_path': str(in_path),
        'output_path': str(out_path),
        'blocks': blocks,
        'output_size': out_path.stat().st_size,
    }


def encode_file(in_path: PathLike, out_path: Optional[PathLike], public_key: Key) -> dict:
    """
    Encode a file with a public key.

    Args:
        in_path: Plaintext file
        out_path: Output file or directory (default: ./encrypted.cypher)
        public_key: Public key to encode with

    Returns:
        Dict with paths, block count and output size
    """
    target = _resolve_output(out_path, ENCODED_FILE_NAME)
    return _process_file(in_path, target, public_key, KeyVariant.PUBLIC,
                         encode_stream, "encoding")


def decode_file(in_path: PathLike, out_path: Optional[PathLike], private_key: Key) -> dict:
    """
    Decode a file with a private key.

    Args:
        in_path: Ciphertext file
        out_path: Output file or directory (default: ./decrypted.message)
        private_key: Private key to decode with

    Returns:
        Dict with paths, block count and output size
    """
    target = _resolve_output(out_path, DECODED_FILE_NAME)
    return _process_file(in_path, target, private_key, KeyVariant.PRIVATE,
                         decode_stream, "decoding")
