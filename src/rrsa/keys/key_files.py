"""
Key Files

Reads and writes keys and key pairs on disk.

Naming convention:
- A key pair written to ``path`` produces ``path`` (private key) and
  ``path.pub`` (public key).
- A key written into a directory uses ``rrsa_key`` or ``rrsa_key.pub``.
- The default directory comes from ``rrsa.config.default_dir()``.
"""

import logging
from pathlib import Path
from typing import Union

from ..config import PRIVATE_KEY_NAME, PUBLIC_KEY_EXTENSION, PUBLIC_KEY_NAME, default_dir
from ..errors import KeyFileError, MissingKeyError
from .key import Key, KeyPair
from .key_format import key_from_str, key_to_str

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def _default_name(key: Key) -> str:
    return PUBLIC_KEY_NAME if key.is_public() else PRIVATE_KEY_NAME


def _public_path_for(path: Path) -> Path:
    return path.with_name(f"{path.name}.{PUBLIC_KEY_EXTENSION}")


def write_key(key: Key, path: PathLike) -> Path:
    """
    Write a key to a file path, or into an existing directory.

    Missing parent directories of a file path are created.

    Args:
        key: Key to write
        path: Target file or existing directory

    Returns:
        The final file path written to

    Raises:
        KeyFileError: If the file cannot be written
    """
    path = Path(path)
    if path.is_dir():
        filepath = path / _default_name(key)
    else:
        filepath = path

    try:
        filepath.parent.mkdir(parents=True, exist_ok=True)
        filepath.write_text(key_to_str(key), encoding="utf-8")
    except OSError as exc:
        raise KeyFileError("Could not write key file", str(filepath)) from exc

    logger.debug("Wrote %s key to %s", key.variant.value, filepath)
    return filepath


def write_key_default(key: Key) -> Path:
    """Write a key into the default keys directory."""
    return write_key(key, default_dir() / _default_name(key))


def write_key_pair(pair: KeyPair, path: PathLike) -> None:
    """
    Write both keys of a pair.

    If ``path`` is a directory the default key names are used inside it,
    otherwise the private key goes to ``path`` and the public key to
    ``path.pub``.
    """
    path = Path(path)
    if path.is_dir():
        write_key(pair.public_key, path)
        write_key(pair.private_key, path)
    else:
        write_key(pair.public_key, _public_path_for(path))
        write_key(pair.private_key, path)


def write_key_pair_default(pair: KeyPair) -> None:
    """Write both keys of a pair into the default keys directory."""
    write_key_pair(pair, default_dir())


def _read_key_file(filepath: Path) -> Key:
    try:
        text = filepath.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise MissingKeyError(f"Key file not found: {filepath}") from exc
    except OSError as exc:
        raise KeyFileError("Could not read key file", str(filepath)) from exc
    return key_from_str(text)


def read_key(path: PathLike) -> Key:
    """
    Read a key from a file, or from a directory.

    In a directory the private key name is tried first, then the public
    key name.

    Raises:
        MissingKeyError: If no key file exists at the location
        KeyFileError: If the file cannot be read
        ImproperlyFormattedKeyError: If the file content is not a key
    """
    path = Path(path)
    if path.is_dir():
        for name in (PRIVATE_KEY_NAME, PUBLIC_KEY_NAME):
            if (path / name).is_file():
                return _read_key_file(path / name)
        raise MissingKeyError(f"No key file found in directory: {path}")
    return _read_key_file(path)


def read_key_default() -> Key:
    """Read a key from the default keys directory (private key first)."""
    return read_key(default_dir())


def read_key_pair(path: PathLike) -> KeyPair:
    """
    Read a key pair written by ``write_key_pair``.

    Raises:
        MissingKeyError: If either of the two key files is missing
    """
    path = Path(path)
    if path.is_dir():
        pub_path = path / PUBLIC_KEY_NAME
        priv_path = path / PRIVATE_KEY_NAME
    else:
        pub_path = _public_path_for(path)
        priv_path = path

    if not (pub_path.is_file() and priv_path.is_file()):
        raise MissingKeyError(f"Missing public and/or private key for: {path}")

    return KeyPair(
        public_key=_read_key_file(pub_path),
        private_key=_read_key_file(priv_path),
    )


def read_key_pair_default() -> KeyPair:
    """Read a key pair from the default keys directory."""
    return read_key_pair(default_dir())
