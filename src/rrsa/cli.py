"""
rrsa-cli - command line interface.

Subcommands:
    keygen    Generate a key pair and store it
    validate  Validate key files, or check that two keys form a pair
    encrypt   Encode a file with a public key
    decrypt   Decode a file with a private key
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from . import __version__
from .codec.block_codec import decode_file, encode_file
from .config import DEFAULT_KEY_SIZE, MAX_KEY_SIZE, MIN_KEY_SIZE, PRIVATE_KEY_NAME, PUBLIC_KEY_NAME, default_dir
from .errors import RsaError, WrongKeyVariantError
from .keys.generation import generate_key_pair
from .keys.key import KeyPair, KeyVariant
from .keys.key_files import read_key, write_key_pair, write_key_pair_default

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="rrsa-cli",
        description="RSA keys generation, encryption and decryption, for learning purposes only.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")
    sub = parser.add_subparsers(dest="command", required=True)

    keygen = sub.add_parser(
        "keygen", help="Generates a Public and a Private key, and stores them in output files."
    )
    keygen.add_argument(
        "-k", "--key-size", type=int, default=None,
        help=f"Key size in bits (defaults to {DEFAULT_KEY_SIZE}, must be in {MIN_KEY_SIZE}..={MAX_KEY_SIZE}).",
    )
    keygen.add_argument(
        "-o", "--out-path", type=Path, default=None, metavar="PATH",
        help="Path to save key files (Ex: ./keys/key or ./keys/, defaults to the rrsa config directory).",
    )
    keygen.add_argument("-n", "--ndex", action="store_true",
                        help="Generates a key with a non default exponent value.")
    keygen.add_argument("-r", "--results", action="store_true",
                        help="Prints the key generation internal results.")
    keygen.add_argument("-p", "--progress", action="store_true",
                        help="Prints the progress of the key generation.")

    validate = sub.add_parser(
        "validate",
        help="Validates a Key format, and that two Keys are mathematically related if both are given.",
    )
    validate.add_argument("-p", "--public-key-path", type=Path, default=None, metavar="PATH",
                          help="Path to a Public Key.")
    validate.add_argument("-k", "--private-key-path", type=Path, default=None, metavar="PATH",
                          help="Path to a Private Key.")

    for name, variant, help_text in (
        ("encrypt", "Public", "Encrypts a plain text file using a Public Key."),
        ("decrypt", "Private", "Decrypts an encrypted file using a Private Key."),
    ):
        command = sub.add_parser(name, help=help_text)
        command.add_argument("-i", "--in-path", type=Path, required=True, metavar="PATH",
                             help="Input file path.")
        command.add_argument("-o", "--out-path", type=Path, default=None, metavar="PATH",
                             help="Output file path (defaults to cwd).")
        command.add_argument("-k", "--key-path", type=Path, default=None, metavar="PATH",
                             help=f"Path to {variant} Key (defaults to the rrsa config directory).")

    return parser


def _load_key(path: Optional[Path], variant: KeyVariant):
    """Read the key for encrypt/decrypt, resolving directories by variant."""
    name = PUBLIC_KEY_NAME if variant is KeyVariant.PUBLIC else PRIVATE_KEY_NAME
    if path is None:
        path = default_dir()
    if path.is_dir():
        path = path / name
    key = read_key(path)
    key.require_variant(variant)
    return key


def _cmd_keygen(args: argparse.Namespace) -> None:
    key_pair = generate_key_pair(
        args.key_size,
        use_default_exponent=not args.ndex,
        print_results=args.results,
        print_progress=args.progress,
    )
    if args.out_path is not None:
        write_key_pair(key_pair, args.out_path)
    else:
        write_key_pair_default(key_pair)


def _cmd_validate(args: argparse.Namespace) -> None:
    pub_path, priv_path = args.public_key_path, args.private_key_path
    if pub_path is None and priv_path is None:
        raise RsaError("At least one of --public-key-path/--private-key-path is required")

    if pub_path is not None and priv_path is not None:
        pair = KeyPair(public_key=read_key(pub_path), private_key=read_key(priv_path))
        if not pair.is_valid():
            raise RsaError("Key Pair is not valid!")
        print("Key Pair is valid!")
    elif priv_path is not None:
        key = read_key(priv_path)
        if not key.is_private():
            raise WrongKeyVariantError(KeyVariant.PRIVATE, key.variant)
        print("Private Key is valid!")
    else:
        key = read_key(pub_path)
        if not key.is_public():
            raise WrongKeyVariantError(KeyVariant.PUBLIC, key.variant)
        print("Public Key is valid!")


def _cmd_encrypt(args: argparse.Namespace) -> None:
    key = _load_key(args.key_path, KeyVariant.PUBLIC)
    result = encode_file(args.in_path, args.out_path, key)
    logger.info("Encoded %s -> %s (%d blocks)",
                result['input_path'], result['output_path'], result['blocks'])


def _cmd_decrypt(args: argparse.Namespace) -> None:
    key = _load_key(args.key_path, KeyVariant.PRIVATE)
    result = decode_file(args.in_path, args.out_path, key)
    logger.info("Decoded %s -> %s (%d blocks)",
                result['input_path'], result['output_path'], result['blocks'])


COMMANDS = {
    'keygen': _cmd_keygen,
    'validate': _cmd_validate,
    'encrypt': _cmd_encrypt,
    'decrypt': _cmd_decrypt,
}


def main(argv: Optional[List[str]] = None) -> int:
    """Run the CLI; returns the process exit status."""
    args = build_parser().parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    try:
        COMMANDS[args.command](args)
    except RsaError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
