"""
PEM Interoperability

Exports rrsa keys as standard PEM so other tools can read them, using the
``cryptography`` package.

- Public keys become SubjectPublicKeyInfo PEM.
- Private keys need the public exponent as well; the primes P and Q are
  recovered from (N, E, D) and the key is written as unencrypted PKCS#8.

These are toy keys: no padding scheme is implied by the export.
"""

from typing import Tuple

from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa

from .keys.key import Key, KeyPair, KeyVariant


def public_numbers(key: Key) -> rsa.RSAPublicNumbers:
    """Convert a public Key to ``RSAPublicNumbers``."""
    key.require_variant(KeyVariant.PUBLIC)
    return rsa.RSAPublicNumbers(key.exponent, key.modulus)


def private_numbers(pair: KeyPair) -> rsa.RSAPrivateNumbers:
    """
    Convert a KeyPair to ``RSAPrivateNumbers``.

    Args:
        pair: Key pair whose private key is to be exported

    Returns:
        Private numbers including the recovered primes and CRT values
    """
    pub = public_numbers(pair.public_key)
    pair.private_key.require_variant(KeyVariant.PRIVATE)
    d = pair.private_key.exponent

    p, q = rsa.rsa_recover_prime_factors(pub.n, pub.e, d)
    return rsa.RSAPrivateNumbers(
        p=p,
        q=q,
        d=d,
        dmp1=rsa.rsa_crt_dmp1(d, p),
        dmq1=rsa.rsa_crt_dmq1(d, q),
        iqmp=rsa.rsa_crt_iqmp(p, q),
        public_numbers=pub,
    )


def public_key_to_pem(key: Key) -> bytes:
    """Serialize a public Key as SubjectPublicKeyInfo PEM."""
    return public_numbers(key).public_key().public_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PublicFormat.SubjectPublicKeyInfo,
    )


def key_pair_to_pem(pair: KeyPair) -> Tuple[bytes, bytes]:
    """
    Serialize a KeyPair as PEM.

    Returns:
        Tuple (public_pem, private_pem); the private key is unencrypted PKCS#8
    """
    private_pem = private_numbers(pair).private_key().private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    )
    return public_key_to_pem(pair.public_key), private_pem
