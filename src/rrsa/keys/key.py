"""
Key Model

A Key is an (exponent, modulus) pair tagged with its variant. A KeyPair
holds the public and private halves produced by one generation run.
"""

from dataclasses import dataclass
from enum import Enum

from ..config import DEFAULT_EXPONENT, VALIDATION_PROBE
from ..core_math.rsa_math import mod_pow
from ..errors import WrongKeyVariantError


class KeyVariant(Enum):
    """Whether a Key is the public or the private half of a pair."""
    PUBLIC = "public"
    PRIVATE = "private"


@dataclass(frozen=True)
class Key:
    """
    Immutable RSA key.

    Attributes:
        exponent: ``E`` for a public key, ``D`` for a private key
        modulus: ``N``, shared by both keys of a pair
        variant: KeyVariant.PUBLIC or KeyVariant.PRIVATE
    """
    exponent: int
    modulus: int
    variant: KeyVariant

    def __post_init__(self):
        if self.modulus < 1:
            raise ValueError("Key modulus must be positive")
        if self.exponent < 0:
            raise ValueError("Key exponent must be non-negative")

    @classmethod
    def public(cls, modulus: int, exponent: int = DEFAULT_EXPONENT) -> 'Key':
        """Build a public key; the exponent defaults to 65537."""
        return cls(exponent=exponent, modulus=modulus, variant=KeyVariant.PUBLIC)

    @classmethod
    def private(cls, modulus: int, exponent: int) -> 'Key':
        """Build a private key."""
        return cls(exponent=exponent, modulus=modulus, variant=KeyVariant.PRIVATE)

    def is_public(self) -> bool:
        return self.variant is KeyVariant.PUBLIC

    def is_private(self) -> bool:
        return self.variant is KeyVariant.PRIVATE

    def require_variant(self, expected: KeyVariant) -> None:
        """Raise WrongKeyVariantError unless this key is of the expected variant."""
        if self.variant is not expected:
            raise WrongKeyVariantError(expected, self.variant)

    def has_default_exponent(self) -> bool:
        """True if the exponent is the fixed default 65537."""
        return self.exponent == DEFAULT_EXPONENT

    @property
    def key_size(self) -> int:
        """Bit length of the modulus."""
        return self.modulus.bit_length()

    def __str__(self) -> str:
        from .key_format import key_to_str
        return key_to_str(self)


@dataclass(frozen=True)
class KeyPair:
    """
    Public and private keys generated together.

    Example:
        >>> pair = KeyPair.generate(512)
        >>> pair.is_valid()
        True
    """
    public_key: Key
    private_key: Key

    @classmethod
    def generate(cls, key_size=None, use_default_exponent: bool = True,
                 print_results: bool = False, print_progress: bool = False,
                 rng=None) -> 'KeyPair':
        """Generate a new key pair. See ``rrsa.keys.generation.generate_key_pair``."""
        from .generation import generate_key_pair
        return generate_key_pair(key_size, use_default_exponent,
                                 print_results, print_progress, rng)

    def is_valid(self) -> bool:
        """
        Check that both keys belong together.

        The moduli must match, the variants must be right, and a fixed
        probe value encoded with the public key must decode back with the
        private key. The probe is reduced modulo N first so that small
        moduli are checked on a representable value.

        Returns:
            True if the pair round-trips the probe, False otherwise
        """
        public, private = self.public_key, self.private_key
        if not (public.is_public() and private.is_private()):
            return False
        if public.modulus != private.modulus or public.exponent >= public.modulus:
            return False

        plain = VALIDATION_PROBE % public.modulus
        encoded = mod_pow(plain, public.exponent, public.modulus)
        decoded = mod_pow(encoded, private.exponent, private.modulus)
        return decoded == plain

    @property
    def modulus(self) -> int:
        """Modulus n."""
        return self.public_key.modulus

    @property
    def key_size(self) -> int:
        """Key size in bits."""
        return self.public_key.key_size

    def __repr__(self) -> str:
        return f"KeyPair(bits={self.key_size}, e={self.public_key.exponent})"
