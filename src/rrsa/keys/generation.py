"""
Key Pair Generation

Generates the values of P, Q, N, Tot(N), E and D and packages them as a
KeyPair.

How it works:
1. Select two distinct random primes P and Q of at most key_size / 2 bits
2. Calculate N = P * Q
3. Calculate Tot(N) = (P - 1) * (Q - 1)
4. Use E = 65537, or a random prime E < Tot(N) for non default exponents
5. Calculate D from the Bezout coefficient of E so that E*D = 1 (mod Tot(N))
6. If E*D != 1 (mod Tot(N)) the whole attempt starts over with new primes

The finished pair is checked with KeyPair.is_valid() before it is
returned; a failure there is a defect in this module, not bad input.
"""

import logging
from typing import Optional

from ..config import DEFAULT_EXPONENT, DEFAULT_KEY_SIZE, MAX_KEY_SIZE, MIN_KEY_SIZE
from ..core_math.rsa_math import PrimeGenerator, extended_euclid
from ..errors import KeyGenerationError, KeySizeError
from .key import Key, KeyPair

logger = logging.getLogger(__name__)


def _printf(should_print: bool, text: str) -> None:
    """Print without newline and flush, if asked to."""
    if should_print:
        print(text, end="", flush=True)


def check_key_size(key_size: int) -> None:
    """
    Raise KeySizeError unless MIN_KEY_SIZE <= key_size <= MAX_KEY_SIZE.
    """
    if not MIN_KEY_SIZE <= key_size <= MAX_KEY_SIZE:
        raise KeySizeError(key_size, MIN_KEY_SIZE, MAX_KEY_SIZE)


def private_exponent(e: int, totient: int) -> int:
    """
    Derive D from E and Tot(N) with the extended Euclidean algorithm.

    The absolute value of the Bezout coefficient of E is normalized into
    [0, Tot(N)). When that coefficient was negative the result is not an
    inverse; the caller detects this and retries.
    """
    _, bezout_e, _ = extended_euclid(e, totient)
    return (abs(bezout_e) % totient + totient) % totient


def generate_key_pair(
    key_size: Optional[int] = None,
    use_default_exponent: bool = True,
    print_results: bool = False,
    print_progress: bool = False,
    rng=None,
) -> KeyPair:
    """
    Generate an RSA key pair.

    Args:
        key_size: Modulus size in bits, 32..=4096 (default 4096)
        use_default_exponent: Use E = 65537 instead of a random prime
        print_results: Print P, Q, N, Tot(N), (E) and D when done
        print_progress: Print each generation step as it happens
        rng: Random source for the prime generator (default: OS CSPRNG)

    Returns:
        A validated KeyPair

    Raises:
        KeySizeError: If key_size is not in 32..=4096
        KeyGenerationError: If Tot(N) is not larger than the default exponent
    """
    pp = print_progress
    if key_size is None:
        key_size = DEFAULT_KEY_SIZE
    check_key_size(key_size)
    _printf(pp, f"Generating key with {key_size} bits\n")

    max_bits = key_size // 2
    gen = PrimeGenerator(rng)
    attempts = 0

    while True:
        attempts += 1
        _printf(pp, f"\nAttempt number {attempts}\nGenerating P...")
        p = gen.random_prime(max_bits)
        _printf(pp, "DONE\nGenerating Q...")
        q = gen.random_prime(max_bits)
        while p == q:
            q = gen.random_prime(max_bits)
        _printf(pp, "DONE\nCalculating Public/Private Key's Modulus (N)...")
        n = p * q
        _printf(pp, "DONE\n")
        totient = (p - 1) * (q - 1)

        if use_default_exponent:
            _printf(pp, "Using default exponent...DONE\n")
            e = DEFAULT_EXPONENT
            if e >= totient:
                raise KeyGenerationError("Tot(N) is smaller than the default exponent")
        else:
            _printf(pp, "Calculating Public Key's Exponent (E)...")
            e = gen.random_prime(max_bits)
            while e >= totient:
                e = gen.random_prime(max_bits)
            _printf(pp, "DONE\n")

        _printf(pp, "Calculating Private Key's Exponent (D)...")
        d = private_exponent(e, totient)

        if (e * d) % totient == 1:
            _printf(pp, "DONE\n")
            break

        logger.debug("Attempt %d produced no valid private exponent, retrying", attempts)
        _printf(pp, "\nCould not find a valid Private Key...RETRYING\n")

    _printf(pp, "\nKey Pair successfully generated\n")
    logger.debug("Generated %d-bit key pair after %d attempt(s)", n.bit_length(), attempts)

    key_pair = KeyPair(
        public_key=Key.public(n, e),
        private_key=Key.private(n, d),
    )

    if not key_pair.is_valid():
        raise AssertionError("Generated key pair failed round-trip validation")

    if print_results:
        print(f"Max bits for N: {key_size}")
        print(f"Max bits for P and Q: {max_bits}")
        print(f"Attempts needed: {attempts}")
        print("The values calculated were:")
        print(f"P = {p}")
        print(f"Q = {q}")
        print(f"N = {n}")
        print(f"Tot(N) = {totient}")
        if not use_default_exponent:
            print(f"E (Non default) = {e}")
        print(f"D = {d}")

    return key_pair
