"""
RSA Mathematical Operations

Implements the number theory the key generator and the block codec
are built on:
- Modular exponentiation (square-and-multiply algorithm)
- Extended Euclidean Algorithm with signed Bezout coefficients
- Miller-Rabin primality testing with a fixed witness set
- Random prime generation with an injectable random source

Note: This is a learning implementation. Nothing here is constant-time,
      and all modular exponentiation uses the square-and-multiply
      algorithm instead of Python's built-in pow(a, b, mod).
"""

import secrets
from typing import Optional, Sequence, Tuple

from ..config import WITNESSES


def mod_pow(base: int, exponent: int, modulus: int) -> int:
    """
    Modular exponentiation using square-and-multiply algorithm.

    Algorithm (right-to-left binary method):
    1. Reduce base modulo modulus, start with result = 1
    2. For each bit of exponent (from LSB to MSB):
       - If bit is 1, multiply result by base (mod modulus)
       - Square the base (mod modulus)

    Time complexity: O(log exponent) multiplications

    Args:
        base: The base number
        exponent: The exponent (must be non-negative)
        modulus: The modulus (must be at least 1)

    Returns:
        (base^exponent) mod modulus

    Raises:
        ValueError: If exponent < 0 or modulus < 1
    """
    if exponent < 0:
        raise ValueError("Exponent must be non-negative")
    if modulus < 1:
        raise ValueError("Modulus must be positive")

    base = base % modulus
    result = 1 % modulus

    while exponent > 0:
        if exponent & 1:
            result = (result * base) % modulus

        base = (base * base) % modulus
        exponent >>= 1

    return result


def extended_euclid(a: int, b: int) -> Tuple[int, int, int]:
    """
    Extended Euclidean Algorithm (iterative).

    Finds integers s, t such that: a*s + b*t = gcd(a, b)

    The coefficients keep their sign; callers reduce them modulo
    whatever they need afterwards.

    Args:
        a: First non-negative integer
        b: Second non-negative integer

    Returns:
        Tuple (gcd, s, t) where a*s + b*t = gcd
    """
    old_r, r = a, b
    old_s, s = 1, 0
    old_t, t = 0, 1

    while r != 0:
        quotient = old_r // r
        old_r, r = r, old_r - quotient * r
        old_s, s = s, old_s - quotient * s
        old_t, t = t, old_t - quotient * t

    return old_r, old_s, old_t


def size_in_bytes(n: int) -> int:
    """Number of whole bytes needed to hold ``n`` itself."""
    return (n.bit_length() + 7) // 8


def int_to_bytes_le(n: int, length: Optional[int] = None) -> bytes:
    """Convert integer to bytes (little-endian), at least 1 byte when length is omitted."""
    if length is None:
        length = max(1, size_in_bytes(n))
    return n.to_bytes(length, byteorder='little')


def bytes_to_int_le(data: bytes) -> int:
    """Convert bytes to integer (little-endian)."""
    return int.from_bytes(data, byteorder='little')


def _is_composite(n: int, a: int, d: int, r: int) -> bool:
    """Return True if witness ``a`` proves ``n`` composite (n - 1 = d * 2^r)."""
    x = mod_pow(a, d, n)
    if x == 1 or x == n - 1:
        return False

    for _ in range(r - 1):
        x = (x * x) % n
        if x == n - 1:
            return False

    return True


def miller_rabin(n: int, witnesses: Sequence[int] = WITNESSES) -> bool:
    """
    Miller-Rabin primality test over a fixed witness set.

    With the first twelve primes as witnesses the answer is exact for
    every n below 3.3 * 10^24; above that it is probabilistic.

    Algorithm:
    1. Write n-1 as d * 2^r with d odd
    2. For each witness a:
       - If a == n, n is one of the witness primes: prime
       - Compute x = a^d mod n
       - If x = 1 or x = n-1, the witness passes
       - Square x up to r-1 times, looking for n-1
       - If never found, n is composite

    Args:
        n: Number to test for primality
        witnesses: Witness bases to try

    Returns:
        True if n is probably prime, False if definitely composite
    """
    if n < 2:
        return False

    r, d = 0, n - 1
    while d % 2 == 0:
        r += 1
        d //= 2

    for a in witnesses:
        if a == n:
            return True
        if _is_composite(n, a, d, r):
            return False

    return True


class PrimeGenerator:
    """
    Random probable-prime source.

    The random source is injected so tests can seed it; by default the
    operating system's CSPRNG is used through ``secrets.SystemRandom``.
    Any object with a ``randint(low, high)`` method works, e.g.
    ``random.Random(42)``.

    Example:
        >>> gen = PrimeGenerator()
        >>> p = gen.random_prime(64)
        >>> miller_rabin(p)
        True
    """

    def __init__(self, rng=None):
        self._rng = rng if rng is not None else secrets.SystemRandom()

    def _random_odd(self, low: int, high: int) -> int:
        # Even numbers are never prime here, skip them up front
        return self._rng.randint(low, high) | 1

    def random_prime(self, max_bits: int) -> int:
        """
        Generate a random odd probable prime below 2^max_bits.

        A random candidate in [2, 2^max_bits - 1] is forced odd and then
        walked upwards in steps of 2 until it passes Miller-Rabin. When the
        walk leaves the range a fresh candidate is drawn. Because the low
        bit is always set, 2 is never returned.

        Args:
            max_bits: Upper bound on the bit length of the prime

        Returns:
            An odd probable prime p with 3 <= p < 2^max_bits

        Raises:
            ValueError: If max_bits < 2
        """
        if max_bits < 2:
            raise ValueError("Bit length must be at least 2")

        low = 2
        max_num = (1 << max_bits) - 1

        candidate = self._random_odd(low, max_num)
        while not miller_rabin(candidate):
            candidate += 2
            if candidate > max_num:
                candidate = self._random_odd(low, max_num)

        return candidate


# Self-test when run directly
if __name__ == "__main__":
    print("RSA Math Implementation Test")
    print("=" * 70)

    print("\n[Test 1] Modular exponentiation (square-and-multiply)")
    test_cases = [
        (4, 13, 497, 445),
        (23, 20, 29, 24),
        (31, 397, 55, 26),
        (7, 0, 13, 1),
    ]
    test1_pass = True
    for base, exp, mod, expected in test_cases:
        result = mod_pow(base, exp, mod)
        passed = result == expected
        test1_pass = test1_pass and passed
        print(f"  {base}^{exp} mod {mod} = {result} (expected {expected}) {'✓' if passed else '✗'}")

    print("\n[Test 2] Extended Euclid")
    g, s, t = extended_euclid(101, 13)
    test2_pass = (g, s, t) == (1, 4, -31) and s * 101 + t * 13 == g
    print(f"  euclid(101, 13) = {(g, s, t)} {'✓ PASS' if test2_pass else '✗ FAIL'}")

    print("\n[Test 3] Miller-Rabin")
    test3_pass = (miller_rabin(13) and not miller_rabin(27)
                  and miller_rabin(918_020_423_304_243_854_760_595_069_249))
    print(f"  13 prime, 27 composite, 100-bit prime: {'✓ PASS' if test3_pass else '✗ FAIL'}")

    print("\n[Test 4] Prime generation")
    prime_64 = PrimeGenerator().random_prime(64)
    test4_pass = miller_rabin(prime_64) and prime_64.bit_length() <= 64
    print(f"  64-bit prime: {prime_64} {'✓ PASS' if test4_pass else '✗ FAIL'}")

    all_passed = test1_pass and test2_pass and test3_pass and test4_pass
    print("\n" + "=" * 70)
    print(f"Overall: {'All tests passed!' if all_passed else 'Some tests failed!'}")
