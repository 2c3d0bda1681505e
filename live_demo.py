#!/usr/bin/env python
"""
╔══════════════════════════════════════════════════════════════════════════════╗
║                            RRSA LIVE DEMO                                     ║
║              RSA key generation, encoding and decoding walkthrough            ║
╚══════════════════════════════════════════════════════════════════════════════╝

This script walks through:
- Key pair generation with progress output
- The textual key format
- Block-wise encoding and decoding of a message
- Key pair validation

Run with --auto to skip the pauses.
"""

import sys

from rrsa.codec.block_codec import block_sizes, decode_bytes, encode_bytes
from rrsa.core_math.rsa_math import extended_euclid, miller_rabin, mod_pow
from rrsa.keys.generation import generate_key_pair
from rrsa.keys.key_format import key_from_str, key_to_str


AUTO = "--auto" in sys.argv[1:]


def print_header(title):
    """Print a formatted section header"""
    print("\n" + "═" * 70)
    print(f"  {title}")
    print("═" * 70)


def print_step(step_num, description):
    """Print a numbered step"""
    print(f"\n  [{step_num}] {description}")


def pause(message="Press ENTER to continue..."):
    """Pause for presenter to explain"""
    if AUTO:
        return
    print(f"\n  [PAUSE] {message}")
    input()


def main():

    print("\n" * 2)
    print("╔" + "═" * 68 + "╗")
    print("║" + " " * 68 + "║")
    print("║" + "RRSA - TOY RSA IMPLEMENTATION".center(68) + "║")
    print("║" + " " * 68 + "║")
    print("╚" + "═" * 68 + "╝")

    print("\n  This demonstration showcases:")
    print("  • Square-and-multiply modular exponentiation")
    print("  • Miller-Rabin prime generation")
    print("  • Key pair generation and validation")
    print("  • Block-wise encoding of arbitrary bytes")

    pause("Press ENTER to begin the demonstration...")

    print_header("PART 1: NUMBER THEORY")

    print_step("1.1", "Modular exponentiation")
    print(f"\n  4^13 mod 497 = {mod_pow(4, 13, 497)}")

    print_step("1.2", "Extended Euclid")
    g, s, t = extended_euclid(101, 13)
    print(f"\n  gcd(101, 13) = {g} = {s}*101 + ({t})*13")

    print_step("1.3", "Miller-Rabin")
    for n in (13, 27, 918_020_423_304_243_854_760_595_069_249):
        print(f"  {n}: {'[OK] probable prime' if miller_rabin(n) else '[X] composite'}")

    pause()

    print_header("PART 2: KEY GENERATION")

    print_step("2.1", "Generating a 512-bit key pair")
    pair = generate_key_pair(512, print_progress=True)

    print_step("2.2", "Serialized keys")
    public_text = key_to_str(pair.public_key)
    private_text = key_to_str(pair.private_key)
    print(f"\n  {public_text[:60]}...")
    print(f"\n{private_text}")

    print_step("2.3", "Parsing the keys back")
    parsed_ok = (key_from_str(public_text) == pair.public_key
                 and key_from_str(private_text) == pair.private_key)
    print(f"  [OK] Round trip: {parsed_ok}")
    print(f"  [OK] Pair valid: {pair.is_valid()}")

    pause()

    print_header("PART 3: ENCODING A MESSAGE")

    message = b"Hello, RSA! This message spans several blocks of the 512-bit key."
    plain_size, cipher_size = block_sizes(pair.public_key)
    print_step("3.1", f"Block sizes: {plain_size} bytes in, {cipher_size} bytes out")

    encoded = encode_bytes(message, pair.public_key)
    print(f"\n  Message:  {message!r}")
    print(f"  Encoded:  {encoded.hex()[:60]}... ({len(encoded)} bytes)")

    decoded = decode_bytes(encoded, pair.private_key)
    print(f"  Decoded:  {decoded!r}")
    print(f"\n  Round trip: {'[OK] MATCH' if decoded == message else '[X] MISMATCH'}")

    print("\n\n" + "═" * 70)
    print("  DEMONSTRATION COMPLETE!")
    print("═" * 70)


if __name__ == "__main__":
    main()
