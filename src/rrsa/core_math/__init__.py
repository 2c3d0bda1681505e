# Core Math Module
"""
Number theory behind key generation and the block codec:
- Square-and-multiply modular exponentiation
- Extended Euclidean algorithm
- Miller-Rabin primality test
- Random prime generation
"""
