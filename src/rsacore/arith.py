"""Modular arithmetic primitives the rest of the engine is built on.

Square-and-multiply exponentiation and Euclid's algorithm in plain and extended form. Python's ``int`` provides the
underlying arbitrary-precision add/multiply/divmod/shift, nothing else is borrowed from the standard library.

Typical usage example:

    mod_pow(4, 13, 497)
    d = mod_inverse(65537, phi)
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
from rsacore.errors import InverseNotFound


def mod_pow(base: int, exponent: int, modulus: int) -> int:
    """Computes `base` ** `exponent` mod `modulus` by left-to-right binary exponentiation.

    Scans the exponent from the most significant bit down, squaring the running result on every bit and multiplying
    in the reduced base whenever the bit is set.

    Args:
        base: The base, any integer.
        exponent: The exponent. Must be non-negative.
        modulus: The modulus. Must be positive.

    Returns:
        The least non-negative residue of `base` ** `exponent` mod `modulus`.

    Raises:
        ValueError: If the exponent is negative or the modulus is not positive.
    """
    if exponent < 0:
        raise ValueError("Exponent must be non-negative.")
    if modulus <= 0:
        raise ValueError("Modulus must be positive.")
    result = 1 % modulus
    base %= modulus
    for i in range(exponent.bit_length() - 1, -1, -1):
        result = (result * result) % modulus
        if (exponent >> i) & 1:
            result = (result * base) % modulus
    return result


def gcd(a: int, b: int) -> int:
    """Plain Euclidean algorithm.

    Args:
        a: The first non-negative integer.
        b: The second non-negative integer.

    Returns:
        Greatest common divisor of `a` and `b`.
    """
    while b != 0:
        a, b = b, a % b
    return a


def extended_gcd(a: int, b: int) -> tuple[int, int, int]:
    """Implements the Extended Euclidean Algorithm.

    Such that a*x + b*y = d = gcd(a, b).

    Args:
        a: The first natural number.
        b: The second natural number.

    Returns:
        Greatest common divisor of the two integers, as well as the Bezout coefficients.
    """
    # Iterative so operands of thousands of bits stay clear of the recursion limit.
    r0, r1 = a, b
    s0, s1, t0, t1 = 1, 0, 0, 1
    while r1 != 0:
        q = r0 // r1
        r0, r1 = r1, r0 - q * r1
        s0, s1 = s1, s0 - q * s1
        t0, t1 = t1, t0 - q * t1
    return r0, s0, t0


def mod_inverse(a: int, m: int) -> int:
    """Modular multiplicative inverse of `a` modulo `m`.

    Args:
        a: The number to invert.
        m: The modulus. Must be positive.

    Returns:
        The unique `x` in [0, m) with a*x mod m == 1.

    Raises:
        InverseNotFound: If gcd(a, m) != 1.
    """
    d, x, _ = extended_gcd(a, m)
    if d != 1:
        raise InverseNotFound(f"No modular inverse exists for {a} modulo {m}.")
    # The raw coefficient may be negative.
    return ((x % m) + m) % m
