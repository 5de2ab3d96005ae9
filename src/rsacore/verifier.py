"""Strength checks for RSA prime pairs and public exponents.

Candidate primes that pass the Miller-Rabin generator are still screened here before they may form a key: they must
be distinct, re-verified prime at a high certainty, far enough apart to resist Fermat factorization and neither
p-1 nor q-1 may be smooth over the small primes (Pollard p-1). Every check answers with a bool so the key generator
can discard and redraw. Exponent validation is separate, as a caller-supplied exponent is an error, not a rejection.

Typical usage example:

    if verify_prime_for_rsa(p, q):
        validate_exponent(65537, (p - 1) * (q - 1))
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import logging
import random

from rsacore import primes
from rsacore.arith import gcd
from rsacore.errors import InvalidExponent

logger = logging.getLogger(__name__)

VERIFY_CERTAINTY: int = 100
MIN_GAP_BITS: int = 50
SMOOTHNESS_BOUND: int = 1_000_000
# Heuristic margin for the strong generation path: |p - q| > 2**(bit_length/2 - 100)
_STRONG_GAP_MARGIN: int = 100


def min_prime_gap(bit_length: int) -> int:
    """The minimum distance between p and q demanded by strong generation for a `bit_length`-bit modulus."""
    return 1 << max(bit_length // 2 - _STRONG_GAP_MARGIN, 0)


def is_weak_smooth(value: int, bound: int = SMOOTHNESS_BOUND) -> bool:
    """Check whether `value` factors completely over the primes up to `bound`.

    Args:
        value: The number to check, usually p-1. Must be positive.
        bound: Largest trial divisor.

    Returns:
        True if dividing out every prime up to `bound` leaves 1, False if a larger prime factor remains.
    """
    temp = value
    for prime in primes.get_small_primes(bound):
        if prime > bound:
            break
        if prime * prime > temp:
            # Whatever is left is 1 or a single prime.
            return temp <= bound
        while temp % prime == 0:
            temp //= prime
    return temp == 1


def validate_exponent(e: int, phi: int) -> None:
    """Ensure `e` can serve as public exponent for the totient `phi`.

    Args:
        e: Candidate public exponent.
        phi: Euler's totient of the modulus.

    Raises:
        InvalidExponent: If not 1 < e < phi or gcd(e, phi) != 1.
    """
    if not 1 < e < phi:
        raise InvalidExponent("Public exponent e must satisfy 1 < e < phi.")
    if gcd(e, phi) != 1:
        raise InvalidExponent("Public exponent e is not coprime with phi.")


def verify_prime_for_rsa(p: int,
                         q: int,
                         e: int | None = None,
                         *,
                         certainty: int = VERIFY_CERTAINTY,
                         min_gap_bits: int = MIN_GAP_BITS,
                         smooth_bound: int = SMOOTHNESS_BOUND,
                         rng: random.Random | None = None) -> bool:
    """Runs every strength check on a prime pair.

    Args:
        p: First prime candidate.
        q: Second prime candidate.
        e: Optional public exponent. If given it has to pass `validate_exponent` as well.
        certainty: Miller-Rabin rounds for the independent primality re-check.
        min_gap_bits: Minimum bit length of |p - q|.
        smooth_bound: Trial division bound of the smoothness check.
        rng: Source of randomness for the primality re-check.

    Returns:
        True if the pair is acceptable, False otherwise.
    """
    if p == q:
        logger.debug("Rejected prime pair: p == q")
        return False
    if not primes.is_probable_prime(p, certainty, rng) or not primes.is_probable_prime(q, certainty, rng):
        logger.debug("Rejected prime pair: failed primality re-check")
        return False
    if abs(p - q).bit_length() < min_gap_bits:
        logger.debug("Rejected prime pair: |p - q| below %d bits", min_gap_bits)
        return False
    if is_weak_smooth(p - 1, smooth_bound) or is_weak_smooth(q - 1, smooth_bound):
        logger.debug("Rejected prime pair: p-1 or q-1 is %d-smooth", smooth_bound)
        return False
    if e is not None:
        try:
            validate_exponent(e, (p - 1) * (q - 1))
        except InvalidExponent:
            logger.debug("Rejected prime pair: exponent unusable")
            return False
    return True
