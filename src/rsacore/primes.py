"""Probable-prime generation via the Miller-Rabin test.

Candidates are drawn uniformly at the requested bit length with both the top and bottom bit forced, sent through a
quick trial division against a fixed table of small primes and finally through `certainty` rounds of Miller-Rabin.
Randomness is always injected: every function takes an optional `rng` (anything exposing the `random.Random` API,
`getrandbits` being the one used here) and falls back to a fresh `secrets.SystemRandom` otherwise.

Also hosts the small-prime sieve with its module-level cache, which the verifier uses for smoothness checks.

Typical usage example:

    p = generate_prime(1024)
    is_probable_prime(p, 40)
    get_small_primes(1_000_000)
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import itertools
import logging
import random
import secrets

from rsacore.arith import mod_pow

logger = logging.getLogger(__name__)

DEFAULT_CERTAINTY: int = 10
SMALL_PRIMES: tuple[int, ...] = (2, 3, 5, 7, 11, 13, 17, 19, 23, 29, 31, 37, 41, 43, 47, 53)

# (bound, primes up to bound)
_SIEVE_CACHE: tuple[int, list[int]] = (0, [])


def resolve_rng(rng: random.Random | None) -> random.Random:
    """Returns `rng`, or a fresh cryptographically secure source if none was supplied."""
    if rng is None:
        return secrets.SystemRandom()
    return rng


def _sieve(n: int = 10000) -> list[int]:
    """Implements the Sieve of Eratosthenes.

    Uses the textbook Sieve of Eratosthenes to generate a set of primes up to `n`.
    Includes memory space optimization (odd numbers only) and sieving until root.

    Args:
        n: The number up to which to generate primes. Must be >= 0.

    Returns:
        A list of primes up to `n`.
    """
    if n < 2:
        return []
    i_size = (n - 1) // 2
    candidate: list[bool] = [True] * i_size
    for i in range(int(n**0.5) // 2):
        if candidate[i]:
            r = 2 * i + 3
            for j in range((r * r - 3) // 2, i_size, r):
                candidate[j] = False
    return [2] + [(no * 2 + 3) for no, ele in enumerate(candidate) if ele]


def get_small_primes(n: int = 10000) -> list[int]:
    """Get all primes up to `n`, sieving only when the cache does not already cover `n`.

    The cache holds its bound and its primes as one tuple, replaced in a single assignment, so a reader never sees a
    bound the list does not cover.

    Args:
        n: The number up to which primes are needed. Must be >= 0.

    Returns:
        List of primes in ascending order, covering at least everything up to `n`.

    Raises:
        ValueError: If `n` is negative.
    """
    if n < 0:
        raise ValueError("n must be >= 0")
    global _SIEVE_CACHE
    cap, cached = _SIEVE_CACHE
    if n > cap or not cached:
        logger.debug("Sieving small primes up to %d", n)
        cached = _sieve(n)
        _SIEVE_CACHE = (n, cached)
    return cached


def uniform_random(low: int, high: int, rng: random.Random | None = None) -> int:
    """Draws an integer uniformly from [low, high] by rejection sampling.

    Candidates of exactly bitlength(high - low + 1) bits are drawn until one falls inside the range, which avoids
    the bias a plain modulo reduction would introduce.

    Args:
        low: Lower bound, inclusive.
        high: Upper bound, inclusive.
        rng: Source of randomness.

    Returns:
        A uniformly distributed integer in [low, high].

    Raises:
        ValueError: If the range is empty.
    """
    if high < low:
        raise ValueError("Empty range for uniform sampling.")
    rng = resolve_rng(rng)
    span = high - low + 1
    bits = span.bit_length()
    while True:
        result = rng.getrandbits(bits)
        if result < span:
            return result + low


def is_probable_prime(n: int, certainty: int = DEFAULT_CERTAINTY, rng: random.Random | None = None) -> bool:
    """Perform the Miller-Rabin primality test, after a short trial division.

    Args:
        n: The candidate to test.
        certainty: Number of independent Miller-Rabin rounds. Each round a composite survives with probability at
            most 1/4.
        rng: Source of randomness for picking witnesses.

    Returns:
        True if `n` is probably prime, False if it is certainly composite.
    """
    if n < 2:
        return False
    if n in (2, 3):
        return True
    if n % 2 == 0:
        return False
    for prime in SMALL_PRIMES:
        if n == prime:
            return True
        if n % prime == 0:
            return False
    tw = n - 1
    k = (tw & -tw).bit_length() - 1
    q = tw >> k
    rng = resolve_rng(rng)
    for _ in range(certainty):
        a = uniform_random(2, n - 2, rng)
        x = mod_pow(a, q, n)
        if x == 1 or x == tw:
            continue
        for _ in range(1, k):
            x = mod_pow(x, 2, n)
            if x == tw:
                break
            if x == 1:
                return False
        else:
            return False
    return True


def generate_prime(bit_length: int,
                   certainty: int = DEFAULT_CERTAINTY,
                   rng: random.Random | None = None,
                   max_attempts: int | None = None,
                   *,
                   top_bits: int = 1) -> int:
    """Generate a probable prime of exactly `bit_length` bits.

    Args:
        bit_length: Size of the prime in bits. Must be at least 2.
        certainty: Number of Miller-Rabin rounds per candidate.
        rng: Source of randomness.
        max_attempts: Optional cap on the number of candidates. Unbounded by default.
        top_bits: How many of the most significant bits to force. Two guarantee that the product of two such primes
            has exactly twice their bit length.

    Returns:
        An odd probable prime with its `top_bits` highest bits set.

    Raises:
        ValueError: If `bit_length` is below 2, or `top_bits` does not fit it.
        RuntimeError: If `max_attempts` candidates were drawn without finding a prime.
    """
    if bit_length < 2:
        raise ValueError("Bit length must be at least 2.")
    if not 1 <= top_bits < bit_length:
        raise ValueError("Forced top bits must leave the lowest bit free.")
    rng = resolve_rng(rng)
    msk = (((1 << top_bits) - 1) << (bit_length - top_bits)) | 1
    attempts = itertools.count(1) if max_attempts is None else range(1, max_attempts + 1)
    for attempt in attempts:
        candidate = rng.getrandbits(bit_length) | msk
        if is_probable_prime(candidate, certainty, rng):
            logger.debug("Found %d-bit probable prime after %d candidates", bit_length, attempt)
            return candidate
    raise RuntimeError(
        f"Run an improbable {max_attempts} amount of loops with no prime found. Check system random number generator.")
