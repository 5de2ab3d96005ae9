"""Core Key Generation Utility, producing validated RSA key pairs.

Two paths are offered. The standard one draws both primes at the default Miller-Rabin certainty and leaves every
strength check to the verifier. The strong one draws at a higher certainty and additionally insists on a large
distance between p and q before the verifier is even consulted. Both retry the full tuple until it is accepted, so
the only errors surfacing are caused by an unusable caller-supplied public exponent.

Typical usage example:

    kp = generate_key_pair(2048, 65537)
    skp = generate_strong_key_pair(2048)
    e, n = kp.public_key
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import logging
import random
import time
from typing import NamedTuple

from rsacore import primes
from rsacore import verifier
from rsacore.arith import gcd
from rsacore.arith import mod_inverse
from rsacore.errors import InvalidExponent
from rsacore.errors import MissingKeyMaterial

logger = logging.getLogger(__name__)

MIN_KEY_SIZE: int = 1024
DEFAULT_PUBLIC_EXPONENT: int = 65537
STRONG_CERTAINTY: int = 40
DEFAULT_MAX_ATTEMPTS: int = 10_000


class CRTParams(NamedTuple):
    """Precomputed Chinese Remainder Theorem components of a private key."""
    dp: int
    dq: int
    q_inv: int


class KeyPair(NamedTuple):
    """An immutable RSA key pair.

    Attributes:
        n: The modulus.
        e: The public exponent.
        d: The private exponent.
        p: Private prime 1, None if the factors are not known.
        q: Private prime 2, None if the factors are not known.
    """
    n: int
    e: int
    d: int
    p: int | None = None
    q: int | None = None

    def __repr__(self) -> str:
        return f"KeyPair(n=<{self.n.bit_length()}-bit>, e={self.e}, crt={self.has_factors})"

    @property
    def public_key(self) -> tuple[int, int]:
        """The public key as (e, n)."""
        return self.e, self.n

    @property
    def private_key(self) -> tuple[int, int]:
        """The private key as (d, n)."""
        return self.d, self.n

    @property
    def bit_length(self) -> int:
        return self.n.bit_length()

    @property
    def has_factors(self) -> bool:
        return self.p is not None and self.q is not None

    @property
    def phi(self) -> int:
        """Euler's totient of the modulus.

        Raises:
            MissingKeyMaterial: If the prime factors are not known.
        """
        if not self.has_factors:
            raise MissingKeyMaterial("Totient requires the prime factors p and q.")
        return (self.p - 1) * (self.q - 1)

    def crt_params(self) -> CRTParams:
        """Derives the CRT exponents and coefficient from d, p and q.

        Returns:
            (d mod (p-1), d mod (q-1), q^-1 mod p)

        Raises:
            MissingKeyMaterial: If the prime factors are not known.
        """
        if not self.has_factors:
            raise MissingKeyMaterial("CRT decryption requires the prime factors p and q.")
        return CRTParams(self.d % (self.p - 1), self.d % (self.q - 1), mod_inverse(self.q, self.p))


def _check_request(bit_length: int, chosen_e: int | None) -> None:
    if bit_length < MIN_KEY_SIZE:
        raise ValueError(f"Size must be at least {MIN_KEY_SIZE}.")
    if bit_length % 2 != 0:
        raise ValueError("Size must be an even number.")
    if chosen_e is None:
        return
    if chosen_e <= 1:
        raise InvalidExponent("Public exponent e must satisfy 1 < e < phi.")
    if chosen_e % 2 == 0:
        # phi is always even.
        raise InvalidExponent("Public exponent e is not coprime with phi.")


def _draw_prime(size: int, certainty: int, rng: random.Random, chosen_e: int | None) -> int:
    """Draws a prime with its top two bits set, skipping those whose predecessor shares a factor with the exponent.

    Two forced top bits make the product of two such primes exactly twice as long.
    """
    while True:
        candidate = primes.generate_prime(size, certainty, rng, top_bits=2)
        if chosen_e is None or gcd(candidate - 1, chosen_e) == 1:
            return candidate


def _resolve_exponent(phi: int, chosen_e: int | None, rng: random.Random) -> int:
    """Validates the caller's exponent or draws a random one coprime to `phi`.

    Raises:
        InvalidExponent: If `chosen_e` is given and unusable for `phi`.
    """
    if chosen_e is not None:
        verifier.validate_exponent(chosen_e, phi)
        return chosen_e
    while True:
        e = primes.uniform_random(3, phi - 1, rng)
        if gcd(e, phi) == 1:
            return e


def _assemble(p: int, q: int, e: int, phi: int) -> KeyPair:
    d = mod_inverse(e, phi)
    return KeyPair(n=p * q, e=e, d=d, p=p, q=q)


def generate_key_pair(bit_length: int,
                      chosen_e: int | None = None,
                      *,
                      rng: random.Random | None = None,
                      max_attempts: int = DEFAULT_MAX_ATTEMPTS) -> KeyPair:
    """Generates an RSA key pair.

    Draws two `bit_length`/2 bit primes at the default certainty, resolves the public exponent and keeps the tuple
    only if the verifier accepts it.

    Args:
        bit_length: Size of the modulus in bits. Must be even and at least `MIN_KEY_SIZE`.
        chosen_e: The public exponent. If None, a random exponent coprime to phi is drawn.
        rng: Source of randomness.
        max_attempts: Cap on the number of full tuples drawn.

    Returns:
        A validated key pair whose modulus has exactly `bit_length` bits.

    Raises:
        ValueError: If `bit_length` is too small or odd.
        InvalidExponent: If `chosen_e` is not a usable public exponent.
        RuntimeError: If no acceptable tuple was found within `max_attempts`.
    """
    _check_request(bit_length, chosen_e)
    rng = primes.resolve_rng(rng)
    half = bit_length // 2
    start = time.perf_counter()
    for attempt in range(1, max_attempts + 1):
        p = _draw_prime(half, primes.DEFAULT_CERTAINTY, rng, chosen_e)
        q = _draw_prime(half, primes.DEFAULT_CERTAINTY, rng, chosen_e)
        while p == q:  # (Un)Likely story.
            q = _draw_prime(half, primes.DEFAULT_CERTAINTY, rng, chosen_e)
        if (p * q).bit_length() != bit_length:
            logger.debug("Discarded tuple %d: modulus too short", attempt)
            continue
        phi = (p - 1) * (q - 1)
        e = _resolve_exponent(phi, chosen_e, rng)
        if verifier.verify_prime_for_rsa(p, q, rng=rng):
            logger.debug("Generated %d-bit key pair in %.3fs after %d attempts", bit_length,
                         time.perf_counter() - start, attempt)
            return _assemble(p, q, e, phi)
        logger.debug("Discarded tuple %d: verifier rejected the primes", attempt)
    raise RuntimeError(f"Run an improbable {max_attempts} amount of key generation attempts with no key found.")


def generate_strong_key_pair(bit_length: int,
                             chosen_e: int | None = None,
                             *,
                             rng: random.Random | None = None,
                             max_attempts: int = DEFAULT_MAX_ATTEMPTS) -> KeyPair:
    """Generates an RSA key pair with enhanced security checks.

    As `generate_key_pair`, but primes are drawn at `STRONG_CERTAINTY` and q is redrawn until it lies at least
    `verifier.min_prime_gap(bit_length)` away from p, before the verifier gets to see the pair.

    Args:
        bit_length: Size of the modulus in bits. Must be even and at least `MIN_KEY_SIZE`.
        chosen_e: The public exponent. If None, a random exponent coprime to phi is drawn.
        rng: Source of randomness.
        max_attempts: Cap on the number of full tuples drawn.

    Returns:
        A validated key pair whose modulus has exactly `bit_length` bits.

    Raises:
        ValueError: If `bit_length` is too small or odd.
        InvalidExponent: If `chosen_e` is not a usable public exponent.
        RuntimeError: If no acceptable tuple was found within `max_attempts`.
    """
    _check_request(bit_length, chosen_e)
    rng = primes.resolve_rng(rng)
    half = bit_length // 2
    min_gap = verifier.min_prime_gap(bit_length)
    start = time.perf_counter()
    for attempt in range(1, max_attempts + 1):
        p = _draw_prime(half, STRONG_CERTAINTY, rng, chosen_e)
        q = _draw_prime(half, STRONG_CERTAINTY, rng, chosen_e)
        while p == q or abs(p - q) < min_gap:
            q = _draw_prime(half, STRONG_CERTAINTY, rng, chosen_e)
        if (p * q).bit_length() != bit_length:
            logger.debug("Discarded strong tuple %d: modulus too short", attempt)
            continue
        phi = (p - 1) * (q - 1)
        e = _resolve_exponent(phi, chosen_e, rng)
        if verifier.verify_prime_for_rsa(p, q, rng=rng):
            logger.debug("Generated strong %d-bit key pair in %.3fs after %d attempts", bit_length,
                         time.perf_counter() - start, attempt)
            return _assemble(p, q, e, phi)
        logger.debug("Discarded strong tuple %d: verifier rejected the primes", attempt)
    raise RuntimeError(f"Run an improbable {max_attempts} amount of key generation attempts with no key found.")
