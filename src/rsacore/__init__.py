"""A self-contained RSA engine built from primitive big-integer operations.

Provides key generation (standard and strong), textbook RSA, RSAES-OAEP and CRT-accelerated decryption, together
with the modular arithmetic and Miller-Rabin prime generation underneath.

Typical usage example:

    kp = generate_key_pair(2048, 65537)
    c = encrypt(1234567890, kp.e, kp.n)
    decrypt_crt(c, kp)
    c = encrypt_oaep(b"test", kp.e, kp.n)
    decrypt_oaep_crt(c, kp, as_bytes=True)
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
from rsacore.arith import extended_gcd
from rsacore.arith import gcd
from rsacore.arith import mod_inverse
from rsacore.arith import mod_pow
from rsacore.errors import InvalidExponent
from rsacore.errors import InvalidInput
from rsacore.errors import InverseNotFound
from rsacore.errors import KeyGenerationError
from rsacore.errors import MessageTooLong
from rsacore.errors import MissingKeyMaterial
from rsacore.errors import OAEPDecodingError
from rsacore.errors import RSACoreError
from rsacore.keygen import DEFAULT_PUBLIC_EXPONENT
from rsacore.keygen import generate_key_pair
from rsacore.keygen import generate_strong_key_pair
from rsacore.keygen import KeyPair
from rsacore.primes import generate_prime
from rsacore.primes import is_probable_prime
from rsacore.rsa import decrypt
from rsacore.rsa import decrypt_crt
from rsacore.rsa import decrypt_oaep
from rsacore.rsa import decrypt_oaep_crt
from rsacore.rsa import encrypt
from rsacore.rsa import encrypt_oaep
from rsacore.rsa import RSAEngine
from rsacore.verifier import verify_prime_for_rsa

__version__ = "0.1.0"
__all__ = [
    "DEFAULT_PUBLIC_EXPONENT",
    "KeyPair",
    "RSAEngine",
    "generate_key_pair",
    "generate_strong_key_pair",
    "generate_prime",
    "is_probable_prime",
    "verify_prime_for_rsa",
    "mod_pow",
    "gcd",
    "extended_gcd",
    "mod_inverse",
    "encrypt",
    "decrypt",
    "encrypt_oaep",
    "decrypt_oaep",
    "decrypt_crt",
    "decrypt_oaep_crt",
    "RSACoreError",
    "InvalidInput",
    "InverseNotFound",
    "KeyGenerationError",
    "InvalidExponent",
    "MessageTooLong",
    "OAEPDecodingError",
    "MissingKeyMaterial",
]
