"""Convenience adapters between text, bytes and the integers the engine works on.

Layered on top of textbook RSA for demonstration purposes. Messages are always read as non-negative big-endian
integers, and converting back yields the shortest byte string, so leading zero bytes of a message do not survive the
round trip. For anything beyond a demonstration use OAEP instead, which `encrypt_oaep_text` and
`decrypt_oaep_crt_text` offer for strings.

Typical usage example:

    c = encrypt_text("Hello, RSA World!", kp.e, kp.n)
    decrypt_text(c, kp.d, kp.n)
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import warnings

from rsacore import rsa
from rsacore.keygen import KeyPair
from rsacore.rsa import bytes_to_integer
from rsacore.rsa import integer_to_bytes


def message_to_integer(message: str | bytes, encoding: str = "utf-8") -> int:
    """Reads a text or byte message as a non-negative integer."""
    if isinstance(message, str):
        message = message.encode(encoding)
    return bytes_to_integer(message)


def integer_to_message(value: int) -> bytes:
    """Converts an integer back to bytes, without any leading zero byte.

    Zero maps to the empty byte string.
    """
    return integer_to_bytes(value).lstrip(b"\x00")


def integer_to_text(value: int, encoding: str = "utf-8") -> str:
    return integer_to_message(value).decode(encoding)


def encrypt_bytes(message: bytes, e: int, n: int) -> int:
    """Textbook-encrypts a byte string.

    Warning! Unsecure! Deterministic and unpadded.

    Raises:
        InvalidInput: If the message, read as an integer, is not less than n.
    """
    warnings.warn("Academic encryption is unsecure! Please use with care.", RuntimeWarning)
    return rsa.encrypt(message_to_integer(message), e, n)


def decrypt_bytes(cipher: int, d: int, n: int) -> bytes:
    return integer_to_message(rsa.decrypt(cipher, d, n))


def encrypt_text(message: str, e: int, n: int, encoding: str = "utf-8") -> int:
    """Textbook-encrypts a string in the given encoding. Warning! Unsecure!"""
    return encrypt_bytes(message.encode(encoding), e, n)


def decrypt_text(cipher: int, d: int, n: int, encoding: str = "utf-8") -> str:
    return decrypt_bytes(cipher, d, n).decode(encoding)


def encrypt_oaep_text(message: str, e: int, n: int, label: bytes = b"", encoding: str = "utf-8") -> int:
    """Encrypts a string with RSAES-OAEP under the default engine.

    Raises:
        MessageTooLong: If the encoded text exceeds the OAEP capacity of the modulus.
    """
    return rsa.encrypt_oaep(message.encode(encoding), e, n, label)


def decrypt_oaep_crt_text(cipher: int, key_pair: KeyPair, label: bytes = b"", encoding: str = "utf-8") -> str:
    """Reverses `encrypt_oaep_text` through CRT decryption.

    Raises:
        MissingKeyMaterial: If the key pair lacks p or q.
        OAEPDecodingError: If decryption fails, for whichever reason.
    """
    return rsa.decrypt_oaep_crt(cipher, key_pair, label, as_bytes=True).decode(encoding)
