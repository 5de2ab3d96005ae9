"""Exception taxonomy of the RSA engine.

Every failure the engine surfaces is one of the classes below. Rejected prime candidates and verifier rejections
during key generation are not errors and never show up here, they are simply redrawn.

Each class also derives from the builtin the rest of the package raises for similar conditions (ValueError for
caller misuse, RuntimeError for decryption-time failures), so callers catching those keep working.
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0


class RSACoreError(Exception):
    """Base class for all engine errors."""


class InvalidInput(RSACoreError, ValueError):
    """A plaintext or ciphertext representative is negative or not reduced modulo n."""


class InverseNotFound(RSACoreError, ValueError):
    """No modular inverse exists as the operands are not coprime."""


class KeyGenerationError(RSACoreError, ValueError):
    """Key generation was asked for something it cannot produce."""


class InvalidExponent(KeyGenerationError):
    """A caller-supplied public exponent is outside (1, phi) or shares a factor with phi."""


class MessageTooLong(RSACoreError, ValueError):
    """The message does not fit into a single OAEP block.

    Attributes:
        max_length: The largest message, in bytes, the key and hash combination can carry.
    """

    def __init__(self, max_length: int) -> None:
        super().__init__(f"Message too long for the specified key and hash function, maximum is {max_length} bytes")
        self.max_length = max_length


class OAEPDecodingError(RSACoreError, RuntimeError):
    """OAEP decoding failed.

    Deliberately carries no detail regarding which check failed.
    """

    def __init__(self) -> None:
        super().__init__("Decryption error.")


class MissingKeyMaterial(RSACoreError, RuntimeError):
    """The CRT path was requested for a key without its prime factors."""
