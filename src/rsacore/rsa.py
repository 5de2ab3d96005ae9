"""Provides core RSA functionalities: textbook encryption and decryption, OAEP padding and CRT acceleration.

All operations live on a single engine, `RSAEngine`, configured with the hash function used by OAEP and an optional
source of randomness. Module-level functions delegate to a default SHA-256 engine drawing from the system's secure
random source, so the common case needs no setup at all.

OAEP decoding failures are deliberately indistinguishable from one another: a bad leading byte, a label hash
mismatch, a missing separator or an out-of-range ciphertext all raise the very same `OAEPDecodingError`.

Typical usage example:

    kp = generate_key_pair(2048, 65537)
    c = encrypt_oaep(b"Hi there!", kp.e, kp.n)
    r = decrypt_oaep_crt(c, kp, as_bytes=True)
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import hashlib
import hmac
from math import ceil
import random

from rsacore import primes
from rsacore.arith import mod_pow
from rsacore.errors import InvalidInput
from rsacore.errors import MessageTooLong
from rsacore.errors import OAEPDecodingError
from rsacore.keygen import KeyPair

# name: (constructor, digest length, maximum label length)
HASH_TLL = {
    "sha256": (hashlib.sha256, 32, 2**61 - 1),
    "sha384": (hashlib.sha384, 48, 2**125 - 1),
    "sha512": (hashlib.sha512, 64, 2**125 - 1),
}
DEFAULT_HASH: str = "sha256"


def _hash_entry(hashf: str):
    try:
        return HASH_TLL[hashf]
    except KeyError:
        raise ValueError(f"Unsupported hash function: {hashf}") from None


def bytes_to_integer(msg: bytes) -> int:
    """Converts a byte string to a non-negative integer, big-endian.

    Args:
        msg: The bytes (AKA Octet String) to convert.

    Returns:
        The representative integer.
    """
    return int.from_bytes(msg, byteorder="big", signed=False)


def integer_to_bytes(msg: int, fixedlen: int | None = None) -> bytes:
    """Converts a non-negative integer to a big-endian byte string.

    Args:
        msg: The integer to unmarshal.
        fixedlen: The target length of the byte string. If None, the shortest representation (at least one byte) is
            used, so no leading zero bytes are produced.

    Returns:
        The representative bytes. (AKA Octet String)
    """
    if fixedlen is None:
        fixedlen = max(1, (msg.bit_length() + 7) // 8)
    return msg.to_bytes(fixedlen, byteorder="big", signed=False)


def xorbytes(a: bytes, b: bytes) -> bytes:
    """XOR bitwise for bytes.

    Requires two byte strings of equal length.

    Args:
        a: byte string
        b: byte string

    Returns:
        xor byte string
    """
    return bytes(x ^ y for x, y in zip(a, b, strict=True))


def mgf1(mgfseed: bytes, masklen: int, hashf: str = DEFAULT_HASH) -> bytes:
    """The PKCS#1 v2.2 Mask Generation Function 1.

    Hashes the seed followed by a 32-bit big-endian counter, starting at 0, and concatenates digests until the mask
    is long enough.

    Args:
        mgfseed: Seed for mask generation
        masklen: Intended length of mask
        hashf: Hash function (Implemented for sha256, sha384, sha512)

    Returns:
        The mask in form of bytes of length masklen.

    Raises:
        ValueError: If mask too long for the combination of values.
    """
    fun, hlen, _ = _hash_entry(hashf)
    if masklen > 2**32 * hlen:
        raise ValueError("Mask too long for the specified hash function")
    t = b""
    for cnt in range(ceil(masklen / hlen)):
        t += fun(mgfseed + integer_to_bytes(cnt, 4)).digest()
    return t[:masklen]


def _check_range(value: int, mod: int, what: str) -> None:
    if value < 0:
        raise InvalidInput(f"{what} must be non-negative.")
    if value >= mod:
        raise InvalidInput(f"{what} must be less than modulus n.")


def oaep_encode(message: bytes, k: int, seed: bytes, label: bytes = b"", hashf: str = DEFAULT_HASH) -> bytes:
    """Builds the OAEP encoded message block EM = 0x00 || maskedSeed || maskedDB.

    Args:
        message: The message, at most k - 2*hLen - 2 bytes.
        k: Length of the modulus in bytes.
        seed: hLen random bytes.
        label: Label whose hash is embedded into the data block.
        hashf: Hash function (Implemented for sha256, sha384, sha512)

    Returns:
        The k-byte encoded message.

    Raises:
        MessageTooLong: If the message does not fit.
        ValueError: If the label is too long for the hash function.
    """
    fun, hlen, hcap = _hash_entry(hashf)
    if len(label) > hcap:
        raise ValueError("Label too long for the specified hash function")
    max_len = k - 2 * hlen - 2
    if len(message) > max_len:
        raise MessageTooLong(max(max_len, 0))
    lh = fun(label).digest()
    pad = b"\x00" * (max_len - len(message))
    db = lh + pad + b"\x01" + message
    db_msk = mgf1(seed, k - hlen - 1, hashf)
    mdb = xorbytes(db, db_msk)
    seed_msk = mgf1(mdb, hlen, hashf)
    mseed = xorbytes(seed, seed_msk)
    return b"\x00" + mseed + mdb


def oaep_decode(em: bytes, label: bytes = b"", hashf: str = DEFAULT_HASH) -> bytes:
    """Reverses `oaep_encode`, validating the padding.

    Every check runs to completion before a verdict is reached, and every failure raises the same error.

    Args:
        em: The encoded message block, exactly k bytes.
        label: Label the message was encoded with.
        hashf: Hash function (Implemented for sha256, sha384, sha512)

    Returns:
        The recovered message.

    Raises:
        OAEPDecodingError: If the block is malformed.
    """
    fun, hlen, _ = _hash_entry(hashf)
    if len(em) < 2 * hlen + 2:
        raise OAEPDecodingError()
    lh = fun(label).digest()
    valid = em[0] == 0
    mseed = em[1:hlen + 1]
    mdb = em[hlen + 1:]
    seed_msk = mgf1(mdb, hlen, hashf)
    seed = xorbytes(mseed, seed_msk)
    db_msk = mgf1(seed, len(mdb), hashf)
    db = xorbytes(mdb, db_msk)
    valid &= hmac.compare_digest(db[0:hlen], lh)
    mrkr = None
    for by in range(hlen, len(db)):
        if db[by] == 0x01 and mrkr is None:
            mrkr = by
        if db[by] != 0x00 and mrkr is None:
            valid = False
    if mrkr is None or not valid:
        raise OAEPDecodingError()
    return db[mrkr + 1:]


class RSAEngine:
    """The RSA cipher, offering textbook, OAEP and CRT operations.

    Holds no key material, only configuration, so a single instance can be shared freely.

    Attributes:
        hashf: Hash function used by OAEP and MGF1.
        rng: Source of randomness for OAEP seeds. None means a fresh secure source per call.
    """
    capabilities: frozenset[str] = frozenset({"basic", "oaep", "crt"})

    def __init__(self, hashf: str = DEFAULT_HASH, rng: random.Random | None = None) -> None:
        _hash_entry(hashf)
        self.hashf = hashf
        self.rng = rng

    @property
    def hlen(self) -> int:
        return HASH_TLL[self.hashf][1]

    def max_message_length(self, n: int) -> int:
        """Largest OAEP payload in bytes for the modulus `n`, never negative."""
        k = (n.bit_length() + 7) // 8
        return max(k - 2 * self.hlen - 2, 0)

    def encrypt(self, message: int, e: int, n: int) -> int:
        """Textbook RSA encryption, c = m^e mod n.

        Raises:
            InvalidInput: If the message is negative or not less than n.
        """
        _check_range(message, n, "Message")
        return mod_pow(message, e, n)

    def decrypt(self, cipher: int, d: int, n: int) -> int:
        """Textbook RSA decryption, m = c^d mod n.

        Raises:
            InvalidInput: If the ciphertext is negative or not less than n.
        """
        _check_range(cipher, n, "Ciphertext")
        return mod_pow(cipher, d, n)

    def encrypt_oaep(self, message: bytes | int, e: int, n: int, label: bytes = b"") -> int:
        """Encrypts the message according to the RSAES-OAEP algorithm.

        A fresh random seed is drawn for every call, so encrypting the same message twice yields different
        ciphertexts.

        Args:
            message: Message to be encrypted. Integers are converted to their shortest big-endian byte form.
            e: The public exponent.
            n: The modulus.
            label: Optional label for the message.

        Returns:
            The ciphertext.

        Raises:
            InvalidInput: If an integer message is negative, or the message is neither bytes nor an integer.
            MessageTooLong: If the message exceeds `max_message_length(n)`.
        """
        if isinstance(message, int):
            if message < 0:
                raise InvalidInput("Message must be non-negative.")
            message = integer_to_bytes(message)
        elif not isinstance(message, (bytes, bytearray)):
            raise InvalidInput("Message must be bytes or a non-negative integer, encode text first.")
        k = (n.bit_length() + 7) // 8
        seed = primes.resolve_rng(self.rng).randbytes(self.hlen)
        em = oaep_encode(message, k, seed, label, self.hashf)
        return self.encrypt(bytes_to_integer(em), e, n)

    def decrypt_oaep(self, cipher: int, d: int, n: int, label: bytes = b"", as_bytes: bool = False) -> int | bytes:
        """Decrypts the message according to the RSAES-OAEP algorithm.

        Args:
            cipher: The ciphertext.
            d: The private exponent.
            n: The modulus.
            label: Optional label the message was encrypted with.
            as_bytes: Return the raw recovered bytes instead of their integer value.

        Returns:
            The recovered message.

        Raises:
            OAEPDecodingError: If decryption fails, for whichever reason.
        """
        try:
            m = self.decrypt(cipher, d, n)
        except InvalidInput:
            raise OAEPDecodingError() from None
        return self._unpad(m, n, label, as_bytes)

    def decrypt_crt(self, cipher: int, key_pair: KeyPair) -> int:
        """RSA decryption through the Chinese Remainder Theorem and Garner's recombination.

        Both exponentiations run on half-size operands, roughly quartering the cost of `decrypt`.

        Args:
            cipher: The ciphertext.
            key_pair: The key pair, including its prime factors.

        Returns:
            The same value `decrypt` would return.

        Raises:
            MissingKeyMaterial: If the key pair lacks p or q.
            InvalidInput: If the ciphertext is negative or not less than n.
        """
        dp, dq, q_inv = key_pair.crt_params()
        _check_range(cipher, key_pair.n, "Ciphertext")
        p, q = key_pair.p, key_pair.q
        m_1 = mod_pow(cipher, dp, p)
        m_2 = mod_pow(cipher, dq, q)
        h = (q_inv * (m_1 - m_2)) % p
        return m_2 + h * q

    def decrypt_oaep_crt(self,
                         cipher: int,
                         key_pair: KeyPair,
                         label: bytes = b"",
                         as_bytes: bool = False) -> int | bytes:
        """CRT decryption followed by OAEP decoding. The recommended way to decrypt.

        Raises:
            MissingKeyMaterial: If the key pair lacks p or q.
            OAEPDecodingError: If decryption fails, for whichever reason.
        """
        try:
            m = self.decrypt_crt(cipher, key_pair)
        except InvalidInput:
            raise OAEPDecodingError() from None
        return self._unpad(m, key_pair.n, label, as_bytes)

    def _unpad(self, m: int, n: int, label: bytes, as_bytes: bool) -> int | bytes:
        k = (n.bit_length() + 7) // 8
        payload = oaep_decode(integer_to_bytes(m, k), label, self.hashf)
        if as_bytes:
            return payload
        return bytes_to_integer(payload)


_DEFAULT_ENGINE = RSAEngine()


def encrypt(message: int, e: int, n: int) -> int:
    return _DEFAULT_ENGINE.encrypt(message, e, n)


def decrypt(cipher: int, d: int, n: int) -> int:
    return _DEFAULT_ENGINE.decrypt(cipher, d, n)


def encrypt_oaep(message: bytes | int, e: int, n: int, label: bytes = b"") -> int:
    return _DEFAULT_ENGINE.encrypt_oaep(message, e, n, label)


def decrypt_oaep(cipher: int, d: int, n: int, label: bytes = b"", as_bytes: bool = False) -> int | bytes:
    return _DEFAULT_ENGINE.decrypt_oaep(cipher, d, n, label, as_bytes)


def decrypt_crt(cipher: int, key_pair: KeyPair) -> int:
    return _DEFAULT_ENGINE.decrypt_crt(cipher, key_pair)


def decrypt_oaep_crt(cipher: int, key_pair: KeyPair, label: bytes = b"", as_bytes: bool = False) -> int | bytes:
    return _DEFAULT_ENGINE.decrypt_oaep_crt(cipher, key_pair, label, as_bytes)
