# pylint: disable=missing-module-docstring,redefined-outer-name
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import random

import pytest

from rsacore import convert
from rsacore import keygen
from rsacore.errors import InvalidInput
from rsacore.errors import MessageTooLong
from rsacore.errors import OAEPDecodingError


@pytest.fixture(scope="module")
def key_pair() -> keygen.KeyPair:
    return keygen.generate_key_pair(1024, 65537, rng=random.Random(4242))


@pytest.mark.parametrize("message", ["Hello, RSA World!", "", "Zażółć gęślą jaźń", "🔐 keys"])
def test_text_roundtrip(key_pair, message):
    with pytest.warns(RuntimeWarning, match="Academic encryption is unsecure"):
        cipher = convert.encrypt_text(message, key_pair.e, key_pair.n)
    assert convert.decrypt_text(cipher, key_pair.d, key_pair.n) == message


def test_bytes_roundtrip(key_pair):
    message = bytes(range(1, 100))
    with pytest.warns(RuntimeWarning):
        cipher = convert.encrypt_bytes(message, key_pair.e, key_pair.n)
    assert cipher == pow(int.from_bytes(message, "big"), key_pair.e, key_pair.n)
    assert convert.decrypt_bytes(cipher, key_pair.d, key_pair.n) == message


def test_leading_zeros_are_lost(key_pair):
    with pytest.warns(RuntimeWarning):
        cipher = convert.encrypt_bytes(b"\x00\x00data", key_pair.e, key_pair.n)
    assert convert.decrypt_bytes(cipher, key_pair.d, key_pair.n) == b"data"


def test_oversized_message(key_pair):
    with pytest.warns(RuntimeWarning), pytest.raises(InvalidInput):
        convert.encrypt_bytes(b"\xff" * 129, key_pair.e, key_pair.n)


@pytest.mark.parametrize("message,expected", [
    ("A", 65),
    (b"\x01\x00", 256),
    (b"", 0),
    ("é", 0xC3A9),
])
def test_message_to_integer(message, expected):
    assert convert.message_to_integer(message) == expected


def test_message_to_integer_encoding():
    assert convert.message_to_integer("é", "latin-1") == 0xE9
    assert convert.integer_to_text(0xE9, "latin-1") == "é"


@pytest.mark.parametrize("value,expected", [(0, b""), (65, b"A"), (256, b"\x01\x00")])
def test_integer_to_message(value, expected):
    assert convert.integer_to_message(value) == expected


@pytest.mark.parametrize("message", ["test", "Hello, RSA World!", "", "Zażółć gęślą jaźń"])
def test_oaep_text_roundtrip(key_pair, message):
    cipher = convert.encrypt_oaep_text(message, key_pair.e, key_pair.n)
    assert convert.decrypt_oaep_crt_text(cipher, key_pair) == message


def test_oaep_text_is_randomized(key_pair):
    first = convert.encrypt_oaep_text("test", key_pair.e, key_pair.n)
    second = convert.encrypt_oaep_text("test", key_pair.e, key_pair.n)
    assert first != second


def test_oaep_text_label(key_pair):
    cipher = convert.encrypt_oaep_text("labelled", key_pair.e, key_pair.n, label=b"tag")
    assert convert.decrypt_oaep_crt_text(cipher, key_pair, label=b"tag") == "labelled"
    with pytest.raises(OAEPDecodingError):
        convert.decrypt_oaep_crt_text(cipher, key_pair)


def test_oaep_text_too_long(key_pair):
    with pytest.raises(MessageTooLong):
        convert.encrypt_oaep_text("x" * 63, key_pair.e, key_pair.n)
