# pylint: disable=missing-module-docstring
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import math
import random

import pytest

from rsacore import arith
from rsacore.errors import InverseNotFound

_seeded = random.Random(1234567890)
modpow_cases = [(_seeded.getrandbits(bits), _seeded.getrandbits(bits), _seeded.getrandbits(bits) | 1)
                for bits in (8, 32, 64, 256, 1024, 2048) for _ in range(3)]


def id_generator(param):
    if isinstance(param, int) and param > 1000000:
        return f"LargeInt-{param.bit_length()}bits"
    return str(param)


@pytest.mark.parametrize("base,exponent,modulus", modpow_cases, ids=id_generator)
def test_mod_pow_matches_builtin(base, exponent, modulus):
    assert arith.mod_pow(base, exponent, modulus) == pow(base, exponent, modulus)


@pytest.mark.parametrize("base,modulus", [(5, 7), (0, 13), (2**521 - 1, 2**607 - 1), (9, 1)])
def test_mod_pow_zero_exponent(base, modulus):
    assert arith.mod_pow(base, 0, modulus) == 1 % modulus


@pytest.mark.parametrize("base,exponent,modulus,expected", [
    (4, 13, 497, 445),
    (2, 10, 1000, 24),
    (-3, 3, 7, 1),
    (7, 1, 7, 0),
    (123, 5, 1, 0),
])
def test_mod_pow_known(base, exponent, modulus, expected):
    assert arith.mod_pow(base, exponent, modulus) == expected


@pytest.mark.parametrize("exponent,modulus", [(-1, 7), (3, 0), (3, -7)])
def test_mod_pow_validates(exponent, modulus):
    with pytest.raises(ValueError):
        arith.mod_pow(3, exponent, modulus)


@pytest.mark.parametrize("a,b", [(0, 0), (0, 5), (5, 0), (12, 18), (17, 5), (2**127 - 1, 2**61 - 1),
                                 (_seeded.getrandbits(2048), _seeded.getrandbits(2048))],
                         ids=id_generator)
def test_gcd_matches_math(a, b):
    assert arith.gcd(a, b) == math.gcd(a, b)


@pytest.mark.parametrize("a,b", [(240, 46), (46, 240), (1, 1), (65537, 2**1024 - 2),
                                 (_seeded.getrandbits(4096), _seeded.getrandbits(4096))],
                         ids=id_generator)
def test_extended_gcd_bezout(a, b):
    d, x, y = arith.extended_gcd(a, b)
    assert d == math.gcd(a, b)
    assert a * x + b * y == d


def test_extended_gcd_deep_operands():
    # Consecutive Fibonacci numbers are the worst case for the number of division steps.
    a, b = 1, 1
    for _ in range(5000):
        a, b = b, a + b
    d, x, y = arith.extended_gcd(b, a)
    assert d == 1
    assert b * x + a * y == 1


@pytest.mark.parametrize("a,m", [(3, 11), (10, 17), (65537, 3120), (17, 3120),
                                 (65537, (2**521 - 2) * (2**607 - 2))],
                         ids=id_generator)
def test_mod_inverse(a, m):
    inv = arith.mod_inverse(a, m)
    assert 0 <= inv < m
    assert (a * inv) % m == 1
    assert inv == pow(a, -1, m)


def test_mod_inverse_random():
    rnd = random.Random(42)
    checked = 0
    while checked < 25:
        m = rnd.getrandbits(1024)
        a = rnd.getrandbits(512)
        if math.gcd(a, m) != 1:
            continue
        assert (a * arith.mod_inverse(a, m)) % m == 1
        checked += 1


@pytest.mark.parametrize("a,m", [(4, 8), (6, 9), (0, 7), (65537 * 3, 65537 * 5)])
def test_mod_inverse_not_found(a, m):
    with pytest.raises(InverseNotFound):
        arith.mod_inverse(a, m)


def test_inverse_not_found_is_value_error():
    with pytest.raises(ValueError):
        arith.mod_inverse(4, 8)
