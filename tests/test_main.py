# pylint: disable=missing-module-docstring,redefined-outer-name
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import pytest

import rsacore
from rsacore import __main__ as cli


@pytest.fixture
def fixed_keys(mocker, reference_1024):
    privs = reference_1024.private_numbers()
    kp = rsacore.KeyPair(privs.public_numbers.n, privs.public_numbers.e, privs.d, privs.p, privs.q)
    standard = mocker.patch("rsacore.generate_key_pair", return_value=kp)
    strong = mocker.patch("rsacore.generate_strong_key_pair", return_value=kp)
    return standard, strong


def test_demo(fixed_keys, capsys):
    assert cli.main(["demo", "--bits", "1024"]) == 0
    out = capsys.readouterr().out
    assert "Decrypted:         1234567890" in out
    assert "Decrypted (CRT):   1234567890" in out
    assert "Ciphertexts differ" in out
    assert "Match!" in out
    fixed_keys[0].assert_called_once_with(1024, 65537)


def test_demo_strong_random_exponent(fixed_keys, capsys):
    assert cli.main(["demo", "-b", "1024", "-s", "-e", "0", "-m", "42"]) == 0
    assert "Match!" in capsys.readouterr().out
    fixed_keys[1].assert_called_once_with(1024, None)
    fixed_keys[0].assert_not_called()


@pytest.mark.parametrize("message", ["0", "-5"])
def test_demo_rejects_message(fixed_keys, capsys, message):
    assert cli.main(["demo", "-b", "1024", "-m", message]) == 2
    assert "positive integer" in capsys.readouterr().out


def test_demo_oversized_oaep_message(fixed_keys, capsys):
    message = str(2**600)
    assert cli.main(["demo", "-b", "1024", "-m", message]) == 0
    assert "OAEP skipped" in capsys.readouterr().out


def test_bench(fixed_keys, capsys):
    assert cli.main(["bench", "--bits", "1024", "-i", "2"]) == 0
    out = capsys.readouterr().out
    assert "Standard decryption time" in out
    assert "CRT decryption time" in out


def test_invalid_size(capsys):
    assert cli.main(["demo", "--bits", "512"]) == 2
    assert "Error: Size must be at least 1024." in capsys.readouterr().err


def test_invalid_exponent(capsys):
    assert cli.main(["demo", "--bits", "1024", "-e", "4"]) == 2
    assert capsys.readouterr().err.startswith("Error:")


def test_version(capsys):
    with pytest.raises(SystemExit) as exc:
        cli.main(["--version"])
    assert exc.value.code == 0
    assert rsacore.__version__ in capsys.readouterr().out


def test_requires_subcommand():
    with pytest.raises(SystemExit):
        cli.main([])
