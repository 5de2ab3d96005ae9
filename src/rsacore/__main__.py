"""The Command Line Interface for the engine, a demonstration and benchmark driver.

Keys are never persisted, so every run generates a fresh key pair and walks through the engine's operations on it.

Typical usage example:

    rsacore demo --bits 1024 --message 1234567890
    python -m rsacore bench --bits 2048 --iterations 200
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import argparse
import logging
import sys
import time
import typing

import rsacore


class HelpData(typing.NamedTuple):
    description: str
    format: typing.Type = str
    default: typing.Any = None


help_dict: dict[str, HelpData] = {
    "demo": HelpData("Generate a key pair and run plain, OAEP and CRT operations on a message."),
    "bench": HelpData("Compare plain and CRT decryption speed."),
    "bits": HelpData("Modulus size (in bits).", int, 2048),
    "message": HelpData("Message to encrypt, a positive integer.", int, 1234567890),
    "exponent": HelpData("Public exponent. 0 draws a random one.", int, rsacore.DEFAULT_PUBLIC_EXPONENT),
    "strong": HelpData("Use strong key generation (higher certainty, prime gap check).", bool, False),
    "iterations": HelpData("Number of decryptions per method.", int, 100),
}

keyp = argparse.ArgumentParser(add_help=False)
keyp.add_argument("--bits", "-b", type=help_dict["bits"].format, default=help_dict["bits"].default,
                  help=help_dict["bits"].description)
keyp.add_argument("--exponent", "-e", type=help_dict["exponent"].format, default=help_dict["exponent"].default,
                  help=help_dict["exponent"].description)
keyp.add_argument("--strong", "-s", action="store_true", help=help_dict["strong"].description)
corep = argparse.ArgumentParser(prog="rsacore")
corep.add_argument("--version", "-V", action="version", version=f"%(prog)s {rsacore.__version__}")
corep.add_argument("--verbose", "-v", action="store_true", help="Log key generation progress")
commands = corep.add_subparsers(dest="subcommand", title="Subcommands", required=True)

demo = commands.add_parser("demo", parents=[keyp], help=help_dict["demo"].description)
demo.add_argument("--message", "-m", type=help_dict["message"].format, default=help_dict["message"].default,
                  help=help_dict["message"].description)
bench = commands.add_parser("bench", parents=[keyp], help=help_dict["bench"].description)
bench.add_argument("--iterations", "-i", type=help_dict["iterations"].format,
                   default=help_dict["iterations"].default, help=help_dict["iterations"].description)


def shorten(value: int, width: int = 50) -> str:
    text = str(value)
    return text if len(text) <= width else text[:width] + "..."


def make_keys(args: argparse.Namespace, prntr: typing.Callable = print) -> rsacore.KeyPair:
    gen = rsacore.generate_strong_key_pair if args.strong else rsacore.generate_key_pair
    prntr(f"Generating {'strong ' if args.strong else ''}{args.bits}-bit key pair...")
    start = time.perf_counter()
    kp = gen(args.bits, args.exponent or None)
    prntr(f"Key pair generated in {(time.perf_counter() - start) * 1000:.0f} ms: {kp!r}")
    return kp


def run_demo(args: argparse.Namespace, prntr: typing.Callable = print) -> int:
    """Plain, OAEP, CRT and OAEP+CRT round trips. Returns the process exit code."""
    kp = make_keys(args, prntr)
    if not 0 < args.message < kp.n:
        prntr(f"Message must be a positive integer below the {kp.bit_length}-bit modulus.")
        return 2
    ok = True
    cipher = rsacore.encrypt(args.message, kp.e, kp.n)
    plain = rsacore.decrypt(cipher, kp.d, kp.n)
    crt = rsacore.decrypt_crt(cipher, kp)
    prntr(f"Ciphertext:        {shorten(cipher)}")
    prntr(f"Decrypted:         {plain}")
    prntr(f"Decrypted (CRT):   {crt}")
    ok &= plain == crt == args.message
    try:
        oaep_1 = rsacore.encrypt_oaep(args.message, kp.e, kp.n)
        oaep_2 = rsacore.encrypt_oaep(args.message, kp.e, kp.n)
    except rsacore.MessageTooLong as exc:
        prntr(f"OAEP skipped: {exc}")
        return 0 if ok else 1
    prntr(f"OAEP ciphertext 1: {shorten(oaep_1)}")
    prntr(f"OAEP ciphertext 2: {shorten(oaep_2)}")
    prntr("Ciphertexts differ (random padding active)." if oaep_1 != oaep_2 else "Ciphertexts are identical!")
    oaep_plain = rsacore.decrypt_oaep_crt(oaep_1, kp)
    prntr(f"Decrypted (OAEP+CRT): {oaep_plain}")
    ok &= oaep_1 != oaep_2 and oaep_plain == args.message
    prntr("Match!" if ok else "Mismatch!")
    return 0 if ok else 1


def run_bench(args: argparse.Namespace, prntr: typing.Callable = print) -> int:
    kp = make_keys(args, prntr)
    cipher = rsacore.encrypt(1234567890, kp.e, kp.n)
    prntr(f"Running {args.iterations} decryptions per method...")
    start = time.perf_counter()
    for _ in range(args.iterations):
        rsacore.decrypt(cipher, kp.d, kp.n)
    t_std = time.perf_counter() - start
    start = time.perf_counter()
    for _ in range(args.iterations):
        rsacore.decrypt_crt(cipher, kp)
    t_crt = time.perf_counter() - start
    prntr(f"Standard decryption time: {t_std * 1000:.0f} ms")
    prntr(f"CRT decryption time:      {t_crt * 1000:.0f} ms")
    if t_crt > 0:
        prntr(f"Speedup: {t_std / t_crt:.2f}x")
    return 0


def main(argv: list[str] | None = None) -> int:
    """Core Command Line Interface."""
    args = corep.parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(asctime)s %(name)s %(levelname)s: %(message)s")
    try:
        match args.subcommand:
            case "demo":
                return run_demo(args)
            case "bench":
                return run_bench(args)
    except ValueError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 2
    return 1


if __name__ == "__main__":
    sys.exit(main())
