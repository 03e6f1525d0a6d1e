"""The Command Line Interface for the demo, including Interactive elements.

A hybrid CLI/ICLI (Command Line Interface/Interactive Command Line Interface) that generates the INTERACTIVE part
on-the-fly based on the arguments missing from the command line, including the option that none are included.

Typical usage example:

    rsademo demo --prime-p 17 --prime-q 19 --message Hi
    OR
    python -m rsademo
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import argparse
import logging
import pathlib
import random
import sys
import typing

import rsademo
from rsademo import codec
from rsademo import pem


class HelpData(typing.NamedTuple):
    description: str
    format: typing.Type = str
    choices: list[str] | None = None
    default: typing.Any = None
    advanced: bool = False


help_dict: dict[str, HelpData] = {
    "subcommand":
        HelpData(
            description="The available subcommands in the RSA demo.",
            choices=["check", "suggest", "keygen", "encrypt", "decrypt", "demo"],
        ),
    "check":
        HelpData("Primality check."),
    "suggest":
        HelpData("Suggest two distinct small primes."),
    "keygen":
        HelpData("Narrated key derivation from two primes."),
    "encrypt":
        HelpData("Narrated encryption with a public key file."),
    "decrypt":
        HelpData("Narrated decryption with a private key file."),
    "demo":
        HelpData("Full walkthrough: key derivation, encryption and decryption."),
    "number":
        HelpData(
            description="The number to test for primality.",
            format=int,
        ),
    "prime_p":
        HelpData(
            description="The first prime p (e.g. 11, 13, 17).",
            format=int,
        ),
    "prime_q":
        HelpData(
            description="The second prime q, different from p.",
            format=int,
        ),
    "pub_exponent":
        HelpData(
            description="Exponent for the public key.",
            format=int,
            advanced=True,
            default=rsademo.PUBLIC_EXPONENT,
        ),
    "public_key":
        HelpData(
            description="Location of the public key file.",
            format=pathlib.Path,
        ),
    "private_key":
        HelpData(
            description="Location of the private key file.",
            format=pathlib.Path,
        ),
    "message":
        HelpData(
            description="Message or path to file containing payload. If Path start with `P:`",
            format=str,
        ),
    "ciphertext":
        HelpData(
            description="Ciphertext values, separated by commas or spaces.",
            format=str,
        ),
    "overwrite":
        HelpData(
            description="Overwrite specified destination files if they exist?",
            choices=["Y", "N"],
            default="N",
        )
}

needs = {
    "check": ("number",),
    "suggest": (),
    "keygen": ("prime_p", "prime_q", "pub_exponent"),
    "encrypt": ("public_key", "message"),
    "decrypt": ("private_key", "ciphertext"),
    "demo": ("prime_p", "prime_q", "pub_exponent", "message"),
}

pubkey = argparse.ArgumentParser(add_help=False)
pubkey.add_argument("--public_key", "-p", type=help_dict["public_key"].format, help=help_dict["public_key"].description)
privkey = argparse.ArgumentParser(add_help=False)
privkey.add_argument("--private_key",
                     "-P",
                     type=help_dict["private_key"].format,
                     help=help_dict["private_key"].description)
primes = argparse.ArgumentParser(add_help=False)
primes.add_argument("--prime-p", type=help_dict["prime_p"].format, help=help_dict["prime_p"].description)
primes.add_argument("--prime-q", type=help_dict["prime_q"].format, help=help_dict["prime_q"].description)
primes.add_argument("--pub-exponent", type=help_dict["pub_exponent"].format, help=help_dict["pub_exponent"].description)
payloads = argparse.ArgumentParser(add_help=False)
payloads.add_argument("--message", "-m", type=help_dict["message"].format, help=help_dict["message"].description)
corep = argparse.ArgumentParser(prog="rsademo")
corep.add_argument("--version", "-v", action="version", version=f"%(prog)s {rsademo.__version__}")
corep.add_argument("--non-interactive", "-n", action="store_true", help="Enable non-interactive mode")
corep.add_argument("--advanced", "-a", action="store_true", help="Enable advanced mode, for interactive mode")
corep.add_argument("--verbose", "-V", action="store_true", help="Enable debug logging")
commands = corep.add_subparsers(dest="subcommand", title="Subcommands")

check = commands.add_parser("check", help=help_dict["check"].description)
check.add_argument("--number", type=help_dict["number"].format, help=help_dict["number"].description)
suggest = commands.add_parser("suggest", help=help_dict["suggest"].description)
suggest.add_argument("--seed", type=int, help="Seed for the random source. Defaults to system entropy.")
keygen = commands.add_parser("keygen", parents=[primes, privkey, pubkey], help=help_dict["keygen"].description)
keygen.add_argument("--overwrite", "-o", action="store_const", const="Y", help=help_dict["overwrite"].description)
encrypt = commands.add_parser("encrypt", parents=[pubkey, payloads], help=help_dict["encrypt"].description)
decrypt = commands.add_parser("decrypt", parents=[privkey], help=help_dict["decrypt"].description)
decrypt.add_argument("--ciphertext", "-c", type=help_dict["ciphertext"].format, help=help_dict["ciphertext"].description)
demo = commands.add_parser("demo", parents=[primes, payloads], help=help_dict["demo"].description)


def checkmodes(arg: str, mode: tuple[bool, bool]):
    helper_data = help_dict[arg]
    if (mode[0] or (helper_data.advanced and not mode[1])) and helper_data.default:
        return helper_data.default
    if mode[0]:
        raise IOError(f"Argument {arg} is missing and non-interactive mode is active.")
    return helper_data


def choice_handler(arg: str, mode: tuple[bool, bool], prntr: typing.Callable = print):
    helper_data = checkmodes(arg, mode)
    if not isinstance(helper_data, HelpData):
        return helper_data
    prntr(f"Please specify the {arg}!")
    prntr("Description: " + helper_data.description)
    choices = helper_data.choices
    vald = set(choices)
    for choice in choices:
        defstring = " (Default)" if choice == helper_data.default else ""
        if help_dict.get(choice, None):
            prntr(f"{choice} - {help_dict[choice].description}" + defstring)
        else:
            prntr(f"{choice}" + defstring)
    if helper_data.default is not None:
        prntr("To accept default just click enter. Otherwise specify value.")
    while True:
        ch = input(f"{arg}: ")
        if ch in vald:
            return ch
        if not ch and helper_data.default is not None:
            return helper_data.default
        prntr("Please select an option from the list.")


def input_handler(arg: str, mode: tuple[bool, bool], prntr: typing.Callable = print):
    helper_data = checkmodes(arg, mode)
    if not isinstance(helper_data, HelpData):
        return helper_data
    prntr(f"Please specify the {arg}!")
    prntr("Description: " + helper_data.description)
    if helper_data.default is not None:
        prntr(f"Default value: {helper_data.default}")
        prntr("To accept default just click enter. Otherwise specify value.")
    cls = helper_data.format
    while True:
        ch = input(f"{arg}: ")
        if not ch and helper_data.default is not None:
            return helper_data.default
        if ch == "":
            prntr("Please provide a value.")
            continue
        try:
            return cls(ch)
        except ValueError:
            prntr(f"We could not convert your value to {cls.__name__}.")


def check_message(mess: str, enc: str = "utf-8") -> str:
    """Parse message for path-notice."""
    if mess.startswith("P:"):
        mess = mess[2:]
        with open(mess, "r", encoding=enc) as f:
            mess = f.read()
    return mess


def parse_ciphertext(text: str) -> list[int]:
    """Split a comma or whitespace separated list of ciphertext values."""
    return [int(part) for part in text.replace(",", " ").split()]


def print_steps(steps: typing.Iterable[str]) -> None:
    for step in steps:
        print(step)


def main():
    """Core Hybrid CLI/ICLI (Command Line Interface/Interactive Command Line Interface)"""
    args = corep.parse_args()
    pstatus = (args.non_interactive, args.advanced)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s:%(name)s: %(message)s")

    def pspr(text: str):
        """Print only if not in non-interactive mode."""
        if not pstatus[0]:
            print(text)

    pspr("Welcome to the Textbook RSA Demo!\n")
    if not args.subcommand:
        args.subcommand = choice_handler("subcommand", pstatus)
    for reqs in needs[args.subcommand]:
        if getattr(args, reqs, None) is None:
            if help_dict[reqs].choices is not None:
                res = choice_handler(reqs, pstatus)
            else:
                res = input_handler(reqs, pstatus)
            setattr(args, reqs, res)
        else:
            pspr(f"{reqs}: {getattr(args, reqs)}")
    pspr("\nInput Complete! Executing...")
    try:
        match args.subcommand:
            case "check":
                verdict = "is prime" if rsademo.is_prime(args.number) else "is not prime"
                print(f"{args.number} {verdict}")
            case "suggest":
                p, q = rsademo.suggest_primes(random.Random(getattr(args, "seed", None)))
                pspr("Suggested primes:")
                print(f"p = {p}, q = {q}")
            case "keygen":
                kp = rsademo.derive_keypair(args.prime_p, args.prime_q, args.pub_exponent)
                print_steps(kp.steps)
                priv_dest, pub_dest = getattr(args, "private_key", None), getattr(args, "public_key", None)
                if any(d is not None and d.exists() for d in (priv_dest, pub_dest)):
                    rs = getattr(args, "overwrite", None)
                    if rs is None:
                        rs = choice_handler("overwrite", pstatus, pspr)
                    if rs == "N":
                        print("Destination private or public key already exists!")
                        return
                if priv_dest is not None:
                    pem.export_private(kp, priv_dest)
                if pub_dest is not None:
                    pem.export_public(kp, pub_dest)
                pspr("\nKey pair derived!")
                print(f"Public key (n, e): ({kp.n}, {kp.e})")
                print(f"Private key (n, d): ({kp.n}, {kp.d})")
            case "encrypt":
                args.message = check_message(args.message)
                n, e = pem.import_public(args.public_key)
                rsademo.require_message(args.message, n)
                enc = rsademo.encrypt(args.message, e, n)
                print_steps(enc.steps)
                pspr("Ciphertext:")
                print(",".join(str(c) for c in enc.ciphertext))
            case "decrypt":
                kp = pem.import_private(args.private_key)
                dec = kp.decrypt(parse_ciphertext(args.ciphertext))
                print_steps(dec.steps)
                pspr("Cleartext:")
                print(codec.printable(dec.plaintext))
            case "demo":
                args.message = check_message(args.message)
                kp = rsademo.derive_keypair(args.prime_p, args.prime_q, args.pub_exponent)
                print_steps(kp.steps)
                enc = kp.encrypt(args.message)
                print_steps(enc.steps)
                dec = kp.decrypt(enc.ciphertext)
                print_steps(dec.steps)
    except rsademo.KeyDerivationError as exc:
        print_steps(exc.steps)
        print(f"Key derivation failed! {exc}")
        sys.exit(1)
    except rsademo.MessageTooLargeError as exc:
        print(f"Message rejected! {exc}")
        sys.exit(1)
    except (OSError, ValueError) as exc:
        print(f"Operation failed! {exc}")
        sys.exit(1)
    pspr("Thank you for using the Textbook RSA Demo!")
    pspr("Goodbye!")


if __name__ == "__main__":
    main()
