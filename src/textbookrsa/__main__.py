"""The Command Line Interface for the utility, including Interactive elements.

A hybrid CLI/ICLI (Command Line Interface/Interactive Command Line Interface) that asks for whatever was not given
on the command line, unless running non-interactively. Keys are not stored anywhere, so every subcommand generates
fresh key pairs and demonstrates a full round trip.

Typical usage example:

    textbookrsa demo
    OR
    python -m textbookrsa encrypt --message 1488 --number -n
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import argparse
import logging
import sys
import typing

import textbookrsa


class HelpData(typing.NamedTuple):
    description: str
    format: typing.Callable = str
    choices: list[str] | None = None
    default: typing.Any = None
    advanced: bool = False


def _exponent(value: str) -> str:
    """Accepts 'random' or an integer, keeping the raw string."""
    if value != "random":
        int(value)
    return value


help_dict: dict[str, HelpData] = {
    "subcommand":
        HelpData(
            description="The available subcommands in textbookrsa.",
            choices=["demo", "encrypt", "sign"],
            default="demo",
        ),
    "demo":
        HelpData("Alice and Bob exchange an encrypted text, an encrypted number and a signature."),
    "encrypt":
        HelpData("Encrypt a message with a fresh key pair and decrypt it again."),
    "sign":
        HelpData("Sign a message with a fresh key pair and recover it again."),
    "message":
        HelpData(
            description="The message to process.",
            format=str,
        ),
    "bits":
        HelpData(
            description="Bit length of each of the two primes (the modulus is twice as long).",
            format=int,
            default=2048,
        ),
    "pub_exponent":
        HelpData(
            description="Public exponent, or 'random' to pick one coprime with lambda.",
            format=_exponent,
            advanced=True,
            default="random",
        ),
}

needs = {
    "demo": ("bits",),
    "encrypt": ("message", "bits", "pub_exponent"),
    "sign": ("message", "bits", "pub_exponent"),
}

keyopts = argparse.ArgumentParser(add_help=False)
keyopts.add_argument("--bits", "-b", type=help_dict["bits"].format, help=help_dict["bits"].description)
keyopts.add_argument("--parallel", action="store_true", help="Generate both primes concurrently")
pubexp = argparse.ArgumentParser(add_help=False)
pubexp.add_argument("--pub-exponent", type=help_dict["pub_exponent"].format, help=help_dict["pub_exponent"].description)
payloads = argparse.ArgumentParser(add_help=False)
payloads.add_argument("--message", "-m", type=help_dict["message"].format, help=help_dict["message"].description)
corep = argparse.ArgumentParser(prog="textbookrsa")
corep.add_argument("--version", action="version", version=f"%(prog)s {textbookrsa.__version__}")
corep.add_argument("--non-interactive", "-n", action="store_true", help="Enable non-interactive mode")
corep.add_argument("--advanced", "-a", action="store_true", help="Enable advanced mode, for interactive mode")
corep.add_argument("--verbose", "-v", action="store_true", help="Log key generation details")
commands = corep.add_subparsers(dest="subcommand", title="Subcommands")

commands.add_parser("demo", parents=[keyopts], help=help_dict["demo"].description)
encrypt_parser = commands.add_parser("encrypt",
                                    parents=[keyopts, pubexp, payloads],
                                    help=help_dict["encrypt"].description)
encrypt_parser.add_argument("--number", "-N", action="store_true", help="Treat the message as an integer")
commands.add_parser("sign", parents=[keyopts, pubexp, payloads], help=help_dict["sign"].description)


def checkmodes(arg: str, mode: tuple[bool, bool]):
    helper_data = help_dict[arg]
    if (mode[0] or (helper_data.advanced and not mode[1])) and helper_data.default is not None:
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
    for choice in helper_data.choices:
        defstring = " (Default)" if choice == helper_data.default else ""
        if help_dict.get(choice, None):
            prntr(f"{choice} - {help_dict[choice].description}" + defstring)
        else:
            prntr(choice + defstring)
    if helper_data.default is not None:
        prntr("To accept default just click enter. Otherwise specify value.")
    while True:
        ch = input(f"{arg}: ")
        if ch in helper_data.choices:
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
            prntr(f"We could not convert your value with {cls.__name__}.")


def run_demo(bits: int, parallel: bool = False) -> None:
    """Alice and Bob exchange messages."""
    alice = textbookrsa.KeyPair.generate(bits, parallel=parallel)
    bob = textbookrsa.KeyPair.generate(bits, 65537, parallel=parallel)

    # Alice encrypts with Bob's public key, only Bob's private key decrypts.
    c1 = textbookrsa.encrypt("hej", bob.public_key)
    print(bob.decrypt(c1))

    c2 = textbookrsa.encrypt(1488, alice.public_key)
    print(alice.decrypt(c2))

    s1 = alice.sign("Alice signatur")
    print(textbookrsa.verify(s1, alice.public_key))


def main():
    """Core Hybrid CLI/ICLI"""
    args = corep.parse_args()
    pstatus = (args.non_interactive, args.advanced)

    def pspr(text: str):
        """Print only if not in non-interactive mode."""
        if not pstatus[0]:
            print(text)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    if not args.subcommand:
        args.subcommand = choice_handler("subcommand", pstatus)
        args.parallel = False
        args.number = False
    for reqs in needs[args.subcommand]:
        if getattr(args, reqs, None) is None:
            setattr(args, reqs, input_handler(reqs, pstatus))
    pub = None if getattr(args, "pub_exponent", "random") == "random" else int(args.pub_exponent)
    try:
        match args.subcommand:
            case "demo":
                run_demo(args.bits, args.parallel)
            case "encrypt":
                message = args.message
                if getattr(args, "number", False):
                    try:
                        message = int(message)
                    except ValueError:
                        print(f"Message {message!r} is not an integer.")
                        sys.exit(1)
                pair = textbookrsa.KeyPair.generate(args.bits, pub, args.parallel)
                cipher = textbookrsa.encrypt(message, pair.public_key)
                pspr("Ciphertext:")
                print(cipher.value)
                pspr("Cleartext:")
                print(pair.decrypt(cipher))
            case "sign":
                pair = textbookrsa.KeyPair.generate(args.bits, pub, args.parallel)
                signature = pair.sign(args.message)
                pspr("Signature:")
                print(signature.value)
                pspr("Recovered:")
                print(textbookrsa.verify(signature, pair.public_key))
                if not textbookrsa.check_signature(signature, args.message, pair.public_key):
                    print("Signature Verification Failed!")
                    sys.exit(1)
                pspr("Signature Verified!")
    except (textbookrsa.RSAError, ValueError) as exc:
        print(f"Error: {exc}")
        sys.exit(1)


if __name__ == "__main__":
    main()
