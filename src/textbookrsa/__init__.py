"""Textbook RSA in an Academic Sense.

Provides RSA key pair generation, encryption and decryption of text or integers, and signing with message recovery.
Every transform is raw modular exponentiation: there is no padding, so this is for study rather than for protecting
anything real.

Typical usage example:

    alice = KeyPair.generate(2048)
    bob = KeyPair.generate(2048, 65537)
    c = encrypt("hej", bob.public_key)
    r = bob.decrypt(c)
    s = alice.sign("Alice signatur")
    v = verify(s, alice.public_key)
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
from textbookrsa.codec import int_to_text
from textbookrsa.codec import text_to_int
from textbookrsa.errors import EncodingError
from textbookrsa.errors import InvalidPlaintextError
from textbookrsa.errors import KeyGenerationError
from textbookrsa.errors import MalformedCiphertextError
from textbookrsa.errors import RSAError
from textbookrsa.keygen import check_prime
from textbookrsa.keygen import generate_key_pair
from textbookrsa.keygen import generate_prime
from textbookrsa.keygen import generate_primes
from textbookrsa.rsa import check_signature
from textbookrsa.rsa import CipherText
from textbookrsa.rsa import encrypt
from textbookrsa.rsa import KeyPair
from textbookrsa.rsa import Number
from textbookrsa.rsa import PrivateKey
from textbookrsa.rsa import PublicKey
from textbookrsa.rsa import Signature
from textbookrsa.rsa import Text
from textbookrsa.rsa import verify

__version__ = "0.1.0"
__all__ = [
    "KeyPair",
    "PublicKey",
    "PrivateKey",
    "Text",
    "Number",
    "CipherText",
    "Signature",
    "encrypt",
    "verify",
    "check_signature",
    "text_to_int",
    "int_to_text",
    "check_prime",
    "generate_prime",
    "generate_primes",
    "generate_key_pair",
    "RSAError",
    "KeyGenerationError",
    "InvalidPlaintextError",
    "MalformedCiphertextError",
    "EncodingError",
]
