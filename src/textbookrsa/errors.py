"""Exceptions raised by textbookrsa.

All of them derive from `RSAError`, and additionally from the builtin exception a caller would naturally expect
(`ValueError` for bad input, `RuntimeError` for generation running out of attempts).
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0


class RSAError(Exception):
    """Base class for all textbookrsa errors."""


class KeyGenerationError(RSAError, RuntimeError):
    """Key generation could not complete, e.g. a retry cap was exhausted or no private exponent exists."""


class InvalidPlaintextError(RSAError, ValueError):
    """The message representative does not lie in [0, n-1]."""


class MalformedCiphertextError(RSAError, ValueError):
    """A ciphertext or signature representative does not lie in [0, n-1]."""


class EncodingError(RSAError, ValueError):
    """Text could not be losslessly converted to or from its integer representative."""
