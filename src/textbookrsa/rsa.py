"""Provides core RSA functionalities, such as encryption, decryption, signing and verification.

Facilitates core RSA under "textbook" conditions: every transform is a bare modular exponentiation, without padding.
Ciphertexts and signatures remember whether their plaintext was text or a number, so the inverse transform can hand
back the same kind of value.

Typical usage example:

    bob = KeyPair.generate(2048, 65537)
    c = encrypt("Hi there!", bob.public_key)
    r = bob.decrypt(c)
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import dataclasses
import hmac
import typing

from textbookrsa import codec
from textbookrsa import keygen
from textbookrsa.errors import EncodingError
from textbookrsa.errors import InvalidPlaintextError
from textbookrsa.errors import MalformedCiphertextError


class PublicKey(typing.NamedTuple):
    """The public half of a key pair, free to share.

    Attributes:
        n: The modulus.
        e: The public exponent.
    """
    n: int
    e: int

    @property
    def size(self) -> int:
        """Length of the modulus in bytes."""
        return (self.n.bit_length() + 7) // 8


class PrivateKey(typing.NamedTuple):
    """The private half of a key pair.

    Attributes:
        d: The private exponent.
        n: The modulus, same as in the public key.
    """
    d: int
    n: int


@dataclasses.dataclass(frozen=True)
class Text:
    """A ciphertext or signature whose plaintext is text."""
    value: int

    @property
    def is_text(self) -> bool:
        return True


@dataclasses.dataclass(frozen=True)
class Number:
    """A ciphertext whose plaintext is a raw integer."""
    value: int

    @property
    def is_text(self) -> bool:
        return False


CipherText = Text | Number
Signature = Text


def c_rsa(message: int, expo: int, mod: int, error: type[ValueError] = InvalidPlaintextError) -> int:
    """Performs core RSA operation. (Encrypt/Decrypt/Sign/Verify).

    Args:
        message: The int-marshalled message.
        expo: The exponent of the key, whether private or public.
        mod: The modulus of the key.
        error: Exception raised for an out-of-range representative.

    Returns:
        `message ** expo mod mod`.

    Raises:
        InvalidPlaintextError: (Or `error`) If the message is out of range for the key.
    """
    if not 0 <= message < mod:
        raise error("Message representative must be in range [0, mod-1]")
    return pow(message, expo, mod)


def encrypt(message: str | int, public_key: PublicKey) -> CipherText:
    """Encrypts the message with the recipient's public key.

    Args:
        message: Text, or a raw integer in [0, n-1].
        public_key: The recipient's public key.

    Returns:
        `Text` if `message` was text, `Number` otherwise.

    Raises:
        TypeError: If the message is neither text nor an integer.
        InvalidPlaintextError: If the message representative is not smaller than the modulus.
        EncodingError: If the text has no lossless integer representative.
    """
    if isinstance(message, str):
        return Text(c_rsa(codec.text_to_int(message), public_key.e, public_key.n))
    if isinstance(message, bool) or not isinstance(message, int):
        raise TypeError(f"Cannot encrypt message of type {type(message).__name__}.")
    return Number(c_rsa(message, public_key.e, public_key.n))


def verify(signature: Signature, public_key: PublicKey) -> str:
    """Recovers the signed message using the signer's public key.

    No verdict is given here: the caller compares the result to the message it expects, see `check_signature`.

    Args:
        signature: The signature.
        public_key: The signer's public key.

    Returns:
        The recovered message.

    Raises:
        MalformedCiphertextError: If the signature is out of range for the key.
        EncodingError: If the recovered representative is not text.
    """
    return codec.int_to_text(c_rsa(signature.value, public_key.e, public_key.n, MalformedCiphertextError))


def check_signature(signature: Signature, message: str, public_key: PublicKey) -> bool:
    """Whether `signature` is a signature of `message` by the owner of `public_key`."""
    try:
        recovered = verify(signature, public_key)
    except (MalformedCiphertextError, EncodingError):
        return False
    try:
        claimed = message.encode("utf-8")
    except UnicodeEncodeError:
        return False
    return hmac.compare_digest(recovered.encode("utf-8"), claimed)


class KeyPair:
    """An RSA key pair.

    The private key never leaves the instance; it is only used by `decrypt` and `sign`. Encryption and verification
    need nothing but a public key and are available both here and as module functions.

    Attributes:
        public_key: The public key, safe to hand out.
    """
    encrypt = staticmethod(encrypt)
    verify = staticmethod(verify)

    def __init__(self, public_key: PublicKey, private_key: PrivateKey) -> None:
        if public_key.n != private_key.n:
            raise ValueError("Public and private key must share the modulus.")
        self._public_key = public_key
        self._private_key = private_key

    @property
    def public_key(self) -> PublicKey:
        return self._public_key

    def __repr__(self) -> str:
        return f"<KeyPair n={self._public_key.n.bit_length()} bits, e={self._public_key.e}>"

    def decrypt(self, cipher: CipherText) -> str | int:
        """Decrypts a ciphertext addressed to this key pair.

        Args:
            cipher: The ciphertext.

        Returns:
            The text or integer that was encrypted.

        Raises:
            MalformedCiphertextError: If the ciphertext is out of range for the key.
            EncodingError: If a text ciphertext does not decode to text (e.g. it was meant for another key).
            TypeError: If `cipher` is not a `Text` or `Number`.
        """
        match cipher:
            case Text(value):
                return codec.int_to_text(self._c_private(value))
            case Number(value):
                return self._c_private(value)
        raise TypeError(f"Cannot decrypt object of type {type(cipher).__name__}.")

    def sign(self, message: str) -> Signature:
        """Signs the message using the private key.

        Args:
            message: The text to sign.

        Returns:
            The signature, recoverable with `verify` and this key pair's public key.

        Raises:
            InvalidPlaintextError: If the message representative is not smaller than the modulus.
            EncodingError: If the text has no lossless integer representative.
        """
        if not isinstance(message, str):
            raise TypeError("Only text messages can be signed.")
        return Text(c_rsa(codec.text_to_int(message), self._private_key.d, self._private_key.n))

    def _c_private(self, value: int) -> int:
        return c_rsa(value, self._private_key.d, self._private_key.n, MalformedCiphertextError)

    @classmethod
    def from_primes(cls, p: int, q: int, pub_exp: int | None = None) -> "KeyPair":
        """Builds the key pair belonging to two known primes.

        Args:
            p: Private prime 1.
            q: Private prime 2.
            pub_exp: The public exponent. Randomly selected if None.

        Returns:
            The key pair.

        Raises:
            ValueError: If the primes are not distinct odd probable primes.
            TypeError: If `pub_exp` is not an int.
            KeyGenerationError: If `pub_exp` is not invertible modulo lambda.
        """
        if p == q:
            raise ValueError("Primes must be distinct.")
        for prime in (p, q):
            if prime <= 2 or not keygen.check_prime(prime):
                raise ValueError("Both factors must be odd primes.")
        keygen.validate_exponent(pub_exp)
        (n, e), (_, d) = keygen.derive_key_pair(p, q, pub_exp)
        return cls(PublicKey(n, e), PrivateKey(d, n))

    @classmethod
    def generate(cls,
                 bit_length: int = keygen.DEFAULT_BIT_LENGTH,
                 pub_exp: int | None = None,
                 parallel: bool = False) -> "KeyPair":
        """Generates a new key pair.

        Args:
            bit_length: The bit length of each of the two secret primes. The modulus is about twice as long.
            pub_exp: The public exponent, commonly 65537. Randomly chosen if None.
            parallel: Whether to generate the two primes concurrently.

        Returns:
            A newly generated key pair.
        """
        (n, e), (_, d) = keygen.generate_key_pair(bit_length, pub_exp, parallel=parallel)
        return cls(PublicKey(n, e), PrivateKey(d, n))
