"""Core Key Generation Utility, mainly focusing on the generation of random large primes.

This module is responsible for the number theory behind an RSA key pair: probable prime generation roughly based on
FIPS 186-5, public exponent selection and derivation of the private exponent modulo the Carmichael function.

Typical usage example:

    p = generate_prime(1024)
    (n, e), (n, d) = generate_key_pair(2048)
    (n, e), (n, d) = generate_key_pair(2048, 65537)
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import logging
import math
import multiprocessing
import secrets
from typing import Literal, overload
import warnings

from textbookrsa.errors import KeyGenerationError

_logger = logging.getLogger(__name__)

DEFAULT_BIT_LENGTH: int = 2048
MIN_BIT_LENGTH: int = 16
SECURE_BIT_LENGTH: int = 1024
MAX_EXPONENT_ATTEMPTS: int = 1000

_SMALL_PRIMES: list[int] = []
_SMALL_PRIMES_CAP: int = 0
_MINIMUM_PRIME_SEPARATION: int = 100


def _sieve(n: int = 10000) -> list[int]:
    """Implements the Sieve of Eratosthenes.

    Uses the textbook Sieve of Eratosthenes over odd numbers only, sieving until root.

    Args:
        n: The number up to which to generate primes. Defaults to 10000. Must be >= 0.

    Returns:
        A list of primes up to `n`.
    """
    if n < 2:
        return []
    i_size = (n - 1) // 2
    candidate: list[bool] = [True] * i_size
    for i in range(int(n**0.5) // 2):
        if candidate[i]:
            r = 2 * i + 3
            for j in range((r * r - 3) // 2, i_size, r):
                candidate[j] = False
    return [2] + [(no * 2 + 3) for no, ele in enumerate(candidate) if ele]


def get_pre_primes(n: int = 10000, change: bool = False) -> list[int]:
    """Get the small primes, sieving them if necessary.

    The result is cached in `_SMALL_PRIMES`; regeneration occurs if the requested range is greater than the cached
    one, if forced by `change` or if the cache is empty.

    Args:
        n: The number up to which to generate primes. Defaults to 10000. Must be >= 0.
        change: Whether to force a recomputation of primes. Defaults to False.

    Returns:
        List of primes in ascending order, at least up to `n`.

    Raises:
        ValueError: If `n` is negative.
    """
    if n < 0:
        raise ValueError("n must be >= 0")
    global _SMALL_PRIMES
    global _SMALL_PRIMES_CAP
    if n > _SMALL_PRIMES_CAP or change or not _SMALL_PRIMES:
        _SMALL_PRIMES = _sieve(n)
        _SMALL_PRIMES_CAP = n
    return _SMALL_PRIMES


def _trial_division(no: int, n: int = 10000) -> bool:
    """Check `no` against the known small primes.

    Args:
         no: The candidate.
         n: Bound of the small primes to divide by.

    Returns:
        False if `no` cannot be prime, True otherwise.
    """
    if no < 2:
        return False
    for prime in get_pre_primes(n):
        if prime**2 > no:
            return True
        if no % prime == 0:
            return False
    return True


def _miller_rabin(w: int, iters: int) -> bool:
    """Perform the Miller-Rabin primality test as specified in FIPS 186-5 B.3.1.

    Args:
        w: Odd integer to be tested.
        iters: Number of Miller-Rabin iterations to perform.

    Returns:
        True if `w` is probably prime, False otherwise.
    """
    if w <= 3:
        return w in (2, 3)
    tw = w - 1
    a = (tw & -tw).bit_length() - 1
    m = tw >> a
    for _ in range(iters):
        b = secrets.randbelow(w - 3) + 2
        z = pow(b, m, w)
        if z in (1, tw):
            continue
        for _ in range(1, a):
            z = pow(z, 2, w)
            if z == tw:
                break
            if z == 1:
                return False
        else:
            return False
    return True


def check_prime(candidate: int, iters: int | None = None, n: int = 10000) -> bool:
    """Tests `candidate` for primality with trial division followed by Miller-Rabin.

    Args:
        candidate: The candidate prime to test.
        iters: Number of Miller-Rabin iterations to perform.
            If not provided, uses the round counts of FIPS 186-5 Appendix C.1.
        n: Bound of the small primes used for trial division. Defaults to 10000.

    Returns:
        True if `candidate` is probably prime, False otherwise.
    """
    if candidate < 2:
        return False
    if not _trial_division(candidate, n):
        return False
    if iters is None:
        if candidate.bit_length() <= 512:
            iters = 40
        elif candidate.bit_length() <= 1024:
            iters = 56
        elif candidate.bit_length() <= 1536:
            iters = 64
        elif candidate.bit_length() <= 2048:
            iters = 70
        else:
            iters = 74
    return _miller_rabin(candidate, iters)


def _too_close(size: int, prm_p: int, candidate: int) -> bool:
    if candidate == prm_p:
        return True
    if size <= _MINIMUM_PRIME_SEPARATION:
        return False
    return abs(prm_p - candidate) <= (1 << (size - _MINIMUM_PRIME_SEPARATION))


def generate_prime(size: int, pub: int | None = None, prm_p: int | None = None) -> int:
    """Generate a probable prime of exactly `size` bits.

    The top two bits are forced, so the product of two such primes has exactly `2 * size` bits.

    Args:
        size: The size of the prime to generate in bits.
        pub: The public exponent the prime will be used with. If given, candidates with `gcd(candidate - 1, pub) != 1`
            are rejected.
        prm_p: The other prime of the pair, if this is the second one. The result is guaranteed to differ from it
            (and, above 100 bits, to not be within `2**(size - 100)` of it).

    Returns:
        A probable prime.

    Raises:
        KeyGenerationError: If an improbable amount of candidates was drawn without finding a prime.
    """
    rep_cap = size * 5 * (1 if prm_p is None else 2)
    msk = (1 << size - 1) | (1 << size - 2) | 1
    for attempt in range(1, rep_cap + 1):
        byts = secrets.randbits(size) | msk
        if prm_p is not None and _too_close(size, prm_p, byts):
            continue
        if pub is not None and math.gcd(byts - 1, pub) != 1:
            continue
        if check_prime(byts):
            _logger.debug("Found %d-bit probable prime after %d candidates.", size, attempt)
            return byts
    raise KeyGenerationError(
        f"Ran an improbable {rep_cap} amount of loops with no prime found. Check system random number generator.")


def _validate_parameters(size: int, pub: int | None) -> None:
    if isinstance(size, bool) or not isinstance(size, int):
        raise TypeError("Bit length must be an int.")
    if size < MIN_BIT_LENGTH:
        raise ValueError(f"Bit length must be at least {MIN_BIT_LENGTH}.")
    validate_exponent(pub)


def validate_exponent(pub: int | None) -> None:
    """Checks a caller supplied public exponent, None meaning a random one.

    Raises:
        TypeError: If `pub` is not an int.
        ValueError: If `pub` is even or below 3.
    """
    if pub is None:
        return
    if isinstance(pub, bool) or not isinstance(pub, int):
        raise TypeError("Public exponent must be an int.")
    if pub < 3 or pub % 2 == 0:
        raise ValueError("Public exponent must be an odd integer >= 3.")


def generate_primes(size: int = DEFAULT_BIT_LENGTH, pub: int | None = None, parallel: bool = False) -> tuple[int, int]:
    """Generates a pair of distinct probable primes of `size` bits each.

    Args:
        size: The bit length of each prime, NOT of the modulus.
        pub: The public exponent the primes will be used with, see `generate_prime`.
        parallel: Whether to search for both primes concurrently in a pool of two processes.

    Returns:
        The pair (p, q).

    Raises:
        ValueError: If `size` is too small or `pub` is unusable.
        TypeError: If `size` or `pub` is not an int.
    """
    _validate_parameters(size, pub)
    if parallel:
        with multiprocessing.Pool(2) as pool:
            p, q = pool.starmap(generate_prime, [(size, pub), (size, pub)])
        if _too_close(size, p, q):
            _logger.debug("Concurrently generated primes are too close, regenerating q.")
            q = generate_prime(size, pub, p)
    else:
        p = generate_prime(size, pub)
        q = generate_prime(size, pub, p)
    return p, q


def select_exponent(lam: int, attempts: int = MAX_EXPONENT_ATTEMPTS) -> int:
    """Draws a uniformly random public exponent in [3, lam) coprime with `lam`.

    Args:
        lam: The Carmichael function of the modulus. Must be > 3.
        attempts: How many candidates to draw before giving up.

    Returns:
        The public exponent.

    Raises:
        KeyGenerationError: If no coprime candidate was drawn within `attempts`.
    """
    for attempt in range(1, attempts + 1):
        e = secrets.randbelow(lam - 3) + 3
        if math.gcd(e, lam) == 1:
            _logger.debug("Selected random public exponent after %d attempts.", attempt)
            return e
    raise KeyGenerationError(f"No public exponent coprime with lambda found in {attempts} attempts.")


def derive_key_pair(p: int, q: int, pub: int | None = None) -> tuple[tuple[int, int], tuple[int, int]]:
    """Derives the key pair numbers from two distinct primes.

    Args:
        p: Private prime 1.
        q: Private prime 2.
        pub: The public exponent. Randomly selected if None.

    Returns:
        A tuple of (public, private) where public is (modulus, public exponent) and private is
        (modulus, private exponent).

    Raises:
        KeyGenerationError: If `pub` has no inverse modulo lambda.
    """
    n = p * q
    lam = math.lcm(p - 1, q - 1)
    if pub is None:
        pub = select_exponent(lam)
    try:
        d = pow(pub, -1, lam)
    except ValueError as exc:
        raise KeyGenerationError("Public exponent is not invertible modulo lambda.") from exc
    return (n, pub), (n, d)


@overload
def generate_key_pair(size: int = DEFAULT_BIT_LENGTH,
                      pub: int | None = None,
                      expose_primes: Literal[False] = False,
                      parallel: bool = False) -> tuple[tuple[int, int], tuple[int, int]]:
    ...


@overload
def generate_key_pair(size: int = DEFAULT_BIT_LENGTH,
                      pub: int | None = None,
                      expose_primes: Literal[True] = False,
                      parallel: bool = False) -> tuple[tuple[int, int], tuple[int, int, int, int]]:
    ...


def generate_key_pair(
    size: int = DEFAULT_BIT_LENGTH,
    pub: int | None = None,
    expose_primes: bool = False,
    parallel: bool = False,
) -> tuple[tuple[int, int], tuple[int, int]] | tuple[tuple[int, int], tuple[int, int, int, int]]:
    """Generates an RSA key pair.

    Args:
        size: The bit length of each of the two primes. The modulus is twice as long.
        pub: The public exponent. If None, a random exponent coprime with lambda is chosen.
        expose_primes: Whether to return the primes as well. Defaults to False.
        parallel: Whether to generate the primes concurrently.

    Returns:
        A tuple of (public, private) sub-tuples (modulus, exponent), or if exposed for the private
        (modulus, exponent, p, q).
    """
    _validate_parameters(size, pub)
    if size < SECURE_BIT_LENGTH:
        warnings.warn(f"Prime size of {size} bits is insecure. Please use with care.", RuntimeWarning, stacklevel=2)
    p, q = generate_primes(size, pub, parallel)
    public, private = derive_key_pair(p, q, pub)
    if not expose_primes:
        del p, q
        return public, private
    return public, private + (p, q)
