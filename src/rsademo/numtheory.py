"""Number theory primitives underpinning textbook RSA.

All functions operate on Python integers of arbitrary size and never touch floating point, so results stay exact no
matter how large the operands grow. Nothing in here is constant-time; it is written to be read, not to resist
side-channels.

Typical usage example:

    is_prime(97)
    g, x, y = extended_gcd(17, 120)
    d = modular_inverse(65537, 120)
    c = modular_exponentiation(72, 65537, 143)
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import logging

logger = logging.getLogger(__name__)


def is_prime(n: int) -> bool:
    """Deterministic primality test by trial division.

    Eliminates multiples of 2 and 3 up front, then only tries divisors of the form 6k ± 1 up to the square root of
    `n`. The loop bound is checked as `i * i <= n` to stay exact for arbitrarily large integers.

    Args:
        n: The candidate to classify.

    Returns:
        True if `n` is prime, False otherwise (including every `n <= 1`).
    """
    if n <= 1:
        return False
    if n <= 3:
        return True
    if n % 2 == 0 or n % 3 == 0:
        return False
    i = 5
    while i * i <= n:
        if n % i == 0 or n % (i + 2) == 0:
            return False
        i += 6
    return True


def gcd(a: int, b: int) -> int:
    """Greatest common divisor via the iterative Euclidean algorithm.

    Args:
        a: The first integer.
        b: The second integer.

    Returns:
        The non-negative greatest common divisor. `gcd(0, b)` is `|b|`.
    """
    while b != 0:
        a, b = b, a % b
    return abs(a)


def extended_gcd(a: int, m: int) -> tuple[int, int, int]:
    """Implements the Extended Euclidean Algorithm.

    Such that a*x + m*y = g = gcd(a, m). For `a == 0` this yields `(m, 0, 1)`.

    Args:
        a: The number whose Bezout coefficient is wanted.
        m: The modulus.

    Returns:
        Greatest common divisor of the two integers, as well as the Bezout coefficients of `a` and `m`.
    """
    r0, r1 = a, m
    s0, s1, t0, t1 = 1, 0, 0, 1
    while r1 != 0:
        q = r0 // r1
        r0, r1 = r1, r0 - q * r1
        s0, s1 = s1, s0 - q * s1
        t0, t1 = t1, t0 - q * t1
    return r0, s0, t0


def modular_inverse(e: int, phi: int) -> int | None:
    """Find `d` in `[0, phi)` with `e * d ≡ 1 (mod phi)`.

    Args:
        e: The number to invert.
        phi: The modulus. Must be >= 1.

    Returns:
        The modular inverse, or None if `e` and `phi` are not coprime.

    Raises:
        ValueError: If `phi` is smaller than 1.
    """
    if phi < 1:
        raise ValueError("Modulus must be >= 1")
    g, x, _ = extended_gcd(e % phi, phi)
    if g != 1:
        logger.debug("No inverse of %d mod %d, gcd is %d", e, phi, g)
        return None
    # Python's modulo already lands in [0, phi) for a negative coefficient.
    return x % phi


def modular_exponentiation(base: int, exponent: int, modulus: int) -> int:
    """Computes `base ** exponent % modulus` with binary square-and-multiply.

    Every encryption and decryption of a single character goes through here. A negative exponent is rejected rather
    than silently treated as zero (which would return 1); a modulus of 1 is accepted and always yields 0.

    Args:
        base: The base, reduced modulo `modulus` before use.
        exponent: The exponent. Must be >= 0.
        modulus: The modulus. Must be >= 1.

    Returns:
        The residue in `[0, modulus)`.

    Raises:
        ValueError: If `exponent` is negative or `modulus` is smaller than 1.
    """
    if modulus < 1:
        raise ValueError("Modulus must be >= 1")
    if exponent < 0:
        raise ValueError("Exponent must be >= 0")
    if modulus == 1:
        return 0
    result = 1
    base = base % modulus
    while exponent > 0:
        if exponent & 1:
            result = (result * base) % modulus
        exponent >>= 1
        base = (base * base) % modulus
    return result


def euler_totient(p: int, q: int) -> int:
    """Euler's totient of `p * q` for distinct primes `p` and `q`."""
    return (p - 1) * (q - 1)
