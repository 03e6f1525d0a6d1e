"""Key derivation from two caller-chosen primes, with a narrated trace of every arithmetic step.

The public exponent is fixed at 65537. For the small primes used in a classroom this sometimes shares a factor with
the totient; derivation then fails and the caller has to choose other primes. That failure is part of the lesson, so
no smaller exponent is ever picked automatically.

Typical usage example:

    p, q = suggest_primes(random.Random(4))
    kp = derive_keypair(p, q)
    enc = kp.encrypt("Hi")
    dec = kp.decrypt(enc.ciphertext)
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import logging
import random
from typing import NamedTuple, Sequence

from rsademo import errors
from rsademo import numtheory
from rsademo import rsa

logger = logging.getLogger(__name__)

PUBLIC_EXPONENT: int = 65537


def _sieve(n: int = 100) -> list[int]:
    """Implements the Sieve of Eratosthenes.

    Uses the textbook Sieve of Eratosthenes, on odd numbers only and sieving until root.

    Args:
        n: The number up to which to generate primes. Must be >= 0.

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


SUGGESTED_PRIMES: tuple[int, ...] = tuple(p for p in _sieve(47) if p >= 11)


class Keypair(NamedTuple):
    """A derived textbook RSA keypair.

    Attributes:
        p: First prime.
        q: Second prime, distinct from `p`.
        n: The modulus `p * q`.
        phi: Euler's totient `(p-1)(q-1)`.
        e: The public exponent, coprime to `phi`.
        d: The private exponent, `e * d ≡ 1 (mod phi)`.
        steps: Narration of the derivation, in order.
    """
    p: int
    q: int
    n: int
    phi: int
    e: int
    d: int
    steps: tuple[str, ...]

    @property
    def public(self) -> tuple[int, int]:
        """The public key as (modulus, exponent)."""
        return self.n, self.e

    @property
    def private(self) -> tuple[int, int]:
        """The private key as (modulus, exponent)."""
        return self.n, self.d

    def encrypt(self, message: str) -> rsa.Encryption:
        """Encrypt with the public half, refusing messages that do not fit the modulus.

        Raises:
            MessageTooLargeError: If a character code is >= n. Nothing is encrypted in that case.
        """
        rsa.require_message(message, self.n)
        return rsa.encrypt(message, self.e, self.n)

    def decrypt(self, ciphertext: Sequence[int]) -> rsa.Decryption:
        """Decrypt with the private half."""
        return rsa.decrypt(ciphertext, self.d, self.n)


def validate_primes(p: int, q: int) -> None:
    """Check a prime pair before derivation, for early feedback.

    Args:
        p: The first prime candidate.
        q: The second prime candidate.

    Raises:
        NotPrimeError: If either candidate is not prime (`p` is checked first).
        IdenticalPrimesError: If both candidates are the same prime.
    """
    for candidate in (p, q):
        if not numtheory.is_prime(candidate):
            raise errors.NotPrimeError(candidate)
    if p == q:
        raise errors.IdenticalPrimesError(p)


def derive_keypair(p: int, q: int, pub: int = PUBLIC_EXPONENT) -> Keypair:
    """Derive a keypair from two distinct primes, narrating each step.

    Steps are recorded in a fixed order: prime confirmation, modulus, totient, public exponent check, private exponent
    and the verification identity. On failure the narration so far, ending in an error step, rides on the exception.

    Args:
        p: The first prime.
        q: The second prime.
        pub: The public exponent. Defaults to 65537.

    Returns:
        The derived keypair.

    Raises:
        NotPrimeError: If `p` or `q` is not prime.
        IdenticalPrimesError: If `p == q`.
        NonCoprimeExponentError: If `gcd(pub, phi) != 1`.
        NoModularInverseError: If no private exponent can be computed.
    """
    steps: list[str] = []
    for candidate in (p, q):
        if not numtheory.is_prime(candidate):
            steps.append("Error: Both p and q must be prime numbers")
            raise errors.NotPrimeError(candidate, steps)
    if p == q:
        steps.append("Error: p and q must be different prime numbers")
        raise errors.IdenticalPrimesError(p, steps)
    steps.append(f"Prime validation: p = {p}, q = {q}")

    n = p * q
    steps.append(f"Calculate n = p × q = {p} × {q} = {n}")

    phi = numtheory.euler_totient(p, q)
    steps.append(f"Calculate φ(n) = (p-1) × (q-1) = {p - 1} × {q - 1} = {phi}")

    g = numtheory.gcd(pub, phi)
    if g != 1:
        steps.append(f"Error: gcd({pub}, {phi}) = {g} ≠ 1. Choose different primes.")
        logger.debug("Exponent %d rejected for p=%d, q=%d", pub, p, q)
        raise errors.NonCoprimeExponentError(pub, phi, steps)
    steps.append(f"Choose e = {pub}, verify gcd({pub}, {phi}) = 1")

    d = numtheory.modular_inverse(pub, phi)
    if d is None:
        steps.append(f"Error: Cannot compute modular inverse of {pub} mod {phi}")
        raise errors.NoModularInverseError(pub, phi, steps)
    steps.append(f"Calculate d ≡ e⁻¹ (mod φ(n)) = {d}")
    steps.append(f"Verification: {pub} × {d} ≡ 1 (mod {phi})")

    logger.debug("Derived keypair with n=%d", n)
    return Keypair(p, q, n, phi, pub, d, tuple(steps))


def suggest_primes(rng: random.Random, candidates: Sequence[int] = SUGGESTED_PRIMES) -> tuple[int, int]:
    """Pick two distinct primes from a small table.

    Args:
        rng: The random source to draw from.
        candidates: The table to pick from. Must hold at least two distinct values.

    Returns:
        A pair of distinct primes.

    Raises:
        ValueError: If the table holds fewer than two distinct values.
    """
    pool = sorted(set(candidates))
    if len(pool) < 2:
        raise ValueError("At least two distinct candidates are required")
    p, q = rng.sample(pool, 2)
    return p, q


def generate_random_prime(low: int, high: int, rng: random.Random) -> int:
    """Draw uniform candidates from `[low, high]` until one is prime.

    Args:
        low: Lower bound, inclusive.
        high: Upper bound, inclusive.
        rng: The random source to draw from.

    Returns:
        A prime within the range.

    Raises:
        ValueError: If the range is empty.
        RuntimeError: If generation loops way beyond a reasonable time, e.g. the range holds no prime at all.
    """
    if low > high:
        raise ValueError("low must be <= high")
    rep_cap = max(high - low + 1, 1).bit_length() * 100
    for _ in range(rep_cap):
        candidate = rng.randint(low, high)
        if numtheory.is_prime(candidate):
            return candidate
    raise RuntimeError(f"Run an improbable {rep_cap} amount of draws with no prime found in [{low}, {high}].")
