"""Exceptions raised by the textbook RSA core.

Every failure here is an expected, recoverable condition: a caller picked unsuitable primes or a message that does not
fit the modulus. Key derivation failures carry the narration recorded up to the point of failure, so a front end can
still show what was attempted.
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import enum
from typing import Sequence


class Reason(enum.Enum):
    """Why a keypair could not be derived."""
    NOT_PRIME = "not_prime"
    IDENTICAL_PRIMES = "identical_primes"
    NON_COPRIME_EXPONENT = "non_coprime_exponent"
    NO_MODULAR_INVERSE = "no_modular_inverse"


class KeyDerivationError(ValueError):
    """Base class of all key derivation failures.

    Attributes:
        reason: The failure category.
        steps: Narration recorded before (and including) the failure.
    """
    reason: Reason

    def __init__(self, message: str, steps: Sequence[str] = ()) -> None:
        super().__init__(message)
        self.steps: tuple[str, ...] = tuple(steps)


class NotPrimeError(KeyDerivationError):
    reason = Reason.NOT_PRIME

    def __init__(self, value: int, steps: Sequence[str] = ()) -> None:
        super().__init__(f"{value} is not a prime number.", steps)
        self.value = value


class IdenticalPrimesError(KeyDerivationError):
    reason = Reason.IDENTICAL_PRIMES

    def __init__(self, value: int, steps: Sequence[str] = ()) -> None:
        super().__init__(f"p and q must be different primes, both are {value}.", steps)
        self.value = value


class NonCoprimeExponentError(KeyDerivationError):
    """The public exponent shares a factor with the totient. Picking different primes is the only remedy."""
    reason = Reason.NON_COPRIME_EXPONENT

    def __init__(self, exponent: int, totient: int, steps: Sequence[str] = ()) -> None:
        super().__init__(f"gcd({exponent}, {totient}) != 1, choose different primes.", steps)
        self.exponent = exponent
        self.totient = totient


class NoModularInverseError(KeyDerivationError):
    reason = Reason.NO_MODULAR_INVERSE

    def __init__(self, exponent: int, totient: int, steps: Sequence[str] = ()) -> None:
        super().__init__(f"Cannot compute the modular inverse of {exponent} mod {totient}.", steps)
        self.exponent = exponent
        self.totient = totient


class MessageTooLargeError(ValueError):
    """A character code of the message does not fit below the modulus.

    Attributes:
        code: The first offending character code.
        modulus: The modulus it was checked against.
    """

    def __init__(self, code: int, modulus: int) -> None:
        super().__init__(f"Message contains a character code {code} >= n ({modulus}). "
                         "Use larger primes or a different message.")
        self.code = code
        self.modulus = modulus
