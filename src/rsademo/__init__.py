"""Textbook RSA for the Classroom.

Derives a keypair from two small primes, encrypts a short text message character by character and decrypts it back,
narrating every arithmetic step on the way. No padding, no secure randomness, no real security: the point is the
arithmetic, not the protection.

Typical usage example:

    kp = derive_keypair(17, 19)
    print("\\n".join(kp.steps))
    enc = kp.encrypt("Hi")
    dec = kp.decrypt(enc.ciphertext)
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
from rsademo.codec import codes_to_text
from rsademo.codec import text_to_codes
from rsademo.errors import IdenticalPrimesError
from rsademo.errors import KeyDerivationError
from rsademo.errors import MessageTooLargeError
from rsademo.errors import NoModularInverseError
from rsademo.errors import NonCoprimeExponentError
from rsademo.errors import NotPrimeError
from rsademo.errors import Reason
from rsademo.keygen import derive_keypair
from rsademo.keygen import generate_random_prime
from rsademo.keygen import Keypair
from rsademo.keygen import PUBLIC_EXPONENT
from rsademo.keygen import suggest_primes
from rsademo.keygen import validate_primes
from rsademo.numtheory import extended_gcd
from rsademo.numtheory import gcd
from rsademo.numtheory import is_prime
from rsademo.numtheory import modular_exponentiation
from rsademo.numtheory import modular_inverse
from rsademo.rsa import decrypt
from rsademo.rsa import encrypt
from rsademo.rsa import require_message
from rsademo.rsa import validate_message

__version__ = "0.0.1"
__all__ = [
    "PUBLIC_EXPONENT",
    "Keypair",
    "Reason",
    "KeyDerivationError",
    "NotPrimeError",
    "IdenticalPrimesError",
    "NonCoprimeExponentError",
    "NoModularInverseError",
    "MessageTooLargeError",
    "is_prime",
    "gcd",
    "extended_gcd",
    "modular_inverse",
    "modular_exponentiation",
    "derive_keypair",
    "validate_primes",
    "suggest_primes",
    "generate_random_prime",
    "text_to_codes",
    "codes_to_text",
    "validate_message",
    "require_message",
    "encrypt",
    "decrypt",
]
