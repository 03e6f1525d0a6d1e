"""Textbook RSA encryption and decryption, one character at a time, with every step narrated.

Each character code `m` is encrypted as `m^e mod n` and each ciphertext value `c` decrypted as `c^d mod n`. No padding
is applied, so equal characters always yield equal ciphertext values. The pipelines do not check that the message
fits the modulus; callers gate them with `validate_message` or `require_message` first.

Typical usage example:

    if validate_message("Hi", 323):
        enc = encrypt("Hi", 65537, 323)
        dec = decrypt(enc.ciphertext, 161, 323)
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import logging
from typing import NamedTuple, Sequence

from rsademo.codec import codes_to_text
from rsademo.codec import printable
from rsademo.codec import text_to_codes
from rsademo.codec import unit_to_char
from rsademo.codec import UNIT_MAX
from rsademo.errors import MessageTooLargeError
from rsademo.numtheory import modular_exponentiation

logger = logging.getLogger(__name__)


class Encryption(NamedTuple):
    ciphertext: list[int]
    steps: list[str]


class Decryption(NamedTuple):
    plaintext: str
    steps: list[str]


def validate_message(message: str, n: int) -> bool:
    """Check that every character code of `message` is strictly below the modulus.

    A code >= n would be reduced modulo n during encryption and could never be recovered.

    Args:
        message: The message to check.
        n: The modulus.

    Returns:
        True if the message can be encrypted losslessly, False otherwise.
    """
    return all(code < n for code in text_to_codes(message))


def require_message(message: str, n: int) -> None:
    """Raising counterpart of `validate_message`.

    Raises:
        MessageTooLargeError: On the first character code >= n.
    """
    for code in text_to_codes(message):
        if code >= n:
            raise MessageTooLargeError(code, n)


def encrypt(message: str, e: int, n: int) -> Encryption:
    """Encrypt `message` character by character with the public key `(n, e)`.

    Args:
        message: The plaintext. Every code must be < n, which is not re-checked here.
        e: The public exponent.
        n: The modulus.

    Returns:
        The ciphertext (one value per character, in order) and the narration.
    """
    codes = text_to_codes(message)
    steps = [f'Convert message "{printable(message)}" to numbers:',
             "   " + ", ".join(f"'{printable(unit_to_char(m))}' → {m}" for m in codes)]
    ciphertext = []
    for m in codes:
        c = modular_exponentiation(m, e, n)
        steps.append(f"Encrypt '{printable(unit_to_char(m))}': {m}^{e} mod {n} = {c}")
        ciphertext.append(c)
    logger.debug("Encrypted %d characters under modulus %d", len(ciphertext), n)
    return Encryption(ciphertext, steps)


def decrypt(ciphertext: Sequence[int], d: int, n: int) -> Decryption:
    """Decrypt a ciphertext sequence with the private key `(n, d)`.

    Each decrypted value is turned into a character by its low 16 bits. For a message that fitted the modulus this
    is the value itself; a value above 0xFFFF (a typed-in ciphertext, the wrong key) still yields a character
    instead of an error, while the narration shows the full value.

    Args:
        ciphertext: Ciphertext values in message order.
        d: The private exponent.
        n: The modulus.

    Returns:
        The reconstructed plaintext and the narration.
    """
    steps = []
    units = []
    for c in ciphertext:
        m = modular_exponentiation(c, d, n)
        unit = m & UNIT_MAX
        steps.append(f"Decrypt {c}: {c}^{d} mod {n} = {m} → '{printable(unit_to_char(unit))}'")
        units.append(unit)
    plaintext = codes_to_text(units)
    steps.append(f'Reconstructed message: "{printable(plaintext)}"')
    logger.debug("Decrypted %d characters under modulus %d", len(units), n)
    return Decryption(plaintext, steps)
