# pylint: disable=missing-module-docstring,redefined-outer-name
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import itertools

import pytest
import sympy

from rsademo import errors
from rsademo import keygen
from rsademo import rsa

standard_payload = "The quick brown fox jumps over the lazy dog1234567890!@#$%^&*()-_=+[{}];:\\|<>,./?~`'\""
round_trip_primes = [11, 13, 17, 19, 23, 101, 127, 257, 263]
round_trip_messages = ["", "Hi", "aaaa", "\x00\x01\x7f", standard_payload, "Grüße 😀"]


@pytest.fixture(scope="module")
def keypair() -> keygen.Keypair:
    return keygen.derive_keypair(17, 19)


def test_encrypt_narration(keypair):
    enc = rsa.encrypt("Hi", keypair.e, keypair.n)
    c_h, c_i = pow(72, 65537, 323), pow(105, 65537, 323)
    assert enc.ciphertext == [c_h, c_i]
    assert enc.steps == [
        'Convert message "Hi" to numbers:',
        "   'H' → 72, 'i' → 105",
        f"Encrypt 'H': 72^65537 mod 323 = {c_h}",
        f"Encrypt 'i': 105^65537 mod 323 = {c_i}",
    ]


def test_decrypt_narration(keypair):
    c_h, c_i = pow(72, 65537, 323), pow(105, 65537, 323)
    dec = rsa.decrypt([c_h, c_i], keypair.d, keypair.n)
    assert dec.plaintext == "Hi"
    assert dec.steps == [
        f"Decrypt {c_h}: {c_h}^161 mod 323 = 72 → 'H'",
        f"Decrypt {c_i}: {c_i}^161 mod 323 = 105 → 'i'",
        'Reconstructed message: "Hi"',
    ]


def test_encrypt_empty(keypair):
    enc = rsa.encrypt("", keypair.e, keypair.n)
    assert enc.ciphertext == []
    assert enc.steps == ['Convert message "" to numbers:', "   "]
    dec = rsa.decrypt(enc.ciphertext, keypair.d, keypair.n)
    assert dec.plaintext == ""
    assert dec.steps == ['Reconstructed message: ""']


def test_encrypt_repeats_are_deterministic(keypair):
    enc = rsa.encrypt("abab", keypair.e, keypair.n)
    assert len(enc.ciphertext) == 4
    assert enc.ciphertext[0] == enc.ciphertext[2]
    assert enc.ciphertext[1] == enc.ciphertext[3]
    assert all(0 <= c < keypair.n for c in enc.ciphertext)


def test_pipelines_are_pure(keypair):
    first = rsa.encrypt(standard_payload, keypair.e, keypair.n)
    second = rsa.encrypt(standard_payload, keypair.e, keypair.n)
    assert first == second
    assert rsa.decrypt(first.ciphertext, keypair.d, keypair.n) == rsa.decrypt(second.ciphertext, keypair.d, keypair.n)


def test_hi_round_trip(keypair):
    assert keypair.n > 200
    assert rsa.validate_message("Hi", keypair.n)
    enc = rsa.encrypt("Hi", keypair.e, keypair.n)
    assert rsa.decrypt(enc.ciphertext, keypair.d, keypair.n).plaintext == "Hi"


def test_round_trip_property():
    for p, q in itertools.combinations(round_trip_primes, 2):
        kp = keygen.derive_keypair(p, q)
        for message in round_trip_messages:
            if not rsa.validate_message(message, kp.n):
                continue
            enc = rsa.encrypt(message, kp.e, kp.n)
            assert rsa.decrypt(enc.ciphertext, kp.d, kp.n).plaintext == message


@pytest.mark.slow
def test_round_trip_many_primes():
    primes = list(sympy.primerange(251, 400))
    message = "Round trip " + standard_payload
    for p, q in itertools.combinations(primes, 2):
        kp = keygen.derive_keypair(p, q)
        enc = kp.encrypt(message)
        assert kp.decrypt(enc.ciphertext).plaintext == message


def test_emoji_needs_large_modulus():
    kp = keygen.derive_keypair(257, 263)
    assert rsa.validate_message("😀", kp.n)
    enc = kp.encrypt("😀")
    assert len(enc.ciphertext) == 2
    assert kp.decrypt(enc.ciphertext).plaintext == "😀"


@pytest.mark.parametrize("message,n,expected", [
    ("Hi", 143, True),
    ("Hi", 106, True),
    ("Hi", 105, False),
    ("Hi", 33, False),
    ("", 1, True),
    ("~", 126, False),
    ("😀", 65536, True),
    ("😀", 55357, False),
])
def test_validate_message(message, n, expected):
    assert rsa.validate_message(message, n) == expected


def test_require_message_reports_first_offender():
    with pytest.raises(errors.MessageTooLargeError) as excinfo:
        rsa.require_message("a~z", 120)
    assert excinfo.value.code == ord("~")
    assert excinfo.value.modulus == 120


def test_require_message_accepts():
    assert rsa.require_message("Hi", 143) is None


def test_unguarded_encrypt_wraps():
    # Bypassing the guard silently loses information.
    enc = rsa.encrypt("H", 65537, 33)
    assert rsa.decrypt(enc.ciphertext, 13, 33).plaintext != "H"


def test_degenerate_modulus():
    assert rsa.encrypt("Hi", 65537, 1).ciphertext == [0, 0]


def test_decrypt_value_above_code_unit_range():
    kp = keygen.derive_keypair(257, 263)
    c = pow(66000, kp.e, kp.n)
    dec = rsa.decrypt([c], kp.d, kp.n)
    assert dec.plaintext == chr(66000 & 0xFFFF)
    assert dec.steps[0] == f"Decrypt {c}: {c}^{kp.d} mod {kp.n} = 66000 → '{chr(464)}'"


def test_decrypt_wrong_key_still_returns():
    kp = keygen.derive_keypair(257, 263)
    enc = kp.encrypt(standard_payload)
    dec = rsa.decrypt(enc.ciphertext, kp.d + 2, kp.n)
    assert len(dec.steps) == len(enc.ciphertext) + 1


def test_narration_escapes_surrogates():
    kp = keygen.derive_keypair(257, 263)
    enc = kp.encrypt("😀")
    assert enc.steps[0] == 'Convert message "😀" to numbers:'
    assert enc.steps[1] == "   '\\ud83d' → 55357, '\\ude00' → 56832"
    assert enc.steps[2].startswith("Encrypt '\\ud83d': 55357^65537")
    dec = kp.decrypt(enc.ciphertext)
    assert dec.plaintext == "😀"
    assert dec.steps[0].endswith("= 55357 → '\\ud83d'")
    assert dec.steps[-1] == 'Reconstructed message: "😀"'
    "\n".join(enc.steps + dec.steps).encode("utf-8")


def test_narration_escapes_lone_surrogate_plaintext():
    kp = keygen.derive_keypair(257, 263)
    dec = kp.decrypt(kp.encrypt("a\ud83d").ciphertext)
    assert dec.plaintext == "a\ud83d"
    assert dec.steps[-1] == 'Reconstructed message: "a\\ud83d"'
