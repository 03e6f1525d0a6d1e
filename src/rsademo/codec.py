"""Conversion between text and the per-character codes textbook RSA operates on.

A "character" is a UTF-16 code unit: characters outside the Basic Multilingual Plane become two surrogate codes,
each encrypted on its own. Every code therefore lies in `[0, 0xFFFF]`.
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
from typing import Iterable

UNIT_MAX = 0xFFFF
SURROGATE_MIN = 0xD800
SURROGATE_MAX = 0xDFFF


def text_to_codes(message: str) -> list[int]:
    """Map each UTF-16 code unit of `message` to its integer value, preserving order.

    Args:
        message: The text to convert. Lone surrogates are passed through unchanged.

    Returns:
        One integer per code unit.
    """
    raw = message.encode("utf-16-be", errors="surrogatepass")
    return [int.from_bytes(raw[i:i + 2], byteorder="big") for i in range(0, len(raw), 2)]


def unit_to_char(code: int) -> str:
    """The single character for one code unit, a lone surrogate if the unit is half of a pair.

    Raises:
        ValueError: If `code` is outside `[0, 0xFFFF]`.
    """
    if not 0 <= code <= UNIT_MAX:
        raise ValueError(f"Character code {code} is outside the UTF-16 code unit range")
    return chr(code)


def printable(text: str) -> str:
    """Escape lone surrogates as `\\udxxx` so the text can be written to any UTF-8 stream.

    Joined surrogate pairs are ordinary characters in a Python string and stay as they are.
    """
    return "".join(f"\\u{ord(ch):04x}" if SURROGATE_MIN <= ord(ch) <= SURROGATE_MAX else ch for ch in text)


def codes_to_text(codes: Iterable[int]) -> str:
    """Reassemble text from UTF-16 code units, the exact inverse of `text_to_codes`.

    Args:
        codes: Code units in message order.

    Returns:
        The reconstructed string. Surrogate pairs are joined back into a single character.

    Raises:
        ValueError: If a code is outside `[0, 0xFFFF]`.
    """
    parcel = bytearray()
    for code in codes:
        parcel += unit_to_char(code).encode("utf-16-be", errors="surrogatepass")
    return parcel.decode("utf-16-be", errors="surrogatepass")
