"""
Text Codec

Maps single-byte strings to polynomials over the base modulus, one
coefficient per character.
"""

from ..errors import RingMismatch
from ..params import DEFAULT_PARAMS
from ..ring.polynomial import Polynomial


def text_to_poly(text: str, modulus: int = DEFAULT_PARAMS.base_modulus) -> Polynomial:
    """
    Convert a string to the polynomial of its character codes.

    Raises:
        ValueError: If the string is empty or a character code is not below the modulus
    """
    codes = [ord(ch) for ch in text]
    if not codes:
        raise ValueError("Cannot encode an empty string")
    for ch, code in zip(text, codes):
        if code >= modulus:
            raise ValueError(f"Character {ch!r} does not fit modulus {modulus}")
    return Polynomial(codes, modulus)


def poly_to_text(poly: Polynomial, modulus: int = DEFAULT_PARAMS.base_modulus) -> str:
    """
    Convert a polynomial over the given base modulus back to a string.

    Each coefficient is truncated to its low 8 bits.

    Raises:
        RingMismatch: If the polynomial is not over modulus
    """
    if poly.modulus != modulus:
        raise RingMismatch(poly.modulus, modulus)
    return ''.join(chr(c & 0xFF) for c in poly.tolist())
