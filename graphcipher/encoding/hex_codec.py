"""
Hex Codec

Each coefficient is written as exactly 3 lowercase hexadecimal digits,
concatenated without separators.
"""

import string

from ..errors import InvalidEncoding
from ..ring.polynomial import Polynomial

DIGITS_PER_COEFFICIENT = 3
MAX_COEFFICIENT = 16 ** DIGITS_PER_COEFFICIENT

_HEX_DIGITS = frozenset(string.hexdigits)


def poly_to_hex(poly: Polynomial) -> str:
    """
    Encode a polynomial's coefficients as hex.

    Raises:
        ValueError: If a coefficient does not fit in 3 hex digits
    """
    if poly.coeffs.max() >= MAX_COEFFICIENT:
        raise ValueError(f"Coefficients must be below {MAX_COEFFICIENT} to hex-encode")
    return ''.join(f"{c:03x}" for c in poly.tolist())


def hex_to_poly(data: str, modulus: int) -> Polynomial:
    """
    Decode a hex string produced by poly_to_hex().

    Args:
        data: Concatenated 3-digit hex groups
        modulus: Modulus of the resulting polynomial

    Returns:
        The decoded polynomial

    Raises:
        InvalidEncoding: If the length is not a positive multiple of 3 or a
            group is not hexadecimal
        ValueError: If a decoded coefficient is not below the modulus
    """
    if len(data) == 0 or len(data) % DIGITS_PER_COEFFICIENT != 0:
        raise InvalidEncoding(
            f"Hex length must be a positive multiple of {DIGITS_PER_COEFFICIENT}, got {len(data)}"
        )
    if not set(data) <= _HEX_DIGITS:
        raise InvalidEncoding("Hex string contains non-hexadecimal characters")

    coeffs = [int(data[i:i + DIGITS_PER_COEFFICIENT], 16)
              for i in range(0, len(data), DIGITS_PER_COEFFICIENT)]
    return Polynomial(coeffs, modulus)
