"""
Polynomial Ring Arithmetic

This module implements coefficient-vector arithmetic over Z/MZ: the
Polynomial value type, multiplication, long division with remainder,
ring extension, and the recombination step that undoes a division.

Coefficient i of a Polynomial is the coefficient of x^i.
"""

from typing import List, Optional, Sequence, Tuple, Union

import numpy as np

from ..errors import (
    InvalidModulusExtension,
    LengthMismatch,
    NonInvertibleLeadingCoefficient,
    RingMismatch,
)
from ..params import DEFAULT_PARAMS

# Modulus used for leading-coefficient inversion during division
EXTENDED_MODULUS = DEFAULT_PARAMS.extended_modulus


def egcd(a: int, b: int) -> Tuple[int, int, int]:
    """
    Extended Euclidean algorithm.

    Args:
        a: First operand
        b: Second operand

    Returns:
        A tuple (g, x, y) with a*x + b*y == g == gcd(a, b)
    """
    x0, x1, y0, y1 = 1, 0, 0, 1
    while b != 0:
        q, r = divmod(a, b)
        a, b = b, r
        x0, x1 = x1, x0 - q * x1
        y0, y1 = y1, y0 - q * y1
    return a, x0, y0


def mod_inverse(a: int, m: int) -> int:
    """
    Compute the inverse of a modulo m.

    Raises:
        ValueError: If a is not a unit modulo m
    """
    g, x, _ = egcd(a % m, m)
    if g != 1:
        raise ValueError(f"no inverse for a={a} mod {m}")
    return x % m


class Polynomial:
    """
    Immutable polynomial with coefficients in [0, modulus).

    The coefficients are stored in a read-only int64 numpy array; every
    operation returns a new Polynomial.
    """

    __slots__ = ('_coeffs', '_modulus')

    def __init__(self, coeffs: Union[Sequence[int], np.ndarray], modulus: int):
        if modulus <= 0:
            raise ValueError(f"Modulus must be positive, got {modulus}")

        data = np.array(coeffs, dtype=np.int64)
        if data.ndim != 1 or data.size == 0:
            raise ValueError("A polynomial needs at least one coefficient")
        if np.any(data < 0) or np.any(data >= modulus):
            raise ValueError(f"Coefficients must lie in [0, {modulus})")

        data.flags.writeable = False
        self._coeffs = data
        self._modulus = int(modulus)

    @property
    def coeffs(self) -> np.ndarray:
        return self._coeffs

    @property
    def modulus(self) -> int:
        return self._modulus

    @property
    def degree(self) -> int:
        return len(self._coeffs) - 1

    @property
    def leading_coefficient(self) -> int:
        return int(self._coeffs[-1])

    def tolist(self) -> List[int]:
        return [int(c) for c in self._coeffs]

    def __len__(self) -> int:
        return len(self._coeffs)

    def __iter__(self):
        return iter(self.tolist())

    def __getitem__(self, index):
        return int(self._coeffs[index])

    def __eq__(self, other) -> bool:
        if not isinstance(other, Polynomial):
            return NotImplemented
        return self._modulus == other._modulus and np.array_equal(self._coeffs, other._coeffs)

    def __hash__(self) -> int:
        return hash((self._modulus, tuple(self.tolist())))

    def __repr__(self) -> str:
        return f"Polynomial({self.tolist()}, mod {self._modulus})"

    def __mul__(self, other: 'Polynomial') -> 'Polynomial':
        return multiply(self, other)

    def divmod(self, divisor: 'Polynomial',
               inverse_modulus: Optional[int] = None) -> Tuple['Polynomial', List[int]]:
        return divide_with_remainder(self, divisor, inverse_modulus)

    def extend(self, new_modulus: int) -> 'Polynomial':
        return extend_modulus(self, new_modulus)


def _check_same_ring(a: Polynomial, b: Polynomial) -> None:
    if a.modulus != b.modulus:
        raise RingMismatch(a.modulus, b.modulus)


def multiply(a: Polynomial, b: Polynomial) -> Polynomial:
    """
    Multiply two polynomials over the same ring.

    Args:
        a: First factor
        b: Second factor

    Returns:
        The product, of degree deg(a) + deg(b)

    Raises:
        RingMismatch: If the moduli differ
    """
    _check_same_ring(a, b)

    # Object dtype keeps the convolution exact before reduction
    conv = np.convolve(a.coeffs.astype(object), b.coeffs.astype(object))
    return Polynomial((conv % a.modulus).astype(np.int64), a.modulus)


def divide_with_remainder(dividend: Polynomial, divisor: Polynomial,
                          inverse_modulus: Optional[int] = None) -> Tuple[Polynomial, List[int]]:
    """
    Polynomial long division, from the highest degree downward.

    The inverse of the divisor's leading coefficient is taken modulo
    inverse_modulus (the extended modulus unless given), which is a power
    of two, so the leading coefficient has to be odd.

    Args:
        dividend: Polynomial to divide
        divisor: Polynomial to divide by
        inverse_modulus: Modulus for the leading-coefficient inverse

    Returns:
        A tuple (remainder, quotient). The remainder has the dividend's
        length with every entry at index >= deg(divisor) equal to zero;
        the quotient lists deg(dividend) - deg(divisor) + 1 coefficients
        in ascending degree order (empty when the dividend is shorter).

    Raises:
        RingMismatch: If the moduli differ
        NonInvertibleLeadingCoefficient: If the leading coefficient is not a unit
    """
    _check_same_ring(dividend, divisor)
    if inverse_modulus is None:
        inverse_modulus = EXTENDED_MODULUS

    modulus = dividend.modulus
    lead = divisor.leading_coefficient
    try:
        lead_inv = mod_inverse(lead, inverse_modulus)
    except ValueError:
        raise NonInvertibleLeadingCoefficient(lead, inverse_modulus) from None

    d = divisor.degree
    div = divisor.coeffs
    res = dividend.coeffs.copy()
    quot = []

    for i in range(dividend.degree, d - 1, -1):
        q = (lead_inv * int(res[i])) % inverse_modulus
        quot.append(q)
        res[i - d:i + 1] = (res[i - d:i + 1] - q * div) % modulus

    quot.reverse()
    return Polynomial(res, modulus), quot


def extend_modulus(element: Polynomial, new_modulus: int) -> Polynomial:
    """
    Reinterpret a polynomial's coefficients in a larger ring.

    The coefficient values are kept as they are, which is a valid ring
    embedding when the old modulus divides the new one.

    Raises:
        InvalidModulusExtension: If new_modulus is not a multiple of the modulus
    """
    if new_modulus <= 0 or new_modulus % element.modulus != 0:
        raise InvalidModulusExtension(element.modulus, new_modulus)
    return Polynomial(element.coeffs, new_modulus)


def recombine(remainder: Sequence[int], quotient: Sequence[int],
              divisor: Polynomial, modulus: Optional[int] = None) -> Polynomial:
    """
    Rebuild a dividend from its remainder and quotient.

    Computes quotient * divisor + remainder, the inverse of
    divide_with_remainder. The result has len(quotient) + deg(divisor)
    coefficients, or len(remainder) when the quotient is empty.

    Args:
        remainder: Low-order remainder coefficients
        quotient: Quotient coefficients in ascending degree order
        divisor: The polynomial that was divided by
        modulus: Ring of the result (the divisor's modulus unless given)

    Returns:
        The reconstructed dividend

    Raises:
        LengthMismatch: If the remainder does not fit under the quotient
    """
    if modulus is None:
        modulus = divisor.modulus

    d = divisor.degree
    size = len(quotient) + d if len(quotient) > 0 else len(remainder)
    if len(remainder) > size:
        raise LengthMismatch(
            f"Remainder of length {len(remainder)} does not fit a dividend of "
            f"length {size} (quotient length {len(quotient)}, divisor degree {d})"
        )

    res = np.zeros(size, dtype=np.int64)
    res[:len(remainder)] = np.asarray(remainder, dtype=np.int64)
    div = divisor.coeffs
    for i, q in enumerate(quotient):
        res[i:i + d + 1] = (res[i:i + d + 1] + int(q) * div) % modulus

    return Polynomial(res % modulus, modulus)
