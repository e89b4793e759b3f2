"""
Ring Arithmetic Package

This package implements polynomial arithmetic over Z/MZ used by the
key schedule and the division rounds of the cipher.
"""

from .polynomial import (
    EXTENDED_MODULUS,
    Polynomial,
    divide_with_remainder,
    egcd,
    extend_modulus,
    mod_inverse,
    multiply,
    recombine,
)

__all__ = [
    'EXTENDED_MODULUS',
    'Polynomial',
    'divide_with_remainder',
    'egcd',
    'extend_modulus',
    'mod_inverse',
    'multiply',
    'recombine',
]
