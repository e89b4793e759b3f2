"""
Encoding Package

Hex and text adapters for moving polynomials in and out of the cipher.
"""

from .hex_codec import hex_to_poly, poly_to_hex
from .text import poly_to_text, text_to_poly

__all__ = ['hex_to_poly', 'poly_to_hex', 'poly_to_text', 'text_to_poly']
