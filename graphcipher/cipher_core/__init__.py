"""
Cipher Core Package

This package implements the core of the graph cipher: the reversible
division round and the driver that iterates it for encryption and
decryption.
"""

from .graph_cipher import GraphCipher, decrypt, encrypt
from .round_transform import apply_keystream, forward_round, inverse_round

__all__ = [
    'GraphCipher',
    'encrypt',
    'decrypt',
    'apply_keystream',
    'forward_round',
    'inverse_round',
]
