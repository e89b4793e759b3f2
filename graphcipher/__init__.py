"""
GraphCipher - Graph-keyed Polynomial Division Cipher

This library implements a symmetric cipher whose key schedule is derived
from a labeled graph instead of a random seed. The graph's edges are
multiplied into a key polynomial over Z/512Z and plaintext is encrypted
by iterated rounds of keystream masking and polynomial division by that
key.

Key Features:
- Ring arithmetic over Z/MZ (multiplication, division with remainder,
  ring extension)
- Graph-derived key polynomial and cyclic keystream
- Reversible division rounds (8 by default, configurable)
- Hex and text adapters for ciphertext and plaintext
- Sealed keyring for graph keys with Argon2id root-key derivation

This is an experimental construction: no claim of cryptographic
security is made.
"""

from .cipher_core import GraphCipher, decrypt, encrypt
from .key_schedule import Graph
from .params import DEFAULT_PARAMS, CipherParams
from .ring import Polynomial

__version__ = '0.1.0'
__author__ = 'GraphCipher Team'

__all__ = [
    'CipherParams',
    'DEFAULT_PARAMS',
    'Graph',
    'GraphCipher',
    'Polynomial',
    'decrypt',
    'encrypt',
]
