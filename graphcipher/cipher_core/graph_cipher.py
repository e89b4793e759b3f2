"""
Graph Cipher Implementation

This module provides the cipher driver. Encryption lifts the plaintext
into the extended ring, masks it with the keystream, applies the odd
affine map to every coefficient and runs the division rounds; decryption
runs the inverse rounds in reverse order and undoes the substitution.

The key polynomial and keystream are derived from the graph on every
call.
"""

import logging
from typing import Optional

import numpy as np

from ..encoding.hex_codec import hex_to_poly, poly_to_hex
from ..encoding.text import poly_to_text, text_to_poly
from ..errors import OddnessViolation, RingMismatch
from ..key_schedule.graph_key_schedule import Graph, derive_schedule, inv_odd, odd
from ..params import DEFAULT_PARAMS, CipherParams
from ..ring.polynomial import Polynomial
from .round_transform import apply_keystream, forward_round, inverse_round

logger = logging.getLogger(__name__)


class GraphCipher:
    """
    Iterated polynomial-division cipher keyed by a graph.
    """

    def __init__(self, params: Optional[CipherParams] = None):
        """
        Initialize the cipher with the given parameters.

        Args:
            params: Ring sizes and round count (default: DEFAULT_PARAMS)
        """
        self.params = params or DEFAULT_PARAMS

    def encrypt(self, plaintext: Polynomial, graph: Graph) -> Polynomial:
        """
        Encrypt a polynomial over the base modulus.

        Args:
            plaintext: Plaintext coefficients in [0, base_modulus)
            graph: The graph acting as the key

        Returns:
            The ciphertext, a polynomial over the extended modulus

        Raises:
            RingMismatch: If the plaintext is not over the base modulus
            EmptyGraph: If the graph has no edges
        """
        params = self.params
        if plaintext.modulus != params.base_modulus:
            raise RingMismatch(plaintext.modulus, params.base_modulus)

        schedule = derive_schedule(graph, params)
        modulus = params.extended_modulus

        lifted = plaintext.extend(modulus)
        masked = apply_keystream(lifted.coeffs, schedule.keystream)
        state = Polynomial(odd(masked, modulus), modulus)

        logger.debug("Encrypting %d coefficients with %d rounds", len(state), params.num_rounds)
        for r in range(params.num_rounds):
            state = forward_round(state, schedule.key, schedule.keystream, r)

        return state

    def decrypt(self, ciphertext: Polynomial, graph: Graph) -> Polynomial:
        """
        Decrypt a polynomial produced by encrypt().

        Args:
            ciphertext: Ciphertext over the extended modulus
            graph: The graph used for encryption

        Returns:
            The plaintext, a polynomial over the base modulus

        Raises:
            RingMismatch: If the ciphertext is not over the extended modulus
            OddnessViolation: If the ciphertext was not produced with this graph
            EmptyGraph: If the graph has no edges
        """
        params = self.params
        if ciphertext.modulus != params.extended_modulus:
            raise RingMismatch(ciphertext.modulus, params.extended_modulus)

        schedule = derive_schedule(graph, params)

        logger.debug("Decrypting %d coefficients with %d rounds", len(ciphertext), params.num_rounds)
        state = ciphertext
        for r in range(params.num_rounds - 1, -1, -1):
            state = inverse_round(state, schedule.key, schedule.keystream, r)

        substituted = []
        for position, c in enumerate(state.tolist()):
            try:
                substituted.append(inv_odd(c) % params.base_modulus)
            except OddnessViolation:
                raise OddnessViolation(c, position) from None

        plain = apply_keystream(np.array(substituted, dtype=np.int64), schedule.keystream)
        return Polynomial(plain, params.base_modulus)

    def encrypt_text(self, text: str, graph: Graph) -> str:
        """
        Encrypt a single-byte string and return the ciphertext as hex.
        """
        plaintext = text_to_poly(text, self.params.base_modulus)
        return poly_to_hex(self.encrypt(plaintext, graph))

    def decrypt_text(self, ciphertext_hex: str, graph: Graph) -> str:
        """
        Decrypt a hex ciphertext produced by encrypt_text().
        """
        ciphertext = hex_to_poly(ciphertext_hex, self.params.extended_modulus)
        return poly_to_text(self.decrypt(ciphertext, graph), self.params.base_modulus)


def encrypt(plaintext: Polynomial, graph: Graph,
            params: Optional[CipherParams] = None) -> Polynomial:
    """
    Convenience function to encrypt a polynomial.

    Args:
        plaintext: Plaintext over the base modulus
        graph: The graph acting as the key
        params: Cipher parameters (default: DEFAULT_PARAMS)

    Returns:
        The ciphertext over the extended modulus
    """
    return GraphCipher(params).encrypt(plaintext, graph)


def decrypt(ciphertext: Polynomial, graph: Graph,
            params: Optional[CipherParams] = None) -> Polynomial:
    """
    Convenience function to decrypt a polynomial.

    Args:
        ciphertext: Ciphertext over the extended modulus
        graph: The graph used for encryption
        params: Cipher parameters (default: DEFAULT_PARAMS)

    Returns:
        The plaintext over the base modulus
    """
    return GraphCipher(params).decrypt(ciphertext, graph)
