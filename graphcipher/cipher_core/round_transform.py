"""
Division Round Transform

One round of the cipher masks the state with the keystream, divides it
by the key polynomial, packs remainder and quotient back into a vector
of the same length, reverses it on odd rounds and masks it again.

The inverse round rebuilds the dividend from the packed remainder and
quotient, so inverse_round(forward_round(s, k, ks, i), k, ks, i) == s.
"""

import numpy as np

from ..errors import RingMismatch
from ..ring.polynomial import Polynomial, divide_with_remainder, recombine


def apply_keystream(coeffs: np.ndarray, keystream: np.ndarray) -> np.ndarray:
    """
    XOR coefficient i with keystream[i % len(keystream)].

    Args:
        coeffs: Coefficients to mask
        keystream: Mask values, reused cyclically

    Returns:
        A new array with the masked coefficients
    """
    if len(keystream) == 0:
        raise ValueError("Keystream cannot be empty")
    coeffs = np.asarray(coeffs, dtype=np.int64)
    return coeffs ^ np.resize(keystream, coeffs.shape)


def _check_key_ring(state: Polynomial, key: Polynomial) -> None:
    if state.modulus != key.modulus:
        raise RingMismatch(state.modulus, key.modulus)


def forward_round(state: Polynomial, key: Polynomial,
                  keystream: np.ndarray, round_index: int) -> Polynomial:
    """
    Apply one encryption round.

    Args:
        state: Current state over the extended modulus
        key: Key polynomial (odd leading coefficient)
        keystream: Cyclic XOR mask
        round_index: Position of the round; odd rounds reverse the vector

    Returns:
        The new state, of the same length and modulus
    """
    _check_key_ring(state, key)

    masked = Polynomial(apply_keystream(state.coeffs, keystream), state.modulus)
    remainder, quotient = divide_with_remainder(masked, key, inverse_modulus=key.modulus)

    mixed = np.concatenate([
        remainder.coeffs[:key.degree],
        np.array(quotient, dtype=np.int64),
    ])
    if round_index % 2 == 1:
        mixed = mixed[::-1]

    return Polynomial(apply_keystream(mixed, keystream), state.modulus)


def inverse_round(state: Polynomial, key: Polynomial,
                  keystream: np.ndarray, round_index: int) -> Polynomial:
    """
    Undo forward_round for the same key, keystream and round index.

    Args:
        state: State produced by forward_round
        key: Key polynomial used by forward_round
        keystream: Cyclic XOR mask used by forward_round
        round_index: Round index used by forward_round

    Returns:
        The state that forward_round was applied to
    """
    _check_key_ring(state, key)

    mixed = apply_keystream(state.coeffs, keystream)
    if round_index % 2 == 1:
        mixed = mixed[::-1]

    d = key.degree
    dividend = recombine(mixed[:d], mixed[d:], key, state.modulus)

    return Polynomial(apply_keystream(dividend.coeffs, keystream), state.modulus)
