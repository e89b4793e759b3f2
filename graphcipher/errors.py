"""
Cipher Errors

Every precondition violation in the cipher is raised as one of the
exceptions below. They all derive from ValueError, so callers that only
care about "bad input" can keep catching ValueError.
"""

from typing import Optional


class GraphCipherError(ValueError):
    """Base class for all cipher errors."""


class RingMismatch(GraphCipherError):
    """Operands of a ring operation have different moduli."""

    def __init__(self, left: int, right: int):
        super().__init__(f"Ring moduli differ: {left} != {right}")
        self.left = left
        self.right = right


class NonInvertibleLeadingCoefficient(GraphCipherError):
    """The divisor's leading coefficient is not a unit of the extended ring."""

    def __init__(self, coefficient: int, modulus: int):
        super().__init__(
            f"Leading coefficient {coefficient} has no inverse modulo {modulus}"
        )
        self.coefficient = coefficient
        self.modulus = modulus


class LengthMismatch(GraphCipherError):
    """A remainder/quotient pair cannot have come from dividing by the key."""


class InvalidEncoding(GraphCipherError):
    """A hex string is not a sequence of 3-digit coefficient groups."""


class InvalidModulusExtension(GraphCipherError):
    """The requested modulus is not a multiple of the current one."""

    def __init__(self, old_modulus: int, new_modulus: int):
        super().__init__(
            f"Cannot extend modulus {old_modulus} to {new_modulus}: "
            f"{new_modulus} is not a multiple of {old_modulus}"
        )
        self.old_modulus = old_modulus
        self.new_modulus = new_modulus


class OddnessViolation(GraphCipherError):
    """
    The inverse affine map was applied to an even value.

    During decryption this means the ciphertext is corrupted or was
    produced with a different graph.
    """

    def __init__(self, value: int, position: Optional[int] = None):
        where = f" at position {position}" if position is not None else ""
        super().__init__(f"Expected an odd coefficient{where}, got {value}")
        self.value = value
        self.position = position


class InvalidEdge(GraphCipherError):
    """An edge endpoint lies outside the graph's node range."""


class EmptyGraph(GraphCipherError):
    """A graph without edges cannot produce a keystream."""
