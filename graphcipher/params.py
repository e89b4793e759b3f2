"""
Cipher Parameters

Ring sizes and the round count are carried in a CipherParams object that
is passed to the key schedule and the cipher driver.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class CipherParams:
    """
    Configuration of the graph cipher.

    Attributes:
        base_modulus: Modulus of plaintext coefficients (default: 256)
        extended_modulus: Modulus used for the division rounds (default: 512).
            Must be a power of two and a multiple of base_modulus, so the
            units of the ring are exactly the odd residues.
        num_rounds: Number of division rounds (default: 8)
    """
    base_modulus: int = 1 << 8
    extended_modulus: int = 1 << 9
    num_rounds: int = 8

    def __post_init__(self):
        if self.base_modulus < 2:
            raise ValueError("Base modulus must be at least 2")
        if self.extended_modulus <= 0 or self.extended_modulus & (self.extended_modulus - 1):
            raise ValueError("Extended modulus must be a power of 2")
        if self.extended_modulus % self.base_modulus != 0:
            raise ValueError(
                f"Extended modulus {self.extended_modulus} must be a multiple "
                f"of base modulus {self.base_modulus}"
            )
        if self.extended_modulus < 2 * self.base_modulus:
            raise ValueError("Extended modulus must hold 2 * base_modulus values")
        if self.num_rounds < 0:
            raise ValueError("Number of rounds cannot be negative")


DEFAULT_PARAMS = CipherParams()
