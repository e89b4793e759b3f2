import numpy as np
import pytest

from graphcipher.errors import (
    InvalidModulusExtension,
    LengthMismatch,
    NonInvertibleLeadingCoefficient,
    RingMismatch,
)
from graphcipher.ring import (
    Polynomial,
    divide_with_remainder,
    egcd,
    extend_modulus,
    mod_inverse,
    multiply,
    recombine,
)

from .helpers import odd_leading, random_poly


class TestModularInverse:
    def test_egcd_identity(self):
        for a, b in [(240, 46), (7, 512), (512, 7), (0, 5), (17, 17)]:
            g, x, y = egcd(a, b)
            assert a * x + b * y == g
            assert g == np.gcd(a, b)

    def test_every_odd_residue_is_invertible(self):
        for a in range(1, 512, 2):
            inv = mod_inverse(a, 512)
            assert 0 <= inv < 512
            assert (a * inv) % 512 == 1

    def test_even_residue_has_no_inverse(self):
        with pytest.raises(ValueError):
            mod_inverse(6, 512)


class TestPolynomial:
    def test_basic_properties(self):
        p = Polynomial([3, 0, 7], 512)
        assert p.degree == 2
        assert len(p) == 3
        assert p.leading_coefficient == 7
        assert p.tolist() == [3, 0, 7]
        assert p[1] == 0

    def test_rejects_empty_coefficients(self):
        with pytest.raises(ValueError):
            Polynomial([], 512)

    def test_rejects_out_of_range_coefficients(self):
        with pytest.raises(ValueError):
            Polynomial([512], 512)
        with pytest.raises(ValueError):
            Polynomial([-1], 512)

    def test_rejects_non_positive_modulus(self):
        with pytest.raises(ValueError):
            Polynomial([0], 0)

    def test_coefficients_are_read_only(self):
        p = Polynomial([1, 2, 3], 512)
        with pytest.raises(ValueError):
            p.coeffs[0] = 5

    def test_does_not_alias_input(self):
        source = np.array([1, 2, 3], dtype=np.int64)
        p = Polynomial(source, 512)
        source[0] = 9
        assert p.tolist() == [1, 2, 3]

    def test_equality_includes_modulus(self):
        assert Polynomial([1, 2], 512) == Polynomial([1, 2], 512)
        assert Polynomial([1, 2], 512) != Polynomial([1, 2], 256)
        assert hash(Polynomial([1, 2], 512)) == hash(Polynomial([1, 2], 512))


class TestMultiply:
    def test_known_product(self):
        a = Polynomial([1, 1], 512)
        assert multiply(a, a) == Polynomial([1, 2, 1], 512)

    def test_reduces_modulo(self):
        a = Polynomial([300], 512)
        b = Polynomial([2], 512)
        assert (a * b).tolist() == [88]

    def test_degree_adds(self, rng):
        a = random_poly(rng, 4)
        b = random_poly(rng, 7)
        assert (a * b).degree == a.degree + b.degree

    def test_commutative_and_associative(self, rng):
        for _ in range(10):
            a, b, c = (random_poly(rng, int(n)) for n in rng.integers(1, 9, size=3))
            assert a * b == b * a
            assert (a * b) * c == a * (b * c)

    def test_ring_mismatch(self):
        with pytest.raises(RingMismatch):
            multiply(Polynomial([1], 256), Polynomial([1], 512))


class TestDivideWithRemainder:
    def test_exact_division(self):
        remainder, quotient = divide_with_remainder(Polynomial([1, 2, 1], 512), Polynomial([1, 1], 512))
        assert remainder == Polynomial([0, 0, 0], 512)
        assert quotient == [1, 1]

    def test_shapes(self, rng):
        dividend = random_poly(rng, 12)
        divisor = odd_leading(rng, 11)
        remainder, quotient = divide_with_remainder(dividend, divisor)

        assert len(remainder) == len(dividend)
        assert len(quotient) == dividend.degree - divisor.degree + 1
        assert remainder.tolist()[divisor.degree:] == [0, 0]

    def test_division_identity(self, rng):
        for _ in range(20):
            divisor = odd_leading(rng, int(rng.integers(1, 8)))
            dividend = random_poly(rng, divisor.degree + int(rng.integers(1, 10)))
            remainder, quotient = divide_with_remainder(dividend, divisor)

            product = multiply(Polynomial(quotient, 512), divisor)
            rebuilt = [(p + r) % 512 for p, r in zip(product, remainder)]
            assert rebuilt == dividend.tolist()

    def test_short_dividend_is_its_own_remainder(self):
        dividend = Polynomial([5, 6], 512)
        divisor = Polynomial([1, 3, 5], 512)
        remainder, quotient = divide_with_remainder(dividend, divisor)
        assert remainder == dividend
        assert quotient == []

    def test_even_leading_coefficient(self):
        with pytest.raises(NonInvertibleLeadingCoefficient) as excinfo:
            divide_with_remainder(Polynomial([1, 2, 3], 512), Polynomial([1, 4], 512))
        assert excinfo.value.coefficient == 4
        assert excinfo.value.modulus == 512

    def test_ring_mismatch(self):
        with pytest.raises(RingMismatch):
            divide_with_remainder(Polynomial([1, 2], 256), Polynomial([1, 1], 512))

    def test_method_form(self):
        dividend = Polynomial([1, 2, 1], 512)
        assert dividend.divmod(Polynomial([1, 1], 512)) == divide_with_remainder(
            dividend, Polynomial([1, 1], 512))


class TestRecombine:
    def test_undoes_division(self, rng):
        for _ in range(20):
            divisor = odd_leading(rng, int(rng.integers(1, 8)))
            dividend = random_poly(rng, divisor.degree + int(rng.integers(1, 10)))
            remainder, quotient = divide_with_remainder(dividend, divisor)
            assert recombine(remainder.tolist()[:divisor.degree], quotient, divisor) == dividend

    def test_empty_quotient_returns_remainder(self):
        divisor = Polynomial([1, 3, 5], 512)
        assert recombine([7, 8], [], divisor) == Polynomial([7, 8], 512)

    def test_remainder_longer_than_dividend(self):
        with pytest.raises(LengthMismatch):
            recombine([1, 2, 3, 4], [5], Polynomial([1, 3, 5], 512))


class TestExtendModulus:
    def test_keeps_coefficients(self):
        p = Polynomial([0, 255, 17], 256)
        extended = extend_modulus(p, 512)
        assert extended.modulus == 512
        assert extended.tolist() == p.tolist()
        assert p.extend(512) == extended

    def test_rejects_non_multiple(self):
        with pytest.raises(InvalidModulusExtension):
            extend_modulus(Polynomial([1], 256), 384)
