"""Tests for PiecewiseFunction arithmetic."""

from __future__ import annotations

from decimal import Decimal

import numpy as np
import pytest

from conftest import D
from pypiecewise import DivisionError, PiecewiseFunction


def _samples(f):
    return f.samples


class TestFunctionArithmetic:
    """Function-function operations with grid alignment."""

    def test_add_on_receiver_grid(self, field, density):
        c = field + density
        assert c.abscissas == field.abscissas
        assert _samples(c) == {
            D(0): D(2),
            D("0.5"): D("2.5"),
            D(1): D(9),
            D("2.5"): D(1),
            D(4): D("2.5"),
        }

    def test_add_matches_pointwise_sum(self, field, density):
        c = field.add(density)
        lo, hi = D(1), D(4)
        for x in field.abscissas:
            if lo <= x <= hi:
                assert c.value_at(x) == field.value_at(x) + density.value_at(x)

    def test_add_is_not_symmetric_in_grid(self, field, density):
        c = density + field
        assert _samples(c) == {D(1): D(9), D(3): D("0.5"), D(6): D(4)}

    def test_add_passes_through_outside_operand_domain(self):
        f = PiecewiseFunction({0: 1, 1: 2})
        g = PiecewiseFunction({5: 10, 6: 20})
        assert f + g == f

    def test_add_empty_operand(self, field):
        assert field + PiecewiseFunction() == field

    def test_add_to_empty_receiver(self, field):
        assert PiecewiseFunction() + field == PiecewiseFunction()

    def test_sub(self, field, density):
        c = field - density
        assert _samples(c) == {
            D(0): D(2),
            D("0.5"): D("2.5"),
            D(1): D(-1),
            D("2.5"): D(-3),
            D(4): D("-1.5"),
        }

    def test_sub_self_is_zero(self, field):
        c = field.subtract(field)
        for _, value in c:
            assert value == 0
            assert str(value) == "0"

    def test_mul(self, field, density):
        c = field * density
        assert _samples(c) == {
            D(0): D(2),
            D("0.5"): D("2.5"),
            D(1): D(20),
            D("2.5"): D(-2),
            D(4): D(1),
        }

    def test_div(self, field, density):
        c = field / density
        assert _samples(c) == {
            D(0): D(2),
            D("0.5"): D("2.5"),
            D(1): D("0.8"),
            D("2.5"): D("-0.8"),
            D(4): D("0.375"),
        }

    def test_div_is_mul_by_inverse(self, field, density):
        assert field.divide(density) == field.multiply(density.invert())

    def test_div_by_function_with_zero_raises(self, field, with_zeros):
        with pytest.raises(DivisionError):
            field / with_zeros

    def test_neg(self, field):
        c = -field
        for (x, v), (y, w) in zip(field, c):
            assert x == y
            assert w == -v

    def test_neg_of_zero_is_plain_zero(self):
        c = -PiecewiseFunction({0: 0})
        assert str(c.values[0]) == "0"

    def test_invert(self, density):
        c = density.invert()
        assert _samples(c) == {D(1): D("0.2"), D(3): D(1), D(6): D("0.25")}

    def test_invert_round_trip(self):
        f = PiecewiseFunction({0: 2, 1: -4, 2: "0.5", 3: 8, 4: 3})
        assert f.invert().invert() == f

    def test_invert_round_trip_is_inexact_for_repeating_reciprocals(self):
        """1/7 is rounded to 34 digits, so inverting twice does not return 7."""
        twice = PiecewiseFunction({0: 7}).invert().invert()
        assert twice.values == (D("6.999999999999999999999999999999998"),)
        assert twice != PiecewiseFunction({0: 7})

    def test_invert_zero_raises(self, with_zeros):
        with pytest.raises(DivisionError, match="abscissa 0") as info:
            with_zeros.invert()
        assert info.value.position == 0

    def test_division_error_is_zero_division_error(self, with_zeros):
        with pytest.raises(ZeroDivisionError):
            with_zeros.invert()

    def test_combine_with_other_type_raises(self, field):
        with pytest.raises(TypeError, match="Cannot combine"):
            field.add(3)

    def test_operands_are_not_mutated(self, field, density):
        before_f, before_g = field.samples, density.samples
        field + density
        field - density
        field * density
        field / density
        -field
        assert field.samples == before_f
        assert density.samples == before_g


class TestScalarArithmetic:
    """Function-scalar operations."""

    def test_mul_scalar(self, field):
        c = field * 3
        assert c.values == tuple(v * 3 for v in field.values)

    def test_rmul_scalar(self, field):
        assert 3 * field == field * 3

    def test_mul_decimal_and_numpy_scalars(self, field):
        assert field * Decimal("2") == field * 2
        assert field * np.float64(2.0) == field * 2
        assert field * np.int64(2) == field * 2

    def test_mul_method_accepts_string(self, field):
        assert field.multiply("2") == field * 2

    def test_mul_by_zero_gives_zeros(self, field):
        c = field * 0
        assert all(value == 0 for value in c.values)

    def test_truediv_scalar(self, field):
        c = field / 2
        assert _samples(c) == {
            D(0): D(1),
            D("0.5"): D("1.25"),
            D(1): D(2),
            D("2.5"): D("-0.5"),
            D(4): D("0.25"),
        }

    def test_div_scalar_uses_34_digits(self):
        c = PiecewiseFunction({0: 1}).divide(3)
        assert c.values[0] == Decimal("0.3333333333333333333333333333333333")

    def test_div_by_zero_scalar_raises(self, field):
        with pytest.raises(DivisionError, match="zero scalar"):
            field / 0

    def test_div_by_decimal_zero_raises(self, field):
        with pytest.raises(DivisionError):
            field.divide(Decimal("0.000"))

    def test_div_by_zero_function_raises_unless_zeros_avoided(self, field):
        zeroed = field.multiply(0)
        with pytest.raises(DivisionError):
            field.divide(zeroed)
        result = field.divide(zeroed.avoid_zeros())
        assert len(result) == len(field)

    def test_unsupported_operands(self, field):
        with pytest.raises(TypeError):
            field + 1
        with pytest.raises(TypeError):
            1 - field
        with pytest.raises(TypeError):
            1 / field
        with pytest.raises(TypeError):
            field * None


class TestPrecision:
    """Exact decimal arithmetic over chains of operations."""

    def test_repeated_addition_is_exact(self):
        tenth = PiecewiseFunction({0: "0.1", 1: "0.1"})
        total = tenth
        for _ in range(9):
            total = total + tenth
        assert total == PiecewiseFunction({0: 1, 1: 1})

    def test_scale_and_unscale_is_exact(self, field):
        assert (field * "0.1") * 10 == field

    def test_chained_ops(self, field, density):
        """0.5*f + 0.3*g - 0.2*f == 0.3*f + 0.3*g on the grid of f."""
        c = 0.5 * field + 0.3 * density - 0.2 * field
        expected = 0.3 * field + 0.3 * density
        for x in field.abscissas:
            if x in density:
                assert c.value_at(x) == expected.value_at(x)

    def test_results_are_canonical(self, field):
        c = field * "1.000"
        assert str(c) == str(field)
