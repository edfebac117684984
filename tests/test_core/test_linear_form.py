"""Tests for affine-linear system extraction."""

import pytest
import numpy as np
import sympy as sp
from numpy.testing import assert_array_equal, assert_allclose

from linear_covariance.core.linear_form import linear_system, LinearFormResult
from linear_covariance.core.errors import NonLinearError


def build_equations(A, b, variables):
    """Equations ``A·variables − b`` as sympy expressions."""
    return [
        sum(int(A[i, j]) * variables[j] for j in range(len(variables))) - int(b[i])
        for i in range(A.shape[0])
    ]


class TestLinearSystemRecovery:
    """Test recovery of known systems."""

    def test_recovers_chosen_system(self):
        """Test that A and b of a synthetic system are recovered exactly."""
        x = sp.symbols('x1:4')
        A = np.array([[1, 2, -1], [0, 3, 4], [5, 0, 0]])
        b = np.array([5, -2, 7])

        result = linear_system(build_equations(A, b, x))

        assert result.ok
        assert result.variables == x
        assert_array_equal(result.A, A)
        assert_array_equal(result.b, b)

    def test_constant_sign_convention(self, xy_symbols):
        """Test that constant terms enter b with a minus sign."""
        x, y = xy_symbols
        A, b = linear_system([x + 3]).unwrap()

        assert_array_equal(A, [[1.0]])
        assert_array_equal(b, [-3.0])

    def test_explicit_variable_order(self, xy_symbols):
        """Test that columns follow the given variable order."""
        x, y = xy_symbols
        A, b = linear_system([2 * x + 7 * y - 1], variables=[y, x]).unwrap()

        assert_array_equal(A, [[7.0, 2.0]])
        assert_array_equal(b, [1.0])

    def test_missing_variable_gives_zero_column(self, xy_symbols):
        x, y = xy_symbols
        z = sp.Symbol('z')
        A, _ = linear_system([x + y], variables=[x, z, y]).unwrap()

        assert_array_equal(A, [[1.0, 0.0, 1.0]])

    def test_default_variables_natural_order(self):
        """Test that t2 sorts before t10."""
        t2, t10 = sp.symbols('t2 t10')
        result = linear_system([t10 + 2 * t2])

        assert result.variables == (t2, t10)
        assert_array_equal(result.A, [[2.0, 1.0]])

    def test_constant_equation(self, xy_symbols):
        """Test an equation without variables."""
        x, _ = xy_symbols
        A, b = linear_system([sp.Integer(4), x], variables=[x]).unwrap()

        assert_array_equal(A, [[0.0], [1.0]])
        assert_array_equal(b, [-4.0, 0.0])

    def test_no_variables(self):
        A, b = linear_system([sp.Float(1.5)], variables=[]).unwrap()

        assert A.shape == (1, 0)
        assert_array_equal(b, [-1.5])

    def test_complex_coefficients(self, xy_symbols):
        """Test that complex coefficients give complex arrays."""
        x, y = xy_symbols
        A, b = linear_system([(1 + 2j) * x - 3j * y + (0.5 - 1j)]).unwrap()

        assert A.dtype == complex
        assert_allclose(A, [[1 + 2j, -3j]])
        assert_allclose(b, [-0.5 + 1j])

    def test_symbolic_coefficients(self, xy_symbols):
        """Test that symbols outside the variables stay symbolic."""
        x, y = xy_symbols
        c = sp.Symbol('c')
        A, b = linear_system([c * x + y - c], variables=[x, y]).unwrap()

        assert A.dtype == object
        assert A[0, 0] == c
        assert A[0, 1] == 1
        assert b[0] == c


class TestNonLinearDetection:
    """Test that non-linear input yields the failure result."""

    def test_quadratic_term(self, xy_symbols):
        """Test that a squared variable is rejected."""
        x, y = xy_symbols
        result = linear_system([x + y, x**2 + 1])

        assert not result.ok
        assert result.A is None
        assert result.b is None
        assert result.equation_index == 1
        assert "degree 2" in result.reason

    def test_cross_term(self, xy_symbols):
        """Test that a product of two variables is rejected."""
        x, y = xy_symbols
        result = linear_system([x * y + x])

        assert not result.ok
        assert "cross term" in result.reason

    def test_non_polynomial(self, xy_symbols):
        x, _ = xy_symbols
        result = linear_system([1 / x])

        assert not result.ok
        assert result.equation_index == 0

    def test_higher_degree_in_coefficient_symbol_is_allowed(self, xy_symbols):
        """Test that only the declared variables are checked for degree."""
        x, _ = xy_symbols
        c = sp.Symbol('c')
        result = linear_system([c**3 * x], variables=[x])

        assert result.ok

    def test_unwrap_raises(self, xy_symbols):
        x, _ = xy_symbols
        result = linear_system([x**3])

        with pytest.raises(NonLinearError) as exc_info:
            result.unwrap()

        assert exc_info.value.equation_index == 0

    def test_failure_constructor(self):
        result = LinearFormResult.failure("bad", 2, [])

        assert not result.ok
        assert result.equation_index == 2
