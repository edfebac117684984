"""Tests for the symmetric matrix / coordinate vector codec."""

import pytest
import numpy as np
import sympy as sp
from numpy.testing import assert_array_equal

from linear_covariance.core.codec import vec_to_sym, sym_to_vec, n_vec_to_sym, n_sym_to_vec
from linear_covariance.core.errors import DimensionError


class TestVecToSym:
    """Test suite for vec_to_sym."""

    def test_documented_example(self):
        """Test the 3×3 example from the docstring."""
        S = vec_to_sym([1, 2, 3, 4, 5, 6])

        assert_array_equal(S, np.array([[1, 2, 3], [2, 4, 5], [3, 5, 6]]))

    def test_result_is_symmetric(self, rng):
        """Test symmetry for random vectors."""
        v = rng.standard_normal(10)
        S = vec_to_sym(v)

        assert S.shape == (4, 4)
        assert_array_equal(S, S.T)

    def test_preserves_dtype(self):
        """Test that complex and integer inputs keep their dtype."""
        assert vec_to_sym(np.array([1j, 2, 3])).dtype == complex
        assert vec_to_sym(np.array([1, 2, 3])).dtype.kind == 'i'

    def test_symbolic_input_gives_sympy_matrix(self):
        """Test that sympy elements produce a sympy matrix."""
        k = sp.symbols('k1:4')
        K = vec_to_sym(list(k))

        assert isinstance(K, sp.MatrixBase)
        assert K == sp.Matrix([[k[0], k[1]], [k[1], k[2]]])

    def test_sympy_column_input(self):
        """Test that a sympy column vector is accepted."""
        K = vec_to_sym(sp.Matrix([1, 2, 3]))

        assert K == sp.Matrix([[1, 2], [2, 3]])

    @pytest.mark.parametrize("length", [2, 4, 5, 7, 8, 9])
    def test_invalid_length_raises(self, length):
        """Test lengths that are not triangular numbers."""
        with pytest.raises(DimensionError):
            vec_to_sym(np.arange(length))

    def test_empty_vector_raises(self):
        with pytest.raises(DimensionError):
            vec_to_sym([])

    def test_two_dimensional_input_raises(self):
        with pytest.raises(DimensionError):
            vec_to_sym(np.ones((3, 2)))


class TestSymToVec:
    """Test suite for sym_to_vec."""

    def test_reads_lower_triangle_columnwise(self):
        """Test the ordering convention on a 3×3 matrix."""
        S = np.array([[1, 2, 3], [2, 4, 5], [3, 5, 6]])

        assert_array_equal(sym_to_vec(S), [1, 2, 3, 4, 5, 6])

    def test_sympy_matrix_gives_list(self):
        a, b, c = sp.symbols('a b c')
        v = sym_to_vec(sp.Matrix([[a, b], [b, c]]))

        assert v == [a, b, c]

    def test_nested_lists_accepted(self):
        assert_array_equal(sym_to_vec([[1, 2], [2, 3]]), [1, 2, 3])

    def test_non_square_raises(self):
        with pytest.raises(DimensionError):
            sym_to_vec(np.ones((2, 3)))

        with pytest.raises(DimensionError):
            sym_to_vec(sp.ones(2, 3))


class TestRoundTrip:
    """Test that the two directions are exact inverses."""

    @pytest.mark.parametrize("n", [1, 2, 3, 5, 8])
    def test_vector_round_trip(self, n, rng):
        N = n * (n + 1) // 2
        v = rng.standard_normal(N) + 1j * rng.standard_normal(N)

        assert_array_equal(sym_to_vec(vec_to_sym(v)), v)

    @pytest.mark.parametrize("n", [1, 3, 6])
    def test_matrix_round_trip(self, n, rng):
        A = rng.standard_normal((n, n))
        S = A + A.T

        assert_array_equal(vec_to_sym(sym_to_vec(S)), S)

    def test_symbolic_round_trip(self):
        s = list(sp.symbols('s1:11'))

        assert sym_to_vec(vec_to_sym(s)) == s


class TestDimensionHelpers:
    """Test suite for size conversions."""

    def test_n_vec_to_sym(self):
        assert n_vec_to_sym(1) == 1
        assert n_vec_to_sym(6) == 3
        assert n_vec_to_sym(55) == 10

    def test_n_sym_to_vec(self):
        assert [n_sym_to_vec(n) for n in range(1, 6)] == [1, 3, 6, 10, 15]

    def test_dimension_error_is_value_error(self):
        """Test that DimensionError can be caught as ValueError."""
        with pytest.raises(ValueError):
            n_vec_to_sym(11)
