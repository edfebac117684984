"""Generators for linear covariance models.

Random generic subspaces and structured (Hankel, Toeplitz) families of
symmetric matrices whose entries are parameter symbols.
"""

from typing import List

import numpy as np
import sympy as sp

from ..config.random_state import get_rng
from ..core.codec import n_sym_to_vec
from ..core.errors import DimensionError
from ..core.model import LinearCovarianceModel
from ..core.symbols import indexed_symbols

THETA_PREFIX = 'theta'


def outer(A: np.ndarray) -> np.ndarray:
    return A @ A.T


def rand_pos_def(n: int, rng=None) -> np.ndarray:
    """Random symmetric positive (semi)definite matrix ``A Aᵀ`` with Gaussian ``A``.

    The result is symmetrized so that it is symmetric to the last bit.
    """
    rng = get_rng(rng)
    B = outer(rng.standard_normal((n, n)))
    return (B + B.T) / 2


def generic_subspace(n: int, m: int, rng=None) -> List[sp.Matrix]:
    """Generate a generic family of symmetric ``n×n`` matrices in an ``m``-dimensional subspace.

    Parameters
    ----------
    n : int
        Matrix size
    m : int
        Subspace dimension, at most ``n(n+1)/2``
    rng : None, int or np.random.Generator
        Random source; None uses the package-wide generator

    Returns
    -------
    List[sp.Matrix]
        The terms ``θᵢ·Bᵢ`` with independent random positive definite ``Bᵢ``;
        their sum is a generic linear covariance model

    Raises
    ------
    DimensionError
        If ``m`` exceeds the dimension of the space of symmetric matrices

    Examples
    --------
    >>> terms = generic_subspace(3, 2, rng=0)
    >>> len(terms), terms[0].shape
    (2, (3, 3))
    """
    if n < 1:
        raise DimensionError(f"Matrix size must be positive, got n={n}")
    N = n_sym_to_vec(n)
    if m > N:
        raise DimensionError(f"`m={m}` is larger than the dimension of the space ({N}).")
    if m < 1:
        raise DimensionError(f"Subspace dimension must be positive, got m={m}")

    rng = get_rng(rng)
    theta = indexed_symbols(THETA_PREFIX, m)
    return [t * sp.Matrix(rand_pos_def(n, rng)) for t in theta]


def generic_model(n: int, m: int, rng=None) -> LinearCovarianceModel:
    """Sum of :func:`generic_subspace` as a :class:`LinearCovarianceModel`."""
    terms = generic_subspace(n, m, rng)
    return LinearCovarianceModel.from_subspace(terms, indexed_symbols(THETA_PREFIX, m))


def hankel_matrix(n: int) -> sp.Matrix:
    """Generate an ``n×n`` Hankel matrix of the variables ``θ₁..θ₂ₙ₋₁``.

    Entry ``(i, j)`` (1-based) is ``θ_{i+j-1}``, constant along anti-diagonals.
    """
    if n < 1:
        raise DimensionError(f"Matrix size must be positive, got n={n}")
    theta = indexed_symbols(THETA_PREFIX, 2 * n - 1)
    return sp.Matrix([[theta[i + j] for j in range(n)] for i in range(n)])


def toeplitz_matrix(n: int) -> sp.Matrix:
    """Generate an ``n×n`` symmetric Toeplitz matrix of the variables ``θ₁..θₙ``."""
    if n < 1:
        raise DimensionError(f"Matrix size must be positive, got n={n}")
    theta = indexed_symbols(THETA_PREFIX, n)
    return sp.Matrix([[theta[abs(i - j)] for j in range(n)] for i in range(n)])
