"""Bijection between symmetric matrices and their coordinate vectors.

A symmetric ``n×n`` matrix is stored as a vector of length ``N = n(n+1)/2``
by walking ``i = 1..n`` and ``j = i..n`` and reading ``S[i, j]``, i.e. the
lower triangle column by column. Both directions are pure rearrangements,
so they are exact inverses of each other for any element type.
"""

import math
from typing import List, Sequence, Union

import numpy as np
import sympy as sp

from .errors import DimensionError

MatrixLike = Union[np.ndarray, sp.MatrixBase, Sequence[Sequence]]


def n_vec_to_sym(length: int) -> int:
    """Matrix size ``n`` of a symmetric vector of the given length.

    Parameters
    ----------
    length : int
        Vector length ``N``

    Returns
    -------
    int
        The unique positive ``n`` with ``n(n+1)/2 == N``

    Raises
    ------
    DimensionError
        If ``N`` is not a positive triangular number
    """
    if length < 1:
        raise DimensionError(f"Vector length must be positive, got {length}")
    n = (math.isqrt(1 + 8 * length) - 1) // 2
    if n * (n + 1) // 2 != length:
        raise DimensionError(
            f"Vector length {length} is not n(n+1)/2 for any integer n"
        )
    return n


def n_sym_to_vec(n: int) -> int:
    """Length ``N = n(n+1)/2`` of the vector encoding an ``n×n`` symmetric matrix."""
    return n * (n + 1) // 2


def _is_symbolic(values) -> bool:
    return any(isinstance(v, sp.Basic) for v in values)


def vec_to_sym(v):
    """Convert a vector to a symmetric matrix, filling the lower triangle columnwise.

    Parameters
    ----------
    v : sequence, np.ndarray or sympy matrix
        Vector of length ``n(n+1)/2``

    Returns
    -------
    np.ndarray or sympy.Matrix
        A sympy matrix if any element of ``v`` is a sympy object, otherwise a
        numpy array with the dtype of ``v``

    Examples
    --------
    >>> vec_to_sym([1, 2, 3, 4, 5, 6])
    array([[1, 2, 3],
           [2, 4, 5],
           [3, 5, 6]])
    """
    if isinstance(v, sp.MatrixBase):
        values = list(v)
    else:
        values = np.asarray(v)
        if values.ndim != 1:
            raise DimensionError(f"Expected a 1-D vector, got shape {values.shape}")

    n = n_vec_to_sym(len(values))
    rows, cols = np.triu_indices(n)

    if isinstance(v, sp.MatrixBase) or _is_symbolic(values):
        S = sp.zeros(n, n)
        for l, (i, j) in enumerate(zip(rows, cols)):
            S[i, j] = S[j, i] = sp.sympify(values[l])
        return S

    S = np.empty((n, n), dtype=values.dtype)
    S[rows, cols] = values
    S[cols, rows] = values
    return S


def sym_to_vec(S: MatrixLike):
    """Convert a symmetric matrix to its coordinate vector.

    Reads ``S[i, j]`` for ``i = 1..n`` and ``j = i..n``. Only that triangle
    is read, symmetry of ``S`` is not checked.

    Returns
    -------
    np.ndarray or list
        A list of entries for sympy input, a numpy array otherwise
    """
    if isinstance(S, sp.MatrixBase):
        n, cols = S.shape
        if n != cols or n == 0:
            raise DimensionError(f"Expected a non-empty square matrix, got shape {S.shape}")
        return [S[i, j] for i in range(n) for j in range(i, n)]

    arr = np.asarray(S)
    if arr.ndim != 2 or arr.shape[0] != arr.shape[1] or arr.shape[0] == 0:
        raise DimensionError(f"Expected a non-empty square matrix, got shape {arr.shape}")
    return arr[np.triu_indices(arr.shape[0])]


def symbolic_vec_to_sym(symbols: List[sp.Symbol]) -> sp.ImmutableMatrix:
    """Symmetric matrix of symbols, used for the ``K`` and ``S`` matrices."""
    return sp.ImmutableMatrix(vec_to_sym(sp.Matrix(symbols)))
