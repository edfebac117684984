"""Recover ``A`` and ``b`` from polynomial expressions that represent ``A x = b``.

The extractor never raises on non-linear input. It returns a
:class:`LinearFormResult` that callers must inspect, or ``unwrap()`` to turn
a failure into :class:`NonLinearError`.
"""

import numbers
from dataclasses import dataclass
from typing import Iterable, Optional, Sequence, Tuple

import numpy as np
import sympy as sp

from .errors import NonLinearError
from .symbols import free_symbols


@dataclass(frozen=True)
class LinearFormResult:
    """Outcome of :func:`linear_system`.

    Attributes
    ----------
    A : Optional[np.ndarray], shape (n_equations, n_variables)
        Coefficient matrix, ``None`` on failure
    b : Optional[np.ndarray], shape (n_equations,)
        Right-hand side, ``None`` on failure
    variables : Tuple[sp.Symbol, ...]
        Column order of ``A``
    reason : Optional[str]
        Why the system is not affine-linear, ``None`` on success
    equation_index : Optional[int]
        Index of the first offending equation
    """
    A: Optional[np.ndarray] = None
    b: Optional[np.ndarray] = None
    variables: Tuple[sp.Symbol, ...] = ()
    reason: Optional[str] = None
    equation_index: Optional[int] = None

    @property
    def ok(self) -> bool:
        return self.reason is None

    def unwrap(self) -> Tuple[np.ndarray, np.ndarray]:
        """Return ``(A, b)`` or raise :class:`NonLinearError`."""
        if not self.ok:
            raise NonLinearError(self.reason, self.equation_index)
        return self.A, self.b

    @classmethod
    def failure(cls, reason: str, equation_index: int,
                variables: Sequence[sp.Symbol]) -> 'LinearFormResult':
        return cls(variables=tuple(variables), reason=reason, equation_index=equation_index)


def _is_number(value) -> bool:
    if isinstance(value, sp.Basic):
        return bool(value.is_number)
    return isinstance(value, numbers.Number)


def _as_array(values: np.ndarray) -> np.ndarray:
    """Convert an object array of coefficients to float or complex when possible."""
    flat = values.ravel()
    if not all(_is_number(v) for v in flat):
        return values
    converted = np.array([complex(v) for v in flat], dtype=complex).reshape(values.shape)
    if np.all(converted.imag == 0):
        return converted.real.copy()
    return converted


def _terms(expression: sp.Expr, variables: Tuple[sp.Symbol, ...]):
    if not variables:
        return [((), expression)]
    return sp.Poly(expression, *variables).terms()


def linear_system(equations: Iterable,
                  variables: Optional[Sequence[sp.Symbol]] = None) -> LinearFormResult:
    """Extract ``A`` and ``b`` such that ``equations == 0`` is ``A·variables = b``.

    Parameters
    ----------
    equations : Iterable
        Polynomial expressions (sympy expressions or numbers)
    variables : Optional[Sequence[sp.Symbol]]
        Unknowns, in column order. Defaults to the free symbols of all
        equations in natural name order. Other free symbols are treated as
        symbolic coefficients.

    Returns
    -------
    LinearFormResult
        Success with ``A`` and ``b``, or failure when any term has degree
        two or more in ``variables`` (including cross terms such as ``x*y``)
        or an equation is not polynomial in ``variables``

    Examples
    --------
    >>> x, y = sp.symbols('x y')
    >>> A, b = linear_system([2*x + 3*y - 1, x - 4]).unwrap()
    >>> A
    array([[2., 3.],
           [1., 0.]])
    >>> b
    array([1., 4.])
    """
    equations = [sp.sympify(eq) for eq in equations]
    if variables is None:
        variables = free_symbols(equations)
    variables = tuple(variables)

    A = np.zeros((len(equations), len(variables)), dtype=object)
    b = np.zeros(len(equations), dtype=object)

    for i, equation in enumerate(equations):
        try:
            terms = _terms(equation, variables)
        except sp.PolynomialError as exc:
            return LinearFormResult.failure(f"equation {i} is not polynomial: {exc}", i, variables)

        for monomial, coefficient in terms:
            if coefficient == 0:
                continue
            degree = sum(monomial)
            if degree == 0:
                b[i] = -coefficient
                continue
            if max(monomial) >= 2:
                var = variables[int(np.argmax(monomial))]
                return LinearFormResult.failure(
                    f"equation {i} has degree {max(monomial)} in {var}", i, variables
                )
            if degree >= 2:
                return LinearFormResult.failure(
                    f"equation {i} has a cross term of total degree {degree}", i, variables
                )
            A[i, monomial.index(1)] = coefficient

    return LinearFormResult(A=_as_array(A), b=_as_array(b), variables=variables)
