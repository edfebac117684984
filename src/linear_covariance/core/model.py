"""Linear covariance models: symmetric matrices affine-linear in their parameters."""

from dataclasses import dataclass
from functools import cached_property
from typing import Callable, List, Optional, Sequence, Tuple, Union

import numpy as np
import sympy as sp

from .codec import n_sym_to_vec, sym_to_vec
from .errors import DimensionError, ModelError
from .linear_form import linear_system
from .symbols import free_symbols


@dataclass(frozen=True)
class LinearCovarianceModel:
    """Affine family ``Σ(θ) = Σ₀ + Σᵢ θᵢ Bᵢ`` of symmetric matrices.

    Instances are validated on construction and immutable afterwards.

    Attributes
    ----------
    sigma : sp.ImmutableMatrix, shape (n, n)
        Symmetric matrix of expressions affine-linear in ``parameters``
    parameters : Tuple[sp.Symbol, ...]
        Ordered parameters ``θ₁..θₘ``; exactly the free symbols of ``sigma``

    Examples
    --------
    >>> a, b = sp.symbols('a b')
    >>> model = LinearCovarianceModel.from_matrix(sp.Matrix([[a, b], [b, a]]))
    >>> model.n, model.m, model.ambient_dim
    (2, 2, 3)
    """
    sigma: sp.ImmutableMatrix
    parameters: Tuple[sp.Symbol, ...]

    def __post_init__(self):
        object.__setattr__(self, 'sigma', sp.ImmutableMatrix(self.sigma))
        object.__setattr__(self, 'parameters', tuple(self.parameters))
        self._validate()

    def _validate(self) -> None:
        rows, cols = self.sigma.shape
        if rows != cols or rows == 0:
            raise ModelError(f"Σ must be a non-empty square matrix, got shape {self.sigma.shape}")

        for i in range(rows):
            for j in range(i + 1, cols):
                if sp.expand(self.sigma[i, j] - self.sigma[j, i]) != 0:
                    raise ModelError(f"Σ is not symmetric at entry ({i}, {j})")

        if len(set(self.parameters)) != len(self.parameters):
            raise ModelError("Parameters contain duplicates")
        if not all(isinstance(p, sp.Symbol) for p in self.parameters):
            raise ModelError("Parameters must be sympy symbols")

        declared = set(self.parameters)
        actual = set(free_symbols(self.sigma))
        if declared != actual:
            missing = sorted(str(s) for s in declared - actual)
            extra = sorted(str(s) for s in actual - declared)
            raise ModelError(
                f"Free symbols of Σ do not match the parameters "
                f"(unused parameters: {missing}, undeclared symbols: {extra})"
            )

        if self.m == 0:
            raise ModelError("Σ has no free parameters")
        if self.m > self.ambient_dim:
            raise DimensionError(
                f"Model has {self.m} parameters but the space of symmetric "
                f"{self.n}×{self.n} matrices has dimension {self.ambient_dim}"
            )

        result = linear_system(sym_to_vec(self.sigma), self.parameters)
        if not result.ok:
            raise ModelError(f"Σ is not affine-linear in its parameters: {result.reason}")

    @classmethod
    def from_matrix(cls, matrix, parameters: Optional[Sequence[sp.Symbol]] = None
                    ) -> 'LinearCovarianceModel':
        """Build a model from a symmetric matrix of expressions.

        ``parameters`` defaults to the free symbols of ``matrix`` in natural
        name order (``t2`` before ``t10``).
        """
        matrix = sp.ImmutableMatrix(matrix)
        if parameters is None:
            parameters = free_symbols(matrix)
        return cls(sigma=matrix, parameters=tuple(parameters))

    @classmethod
    def from_subspace(cls, terms: Sequence[sp.MatrixBase],
                      parameters: Optional[Sequence[sp.Symbol]] = None
                      ) -> 'LinearCovarianceModel':
        """Sum the terms ``θᵢ·Bᵢ`` of a subspace into a single model."""
        if len(terms) == 0:
            raise ModelError("A subspace needs at least one term")
        total = sp.zeros(*terms[0].shape)
        for term in terms:
            if term.shape != total.shape:
                raise ModelError(f"Term shapes differ: {term.shape} != {total.shape}")
            total += term
        return cls.from_matrix(total, parameters)

    @property
    def n(self) -> int:
        return self.sigma.shape[0]

    @property
    def m(self) -> int:
        return len(self.parameters)

    @property
    def ambient_dim(self) -> int:
        """Dimension ``N = n(n+1)/2`` of the space of symmetric matrices."""
        return n_sym_to_vec(self.n)

    @cached_property
    def _numeric(self) -> Callable:
        return sp.lambdify(self.parameters, self.sigma, modules=["numpy"])

    def evaluate(self, theta: Sequence[complex]) -> np.ndarray:
        """Numeric complex matrix ``Σ(θ)``."""
        theta = np.asarray(theta)
        if theta.shape != (self.m,):
            raise DimensionError(f"Expected {self.m} parameter values, got shape {theta.shape}")
        return np.array(self._numeric(*theta), dtype=complex)

    def basis(self) -> Tuple[np.ndarray, List[np.ndarray]]:
        """Return ``(Σ₀, [B₁, ..., Bₘ])`` as complex numpy arrays."""
        offset = self.evaluate(np.zeros(self.m))
        directions = []
        for i in range(self.m):
            unit = np.zeros(self.m)
            unit[i] = 1.0
            directions.append(self.evaluate(unit) - offset)
        return offset, directions


def as_model(sigma: Union[LinearCovarianceModel, sp.MatrixBase, Sequence]) -> LinearCovarianceModel:
    """Accept a model or a bare symmetric sympy matrix."""
    if isinstance(sigma, LinearCovarianceModel):
        return sigma
    return LinearCovarianceModel.from_matrix(sigma)
