"""Primal and dual MLE polynomial systems of linear covariance models.

For a model ``Σ(θ)`` with ``n×n`` matrices and ``m`` parameters, both systems
introduce a symmetric concentration matrix ``K`` (unknowns ``k₁..k_N``) and a
symmetric sample covariance ``S`` (parameters ``s₁..s_N``), ``N = n(n+1)/2``.
The equations are the gradient of the log-likelihood objective with respect
to ``θ`` followed by the column-major entries of ``KΣ − I``:

    primal:  l = −tr(KΣ) + tr(SKΣK)
    dual:    l = −tr(KΣ) + tr(SΣ)

The gradient block always comes first. Start pair synthesis relies on that
ordering.
"""

import logging
import warnings
from dataclasses import dataclass
from functools import cached_property
from typing import Callable, Sequence, Tuple

import numpy as np
import sympy as sp

from ..config.settings import get_config
from .codec import symbolic_vec_to_sym
from .errors import DimensionError, ModelError
from .model import as_model
from .symbols import flatten_columns, indexed_symbols

logger = logging.getLogger(__name__)

CONCENTRATION_PREFIX = 'k'
SAMPLE_COVARIANCE_PREFIX = 's'


@dataclass(frozen=True)
class PolynomialSystem:
    """Equations with their unknowns and parameters.

    Attributes
    ----------
    equations : Tuple[sp.Expr, ...]
        ``m`` gradient equations followed by ``n²`` constraint equations
    variables : Tuple[sp.Symbol, ...]
        Unknowns ``[θ; k]``
    parameters : Tuple[sp.Symbol, ...]
        Parameters ``s``
    n_gradient : int
        Number of leading gradient equations (``m``)

    Unpacks as ``(equations, variables, parameters)``.
    """
    equations: Tuple[sp.Expr, ...]
    variables: Tuple[sp.Symbol, ...]
    parameters: Tuple[sp.Symbol, ...]
    n_gradient: int

    @property
    def n_equations(self) -> int:
        return len(self.equations)

    @property
    def n_variables(self) -> int:
        return len(self.variables)

    @property
    def n_parameters(self) -> int:
        return len(self.parameters)

    def __iter__(self):
        return iter((self.equations, self.variables, self.parameters))

    @cached_property
    def _numeric(self) -> Callable:
        return sp.lambdify([self.variables, self.parameters], list(self.equations),
                           modules=["numpy"])

    def residuals(self, x: Sequence[complex], p: Sequence[complex]) -> np.ndarray:
        """Evaluate every equation at unknowns ``x`` and parameters ``p``."""
        x = np.asarray(x)
        p = np.asarray(p)
        if x.shape != (self.n_variables,):
            raise DimensionError(f"Expected {self.n_variables} unknowns, got shape {x.shape}")
        if p.shape != (self.n_parameters,):
            raise DimensionError(f"Expected {self.n_parameters} parameters, got shape {p.shape}")
        return np.array(self._numeric(x, p), dtype=complex)


def _objective(K: sp.MatrixBase, S: sp.MatrixBase, sigma: sp.MatrixBase, dual: bool) -> sp.Expr:
    K_sigma = K * sigma
    if dual:
        return -K_sigma.trace() + (S * sigma).trace()
    return -K_sigma.trace() + (S * K_sigma * K).trace()


def _build(sigma, dual: bool, settings=None) -> PolynomialSystem:
    if settings is None:
        settings = get_config()

    model = as_model(sigma)
    theta = model.parameters
    n, N = model.n, model.ambient_dim

    if n > settings.large_model_size:
        warnings.warn(f"Building the MLE system of a {n}×{n} model may be slow")

    k = indexed_symbols(CONCENTRATION_PREFIX, N)
    s = indexed_symbols(SAMPLE_COVARIANCE_PREFIX, N)
    reserved = {sym.name for sym in k + s}
    clashes = sorted(p.name for p in theta if p.name in reserved)
    if clashes:
        raise ModelError(f"Model parameters reuse reserved names: {clashes}")

    K = symbolic_vec_to_sym(k)
    S = symbolic_vec_to_sym(s)
    l = _objective(K, S, model.sigma, dual)

    gradient = [sp.expand(sp.diff(l, t)) for t in theta]
    constraints = [sp.expand(e) for e in flatten_columns(K * model.sigma - sp.eye(n))]

    logger.debug("Built %s MLE system: n=%d, m=%d, %d equations",
                 "dual" if dual else "primal", n, len(theta), len(gradient) + len(constraints))

    return PolynomialSystem(
        equations=tuple(gradient + constraints),
        variables=tuple(theta) + tuple(k),
        parameters=tuple(s),
        n_gradient=len(gradient),
    )


def mle_system(sigma, settings=None) -> PolynomialSystem:
    """Generate the MLE system of the family of covariance matrices ``sigma``.

    Parameters
    ----------
    sigma : LinearCovarianceModel or sympy matrix
        Symmetric matrix affine-linear in its free symbols
    settings : Optional[Settings]
        Defaults to the global configuration

    Returns
    -------
    PolynomialSystem
        ``m + n²`` equations in the unknowns ``[θ; k]`` with parameters ``s``

    Raises
    ------
    ModelError
        If ``sigma`` is not a valid linear covariance model
    """
    return _build(sigma, dual=False, settings=settings)


def dual_mle_system(sigma, settings=None) -> PolynomialSystem:
    """Generate the dual MLE system of the family of covariance matrices ``sigma``.

    Same layout as :func:`mle_system`, with objective ``−tr(KΣ) + tr(SΣ)``.
    """
    return _build(sigma, dual=True, settings=settings)
