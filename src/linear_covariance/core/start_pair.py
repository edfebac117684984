"""Start pairs ``(x₀, p₀)`` for parameter homotopies of MLE systems.

Instead of solving the MLE system, a solution is chosen first and matching
parameters are recovered afterwards:

1. sample a generic complex ``θ₀`` and set ``K₀ = Σ(θ₀)⁻¹``;
2. ``x₀ = [θ₀; sym_to_vec(K₀)]`` satisfies the constraint block ``KΣ − I``;
3. with ``x₀`` substituted, the first ``len(x₀)`` equations are affine-linear
   in the parameters ``s``, so ``p₀`` follows from a least squares solve.

Singular or badly conditioned samples are resampled a bounded number of times.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np
import sympy as sp
from scipy import linalg

from ..config.random_state import get_rng
from ..config.settings import Settings, get_config
from .codec import sym_to_vec
from .errors import ModelError, SingularityError
from .linear_form import linear_system
from .mle_system import PolynomialSystem, dual_mle_system, mle_system
from .model import LinearCovarianceModel, as_model

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StartPair:
    """A certified solution ``x0`` of ``system`` at parameters ``p0``.

    Unpacks as ``(equations, x0, p0, variables, parameters)``.
    """
    system: PolynomialSystem
    x0: np.ndarray
    p0: np.ndarray

    @property
    def variables(self) -> Tuple[sp.Symbol, ...]:
        return self.system.variables

    @property
    def parameters(self) -> Tuple[sp.Symbol, ...]:
        return self.system.parameters

    def residuals(self) -> np.ndarray:
        return self.system.residuals(self.x0, self.p0)

    def max_residual(self) -> float:
        """Largest absolute value of any equation at ``(x0, p0)``."""
        return float(np.max(np.abs(self.residuals())))

    def __iter__(self):
        return iter((self.system.equations, self.x0, self.p0,
                     self.system.variables, self.system.parameters))


def sample_parameters(m: int, rng: np.random.Generator, sampling: str = "normal") -> np.ndarray:
    """Draw a generic complex vector of length ``m``."""
    if sampling == "uniform":
        return rng.uniform(-1.0, 1.0, m) + 1j * rng.uniform(-1.0, 1.0, m)
    if sampling == "normal":
        return (rng.standard_normal(m) + 1j * rng.standard_normal(m)) / np.sqrt(2)
    raise ValueError(f"Unknown sampling distribution '{sampling}'")


def invert_covariance(sigma0: np.ndarray, max_condition_number: float) -> np.ndarray:
    """Return ``Σ₀⁻¹``, refusing singular or badly conditioned matrices."""
    condition = np.linalg.cond(sigma0)
    if not np.isfinite(condition) or condition > max_condition_number:
        raise SingularityError(f"Σ₀ is numerically singular (condition number {condition:.2e})")
    try:
        return linalg.inv(sigma0)
    except linalg.LinAlgError as exc:
        raise SingularityError(f"Σ₀ is not invertible: {exc}") from exc


def solve_parameters(A: np.ndarray, b: np.ndarray, tolerance: float) -> np.ndarray:
    """Least squares solution of ``A p = b`` that must actually solve the system."""
    A = np.asarray(A, dtype=complex)
    b = np.asarray(b, dtype=complex)
    try:
        p0, _, rank, _ = linalg.lstsq(A, b)
    except linalg.LinAlgError as exc:
        raise SingularityError(f"Least squares solve for p₀ failed: {exc}") from exc

    if not np.all(np.isfinite(p0)):
        raise SingularityError("Least squares solve for p₀ produced non-finite values")

    residual = float(np.max(np.abs(A @ p0 - b))) if b.size else 0.0
    scale = max(1.0, float(np.max(np.abs(b)))) if b.size else 1.0
    if residual > tolerance * scale:
        raise SingularityError(
            f"Linear system for p₀ is inconsistent (residual {residual:.2e}, rank {rank})"
        )
    return p0


def _check_layout(model: LinearCovarianceModel, system: PolynomialSystem) -> None:
    m, N = model.m, model.ambient_dim
    if system.n_gradient != m or system.variables[:m] != model.parameters:
        raise ModelError("System does not start with the gradient block of this model")
    if system.n_variables != m + N or system.n_parameters != N:
        raise ModelError(
            f"System layout ({system.n_variables} unknowns, {system.n_parameters} parameters) "
            f"does not match a model with m={m}, N={N}"
        )


def _attempt(model: LinearCovarianceModel, system: PolynomialSystem,
             theta0: np.ndarray, settings: Settings) -> StartPair:
    sigma0 = model.evaluate(theta0)
    K0 = invert_covariance(sigma0, settings.max_condition_number)
    x0 = np.concatenate([theta0, sym_to_vec(K0)])

    substitution = {v: sp.sympify(complex(value)) for v, value in zip(system.variables, x0)}
    reduced = [sp.expand(eq.xreplace(substitution)) for eq in system.equations[:len(x0)]]

    A, b = linear_system(reduced, system.parameters).unwrap()
    p0 = solve_parameters(A, b, settings.residual_tolerance)

    pair = StartPair(system=system, x0=x0, p0=p0)
    residual = pair.max_residual()
    if residual > settings.residual_tolerance:
        raise SingularityError(f"Start pair residual {residual:.2e} exceeds tolerance")
    return pair


def synthesize_start_pair(sigma, system: PolynomialSystem,
                          rng=None, settings: Optional[Settings] = None) -> StartPair:
    """Synthesize a certified start pair for ``system``, built from ``sigma``.

    Parameters
    ----------
    sigma : LinearCovarianceModel or sympy matrix
        Model the system was generated from
    system : PolynomialSystem
        Output of :func:`mle_system` or :func:`dual_mle_system`
    rng : None, int or np.random.Generator
        Random source for ``θ₀``; None uses the package-wide generator
    settings : Optional[Settings]
        Defaults to the global configuration

    Returns
    -------
    StartPair
        ``(x0, p0)`` with every equation below ``settings.residual_tolerance``

    Raises
    ------
    SingularityError
        If no sample succeeds within ``settings.max_start_pair_attempts``
    NonLinearError
        If the substituted equations are not affine-linear in the parameters
    """
    if settings is None:
        settings = get_config()
    model = as_model(sigma)
    _check_layout(model, system)
    rng = get_rng(rng)

    last_error = None
    for attempt in range(1, settings.max_start_pair_attempts + 1):
        theta0 = sample_parameters(model.m, rng, settings.sampling)
        try:
            return _attempt(model, system, theta0, settings)
        except SingularityError as exc:
            last_error = exc
            logger.debug("Start pair attempt %d/%d rejected: %s",
                         attempt, settings.max_start_pair_attempts, exc)

    logger.warning("No start pair found after %d attempts", settings.max_start_pair_attempts)
    raise SingularityError(
        f"No start pair found after {settings.max_start_pair_attempts} attempts: {last_error}"
    ) from last_error


def mle_system_and_start_pair(sigma, rng=None, settings: Optional[Settings] = None) -> StartPair:
    """Generate the MLE system of ``sigma`` together with a start pair ``(x₀, p₀)``."""
    model = as_model(sigma)
    system = mle_system(model, settings=settings)
    return synthesize_start_pair(model, system, rng=rng, settings=settings)


def dual_mle_system_and_start_pair(sigma, rng=None, settings: Optional[Settings] = None) -> StartPair:
    """Generate the dual MLE system of ``sigma`` together with a start pair ``(x₀, p₀)``."""
    model = as_model(sigma)
    system = dual_mle_system(model, settings=settings)
    return synthesize_start_pair(model, system, rng=rng, settings=settings)
