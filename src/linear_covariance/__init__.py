"""
Linear Covariance - ML degree machinery for linear covariance models.

Builds primal and dual MLE polynomial systems for affine families of
symmetric matrices and synthesizes start pairs for parameter homotopies.
"""

__version__ = "0.1.0"

from .core import (
    vec_to_sym,
    sym_to_vec,
    linear_system,
    mle_system,
    dual_mle_system,
    mle_system_and_start_pair,
    dual_mle_system_and_start_pair,
    PolynomialSystem,
    StartPair,
    LinearCovarianceError,
    DimensionError,
    ModelError,
    NonLinearError,
    SingularityError,
)
from .models import (
    LinearCovarianceModel,
    generic_subspace,
    generic_model,
    hankel_matrix,
    toeplitz_matrix,
    tree,
    trees,
)
from .config import get_config, set_global_seed

__all__ = [
    'vec_to_sym',
    'sym_to_vec',
    'linear_system',
    'mle_system',
    'dual_mle_system',
    'mle_system_and_start_pair',
    'dual_mle_system_and_start_pair',
    'PolynomialSystem',
    'StartPair',
    'LinearCovarianceError',
    'DimensionError',
    'ModelError',
    'NonLinearError',
    'SingularityError',
    'LinearCovarianceModel',
    'generic_subspace',
    'generic_model',
    'hankel_matrix',
    'toeplitz_matrix',
    'tree',
    'trees',
    'get_config',
    'set_global_seed',
]
