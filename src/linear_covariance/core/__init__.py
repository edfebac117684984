"""Core algebraic machinery for linear covariance models.

This module contains the fundamental components:
- Symmetric matrix / coordinate vector codec
- Affine-linear system extraction from polynomial expressions
- Primal and dual MLE polynomial systems
- Start pair synthesis for parameter homotopies
"""

from .errors import (
    LinearCovarianceError,
    DimensionError,
    ModelError,
    NonLinearError,
    SingularityError
)
from .codec import vec_to_sym, sym_to_vec, n_vec_to_sym, n_sym_to_vec
from .linear_form import linear_system, LinearFormResult
from .model import LinearCovarianceModel, as_model
from .mle_system import PolynomialSystem, mle_system, dual_mle_system
from .start_pair import (
    StartPair,
    synthesize_start_pair,
    mle_system_and_start_pair,
    dual_mle_system_and_start_pair
)

__all__ = [
    # Errors
    'LinearCovarianceError',
    'DimensionError',
    'ModelError',
    'NonLinearError',
    'SingularityError',

    # Codec
    'vec_to_sym',
    'sym_to_vec',
    'n_vec_to_sym',
    'n_sym_to_vec',

    # Linear forms
    'linear_system',
    'LinearFormResult',

    # Models
    'LinearCovarianceModel',
    'as_model',

    # MLE systems
    'PolynomialSystem',
    'mle_system',
    'dual_mle_system',

    # Start pairs
    'StartPair',
    'synthesize_start_pair',
    'mle_system_and_start_pair',
    'dual_mle_system_and_start_pair'
]
