"""Linear covariance model generators.

Provides random generic subspaces, Hankel and Toeplitz families, and the
catalog of phylogenetic tree covariance structures.
"""

from ..core.model import LinearCovarianceModel
from .subspace import (
    rand_pos_def,
    generic_subspace,
    generic_model,
    hankel_matrix,
    toeplitz_matrix
)
from .trees import (
    tree,
    trees,
    tree_catalog,
    parse_topology,
    tree_covariance,
    NamedTree,
    TreeEntry
)

__all__ = [
    'LinearCovarianceModel',

    # Subspaces
    'rand_pos_def',
    'generic_subspace',
    'generic_model',
    'hankel_matrix',
    'toeplitz_matrix',

    # Trees
    'tree',
    'trees',
    'tree_catalog',
    'parse_topology',
    'tree_covariance',
    'NamedTree',
    'TreeEntry'
]
