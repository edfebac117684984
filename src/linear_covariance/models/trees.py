"""Covariance structures of phylogenetic trees.

The covariance matrix of a rooted tree with leaves ``1..n`` has the leaf
variable ``tᵢ`` at diagonal entry ``(i, i)`` and, for ``i ≠ j``, the variable
of the smallest clade containing both leaves. Internal clades are numbered
``t_{n+1}, t_{n+2}, ...`` in post-order, so the root gets the last variable::

    tree("{{1, 2}, {3, 4}}").sigma
    Matrix([
    [t1, t5, t7, t7],
    [t5, t2, t7, t7],
    [t7, t7, t3, t6],
    [t7, t7, t6, t4]])

The catalog is built once, on first use, and never mutated.
"""

import re
from functools import lru_cache
from types import MappingProxyType
from typing import List, Mapping, NamedTuple, Optional, Tuple, Union

import sympy as sp

from ..core.model import LinearCovarianceModel
from ..core.symbols import indexed_symbols
from .tree_data import TREE_IDS

TREE_PREFIX = 't'

Topology = Union[int, Tuple['Topology', ...]]

_TOKEN = re.compile(r'\s*(\{|\}|,|\d+)')


class NamedTree(NamedTuple):
    id: str
    tree: LinearCovarianceModel


class TreeEntry(NamedTuple):
    id: str
    n: int
    tree: LinearCovarianceModel


def normalize_id(tree_id: str) -> str:
    return re.sub(r'\s+', '', tree_id)


def _tokenize(tree_id: str) -> List[str]:
    tokens = []
    position = 0
    stripped = tree_id.rstrip()
    while position < len(stripped):
        match = _TOKEN.match(stripped, position)
        if match is None:
            raise ValueError(f"Unexpected character {stripped[position]!r} in tree id {tree_id!r}")
        tokens.append(match.group(1))
        position = match.end()
    return tokens


def parse_topology(tree_id: str) -> Topology:
    """Parse nested-set notation such as ``"{{1, 2}, 3}"`` into nested tuples."""
    tokens = _tokenize(tree_id)
    position = 0

    def parse() -> Topology:
        nonlocal position
        if position >= len(tokens):
            raise ValueError(f"Unexpected end of tree id {tree_id!r}")
        token = tokens[position]
        position += 1
        if token.isdigit():
            return int(token)
        if token != '{':
            raise ValueError(f"Unexpected {token!r} in tree id {tree_id!r}")
        children = [parse()]
        while position < len(tokens) and tokens[position] == ',':
            position += 1
            children.append(parse())
        if position >= len(tokens) or tokens[position] != '}':
            raise ValueError(f"Unbalanced braces in tree id {tree_id!r}")
        position += 1
        if len(children) < 2:
            raise ValueError(f"Clades need at least two children in tree id {tree_id!r}")
        return tuple(children)

    topology = parse()
    if position != len(tokens):
        raise ValueError(f"Trailing input in tree id {tree_id!r}")

    leaves = sorted(_leaves(topology))
    if leaves != list(range(1, len(leaves) + 1)):
        raise ValueError(f"Leaves of {tree_id!r} must be 1..n, each exactly once")
    return topology


def _leaves(topology: Topology) -> List[int]:
    if isinstance(topology, int):
        return [topology]
    return [leaf for child in topology for leaf in _leaves(child)]


def _n_clades(topology: Topology) -> int:
    if isinstance(topology, int):
        return 0
    return 1 + sum(_n_clades(child) for child in topology)


def tree_covariance(topology: Topology) -> LinearCovarianceModel:
    """Covariance model of a parsed tree topology."""
    n = len(_leaves(topology))
    t = indexed_symbols(TREE_PREFIX, n + _n_clades(topology))
    entries = [[sp.S.Zero] * n for _ in range(n)]
    for i in range(n):
        entries[i][i] = t[i]

    next_index = n

    def visit(node: Topology) -> List[int]:
        nonlocal next_index
        if isinstance(node, int):
            return [node - 1]
        groups = [visit(child) for child in node]
        variable = t[next_index]
        next_index += 1
        for a, first in enumerate(groups):
            for second in groups[a + 1:]:
                for i in first:
                    for j in second:
                        entries[i][j] = entries[j][i] = variable
        return [leaf for group in groups for leaf in group]

    visit(topology)
    return LinearCovarianceModel(sigma=sp.ImmutableMatrix(entries), parameters=tuple(t))


@lru_cache(maxsize=None)
def tree_catalog() -> Tuple[TreeEntry, ...]:
    """All catalog entries, built on first use."""
    return tuple(
        TreeEntry(id=tree_id, n=n, tree=tree_covariance(parse_topology(tree_id)))
        for n, tree_id in TREE_IDS
    )


@lru_cache(maxsize=None)
def _catalog_index() -> Mapping[str, TreeEntry]:
    return MappingProxyType({normalize_id(entry.id): entry for entry in tree_catalog()})


def tree(tree_id: str) -> Optional[LinearCovarianceModel]:
    """Get the covariance model of the tree with the given id.

    Whitespace in ``tree_id`` is ignored. Returns None if the tree is not in
    the catalog.
    """
    entry = _catalog_index().get(normalize_id(tree_id))
    if entry is None:
        return None
    return entry.tree


def trees(n: int) -> List[NamedTree]:
    """Return all catalog trees with ``n`` leaves as ``(id, tree)`` pairs."""
    return [NamedTree(id=entry.id, tree=entry.tree) for entry in tree_catalog() if entry.n == n]
