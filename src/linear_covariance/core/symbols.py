"""Symbol bookkeeping shared by the extractor, the builders and the models."""

import re
from typing import Iterable, List, Tuple

import sympy as sp

_NAME_PATTERN = re.compile(r'(\d+)')


def natural_key(symbol: sp.Symbol) -> Tuple:
    """Sort key that orders ``t2`` before ``t10``."""
    parts = _NAME_PATTERN.split(symbol.name)
    return tuple((0, int(p)) if p.isdigit() else (1, p) for p in parts if p)


def sorted_symbols(symbols: Iterable[sp.Symbol]) -> List[sp.Symbol]:
    """Return ``symbols`` deduplicated and in natural name order."""
    return sorted(set(symbols), key=natural_key)


def free_symbols(expressions: Iterable) -> List[sp.Symbol]:
    """Free symbols of a collection of expressions in natural name order.

    Plain numbers are skipped, so numeric and symbolic entries can be mixed.
    """
    found = set()
    for expr in expressions:
        if isinstance(expr, sp.Basic):
            found |= expr.free_symbols
    return sorted_symbols(found)


def indexed_symbols(prefix: str, count: int) -> List[sp.Symbol]:
    """Create ``prefix1 .. prefix<count>``."""
    if count < 1:
        return []
    return list(sp.symbols(f'{prefix}1:{count + 1}'))


def flatten_columns(matrix: sp.MatrixBase) -> List[sp.Expr]:
    """Column-major flattening of a sympy matrix."""
    rows, cols = matrix.shape
    return [matrix[i, j] for j in range(cols) for i in range(rows)]
