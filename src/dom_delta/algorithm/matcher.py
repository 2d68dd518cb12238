"""Minimum-degree assignment between modified and existing nodes.

Rows of the degree matrix are modified nodes, columns existing nodes, and
each cell is the aggregate difference degree of that pair.  A critically
different pair is marked ``np.inf`` and must never be assigned.

scipy's ``linear_sum_assignment`` rejects infinite cells, so they are
replaced by a forbidden-cell cost before solving.  Degrees lie in [0, 1],
so an assignment never sums to more than ``min(rows, cols)``; a forbidden
cost of ``min(rows, cols) + 1`` makes using one forbidden cell always worse
than any choice of finite ones.  Pairs that land on forbidden cells are
dropped from the result.
"""

from __future__ import annotations

import numpy as np
from scipy.optimize import linear_sum_assignment  # type: ignore[import-untyped]

__all__ = ["match_by_degree"]


def match_by_degree(degrees: np.ndarray) -> dict[int, int]:
    """Pair modified and existing nodes with the lowest summed degree.

    Args:
        degrees: Array of shape ``(n_modified, n_existing)`` with values in
            [0, 1] or ``np.inf`` for forbidden pairs.  Not modified.

    Returns:
        Mapping of modified index to existing index.  Modified nodes left
        without an allowed partner are absent.
    """
    if degrees.size == 0:
        return {}

    forbidden = np.isinf(degrees)
    if forbidden.all():
        return {}

    cost = np.where(forbidden, float(min(degrees.shape) + 1), degrees)
    row_ind, col_ind = linear_sum_assignment(cost)
    return {
        int(j): int(i)
        for j, i in zip(row_ind.tolist(), col_ind.tolist(), strict=True)
        if not forbidden[j, i]
    }
