# Copyright 2025 Zhiyuan Yu (Heemskerk's lab, University of Michigan)
from __future__ import annotations

from abc import ABC, abstractmethod

import numpy as np
from loguru import logger
from scipy.optimize import linear_sum_assignment
from scipy.sparse import csr_matrix
from scipy.sparse.csgraph import maximum_bipartite_matching

from ..data.base_components import Matching
from ..data.constants import INFEASIBLE_COST
from ..data.types import Size_t

__all__ = [
    "AssignmentSolver",
    "MunkresSolver",
    "BottleneckSolver",
    "balance_cost_matrix",
    "diagonal_matchings",
    "make_solver",
]


def balance_cost_matrix(matrix: np.ndarray, n_rows: Size_t, n_cols: Size_t) -> np.ndarray:
    """
    Square (n_rows + n_cols) expansion of a cost matrix whose last row and
    column are the diagonal.

    Each row point gets a private diagonal column, each column point a private
    diagonal row, and diagonal slots pair with each other at no cost.
    Infeasible cells become ``inf``.
    """
    size = n_rows + n_cols
    balanced = np.full((size, size), np.inf, dtype=np.float64)
    balanced[:n_rows, :n_cols] = matrix[:n_rows, :n_cols]
    rows = np.arange(n_rows)
    balanced[rows, n_cols + rows] = matrix[:n_rows, n_cols]
    cols = np.arange(n_cols)
    balanced[n_rows + cols, cols] = matrix[n_rows, :n_cols]
    balanced[n_rows:, n_cols:] = 0.0
    balanced[balanced >= INFEASIBLE_COST] = np.inf
    return balanced


def _collect_matchings(
    matrix: np.ndarray,
    row_ind: np.ndarray,
    col_ind: np.ndarray,
    n_rows: Size_t,
    n_cols: Size_t,
) -> list[Matching]:
    matchings = []
    for r, c in zip(row_ind.tolist(), col_ind.tolist()):
        if r < n_rows and c < n_cols:
            matchings.append(Matching(r, c, float(matrix[r, c])))
        elif r < n_rows:
            matchings.append(Matching(r, n_cols, float(matrix[r, n_cols])))
        elif c < n_cols:
            matchings.append(Matching(n_rows, c, float(matrix[n_rows, c])))
    return matchings


def diagonal_matchings(matrix: np.ndarray, n_cols: Size_t) -> list[Matching]:
    """Matchings of a class without rows: every column goes to the diagonal."""
    return [Matching(0, j, float(matrix[0, j])) for j in range(n_cols)]


class AssignmentSolver(ABC):
    """Assigns every row and column point either to a point or to the diagonal.

    ``matrix`` has ``n_rows + 1`` rows and ``n_cols + 1`` columns, the last
    ones being the diagonal. Returned matchings are in matrix coordinates; a
    point sent to the diagonal is reported with index ``n_cols`` (or
    ``n_rows``) on the other side. The matrix is never modified.
    """

    @abstractmethod
    def solve(
        self, matrix: np.ndarray, n_rows: Size_t, n_cols: Size_t
    ) -> list[Matching]:
        pass


class MunkresSolver(AssignmentSolver):
    """Minimum total cost assignment, used for finite norms."""

    def solve(
        self, matrix: np.ndarray, n_rows: Size_t, n_cols: Size_t
    ) -> list[Matching]:
        balanced = balance_cost_matrix(matrix, n_rows, n_cols)
        row_ind, col_ind = linear_sum_assignment(balanced)
        return _collect_matchings(matrix, row_ind, col_ind, n_rows, n_cols)


class BottleneckSolver(AssignmentSolver):
    """Assignment minimizing the largest matched cost, used for the infinity norm.

    Binary search over the distinct finite costs; a threshold is feasible when
    the graph of cells not above it has a perfect matching (augmenting paths).
    """

    @staticmethod
    def _perfect_matching(balanced: np.ndarray, threshold: float) -> np.ndarray | None:
        graph = csr_matrix((balanced <= threshold).astype(np.int8))
        row_to_col = maximum_bipartite_matching(graph, perm_type="column")
        if np.any(row_to_col < 0):
            return None
        return row_to_col

    def solve(
        self, matrix: np.ndarray, n_rows: Size_t, n_cols: Size_t
    ) -> list[Matching]:
        balanced = balance_cost_matrix(matrix, n_rows, n_cols)
        candidates = np.unique(balanced[np.isfinite(balanced)])

        # the largest candidate always admits the all-diagonal assignment
        lo, hi = 0, len(candidates) - 1
        while lo < hi:
            mid = (lo + hi) // 2
            if self._perfect_matching(balanced, candidates[mid]) is not None:
                hi = mid
            else:
                lo = mid + 1

        row_to_col = self._perfect_matching(balanced, candidates[lo])
        if row_to_col is None:
            raise RuntimeError("No perfect matching at the largest finite cost")
        logger.debug(f"Bottleneck threshold {candidates[lo]:.6g}")
        return _collect_matchings(
            matrix, np.arange(len(row_to_col)), row_to_col, n_rows, n_cols
        )


def make_solver(bottleneck: bool) -> AssignmentSolver:
    if bottleneck:
        return BottleneckSolver()
    return MunkresSolver()
