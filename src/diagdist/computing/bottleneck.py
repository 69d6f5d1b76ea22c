# Copyright 2025 Zhiyuan Yu (Heemskerk's lab, University of Michigan)
from __future__ import annotations

import numpy as np
from loguru import logger

from ..data.base_components import Matching
from ..data.constants import (
    MISMATCH_ATOL,
    MISMATCH_RTOL,
    PAIR_CLASS_LABELS,
    PAIR_CLASSES,
    STATUS_EMPTY_DIAGRAMS,
    STATUS_INVALID_NORM,
)
from ..data.containers import (
    ClassPartition,
    DistanceResult,
    PersistenceDiagram,
    as_diagram_array,
)
from ..data.metadata import DistanceConfig
from ..data.types import PairClass
from ..utils.logging import log_elapsed
from .assignment import AssignmentSolver, diagonal_matchings, make_solver
from .classify import (
    classify_diagram,
    compute_geometrical_range,
    compute_minimum_relevant_persistence,
)
from .cost import CostModel
from .cost_matrix import build_class_cost_matrix
from .matching import build_mappings

__all__ = ["compute_bottleneck"]


def _solve_class(
    pair_class: PairClass,
    diagram1: np.ndarray,
    diagram2: np.ndarray,
    partition1: ClassPartition,
    partition2: ClassPartition,
    cost_model: CostModel,
    zero_thresh: float,
    solver: AssignmentSolver,
    transpose_global: bool,
    wasserstein: int,
    matchings: list[Matching],
) -> float:
    cost_matrix = build_class_cost_matrix(
        diagram1, diagram2, pair_class, cost_model, zero_thresh, partition1, partition2
    )
    if cost_matrix.is_empty:
        return 0.0

    logger.info(f"Affecting {PAIR_CLASS_LABELS[pair_class]}...")
    if cost_matrix.n_rows == 0:
        local_matchings = diagonal_matchings(cost_matrix.matrix, cost_matrix.n_cols)
    else:
        local_matchings = solver.solve(
            cost_matrix.matrix.copy(), cost_matrix.n_rows, cost_matrix.n_cols
        )

    return build_mappings(
        local_matchings,
        transpose_global,
        cost_matrix.transpose,
        matchings,
        partition1.index_map(pair_class),
        partition2.index_map(pair_class),
        wasserstein,
    )


def compute_bottleneck(
    diagram1: PersistenceDiagram | np.ndarray,
    diagram2: PersistenceDiagram | np.ndarray,
    config: DistanceConfig,
) -> DistanceResult:
    """
    Bottleneck (``wasserstein="inf"``) or Wasserstein distance between two diagrams.

    Pairs are matched within their class only (minima, maxima, saddles). The
    returned matchings hold (index in diagram1, index in diagram2, cost); pairs
    sent to the diagonal only contribute to ``added_persistence``.
    """
    arr1 = as_diagram_array(diagram1)
    arr2 = as_diagram_array(diagram2)

    transposed = arr1.shape[0] > arr2.shape[0]
    ct1, ct2 = (arr2, arr1) if transposed else (arr1, arr2)
    if transposed:
        logger.info("The first persistence diagram is larger than the second.")
        logger.info("Solving the transposed problem.")

    wasserstein = config.norm
    if wasserstein is None:
        logger.error(f"Invalid norm specifier {config.wasserstein!r}")
        return DistanceResult(status=STATUS_INVALID_NORM, transposed=transposed)

    if ct1.shape[0] + ct2.shape[0] == 0:
        logger.error("Both persistence diagrams are empty")
        return DistanceResult(status=STATUS_EMPTY_DIAGRAMS, transposed=transposed)

    zero_thresh = compute_minimum_relevant_persistence(ct1, ct2, config.zero_threshold)
    partition1 = classify_diagram(ct1, zero_thresh)
    partition2 = classify_diagram(ct2, zero_thresh)
    logger.debug(
        f"Relevance threshold {zero_thresh:.6g}; "
        f"rows (min, max, saddle) = ({partition1.n_min}, {partition1.n_max}, {partition1.n_saddle}), "
        f"cols = ({partition2.n_min}, {partition2.n_max}, {partition2.n_saddle})"
    )

    cost_model = CostModel.from_config(config)
    bottleneck = config.is_bottleneck
    solver = make_solver(bottleneck)

    matchings: list[Matching] = []
    added_persistence: dict[PairClass, float] = {}
    with log_elapsed("Assignment done", level="INFO"):
        for pair_class in PAIR_CLASSES:
            added_persistence[pair_class] = _solve_class(
                pair_class,
                ct1,
                ct2,
                partition1,
                partition2,
                cost_model,
                zero_thresh,
                solver,
                transposed,
                wasserstein,
                matchings,
            )

    # recompute each matched cost from the pairs as a check on the solver output
    affectation = 0.0
    n_mismatches = 0
    for matching in matchings:
        i, j = (
            (matching.second, matching.first)
            if transposed
            else (matching.first, matching.second)
        )
        partial = cost_model.distance(ct1[i], ct2[j])
        if not np.isclose(partial, matching.cost, rtol=MISMATCH_RTOL, atol=MISMATCH_ATOL):
            n_mismatches += 1
        if bottleneck:
            affectation = max(affectation, partial)
        else:
            affectation += partial

    if n_mismatches > 0:
        logger.warning(f"Distance mismatch when rebuilding {n_mismatches} matchings")

    added = list(added_persistence.values())
    if bottleneck:
        distance = max(affectation, *added)
    else:
        distance = (affectation + sum(added)) ** (1.0 / wasserstein)

    logger.info(
        f"Diagonal costs: min={added_persistence['min']:.6g}, "
        f"max={added_persistence['max']:.6g}, saddle={added_persistence['saddle']:.6g}"
    )
    logger.info(f"Matched cost {affectation:.6g}, distance {distance:.6g}")

    return DistanceResult(
        distance=float(distance),
        matchings=matchings,
        added_persistence=added_persistence,
        n_mismatches=n_mismatches,
        transposed=transposed,
        zero_threshold=zero_thresh,
        geometrical_range=compute_geometrical_range(arr1, arr2),
    )
