# Copyright 2025 Zhiyuan Yu (Heemskerk's lab, University of Michigan)
from __future__ import annotations

import numpy as np
from loguru import logger

from ..data.constants import PAIR_CLASS_CODES, PAIR_CLASSES
from ..data.containers import (
    ClassCostMatrix,
    ClassPartition,
    PersistenceDiagram,
    as_diagram_array,
)
from ..data.types import PairClass
from ..data.utils import fill_class_cost_matrix, pair_classes
from .cost import CostModel

__all__ = ["build_class_cost_matrix", "build_cost_matrices"]


def build_class_cost_matrix(
    diagram1: PersistenceDiagram | np.ndarray,
    diagram2: PersistenceDiagram | np.ndarray,
    pair_class: PairClass,
    cost_model: CostModel,
    zero_thresh: float,
    partition1: ClassPartition,
    partition2: ClassPartition,
) -> ClassCostMatrix:
    diagram1 = as_diagram_array(diagram1)
    diagram2 = as_diagram_array(diagram2)
    n1 = partition1.count(pair_class)
    n2 = partition2.count(pair_class)
    transpose = n1 > n2
    n_rows, n_cols = min(n1, n2), max(n1, n2)
    matrix = np.zeros((n_rows + 1, n_cols + 1), dtype=np.float64)

    fill_class_cost_matrix(
        diagram1,
        diagram2,
        pair_classes(diagram1),
        pair_classes(diagram2),
        PAIR_CLASS_CODES[pair_class],
        zero_thresh,
        cost_model.weights,
        cost_model.w,
        matrix,
        transpose,
    )
    logger.debug(
        f"{pair_class} cost matrix: {matrix.shape[0]}x{matrix.shape[1]}"
        + (" (transposed)" if transpose else "")
    )
    return ClassCostMatrix(
        pair_class=pair_class,
        matrix=matrix,
        n_rows=n_rows,
        n_cols=n_cols,
        transpose=transpose,
    )


def build_cost_matrices(
    diagram1: PersistenceDiagram | np.ndarray,
    diagram2: PersistenceDiagram | np.ndarray,
    cost_model: CostModel,
    zero_thresh: float,
    partition1: ClassPartition,
    partition2: ClassPartition,
) -> dict[PairClass, ClassCostMatrix]:
    return {
        pair_class: build_class_cost_matrix(
            diagram1,
            diagram2,
            pair_class,
            cost_model,
            zero_thresh,
            partition1,
            partition2,
        )
        for pair_class in PAIR_CLASSES
    }
