# Copyright 2025 Zhiyuan Yu (Heemskerk's lab, University of Michigan)
import numpy as np
from numba import jit

from .constants import (
    CLASS_MAX,
    CLASS_MIN,
    CLASS_NONE,
    CLASS_SADDLE,
    COL_BIRTH_TYPE,
    COL_BIRTH_VALUE,
    COL_BIRTH_X,
    COL_DEATH_TYPE,
    COL_DEATH_VALUE,
    COL_DEATH_X,
    COL_PERSISTENCE,
    INFEASIBLE_COST,
)
from .types import CriticalType

_MINIMUM = int(CriticalType.LOCAL_MINIMUM)
_SADDLE1 = int(CriticalType.SADDLE1)
_SADDLE2 = int(CriticalType.SADDLE2)
_MAXIMUM = int(CriticalType.LOCAL_MAXIMUM)


@jit(nopython=True, cache=True)
def classify_pair_types(birth_type: int, death_type: int) -> int:
    """
    Class code of a pair from its two critical types. A (min, max) pair spans a
    whole component and is counted as a maximum only.
    """
    if birth_type == _MINIMUM and death_type == _MAXIMUM:
        return CLASS_MAX
    if birth_type == _MAXIMUM or death_type == _MAXIMUM:
        return CLASS_MAX
    if birth_type == _MINIMUM or death_type == _MINIMUM:
        return CLASS_MIN
    if (birth_type == _SADDLE1 and death_type == _SADDLE2) or (
        birth_type == _SADDLE2 and death_type == _SADDLE1
    ):
        return CLASS_SADDLE
    return CLASS_NONE


@jit(nopython=True, cache=True)
def pair_classes(diagram: np.ndarray) -> np.ndarray:
    n = diagram.shape[0]
    classes = np.empty(n, dtype=np.int64)
    for k in range(n):
        classes[k] = classify_pair_types(
            int(diagram[k, COL_BIRTH_TYPE]), int(diagram[k, COL_DEATH_TYPE])
        )
    return classes


@jit(nopython=True, cache=True)
def point_distance(a: np.ndarray, b: np.ndarray, weights: np.ndarray, w: int) -> float:
    """
    Cost of matching pair ``a`` with pair ``b``.

    weights holds (px, py, pz, pe, ps). The branch (minimum, maximum or saddle)
    is chosen from the types of ``a``; both pairs are expected in the same class.
    """
    px, py, pz, pe, ps = weights[0], weights[1], weights[2], weights[3], weights[4]
    is_min = int(a[COL_BIRTH_TYPE]) == _MINIMUM
    is_max = int(a[COL_DEATH_TYPE]) == _MAXIMUM

    x = (pe if is_min and not is_max else ps) * abs(
        a[COL_BIRTH_VALUE] - b[COL_BIRTH_VALUE]
    ) ** w
    y = (pe if is_max else ps) * abs(a[COL_DEATH_VALUE] - b[COL_DEATH_VALUE]) ** w

    axis_weights = (px, py, pz)
    geo = 0.0
    for k in range(3):
        if is_max:
            delta = a[COL_DEATH_X + k] - b[COL_DEATH_X + k]
        elif is_min:
            delta = a[COL_BIRTH_X + k] - b[COL_BIRTH_X + k]
        else:
            mid_a = (a[COL_BIRTH_X + k] + a[COL_DEATH_X + k]) / 2
            mid_b = (b[COL_BIRTH_X + k] + b[COL_DEATH_X + k]) / 2
            delta = mid_a - mid_b
        geo += axis_weights[k] * abs(delta) ** w

    return (x + y + geo) ** (1.0 / w)


@jit(nopython=True, cache=True)
def diagonal_distance(a: np.ndarray, weights: np.ndarray, w: int) -> float:
    """Cost of matching pair ``a`` with its own diagonal projection."""
    px, py, pz, pe, ps = weights[0], weights[1], weights[2], weights[3], weights[4]
    is_min = int(a[COL_BIRTH_TYPE]) == _MINIMUM
    is_max = int(a[COL_DEATH_TYPE]) == _MAXIMUM

    inf_distance = (pe if is_min or is_max else ps) * abs(
        a[COL_BIRTH_VALUE] - a[COL_DEATH_VALUE]
    ) ** w
    axis_weights = (px, py, pz)
    geo = 0.0
    for k in range(3):
        geo += axis_weights[k] * abs(a[COL_DEATH_X + k] - a[COL_BIRTH_X + k]) ** w
    return (inf_distance + geo) ** (1.0 / w)


@jit(nopython=True)
def _write_cell(
    matrix: np.ndarray, i: int, j: int, value: float, reverse: bool
) -> None:
    if reverse:
        matrix[j, i] = value
    else:
        matrix[i, j] = value


@jit(nopython=True, cache=True)
def fill_class_cost_matrix(
    diagram1: np.ndarray,
    diagram2: np.ndarray,
    classes1: np.ndarray,
    classes2: np.ndarray,
    target_class: int,
    zero_thresh: float,
    weights: np.ndarray,
    w: int,
    matrix: np.ndarray,
    reverse: bool,
) -> None:
    """
    Fill the cost matrix of one class in place.

    Rows follow diagram1 and columns diagram2 (swapped when ``reverse``). The
    last column holds the diagonal cost of each diagram1 pair, the last row the
    diagonal cost of each diagram2 pair, and the last cell is infeasible.
    """
    row = 0
    for i in range(diagram1.shape[0]):
        a = diagram1[i]
        if abs(a[COL_PERSISTENCE]) < zero_thresh or classes1[i] != target_class:
            continue
        diag_a = diagonal_distance(a, weights, w)
        col = 0
        for j in range(diagram2.shape[0]):
            b = diagram2[j]
            if abs(b[COL_PERSISTENCE]) < zero_thresh or classes2[j] != target_class:
                continue
            cost = point_distance(a, b, weights, w)
            # dominated by sending both pairs to the diagonal
            if cost > diag_a + diagonal_distance(b, weights, w):
                cost = INFEASIBLE_COST
            _write_cell(matrix, row, col, cost, reverse)
            col += 1
        _write_cell(matrix, row, col, diag_a, reverse)
        row += 1

    col = 0
    for j in range(diagram2.shape[0]):
        b = diagram2[j]
        if abs(b[COL_PERSISTENCE]) < zero_thresh or classes2[j] != target_class:
            continue
        _write_cell(matrix, row, col, diagonal_distance(b, weights, w), reverse)
        col += 1

    _write_cell(matrix, row, col, INFEASIBLE_COST, reverse)
