# Copyright 2025 Zhiyuan Yu (Heemskerk's lab, University of Michigan)
from __future__ import annotations

from collections.abc import Sequence

from ..data.base_components import Matching
from ..data.constants import INFINITY_NORM

__all__ = ["reconcile_local_index", "build_mappings"]


def reconcile_local_index(
    row: int,
    col: int,
    map1: Sequence[int],
    map2: Sequence[int],
    transpose_global: bool,
    transpose_local: bool,
) -> tuple[int, int] | None:
    """
    Translate a matrix cell back to (index in first diagram, index in second diagram).

    ``map1`` and ``map2`` are the class index maps of the row and column
    diagrams as given to the matrix builder, before any local transposition.
    ``transpose_global`` tells that those diagrams were swapped at the top,
    ``transpose_local`` that the class matrix stores them swapped. Returns None
    for a cell on the diagonal row or column.
    """
    row_map = map2 if transpose_local else map1
    col_map = map1 if transpose_local else map2
    if not (0 <= row < len(row_map) and 0 <= col < len(col_map)):
        return None

    point1 = row_map[row]
    point2 = col_map[col]
    if transpose_global ^ transpose_local:
        return point2, point1
    return point1, point2


def build_mappings(
    local_matchings: Sequence[Matching],
    transpose_global: bool,
    transpose_local: bool,
    output_matchings: list[Matching],
    map1: Sequence[int],
    map2: Sequence[int],
    wasserstein: int,
) -> float:
    """
    Append reconciled matchings to ``output_matchings`` and return the cost of
    pairs matched to the diagonal (summed for finite norms, max for infinity).
    """
    added_persistence = 0.0
    for matching in local_matchings:
        cost = abs(matching.cost)
        pair = reconcile_local_index(
            matching.first,
            matching.second,
            map1,
            map2,
            transpose_global,
            transpose_local,
        )
        if pair is None:
            if wasserstein == INFINITY_NORM:
                added_persistence = max(cost, added_persistence)
            else:
                added_persistence += cost
            continue
        output_matchings.append(Matching(pair[0], pair[1], cost))
    return added_persistence
