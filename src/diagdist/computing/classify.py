# Copyright 2025 Zhiyuan Yu (Heemskerk's lab, University of Michigan)
from __future__ import annotations

import numpy as np

from ..data.constants import (
    CLASS_MAX,
    CLASS_MIN,
    CLASS_SADDLE,
    COL_BIRTH_X,
    COL_DEATH_X,
    COL_PERSISTENCE,
)
from ..data.containers import ClassPartition, PersistenceDiagram, as_diagram_array
from ..data.utils import pair_classes

__all__ = [
    "classify_diagram",
    "compute_minimum_relevant_persistence",
    "compute_geometrical_range",
]


def classify_diagram(
    diagram: PersistenceDiagram | np.ndarray, zero_thresh: float = 0.0
) -> ClassPartition:
    """
    Split a diagram into min, max and saddle index maps. Pairs whose absolute
    persistence is below ``zero_thresh`` land in no map.
    """
    arr = as_diagram_array(diagram)
    classes = pair_classes(arr)
    relevant = np.abs(arr[:, COL_PERSISTENCE]) >= zero_thresh
    return ClassPartition(
        min_map=np.flatnonzero(relevant & (classes == CLASS_MIN)).tolist(),
        max_map=np.flatnonzero(relevant & (classes == CLASS_MAX)).tolist(),
        saddle_map=np.flatnonzero(relevant & (classes == CLASS_SADDLE)).tolist(),
    )


def compute_minimum_relevant_persistence(
    diagram1: PersistenceDiagram | np.ndarray,
    diagram2: PersistenceDiagram | np.ndarray,
    percentage: float,
) -> float:
    """
    Persistence below which pairs are ignored: ``percentage`` percent of the
    range of absolute persistence over both diagrams. Percentages outside
    (0, 100) disable pruning.
    """
    arr1 = as_diagram_array(diagram1)
    arr2 = as_diagram_array(diagram2)
    persistences = np.sort(
        np.abs(np.concatenate([arr1[:, COL_PERSISTENCE], arr2[:, COL_PERSISTENCE]]))
    )
    if persistences.size == 0:
        raise ValueError("at least one persistence pair is required")
    s = percentage / 100.0 if 0.0 < percentage < 100.0 else 0.0
    return float(s * (persistences[-1] - persistences[0]))


def compute_geometrical_range(
    diagram1: PersistenceDiagram | np.ndarray,
    diagram2: PersistenceDiagram | np.ndarray,
) -> float:
    """Diagonal length of the bounding box of every birth and death position."""
    arr = np.concatenate([as_diagram_array(diagram1), as_diagram_array(diagram2)])
    if arr.shape[0] == 0:
        return 0.0
    coords = np.concatenate(
        [arr[:, COL_BIRTH_X : COL_BIRTH_X + 3], arr[:, COL_DEATH_X : COL_DEATH_X + 3]]
    )
    extent = coords.max(axis=0) - coords.min(axis=0)
    return float(np.sqrt(np.sum(extent**2)))
