# Copyright 2025 Zhiyuan Yu (Heemskerk's lab, University of Michigan)
from __future__ import annotations

import time
from collections.abc import Sequence

import numpy as np
from loguru import logger

from ..computing.bottleneck import compute_bottleneck
from ..data.base_components import PersistencePair
from ..data.constants import (
    ALGORITHM_DESCRIPTIONS,
    ALGORITHM_SELECTORS,
    DEFAULT_ALGORITHM,
    DEFAULT_PE,
    DEFAULT_PS,
    DEFAULT_PX,
    DEFAULT_PY,
    DEFAULT_PZ,
    DEFAULT_WASSERSTEIN,
    DEFAULT_ZERO_THRESHOLD,
    PV_ALGORITHM_SELECTORS,
    STATUS_INVALID_ALGORITHM,
    STATUS_UNSUPPORTED_ALGORITHM,
)
from ..data.containers import DistanceResult, PersistenceDiagram
from ..data.metadata import DistanceConfig
from ..data.types import AlgorithmMode, Percent_t, Weight_t
from ..utils.logging import configure_logger

__all__ = ["bottleneck_distance", "execute"]

DiagramLike = PersistenceDiagram | Sequence[PersistencePair] | np.ndarray


def _as_diagram(diagram: DiagramLike) -> PersistenceDiagram:
    if isinstance(diagram, PersistenceDiagram):
        return diagram
    if isinstance(diagram, np.ndarray):
        # dense rows go through the same finiteness checks as pairs
        return PersistenceDiagram.from_array(diagram)
    return PersistenceDiagram(pairs=tuple(diagram))


def _resolve_algorithm(config: DistanceConfig) -> AlgorithmMode | None:
    if config.pv_algorithm >= 0:
        return PV_ALGORITHM_SELECTORS.get(config.pv_algorithm)
    return ALGORITHM_SELECTORS.get(config.algorithm.lower())


def execute(
    diagram1: DiagramLike,
    diagram2: DiagramLike,
    config: DistanceConfig,
) -> DistanceResult:
    """
    Run the distance computation selected by ``config.algorithm``.

    Only the exact assignment mode (``"ttk"`` / ``"0"``) is implemented; the
    other known modes report ``STATUS_UNSUPPORTED_ALGORITHM`` and unknown
    selectors ``STATUS_INVALID_ALGORITHM``.
    """
    start = time.perf_counter()
    mode = _resolve_algorithm(config)
    if mode is None:
        logger.error("You must specify a valid assignment algorithm.")
        return DistanceResult(status=STATUS_INVALID_ALGORITHM)

    logger.info(ALGORITHM_DESCRIPTIONS[mode])
    if mode != "ttk":
        logger.error("Not supported")
        return DistanceResult(status=STATUS_UNSUPPORTED_ALGORITHM)

    result = compute_bottleneck(_as_diagram(diagram1), _as_diagram(diagram2), config)
    if result.success:
        logger.success(f"Complete [{time.perf_counter() - start:.3f}s]")
    return result


def bottleneck_distance(
    diagram1: DiagramLike,
    diagram2: DiagramLike,
    wasserstein: str | int = DEFAULT_WASSERSTEIN,
    algorithm: str = DEFAULT_ALGORITHM,
    use_persistence_metric: bool = False,
    px: Weight_t = DEFAULT_PX,
    py: Weight_t = DEFAULT_PY,
    pz: Weight_t = DEFAULT_PZ,
    pe: Weight_t = DEFAULT_PE,
    ps: Weight_t = DEFAULT_PS,
    zero_threshold: Percent_t = DEFAULT_ZERO_THRESHOLD,
    verbose: bool = False,
) -> DistanceResult:
    """
    bottleneck_distance(diagram1, diagram2, wasserstein, ...)

    Distance between two persistence diagrams of critical point pairs.

    Parameters
    ----------
    diagram1, diagram2 : PersistenceDiagram, sequence of PersistencePair or ndarray
        Input diagrams; arrays follow the row layout of ``PersistencePair.to_row``.
    wasserstein : str or int, default='2'
        Norm order, a positive integer, or ``'inf'`` (also ``'-1'`` and ``'0'``)
        for the bottleneck distance.
    algorithm : str, default='ttk'
        Assignment mode. Only ``'ttk'`` (or ``'0'``) is supported.
    use_persistence_metric : bool, default=False
        Ignore the spatial weights and compare pairs on their scalar values only.
    px, py, pz : float
        Weights of the spatial axes.
    pe, ps : float
        Weights of the scalar value terms for extrema and saddles.
    zero_threshold : float, default=0
        Percentage of the persistence range below which pairs are ignored.
    verbose : bool, default=False
        Print progress through a rich console.

    Returns
    -------
    DistanceResult
        ``status`` is 0 on success, negative otherwise (see ``data.constants``).
    """
    if verbose:
        configure_logger()
    config = DistanceConfig(
        wasserstein=wasserstein,
        algorithm=algorithm,
        use_persistence_metric=use_persistence_metric,
        px=px,
        py=py,
        pz=pz,
        pe=pe,
        ps=ps,
        zero_threshold=zero_threshold,
    )
    return execute(diagram1, diagram2, config)
