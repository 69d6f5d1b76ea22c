# Copyright 2025 Zhiyuan Yu (Heemskerk's lab, University of Michigan)
from __future__ import annotations

import numpy as np
from pydantic import BaseModel, field_validator

from .constants import (
    DEFAULT_ALGORITHM,
    DEFAULT_PE,
    DEFAULT_PS,
    DEFAULT_PX,
    DEFAULT_PY,
    DEFAULT_PZ,
    DEFAULT_WASSERSTEIN,
    DEFAULT_ZERO_THRESHOLD,
    INFINITY_NORM,
    INFINITY_TOKEN,
)
from .types import Percent_t, Weight_t


class DistanceConfig(BaseModel):
    wasserstein: str = DEFAULT_WASSERSTEIN
    algorithm: str = DEFAULT_ALGORITHM
    # integer selector used by pipeline front-ends, ignored when negative
    pv_algorithm: int = -1
    use_persistence_metric: bool = False
    px: Weight_t = DEFAULT_PX
    py: Weight_t = DEFAULT_PY
    pz: Weight_t = DEFAULT_PZ
    pe: Weight_t = DEFAULT_PE
    ps: Weight_t = DEFAULT_PS
    zero_threshold: Percent_t = DEFAULT_ZERO_THRESHOLD

    @field_validator("wasserstein", "algorithm", mode="before")
    @classmethod
    def stringify(cls, v):
        return str(v).strip()

    @property
    def norm(self) -> int | None:
        """
        Norm order parsed from ``wasserstein``: a positive integer, or ``-1``
        for the bottleneck distance (``"inf"``, ``"-1"`` or ``"0"``). None when
        the specifier is not an integer or is below -1.
        """
        if self.wasserstein.lower() == INFINITY_TOKEN:
            return INFINITY_NORM
        try:
            w = int(self.wasserstein)
        except ValueError:
            return None
        if w < INFINITY_NORM:
            return None
        return w if w > 0 else INFINITY_NORM

    @property
    def is_bottleneck(self) -> bool:
        return self.norm == INFINITY_NORM

    @property
    def weights(self) -> np.ndarray:
        """Cost weights as (px, py, pz, pe, ps)."""
        if self.use_persistence_metric:
            return np.array([0.0, 0.0, 0.0, self.pe, self.ps], dtype=np.float64)
        return np.array(
            [self.px, self.py, self.pz, self.pe, self.ps], dtype=np.float64
        )
