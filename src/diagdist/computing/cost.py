# Copyright 2025 Zhiyuan Yu (Heemskerk's lab, University of Michigan)
from __future__ import annotations

import numpy as np
from pydantic import BaseModel, Field

from ..data.base_components import PersistencePair
from ..data.metadata import DistanceConfig
from ..data.types import Weight_t
from ..data.utils import diagonal_distance, point_distance

PairLike = PersistencePair | np.ndarray


def _as_row(pair: PairLike) -> np.ndarray:
    if isinstance(pair, PersistencePair):
        return np.asarray(pair.to_row(), dtype=np.float64)
    return np.ascontiguousarray(pair, dtype=np.float64)


class CostModel(BaseModel):
    """Pairwise and diagonal matching costs under a weighted Lw combination.

    The infinity norm has its own solver; callers pass ``wasserstein=1`` (or
    any value below 1) for it and the cost terms are combined linearly.
    """

    px: Weight_t = 0.0
    py: Weight_t = 0.0
    pz: Weight_t = 0.0
    pe: Weight_t = 1.0
    ps: Weight_t = 1.0
    wasserstein: int = Field(default=1)

    @classmethod
    def from_config(cls, config: DistanceConfig) -> CostModel:
        px, py, pz, pe, ps = config.weights.tolist()
        norm = config.norm
        return cls(
            px=px, py=py, pz=pz, pe=pe, ps=ps, wasserstein=norm if norm else 1
        )

    @property
    def w(self) -> int:
        return max(self.wasserstein, 1)

    @property
    def weights(self) -> np.ndarray:
        return np.array([self.px, self.py, self.pz, self.pe, self.ps], dtype=np.float64)

    def distance(self, a: PairLike, b: PairLike) -> float:
        return float(point_distance(_as_row(a), _as_row(b), self.weights, self.w))

    def diagonal_distance(self, a: PairLike) -> float:
        return float(diagonal_distance(_as_row(a), self.weights, self.w))
