# Copyright 2025 Zhiyuan Yu (Heemskerk's lab, University of Michigan)
from __future__ import annotations

import math
from typing import NamedTuple

from pydantic import model_validator
from pydantic.dataclasses import dataclass
from typing_extensions import Self

from .constants import CLASS_MAX, CLASS_MIN, CLASS_SADDLE
from .types import Coords_t, CriticalType, PairClass
from .utils import classify_pair_types

_CLASS_NAMES: dict[int, PairClass] = {
    CLASS_MIN: "min",
    CLASS_MAX: "max",
    CLASS_SADDLE: "saddle",
}


class Matching(NamedTuple):
    first: int
    second: int
    cost: float


@dataclass(frozen=True)
class PersistencePair:
    birth_vertex: int
    birth_type: CriticalType
    death_vertex: int
    death_type: CriticalType
    persistence: float
    pair_type: int = 0
    birth_value: float = 0.0
    birth_coords: Coords_t = (0.0, 0.0, 0.0)
    death_value: float = 0.0
    death_coords: Coords_t = (0.0, 0.0, 0.0)

    @model_validator(mode="after")
    def check_finite(self) -> Self:
        values = (
            self.persistence,
            self.birth_value,
            self.death_value,
            *self.birth_coords,
            *self.death_coords,
        )
        if not all(math.isfinite(v) for v in values):
            raise ValueError("persistence pair holds non-finite values")
        return self

    @classmethod
    def from_values(
        cls,
        birth_type: CriticalType,
        death_type: CriticalType,
        birth_value: float,
        death_value: float,
        birth_coords: Coords_t = (0.0, 0.0, 0.0),
        death_coords: Coords_t = (0.0, 0.0, 0.0),
        birth_vertex: int = 0,
        death_vertex: int = 0,
        pair_type: int = 0,
    ) -> PersistencePair:
        return cls(
            birth_vertex=birth_vertex,
            birth_type=birth_type,
            death_vertex=death_vertex,
            death_type=death_type,
            persistence=death_value - birth_value,
            pair_type=pair_type,
            birth_value=birth_value,
            birth_coords=birth_coords,
            death_value=death_value,
            death_coords=death_coords,
        )

    @property
    def abs_persistence(self) -> float:
        return abs(self.persistence)

    @property
    def pair_class(self) -> PairClass | None:
        code = classify_pair_types(int(self.birth_type), int(self.death_type))
        return _CLASS_NAMES.get(code)

    def to_row(self) -> list[float]:
        return [
            float(self.birth_type),
            float(self.death_type),
            self.persistence,
            self.birth_value,
            *self.birth_coords,
            self.death_value,
            *self.death_coords,
        ]
