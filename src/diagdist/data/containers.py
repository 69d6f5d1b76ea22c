# Copyright 2025 Zhiyuan Yu (Heemskerk's lab, University of Michigan)
from __future__ import annotations

from collections.abc import Iterator

import numpy as np
from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.dataclasses import dataclass
from typing_extensions import Self

from .base_components import Matching, PersistencePair
from .constants import N_PAIR_COLUMNS, PAIR_CLASSES, STATUS_SUCCESS
from .types import Count_t, CriticalType, IndexMap, PairClass, PositiveFloat, Size_t


@dataclass(frozen=True)
class PersistenceDiagram:
    """Ordered, immutable collection of persistence pairs.

    The position of a pair is its identity: matchings refer to pairs by index.
    """

    pairs: tuple[PersistencePair, ...] = ()

    def __len__(self) -> int:
        return len(self.pairs)

    def __getitem__(self, idx: int) -> PersistencePair:
        return self.pairs[idx]

    def __iter__(self) -> Iterator[PersistencePair]:
        return iter(self.pairs)

    def to_array(self) -> np.ndarray:
        if len(self.pairs) == 0:
            return np.empty((0, N_PAIR_COLUMNS), dtype=np.float64)
        return np.ascontiguousarray(
            [pair.to_row() for pair in self.pairs], dtype=np.float64
        )

    @classmethod
    def from_array(cls, array: np.ndarray) -> PersistenceDiagram:
        array = np.asarray(array, dtype=np.float64)
        if array.ndim != 2 or array.shape[1] != N_PAIR_COLUMNS:
            raise ValueError(
                f"Expected an (n, {N_PAIR_COLUMNS}) array, got shape {array.shape}"
            )
        pairs = []
        for row in array:
            birth_value, death_value = float(row[3]), float(row[7])
            pairs.append(
                PersistencePair(
                    birth_vertex=0,
                    birth_type=CriticalType(int(row[0])),
                    death_vertex=0,
                    death_type=CriticalType(int(row[1])),
                    persistence=float(row[2]),
                    birth_value=birth_value,
                    birth_coords=tuple(float(v) for v in row[4:7]),
                    death_value=death_value,
                    death_coords=tuple(float(v) for v in row[8:11]),
                )
            )
        return cls(pairs=tuple(pairs))


def as_diagram_array(diagram: PersistenceDiagram | np.ndarray) -> np.ndarray:
    if isinstance(diagram, PersistenceDiagram):
        return diagram.to_array()
    array = np.ascontiguousarray(diagram, dtype=np.float64)
    if array.size == 0:
        return np.empty((0, N_PAIR_COLUMNS), dtype=np.float64)
    if array.ndim != 2 or array.shape[1] != N_PAIR_COLUMNS:
        raise ValueError(
            f"Expected an (n, {N_PAIR_COLUMNS}) array, got shape {array.shape}"
        )
    return array


class ClassPartition(BaseModel):
    min_map: IndexMap = Field(default_factory=list)
    max_map: IndexMap = Field(default_factory=list)
    saddle_map: IndexMap = Field(default_factory=list)

    def index_map(self, pair_class: PairClass) -> list[int]:
        match pair_class:
            case "min":
                return self.min_map
            case "max":
                return self.max_map
            case "saddle":
                return self.saddle_map
            case _:
                raise ValueError(f"{pair_class} unsupported")

    @property
    def n_min(self) -> Count_t:
        return len(self.min_map)

    @property
    def n_max(self) -> Count_t:
        return len(self.max_map)

    @property
    def n_saddle(self) -> Count_t:
        return len(self.saddle_map)

    def count(self, pair_class: PairClass) -> Count_t:
        return len(self.index_map(pair_class))


class ClassCostMatrix(BaseModel):
    """Cost matrix of one class, stored with rows <= columns.

    ``n_rows`` and ``n_cols`` count the class members on each side, the matrix
    has one extra row and column for the diagonal. ``transpose`` is set when
    the rows hold the second diagram.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    pair_class: PairClass
    matrix: np.ndarray
    n_rows: Size_t
    n_cols: Size_t
    transpose: bool = False

    @model_validator(mode="after")
    def check_shape(self) -> Self:
        if self.n_rows > self.n_cols:
            raise ValueError("cost matrix must have no more rows than columns")
        if self.matrix.shape != (self.n_rows + 1, self.n_cols + 1):
            raise ValueError(
                f"cost matrix shape {self.matrix.shape} does not match "
                f"({self.n_rows + 1}, {self.n_cols + 1})"
            )
        return self

    @property
    def is_empty(self) -> bool:
        return self.n_rows == 0 and self.n_cols == 0


class DistanceResult(BaseModel):
    status: int = STATUS_SUCCESS
    distance: PositiveFloat | None = None
    matchings: list[Matching] = Field(default_factory=list)
    added_persistence: dict[PairClass, float] = Field(
        default_factory=lambda: {pair_class: 0.0 for pair_class in PAIR_CLASSES}
    )
    n_mismatches: Count_t = 0
    transposed: bool = False
    zero_threshold: PositiveFloat | None = None
    geometrical_range: PositiveFloat | None = None

    @property
    def success(self) -> bool:
        return self.status == STATUS_SUCCESS

    @property
    def matched_pairs(self) -> list[tuple[int, int]]:
        return [(m.first, m.second) for m in self.matchings]
