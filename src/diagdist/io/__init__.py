# Copyright 2025 Zhiyuan Yu (Heemskerk's lab, University of Michigan)
from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path

import h5py
import numpy as np
import pandas as pd

from ..data.base_components import Matching, PersistencePair
from ..data.constants import PAIR_CLASSES
from ..data.containers import DistanceResult, PersistenceDiagram
from ..data.types import CriticalType

DIAGDIST_SCHEMA_KEY = "_diagdist_schema"
SCHEMA_VERSION = "1.0.0"

DIAGRAM_COLUMNS = [
    "birth_vertex",
    "birth_type",
    "death_vertex",
    "death_type",
    "persistence",
    "pair_type",
    "birth_value",
    "birth_x",
    "birth_y",
    "birth_z",
    "death_value",
    "death_x",
    "death_y",
    "death_z",
]
MATCHING_COLUMNS = ["index_1", "index_2", "cost"]


def diagram_from_dataframe(df: pd.DataFrame) -> PersistenceDiagram:
    missing = [c for c in DIAGRAM_COLUMNS if c not in df.columns]
    if missing:
        raise ValueError(f"Diagram table is missing columns: {missing}")

    pairs = [
        PersistencePair(
            birth_vertex=int(row.birth_vertex),
            birth_type=CriticalType(int(row.birth_type)),
            death_vertex=int(row.death_vertex),
            death_type=CriticalType(int(row.death_type)),
            persistence=float(row.persistence),
            pair_type=int(row.pair_type),
            birth_value=float(row.birth_value),
            birth_coords=(float(row.birth_x), float(row.birth_y), float(row.birth_z)),
            death_value=float(row.death_value),
            death_coords=(float(row.death_x), float(row.death_y), float(row.death_z)),
        )
        for row in df.itertuples(index=False)
    ]
    return PersistenceDiagram(pairs=tuple(pairs))


def diagram_to_dataframe(diagram: PersistenceDiagram) -> pd.DataFrame:
    records = [
        (
            p.birth_vertex,
            int(p.birth_type),
            p.death_vertex,
            int(p.death_type),
            p.persistence,
            p.pair_type,
            p.birth_value,
            *p.birth_coords,
            p.death_value,
            *p.death_coords,
        )
        for p in diagram
    ]
    return pd.DataFrame.from_records(records, columns=DIAGRAM_COLUMNS)


def read_diagram_csv(filepath: str | Path) -> PersistenceDiagram:
    filepath = Path(filepath)
    if not filepath.exists():
        raise FileNotFoundError(f"{filepath} not found")
    return diagram_from_dataframe(pd.read_csv(filepath))


def matchings_to_dataframe(
    matchings: DistanceResult | Sequence[Matching],
) -> pd.DataFrame:
    if isinstance(matchings, DistanceResult):
        matchings = matchings.matchings
    return pd.DataFrame.from_records(
        [tuple(m) for m in matchings], columns=MATCHING_COLUMNS
    ).astype({"index_1": np.int64, "index_2": np.int64, "cost": np.float64})


def save_distance_result(
    result: DistanceResult,
    filepath: str | Path,
    compress: bool = True,
    overwrite: bool = False,
) -> None:
    filepath = Path(filepath)
    if filepath.exists() and not overwrite:
        raise FileExistsError(f"{filepath} exists. Use overwrite=True to replace.")

    compression = "gzip" if compress and result.matchings else None
    with h5py.File(filepath, "w") as f:
        schema_grp = f.create_group(DIAGDIST_SCHEMA_KEY)
        schema_grp.attrs["version"] = SCHEMA_VERSION

        f.attrs["status"] = result.status
        f.attrs["distance"] = np.nan if result.distance is None else result.distance
        f.attrs["n_mismatches"] = result.n_mismatches
        f.attrs["transposed"] = result.transposed
        for key in ("zero_threshold", "geometrical_range"):
            value = getattr(result, key)
            f.attrs[key] = np.nan if value is None else value

        added_grp = f.create_group("added_persistence")
        for pair_class, value in result.added_persistence.items():
            added_grp.attrs[pair_class] = value

        grp = f.create_group("matchings")
        grp.create_dataset(
            "first",
            data=np.array([m.first for m in result.matchings], dtype=np.int64),
            compression=compression,
        )
        grp.create_dataset(
            "second",
            data=np.array([m.second for m in result.matchings], dtype=np.int64),
            compression=compression,
        )
        grp.create_dataset(
            "cost",
            data=np.array([m.cost for m in result.matchings], dtype=np.float64),
            compression=compression,
        )


def load_distance_result(filepath: str | Path) -> DistanceResult:
    filepath = Path(filepath)
    if not filepath.exists():
        raise FileNotFoundError(f"{filepath} not found")

    with h5py.File(filepath, "r") as f:
        if DIAGDIST_SCHEMA_KEY not in f:
            raise ValueError("Not a valid diagdist HDF5 file (missing schema)")

        version = f[DIAGDIST_SCHEMA_KEY].attrs["version"]
        if version != SCHEMA_VERSION:
            raise ValueError(f"Schema version {version} not supported")

        def _optional(key: str) -> float | None:
            value = float(f.attrs[key])
            return None if np.isnan(value) else value

        grp = f["matchings"]
        matchings = [
            Matching(int(i), int(j), float(c))
            for i, j, c in zip(grp["first"][()], grp["second"][()], grp["cost"][()])
        ]
        added = {
            pair_class: float(f["added_persistence"].attrs[pair_class])
            for pair_class in PAIR_CLASSES
        }
        return DistanceResult(
            status=int(f.attrs["status"]),
            distance=_optional("distance"),
            matchings=matchings,
            added_persistence=added,
            n_mismatches=int(f.attrs["n_mismatches"]),
            transposed=bool(f.attrs["transposed"]),
            zero_threshold=_optional("zero_threshold"),
            geometrical_range=_optional("geometrical_range"),
        )


__all__ = [
    "diagram_from_dataframe",
    "diagram_to_dataframe",
    "read_diagram_csv",
    "matchings_to_dataframe",
    "save_distance_result",
    "load_distance_result",
]
