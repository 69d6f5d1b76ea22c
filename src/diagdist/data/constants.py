# Copyright 2025 Zhiyuan Yu (Heemskerk's lab, University of Michigan)
from __future__ import annotations

import sys

from .types import AlgorithmMode, PairClass

# matrix cell that no assignment may use
INFEASIBLE_COST: float = sys.float_info.max

INFINITY_TOKEN: str = "inf"
INFINITY_NORM: int = -1

DEFAULT_WASSERSTEIN: str = "2"
DEFAULT_ALGORITHM: str = "ttk"
DEFAULT_PX: float = 0.0
DEFAULT_PY: float = 0.0
DEFAULT_PZ: float = 0.0
DEFAULT_PE: float = 1.0
DEFAULT_PS: float = 1.0
DEFAULT_ZERO_THRESHOLD: float = 0.0

MISMATCH_RTOL: float = 1e-9
MISMATCH_ATOL: float = 1e-12

STATUS_SUCCESS: int = 0
STATUS_UNSUPPORTED_ALGORITHM: int = -1
STATUS_INVALID_ALGORITHM: int = -2
STATUS_EMPTY_DIAGRAMS: int = -3
STATUS_INVALID_NORM: int = -4

PAIR_CLASSES: tuple[PairClass, ...] = ("min", "max", "saddle")
PAIR_CLASS_LABELS: dict[PairClass, str] = {
    "min": "minima",
    "max": "maxima",
    "saddle": "saddles",
}

# integer class codes used inside the jitted kernels, same order as PAIR_CLASSES
CLASS_NONE: int = -1
CLASS_MIN: int = 0
CLASS_MAX: int = 1
CLASS_SADDLE: int = 2
PAIR_CLASS_CODES: dict[PairClass, int] = {
    "min": CLASS_MIN,
    "max": CLASS_MAX,
    "saddle": CLASS_SADDLE,
}

# dense row layout of a persistence pair
COL_BIRTH_TYPE: int = 0
COL_DEATH_TYPE: int = 1
COL_PERSISTENCE: int = 2
COL_BIRTH_VALUE: int = 3
COL_BIRTH_X: int = 4
COL_DEATH_VALUE: int = 7
COL_DEATH_X: int = 8
N_PAIR_COLUMNS: int = 11

ALGORITHM_SELECTORS: dict[str, AlgorithmMode] = {
    "0": "ttk",
    "ttk": "ttk",
    "1": "legacy",
    "legacy": "legacy",
    "2": "geometric",
    "geometric": "geometric",
    "3": "parallel",
    "parallel": "parallel",
    "bench": "bench",
}
PV_ALGORITHM_SELECTORS: dict[int, AlgorithmMode] = {
    0: "ttk",
    1: "legacy",
    2: "geometric",
    3: "parallel",
    4: "bench",
}
ALGORITHM_DESCRIPTIONS: dict[AlgorithmMode, str] = {
    "ttk": "Solving with the exact assignment approach",
    "legacy": "Solving with the legacy exact approach.",
    "geometric": "Solving with the approximate geometric approach.",
    "parallel": "Solving with the parallel approach",
    "bench": "Benchmarking",
}
