from . import io  # noqa: F401
from . import tools as tl  # noqa: F401
from .data import (
    CriticalType,
    DistanceConfig,
    DistanceResult,
    Matching,
    PersistenceDiagram,
    PersistencePair,
)

__all__ = [
    "CriticalType",
    "DistanceConfig",
    "DistanceResult",
    "Matching",
    "PersistenceDiagram",
    "PersistencePair",
    "io",
    "tl",
]
