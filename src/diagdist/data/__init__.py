from .base_components import Matching, PersistencePair
from .containers import (
    ClassCostMatrix,
    ClassPartition,
    DistanceResult,
    PersistenceDiagram,
)
from .metadata import DistanceConfig
from .types import CriticalType

__all__ = [
    "ClassCostMatrix",
    "ClassPartition",
    "CriticalType",
    "DistanceConfig",
    "DistanceResult",
    "Matching",
    "PersistenceDiagram",
    "PersistencePair",
]
