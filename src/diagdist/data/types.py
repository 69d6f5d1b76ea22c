# Copyright 2025 Zhiyuan Yu (Heemskerk's lab, University of Michigan)
from enum import IntEnum
from typing import Annotated, Literal, TypeAlias

from pydantic import Field


class CriticalType(IntEnum):
    LOCAL_MINIMUM = 0
    SADDLE1 = 1
    SADDLE2 = 2
    LOCAL_MAXIMUM = 3
    DEGENERATE = 4
    REGULAR = 5


PairClass = Literal["min", "max", "saddle"]
AlgorithmMode = Literal["ttk", "legacy", "geometric", "parallel", "bench"]

Index_t = Annotated[int, Field(ge=0)]
Size_t = Annotated[int, Field(ge=0)]
Count_t = Annotated[int, Field(ge=0)]
Weight_t = Annotated[float, Field(ge=0)]
Percent_t = Annotated[float, Field(ge=0, le=100)]
PositiveFloat = Annotated[float, Field(ge=0)]
Coords_t: TypeAlias = tuple[float, float, float]
IndexMap: TypeAlias = Annotated[
    list[Index_t],
    Field(description="Diagram index of each class member, in order"),
]
