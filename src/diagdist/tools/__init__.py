# Copyright 2025 Zhiyuan Yu (Heemskerk's lab, University of Michigan)
from ._distance import bottleneck_distance, execute

__all__ = ["bottleneck_distance", "execute"]
