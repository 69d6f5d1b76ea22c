"""Numerical core: classification, cost matrices, assignment and reconciliation."""
# Copyright 2025 Zhiyuan Yu (Heemskerk's lab, University of Michigan)

from .assignment import AssignmentSolver, BottleneckSolver, MunkresSolver, make_solver
from .bottleneck import compute_bottleneck
from .classify import (
    classify_diagram,
    compute_geometrical_range,
    compute_minimum_relevant_persistence,
)
from .cost import CostModel
from .cost_matrix import build_class_cost_matrix, build_cost_matrices
from .matching import build_mappings, reconcile_local_index

__all__ = [
    "AssignmentSolver",
    "BottleneckSolver",
    "CostModel",
    "MunkresSolver",
    "build_class_cost_matrix",
    "build_cost_matrices",
    "build_mappings",
    "classify_diagram",
    "compute_bottleneck",
    "compute_geometrical_range",
    "compute_minimum_relevant_persistence",
    "make_solver",
    "reconcile_local_index",
]
