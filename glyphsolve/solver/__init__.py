"""Linear constraint solver with HARD and prioritised soft strength tiers."""

from __future__ import annotations

from .config import get_solver_options, set_solver_options
from .model import LinearConstraint, SolveResult, SolverOptions
from .solver_core import ConstraintSolver
from .types import SOFT_TIERS, ConstraintStrength, Term, Terms, VariableHandle, VariableStrength

__all__ = [
    "ConstraintSolver",
    "ConstraintStrength",
    "LinearConstraint",
    "SOFT_TIERS",
    "SolveResult",
    "SolverOptions",
    "Term",
    "Terms",
    "VariableHandle",
    "VariableStrength",
    "get_solver_options",
    "set_solver_options",
]
