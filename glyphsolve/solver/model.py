"""Core data structures for the linear constraint solver."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional

import numpy as np

from .types import ConstraintStrength, VariableHandle


@dataclass(eq=False)
class LinearConstraint:
    """Record of ``Σ coeff·var (relation) constant`` after moving rhs terms left.

    ``relation`` is ``"eq"`` for equalities and ``"ge"`` for soft inequalities.
    """

    strength: ConstraintStrength
    coefficients: Dict[int, float]
    constant: float
    relation: str = "eq"
    weight: float = 1.0
    label: Optional[str] = None
    anchor: bool = False

    def residual(self, values: np.ndarray) -> float:
        total = sum(coeff * values[idx] for idx, coeff in self.coefficients.items())
        return float(total - self.constant)

    def describe(self, variables: List[VariableHandle]) -> str:
        parts = []
        for idx, coeff in sorted(self.coefficients.items()):
            name = variables[idx].name or f"v{idx}"
            parts.append(f"{coeff:+.6g}*{name}")
        lhs = " ".join(parts) if parts else "0"
        op = "=" if self.relation == "eq" else ">="
        text = f"{lhs} {op} {self.constant:.6g} [{self.strength.name}]"
        if self.label:
            text = f"{self.label}: {text}"
        return text


@dataclass
class SolverOptions:
    """Numerical knobs of :class:`~glyphsolve.solver.ConstraintSolver`."""

    tol: float = 1e-9
    rcond: Optional[float] = None
    max_inequality_passes: Optional[int] = None


@dataclass
class SolveResult:
    values: np.ndarray
    dof: int
    max_hard_residual: float
    tier_residuals: Dict[str, float] = field(default_factory=dict)
    active_inequalities: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)


__all__ = [
    "LinearConstraint",
    "SolveResult",
    "SolverOptions",
]
