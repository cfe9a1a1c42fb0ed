from __future__ import annotations

import logging
import math
from typing import Dict, List, Optional, Sequence, Tuple

import numpy as np

from ..errors import Infeasible
from ..logging_utils import apply_debug_logging
from .config import get_solver_options
from .math_utils import _min_norm_solution, _null_basis, _project, _restrict, _rms, _stack_rows
from .model import LinearConstraint, SolveResult, SolverOptions
from .types import SOFT_TIERS, ConstraintStrength, Terms, VariableHandle, VariableStrength


logger = logging.getLogger(__name__)


class ConstraintSolver:
    """Linear equality solver with a HARD tier and prioritised soft tiers.

    HARD equations are solved exactly. Each soft tier, from ``STRONG`` down to
    ``WEAKER``, is minimised in weighted least squares without disturbing the
    optimum reached by the tiers above it. Whatever freedom is left is
    resolved by moving the variables as little as possible away from their
    seeds, so a consistent seed is returned unchanged.

    Usage::

        solver = ConstraintSolver()
        x1 = solver.new_variable(0.0, name="x1")
        x2 = solver.new_variable(0.0, name="x2")
        solver.add_linear(ConstraintStrength.HARD, 10.0, [(1, x2)], [(1, x1)])
        solver.solve()
        x2.value - x1.value  # 10.0
    """

    def __init__(self, options: Optional[SolverOptions] = None) -> None:
        self.options = options if options is not None else get_solver_options()
        self.variables: List[VariableHandle] = []
        self.constraints: List[LinearConstraint] = []

    # ------------------------------------------------------------------
    # Building

    def new_variable(
        self,
        initial_value: float,
        *,
        strength: VariableStrength = VariableStrength.NONE,
        name: Optional[str] = None,
    ) -> VariableHandle:
        value = float(initial_value)
        if not math.isfinite(value):
            raise ValueError(f"variable {name or len(self.variables)} seeded with non-finite value {value}")
        handle = VariableHandle(
            index=len(self.variables),
            value=value,
            name=name,
            strength=VariableStrength(strength),
        )
        self.variables.append(handle)
        tier = handle.strength.as_constraint_strength()
        if tier is not None:
            self.constraints.append(
                LinearConstraint(
                    strength=tier,
                    coefficients={handle.index: 1.0},
                    constant=value,
                    label=f"anchor({name or handle.index})",
                    anchor=True,
                )
            )
        return handle

    def add_linear(
        self,
        strength: ConstraintStrength,
        constant: float,
        lhs: Terms,
        rhs: Terms = (),
        *,
        weight: float = 1.0,
        label: Optional[str] = None,
    ) -> LinearConstraint:
        """Register ``Σ lhs = Σ rhs + constant``."""

        return self._add(strength, constant, lhs, rhs, "eq", weight, label)

    def add_soft_inequality(
        self,
        strength: ConstraintStrength,
        constant: float,
        lhs: Terms,
        rhs: Terms = (),
        *,
        weight: float = 1.0,
        label: Optional[str] = None,
    ) -> LinearConstraint:
        """Register ``Σ lhs >= Σ rhs + constant`` at a soft tier."""

        if ConstraintStrength(strength).is_hard:
            raise ValueError("inequalities are only supported at soft strengths")
        return self._add(strength, constant, lhs, rhs, "ge", weight, label)

    def _add(
        self,
        strength: ConstraintStrength,
        constant: float,
        lhs: Terms,
        rhs: Terms,
        relation: str,
        weight: float,
        label: Optional[str],
    ) -> LinearConstraint:
        weight = float(weight)
        if not math.isfinite(weight) or weight <= 0.0:
            raise ValueError(f"constraint weight must be positive, got {weight}")
        constant = float(constant)
        if not math.isfinite(constant):
            raise ValueError(f"constraint constant must be finite, got {constant}")

        coefficients: Dict[int, float] = {}
        for sign, terms in ((1.0, lhs), (-1.0, rhs)):
            for coeff, handle in terms:
                self._check_handle(handle)
                coefficients[handle.index] = coefficients.get(handle.index, 0.0) + sign * float(coeff)
        coefficients = {idx: coeff for idx, coeff in coefficients.items() if coeff != 0.0}

        constraint = LinearConstraint(
            strength=ConstraintStrength(strength),
            coefficients=coefficients,
            constant=constant,
            relation=relation,
            weight=weight,
            label=label,
        )
        self.constraints.append(constraint)
        return constraint

    def _check_handle(self, handle: VariableHandle) -> None:
        if not isinstance(handle, VariableHandle):
            raise TypeError(f"expected a VariableHandle, got {type(handle).__name__}")
        idx = handle.index
        if idx >= len(self.variables) or self.variables[idx] is not handle:
            raise ValueError(f"{handle!r} does not belong to this solver")

    # ------------------------------------------------------------------
    # Solving

    def _hard_threshold(self, rhs: np.ndarray) -> float:
        scale = float(np.max(np.abs(rhs))) if rhs.size else 0.0
        return self.options.tol * max(1.0, scale)

    def _solve_hard(self, size: int) -> Tuple[np.ndarray, np.ndarray, float]:
        hard = [c for c in self.constraints if c.strength.is_hard]
        seeds = np.array([var.seed for var in self.variables], dtype=float)
        if not hard:
            return seeds, _null_basis(np.zeros((0, size)), self.options.rcond), 0.0

        matrix, rhs = _stack_rows(hard, size)
        point = _min_norm_solution(matrix, rhs, self.options.rcond)
        residual = matrix @ point - rhs if size else -rhs
        worst = float(np.max(np.abs(residual)))
        threshold = self._hard_threshold(rhs)
        if worst > threshold:
            conflicts = [
                hard[row].describe(self.variables)
                for row in np.flatnonzero(np.abs(residual) > threshold)
            ]
            logger.debug("_solve_hard: infeasible worst=%.3e conflicts=%s", worst, conflicts)
            raise Infeasible(
                f"HARD constraints are contradictory (residual {worst:.3e}): " + "; ".join(conflicts),
                residual=worst,
                conflicts=conflicts,
            )
        return point, _null_basis(matrix, self.options.rcond), worst

    def _violated(self, constraint: LinearConstraint, values: np.ndarray) -> bool:
        return constraint.residual(values) < -self.options.tol * max(1.0, abs(constraint.constant))

    def _solve_tier(
        self,
        point: np.ndarray,
        basis: np.ndarray,
        seeds: np.ndarray,
        equalities: Sequence[LinearConstraint],
        inequalities: Sequence[LinearConstraint],
        guarded: Sequence[LinearConstraint] = (),
    ) -> Tuple[np.ndarray, np.ndarray, List[LinearConstraint], List[LinearConstraint]]:
        """Restrict ``point + span(basis)`` to the optimum of one stage.

        ``inequalities`` compete with ``equalities`` at the stage's own
        strength. ``guarded`` are inequalities of stages already solved: one
        that the stage optimum would break is held at its bound before the
        stage rows are fitted, so it keeps priority over them.
        """

        size = len(self.variables)
        active: List[LinearConstraint] = []
        held: List[LinearConstraint] = []
        passes = self.options.max_inequality_passes
        if passes is None:
            limit = len(inequalities) + len(guarded) + 1
        else:
            limit = max(1, int(passes))

        for _ in range(limit):
            base_point, base_basis = point, basis
            if held:
                matrix, rhs = _stack_rows(held, size, weighted=True)
                base_point, base_basis = _restrict(point, basis, matrix, rhs, self.options.rcond)
            matrix, rhs = _stack_rows(list(equalities) + active, size, weighted=True)
            candidate, candidate_basis = _restrict(base_point, base_basis, matrix, rhs, self.options.rcond)
            if not inequalities and not guarded:
                break
            # Inequalities are judged at the least-change point of the candidate set.
            trial = _project(candidate, candidate_basis, seeds)
            violated = [c for c in inequalities if c not in active and self._violated(c, trial)]
            broken = [c for c in guarded if c not in held and self._violated(c, trial)]
            if not violated and not broken:
                break
            active.extend(violated)
            if broken:
                # Worst bound first; the rest are rechecked on the next pass.
                held.append(min(broken, key=lambda c: c.residual(trial)))
        return candidate, candidate_basis, active, held

    def solve(self) -> SolveResult:
        """Solve every registered constraint and write values into the handles.

        Raises :class:`~glyphsolve.errors.Infeasible` when the HARD equations
        cannot hold together; handles keep their previous values in that case.
        """

        size = len(self.variables)
        logger.debug(
            "solve: variables=%d constraints=%d", size, len(self.constraints)
        )
        seeds = np.array([var.seed for var in self.variables], dtype=float)
        point, basis, _ = self._solve_hard(size)

        tier_residuals: Dict[str, float] = {}
        active_labels: List[str] = []
        warnings: List[str] = []
        soft = [c for c in self.constraints if not c.strength.is_hard]
        # Inequalities of the stages solved so far; later stages must not break them.
        guarded: List[LinearConstraint] = []

        for tier in SOFT_TIERS:
            in_tier = [c for c in soft if c.strength == tier]
            if not in_tier:
                continue
            equalities = [c for c in in_tier if c.relation == "eq" and not c.anchor]
            inequalities = [c for c in in_tier if c.relation == "ge"]
            anchors = [c for c in in_tier if c.anchor]

            active: List[LinearConstraint] = []
            held: List[LinearConstraint] = []
            if equalities or inequalities:
                point, basis, active, held = self._solve_tier(
                    point, basis, seeds, equalities, inequalities, guarded
                )
                guarded.extend(inequalities)
            if anchors:
                point, basis, _, anchor_held = self._solve_tier(point, basis, seeds, anchors, (), guarded)
                held.extend(anchor_held)

            active_labels.extend(c.describe(self.variables) for c in active + held)
            tier_residuals[tier.name] = _rms(
                np.array([c.residual(point) for c in equalities + active + anchors], dtype=float)
            )
            logger.debug(
                "solve: tier=%s rows=%d active_ineq=%d remaining_dof=%d",
                tier.name,
                len(in_tier),
                len(active),
                basis.shape[1],
            )

        dof = int(basis.shape[1])
        values = _project(point, basis, seeds)

        hard = [c for c in self.constraints if c.strength.is_hard]
        max_hard = max((abs(c.residual(values)) for c in hard), default=0.0)
        for constraint in soft:
            if constraint.relation == "ge" and self._violated(constraint, values):
                warnings.append(f"soft inequality not satisfied: {constraint.describe(self.variables)}")

        for var in self.variables:
            var.value = float(values[var.index])

        logger.debug(
            "solve: finished dof=%d max_hard_residual=%.3e warnings=%d", dof, max_hard, len(warnings)
        )
        return SolveResult(
            values=values,
            dof=dof,
            max_hard_residual=float(max_hard),
            tier_residuals=tier_residuals,
            active_inequalities=active_labels,
            warnings=warnings,
        )


apply_debug_logging(globals(), logger=logger)


__all__ = ["ConstraintSolver"]
