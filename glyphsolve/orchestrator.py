"""Solve orchestration over a chart → glyphs → marks element tree."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Sequence

from .catalog import CATALOG, ClassCatalog
from .constraints import AuthoredConstraint
from .elements import ChartInstance, ElementInstance, GlyphInstance
from .errors import Infeasible, OutOfRangeHint
from .session import SolveSession
from .solver import SolverOptions

logger = logging.getLogger(__name__)


@dataclass
class SolveReport:
    variables: int
    constraints: int
    dof: int
    max_hard_residual: float
    tier_residuals: Dict[str, float] = field(default_factory=dict)
    hints: List[OutOfRangeHint] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)


def check_ranges(elements: Iterable[ElementInstance]) -> List[OutOfRangeHint]:
    """Advisory check of intrinsic attributes against their default ranges."""

    hints: List[OutOfRangeHint] = []
    for element in elements:
        attrs = element.require_attributes()
        for desc in element.cls.attributes:
            if desc.role != "intrinsic" or desc.default_range is None:
                continue
            value = attrs.get(desc.name)
            low, high = desc.default_range
            if value < low or value > high:
                hints.append(OutOfRangeHint(element.id, desc.name, value, desc.default_range))
    return hints


def build_session(
    root: ElementInstance,
    constraints: Sequence[AuthoredConstraint] = (),
    *,
    options: Optional[SolverOptions] = None,
) -> SolveSession:
    """Collect variables and constraints of ``root`` and its descendants."""

    elements = list(root.walk())
    session = SolveSession(options)
    for element in elements:
        session.bind(element)
    for element in elements:
        element.build_intrinsic_constraints(session)
    authored: List[AuthoredConstraint] = []
    for element in elements:
        authored.extend(element.authored_constraints())
    authored.extend(constraints)
    for constraint in authored:
        constraint.emit(session)
    logger.debug(
        "Built session for %s: elements=%d authored=%d", root.id, len(elements), len(authored)
    )
    return session


def solve_tree(
    root: ElementInstance,
    constraints: Sequence[AuthoredConstraint] = (),
    *,
    options: Optional[SolverOptions] = None,
    catalog: Optional[ClassCatalog] = None,
) -> SolveReport:
    """Solve every element under ``root`` and write the results back.

    Nothing is written when the solve fails: an :class:`Infeasible` error
    (or any error raised while collecting constraints) leaves every attribute
    map at its previous values.
    """

    (catalog or CATALOG).freeze()
    session = build_session(root, constraints, options=options)
    logger.info(
        "Solving %s with %d variables and %d constraints",
        root.id,
        session.variable_count,
        session.constraint_count,
    )
    try:
        result = session.solve()
    except Infeasible as exc:
        logger.info("Solve of %s is infeasible: %s", root.id, exc)
        raise
    session.apply()

    hints = check_ranges(session.elements)
    for hint in hints:
        logger.info("Out-of-range hint: %s", hint)
    logger.info(
        "Solve of %s finished dof=%d max_hard_residual=%.3e hints=%d",
        root.id,
        result.dof,
        result.max_hard_residual,
        len(hints),
    )
    return SolveReport(
        variables=session.variable_count,
        constraints=session.constraint_count,
        dof=result.dof,
        max_hard_residual=result.max_hard_residual,
        tier_residuals=dict(result.tier_residuals),
        hints=hints,
        warnings=list(result.warnings),
    )


def solve_chart(
    chart: ChartInstance,
    constraints: Sequence[AuthoredConstraint] = (),
    *,
    options: Optional[SolverOptions] = None,
    catalog: Optional[ClassCatalog] = None,
) -> SolveReport:
    return solve_tree(chart, constraints, options=options, catalog=catalog)


def solve_glyph(
    glyph: GlyphInstance,
    constraints: Sequence[AuthoredConstraint] = (),
    *,
    options: Optional[SolverOptions] = None,
    catalog: Optional[ClassCatalog] = None,
) -> SolveReport:
    return solve_tree(glyph, constraints, options=options, catalog=catalog)


__all__ = [
    "SolveReport",
    "build_session",
    "check_ranges",
    "solve_chart",
    "solve_glyph",
    "solve_tree",
]
