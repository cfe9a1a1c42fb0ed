from .attributes import AttributeDescription, AttributeMap
from .catalog import CATALOG, ClassCatalog, ElementClass, GlyphClass, MarkClass, ChartClass, get_class, register_class
from .constraints import AttributeRef, AuthoredConstraint, align, at_least, offset, pin, ref
from .elements import (
    ChartInstance,
    ElementInstance,
    GlyphInstance,
    MarkInstance,
    create_chart,
    create_glyph,
    create_mark,
    unique_id,
)
from .errors import (
    AttributeKindError,
    CatalogError,
    CatalogFrozen,
    ElementStateError,
    GlyphSolveError,
    IncompleteState,
    Infeasible,
    OutOfRangeHint,
    UnknownAttribute,
    UnknownElement,
    UnknownElementClass,
)
from .guides import (
    HandleAction,
    LineHandle,
    PointHandle,
    SnappingGuide,
    collect_guides,
    get_alignment_guides,
    get_handles,
)
from .orchestrator import SolveReport, solve_chart, solve_glyph, solve_tree
from .session import SolveSession
from .solver import (
    ConstraintSolver,
    ConstraintStrength,
    SolveResult,
    SolverOptions,
    VariableHandle,
    VariableStrength,
    get_solver_options,
    set_solver_options,
)

__all__ = [
    "AttributeDescription",
    "AttributeKindError",
    "AttributeMap",
    "AttributeRef",
    "AuthoredConstraint",
    "CATALOG",
    "CatalogError",
    "CatalogFrozen",
    "ChartClass",
    "ChartInstance",
    "ClassCatalog",
    "ConstraintSolver",
    "ConstraintStrength",
    "ElementClass",
    "ElementInstance",
    "ElementStateError",
    "GlyphClass",
    "GlyphInstance",
    "GlyphSolveError",
    "HandleAction",
    "IncompleteState",
    "Infeasible",
    "LineHandle",
    "MarkClass",
    "MarkInstance",
    "OutOfRangeHint",
    "PointHandle",
    "SnappingGuide",
    "SolveReport",
    "SolveResult",
    "SolveSession",
    "SolverOptions",
    "UnknownAttribute",
    "UnknownElement",
    "UnknownElementClass",
    "VariableHandle",
    "VariableStrength",
    "align",
    "at_least",
    "collect_guides",
    "create_chart",
    "create_glyph",
    "create_mark",
    "get_alignment_guides",
    "get_class",
    "get_handles",
    "get_solver_options",
    "offset",
    "pin",
    "ref",
    "register_class",
    "set_solver_options",
    "solve_chart",
    "solve_glyph",
    "solve_tree",
    "unique_id",
]
