"""Exception types raised by the constraint model."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple


class GlyphSolveError(Exception):
    """Base class for every error raised by :mod:`glyphsolve`."""


class UnknownAttribute(GlyphSolveError, KeyError):
    """Raised when an attribute name is not part of the owning class schema."""

    def __init__(self, name: str, class_id: Optional[str] = None):
        self.name = name
        self.class_id = class_id
        if class_id:
            message = f"attribute '{name}' is not declared by class '{class_id}'"
        else:
            message = f"unknown attribute '{name}'"
        super().__init__(message)

    def __str__(self) -> str:
        # KeyError quotes its argument; keep the plain message instead.
        return str(self.args[0])


class AttributeKindError(GlyphSolveError, TypeError):
    """Raised when a value does not match the declared attribute kind."""


class Infeasible(GlyphSolveError):
    """HARD constraints are mutually contradictory."""

    def __init__(self, message: str, *, residual: float = float("inf"), conflicts: Sequence[str] = ()):
        super().__init__(message)
        self.residual = residual
        self.conflicts: List[str] = list(conflicts)


class ElementStateError(GlyphSolveError):
    """Raised when an element is used outside its valid lifecycle state."""


class IncompleteState(ElementStateError):
    """A default-state initializer left schema attributes without a value."""


class CatalogError(GlyphSolveError):
    """Raised for invalid registrations in an element class catalog."""


class CatalogFrozen(CatalogError):
    """Raised when registering into a catalog that has been frozen."""


class UnknownElementClass(CatalogError, KeyError):
    """Raised when looking up a class id that was never registered."""

    def __str__(self) -> str:
        return str(self.args[0])


class UnknownElement(GlyphSolveError, KeyError):
    """Raised when an authored constraint references a missing element."""

    def __str__(self) -> str:
        return str(self.args[0])


@dataclass
class OutOfRangeHint:
    """Advisory note: a solved value left its attribute's default range."""

    element_id: str
    attribute: str
    value: float
    default_range: Tuple[float, float]

    def __str__(self) -> str:
        low, high = self.default_range
        return (
            f"{self.element_id}.{self.attribute}={self.value:.6g} outside default range "
            f"[{low:g}, {high:g}]"
        )


__all__ = [
    "AttributeKindError",
    "CatalogError",
    "CatalogFrozen",
    "ElementStateError",
    "GlyphSolveError",
    "IncompleteState",
    "Infeasible",
    "OutOfRangeHint",
    "UnknownAttribute",
    "UnknownElement",
    "UnknownElementClass",
]
