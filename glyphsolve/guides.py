"""Alignment guides and drag handles derived from solved attributes."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, List, Optional, Tuple, Union

from .attributes import AttributeMap
from .errors import ElementStateError

if TYPE_CHECKING:  # pragma: no cover
    from .elements import ElementInstance

# Solvers work on finite floats; this span stands in for an unbounded line.
UNBOUNDED_SPAN: Tuple[float, float] = (-10000.0, 10000.0)


@dataclass(frozen=True)
class SnappingGuide:
    axis: str
    value: float
    attribute: str
    visible: bool = True
    element_id: Optional[str] = None


@dataclass(frozen=True)
class HandleAction:
    attribute: str
    type: str = "attribute"


@dataclass(frozen=True)
class LineHandle:
    """Draggable line perpendicular to ``axis`` located at ``value``."""

    axis: str
    value: float
    span: Tuple[float, float]
    actions: Tuple[HandleAction, ...]
    type: str = field(default="line", init=False)


@dataclass(frozen=True)
class PointHandle:
    x: float
    y: float
    actions: Tuple[HandleAction, ...]
    type: str = field(default="point", init=False)


Handle = Union[LineHandle, PointHandle]


def axis_guide(axis: str, attrs: AttributeMap, attribute: str) -> SnappingGuide:
    return SnappingGuide(axis=axis, value=attrs.get(attribute), attribute=attribute)


def line_handle(
    axis: str,
    attrs: AttributeMap,
    attribute: str,
    span: Tuple[float, float] = UNBOUNDED_SPAN,
) -> LineHandle:
    return LineHandle(
        axis=axis,
        value=attrs.get(attribute),
        span=span,
        actions=(HandleAction(attribute=attribute),),
    )


def point_handle(attrs: AttributeMap, x_attr: str = "x", y_attr: str = "y") -> PointHandle:
    return PointHandle(
        x=attrs.get(x_attr),
        y=attrs.get(y_attr),
        actions=(HandleAction(attribute=x_attr), HandleAction(attribute=y_attr)),
    )


def _require_initialized(element: "ElementInstance") -> AttributeMap:
    if element.attributes is None:
        raise ElementStateError(f"element '{element.id}' is not initialized")
    return element.attributes


def get_alignment_guides(element: "ElementInstance") -> List[SnappingGuide]:
    _require_initialized(element)
    return list(element.cls.alignment_guides(element))


def get_handles(element: "ElementInstance") -> List[Handle]:
    _require_initialized(element)
    return list(element.cls.handles(element))


def collect_guides(root: "ElementInstance") -> List[SnappingGuide]:
    """Guides of ``root`` and every element below it, tagged with element ids."""

    guides: List[SnappingGuide] = []
    for element in root.walk():
        for guide in get_alignment_guides(element):
            guides.append(replace(guide, element_id=element.id))
    return guides


__all__ = [
    "Handle",
    "HandleAction",
    "LineHandle",
    "PointHandle",
    "SnappingGuide",
    "UNBOUNDED_SPAN",
    "axis_guide",
    "collect_guides",
    "get_alignment_guides",
    "get_handles",
    "line_handle",
    "point_handle",
]
