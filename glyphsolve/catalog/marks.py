from __future__ import annotations

from typing import TYPE_CHECKING, List

from ..attributes import AttributeDescription, intrinsic, positional
from ..guides import Handle, SnappingGuide, axis_guide, line_handle, point_handle
from ..solver.types import ConstraintStrength
from .base import MarkClass
from .registry import register_class

if TYPE_CHECKING:  # pragma: no cover
    from ..elements import MarkInstance
    from ..session import SolveSession

HARD = ConstraintStrength.HARD

_STYLE_ATTRIBUTES = (
    AttributeDescription("fill", kind="color", role="computed", category="style"),
    AttributeDescription("visible", kind="boolean", role="computed", category="style"),
)


@register_class
class AnchorMark(MarkClass):
    """Reference point of a glyph; always the glyph's first mark."""

    __slots__ = ()

    class_id = "mark.anchor"
    display_name = "Anchor"
    attributes = tuple(positional("x", "y"))

    def initialize_state(self, element: "MarkInstance") -> None:
        element.attributes.update({"x": 0.0, "y": 0.0})

    def build_intrinsic_constraints(self, element: "MarkInstance", session: "SolveSession") -> None:
        # A bare point has no geometry of its own to hold together.
        return None

    def alignment_guides(self, element: "MarkInstance") -> List[SnappingGuide]:
        attrs = element.attributes
        return [axis_guide("x", attrs, "x"), axis_guide("y", attrs, "y")]

    def handles(self, element: "MarkInstance") -> List[Handle]:
        return [point_handle(element.attributes)]


@register_class
class RectMark(MarkClass):
    __slots__ = ()

    class_id = "mark.rect"
    display_name = "Rectangle"
    attributes = (
        *positional("x1", "y1", "x2", "y2", "cx", "cy"),
        intrinsic("width", default_range=(0.0, 200.0)),
        intrinsic("height", default_range=(0.0, 200.0)),
        *_STYLE_ATTRIBUTES,
    )

    def initialize_state(self, element: "MarkInstance") -> None:
        attrs = element.attributes
        x1, y1, x2, y2 = -10.0, -10.0, 10.0, 10.0
        attrs.update(
            {
                "x1": x1,
                "y1": y1,
                "x2": x2,
                "y2": y2,
                "cx": (x1 + x2) / 2,
                "cy": (y1 + y2) / 2,
                "width": x2 - x1,
                "height": y2 - y1,
                "fill": "#888888",
                "visible": True,
            }
        )

    def build_intrinsic_constraints(self, element: "MarkInstance", session: "SolveSession") -> None:
        x1, y1, x2, y2, cx, cy, width, height = session.attrs(
            element, ["x1", "y1", "x2", "y2", "cx", "cy", "width", "height"]
        )
        session.add_linear(HARD, 0, [(1, x2), (-1, x1)], [(1, width)])
        session.add_linear(HARD, 0, [(1, y2), (-1, y1)], [(1, height)])
        session.add_linear(HARD, 0, [(2, cx)], [(1, x1), (1, x2)])
        session.add_linear(HARD, 0, [(2, cy)], [(1, y1), (1, y2)])

    def alignment_guides(self, element: "MarkInstance") -> List[SnappingGuide]:
        attrs = element.attributes
        return [
            axis_guide("x", attrs, "x1"),
            axis_guide("x", attrs, "x2"),
            axis_guide("x", attrs, "cx"),
            axis_guide("y", attrs, "y1"),
            axis_guide("y", attrs, "y2"),
            axis_guide("y", attrs, "cy"),
        ]

    def handles(self, element: "MarkInstance") -> List[Handle]:
        attrs = element.attributes
        x_span = (attrs["y1"], attrs["y2"])
        y_span = (attrs["x1"], attrs["x2"])
        return [
            line_handle("x", attrs, "x1", x_span),
            line_handle("x", attrs, "x2", x_span),
            line_handle("y", attrs, "y1", y_span),
            line_handle("y", attrs, "y2", y_span),
        ]


@register_class
class SymbolMark(MarkClass):
    __slots__ = ()

    class_id = "mark.symbol"
    display_name = "Symbol"
    attributes = (
        *positional("x", "y"),
        intrinsic("size", default_range=(0.0, 3600.0), category="symbol"),
        *_STYLE_ATTRIBUTES,
    )

    def initialize_state(self, element: "MarkInstance") -> None:
        element.attributes.update(
            {"x": 0.0, "y": 0.0, "size": 60.0, "fill": "#888888", "visible": True}
        )

    def build_intrinsic_constraints(self, element: "MarkInstance", session: "SolveSession") -> None:
        # Area-based size has no linear relation to the position.
        return None

    def alignment_guides(self, element: "MarkInstance") -> List[SnappingGuide]:
        attrs = element.attributes
        return [axis_guide("x", attrs, "x"), axis_guide("y", attrs, "y")]

    def handles(self, element: "MarkInstance") -> List[Handle]:
        return [point_handle(element.attributes)]
