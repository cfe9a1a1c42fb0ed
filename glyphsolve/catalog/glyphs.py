from __future__ import annotations

from typing import TYPE_CHECKING, List

from ..attributes import intrinsic, positional
from ..guides import Handle, SnappingGuide, axis_guide, line_handle
from ..solver.types import ConstraintStrength
from .base import GlyphClass
from .registry import register_class

if TYPE_CHECKING:  # pragma: no cover
    from ..elements import GlyphInstance
    from ..session import SolveSession

HARD = ConstraintStrength.HARD


@register_class
class RectangleGlyph(GlyphClass):
    """Glyph with a rectangular bounding box and a centered intrinsic frame.

    ``x1..y2`` is the box in chart space and ``ix1..iy2`` the same box in the
    glyph's own frame, whose center ``(icx, icy)`` is the origin. The nominal
    center ``(x, y)`` is the box midpoint shifted by the anchor mark.
    """

    __slots__ = ()

    class_id = "glyph.rectangle"
    display_name = "Glyph"
    attributes = (
        *positional("x1", "y1", "x2", "y2", "x", "y"),
        intrinsic("width", default_range=(30.0, 200.0)),
        intrinsic("height", default_range=(30.0, 200.0)),
        *positional("ix1", "iy1", "ix2", "iy2", "icx", "icy"),
    )

    def initialize_state(self, element: "GlyphInstance") -> None:
        attrs = element.attributes
        x, y, width, height = 0.0, 0.0, 60.0, 100.0
        attrs.update(
            {
                "x": x,
                "y": y,
                "width": width,
                "height": height,
                "x1": x - width / 2,
                "y1": y - height / 2,
                "x2": x + width / 2,
                "y2": y + height / 2,
                "ix1": -width / 2,
                "iy1": -height / 2,
                "ix2": width / 2,
                "iy2": height / 2,
                "icx": 0.0,
                "icy": 0.0,
            }
        )

    def build_intrinsic_constraints(self, element: "GlyphInstance", session: "SolveSession") -> None:
        x1, y1, x2, y2, x, y, width, height, ix1, iy1, ix2, iy2, icx, icy = session.attrs(
            element,
            ["x1", "y1", "x2", "y2", "x", "y", "width", "height", "ix1", "iy1", "ix2", "iy2", "icx", "icy"],
        )
        session.add_linear(HARD, 0, [(1, x2), (-1, x1)], [(1, width)])
        session.add_linear(HARD, 0, [(1, y2), (-1, y1)], [(1, height)])
        session.add_linear(HARD, 0, [(1, ix2), (-1, ix1)], [(1, width)])
        session.add_linear(HARD, 0, [(1, iy2), (-1, iy1)], [(1, height)])
        session.add_linear(HARD, 0, [(1, ix1), (1, ix2)])
        session.add_linear(HARD, 0, [(1, iy1), (1, iy2)])
        session.add_linear(HARD, 0, [(1, icx)])
        session.add_linear(HARD, 0, [(1, icy)])

        anchor = self.anchor_of(element)
        anchor_x, anchor_y = session.attrs(anchor, ["x", "y"])
        session.add_linear(HARD, 0, [(1, x)], [(0.5, x2), (0.5, x1), (1, anchor_x)])
        session.add_linear(HARD, 0, [(1, y)], [(0.5, y2), (0.5, y1), (1, anchor_y)])

    def alignment_guides(self, element: "GlyphInstance") -> List[SnappingGuide]:
        attrs = element.attributes
        return [
            axis_guide("x", attrs, "ix1"),
            axis_guide("x", attrs, "ix2"),
            axis_guide("x", attrs, "icx"),
            axis_guide("y", attrs, "iy1"),
            axis_guide("y", attrs, "iy2"),
            axis_guide("y", attrs, "icy"),
        ]

    def handles(self, element: "GlyphInstance") -> List[Handle]:
        attrs = element.attributes
        return [
            line_handle("x", attrs, "ix1"),
            line_handle("x", attrs, "ix2"),
            line_handle("y", attrs, "iy1"),
            line_handle("y", attrs, "iy2"),
        ]
