from __future__ import annotations

from typing import TYPE_CHECKING, List

from ..attributes import intrinsic, positional
from ..guides import Handle, SnappingGuide, axis_guide, line_handle
from ..solver.types import ConstraintStrength, VariableStrength
from .base import ChartClass
from .registry import register_class

if TYPE_CHECKING:  # pragma: no cover
    from ..elements import ChartInstance
    from ..session import SolveSession

HARD = ConstraintStrength.HARD


def _layout(name: str, default_range):
    return intrinsic(name, default_range=default_range, category="layout", strength=VariableStrength.STRONG)


@register_class
class RectangleChart(ChartClass):
    """Chart canvas centered on the origin with a margin-inset plot area."""

    __slots__ = ()

    class_id = "chart.rectangle"
    display_name = "Chart"
    attributes = (
        *positional("x1", "y1", "x2", "y2", "cx", "cy"),
        _layout("width", (100.0, 4000.0)),
        _layout("height", (100.0, 4000.0)),
        _layout("marginLeft", (0.0, 500.0)),
        _layout("marginRight", (0.0, 500.0)),
        _layout("marginTop", (0.0, 500.0)),
        _layout("marginBottom", (0.0, 500.0)),
    )

    def initialize_state(self, element: "ChartInstance") -> None:
        attrs = element.attributes
        width, height, margin = 900.0, 600.0, 50.0
        attrs.update(
            {
                "width": width,
                "height": height,
                "marginLeft": margin,
                "marginRight": margin,
                "marginTop": margin,
                "marginBottom": margin,
                "x1": -width / 2 + margin,
                "x2": width / 2 - margin,
                "y1": -height / 2 + margin,
                "y2": height / 2 - margin,
                "cx": 0.0,
                "cy": 0.0,
            }
        )

    def build_intrinsic_constraints(self, element: "ChartInstance", session: "SolveSession") -> None:
        x1, y1, x2, y2, cx, cy, width, height, left, right, top, bottom = session.attrs(
            element,
            [
                "x1", "y1", "x2", "y2", "cx", "cy",
                "width", "height", "marginLeft", "marginRight", "marginTop", "marginBottom",
            ],
        )
        session.add_linear(HARD, 0, [(1, x1)], [(-0.5, width), (1, left)])
        session.add_linear(HARD, 0, [(1, x2)], [(0.5, width), (-1, right)])
        session.add_linear(HARD, 0, [(1, y1)], [(-0.5, height), (1, bottom)])
        session.add_linear(HARD, 0, [(1, y2)], [(0.5, height), (-1, top)])
        session.add_linear(HARD, 0, [(2, cx)], [(1, x1), (1, x2)])
        session.add_linear(HARD, 0, [(2, cy)], [(1, y1), (1, y2)])

    def alignment_guides(self, element: "ChartInstance") -> List[SnappingGuide]:
        attrs = element.attributes
        return [
            axis_guide("x", attrs, "x1"),
            axis_guide("x", attrs, "x2"),
            axis_guide("x", attrs, "cx"),
            axis_guide("y", attrs, "y1"),
            axis_guide("y", attrs, "y2"),
            axis_guide("y", attrs, "cy"),
        ]

    def handles(self, element: "ChartInstance") -> List[Handle]:
        attrs = element.attributes
        half_w = attrs["width"] / 2
        half_h = attrs["height"] / 2
        return [
            line_handle("x", attrs, "x1", (-half_h, half_h)),
            line_handle("x", attrs, "x2", (-half_h, half_h)),
            line_handle("y", attrs, "y1", (-half_w, half_w)),
            line_handle("y", attrs, "y2", (-half_w, half_w)),
        ]
