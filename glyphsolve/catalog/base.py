"""Element classes: immutable, shared templates for glyphs, marks and charts."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, List, Sequence, Tuple

from ..attributes import AttributeDescription, AttributeMap
from ..errors import ElementStateError, UnknownAttribute
from ..guides import Handle, SnappingGuide

if TYPE_CHECKING:  # pragma: no cover
    from ..elements import ElementInstance, GlyphInstance
    from ..session import SolveSession


class ElementClass(ABC):
    """Capability set shared by every instance of one element kind.

    A class declares its attribute schema and knows how to initialise an
    instance, emit the instance's intrinsic constraints, and derive guides
    and handles from its solved attributes. Classes hold no per-instance
    state; one object per class lives in the catalog.
    """

    __slots__ = ()

    class_id: str = ""
    kind: str = "element"
    display_name: str = ""
    attributes: Tuple[AttributeDescription, ...] = ()

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    @property
    def attribute_names(self) -> List[str]:
        return [desc.name for desc in self.attributes]

    def describe(self, name: str) -> AttributeDescription:
        for desc in self.attributes:
            if desc.name == name:
                return desc
        raise UnknownAttribute(name, self.class_id)

    def new_attribute_map(self) -> AttributeMap:
        return AttributeMap(self.attributes, class_id=self.class_id)

    # Initialize the state so that every attribute has a valid value
    @abstractmethod
    def initialize_state(self, element: "ElementInstance") -> None:
        ...

    # Intrinsic constraints between attributes (e.g., x2 - x1 = width)
    @abstractmethod
    def build_intrinsic_constraints(self, element: "ElementInstance", session: "SolveSession") -> None:
        ...

    @abstractmethod
    def alignment_guides(self, element: "ElementInstance") -> Sequence[SnappingGuide]:
        ...

    @abstractmethod
    def handles(self, element: "ElementInstance") -> Sequence[Handle]:
        ...

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.class_id}>"


class MarkClass(ElementClass):
    __slots__ = ()
    kind = "mark"


class GlyphClass(ElementClass):
    __slots__ = ()
    kind = "glyph"

    @staticmethod
    def anchor_of(glyph: "GlyphInstance") -> "ElementInstance":
        """The glyph's first mark, whose ``x``/``y`` offset the glyph center."""

        if not glyph.marks:
            raise ElementStateError(f"glyph '{glyph.id}' has no anchor mark")
        return glyph.marks[0]


class ChartClass(ElementClass):
    __slots__ = ()
    kind = "chart"


__all__ = [
    "ChartClass",
    "ElementClass",
    "GlyphClass",
    "MarkClass",
]
