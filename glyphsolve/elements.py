"""Element instances: charts own glyphs, glyphs own marks."""

from __future__ import annotations

import itertools
import logging
from typing import TYPE_CHECKING, Iterator, List, Optional, Sequence

from .attributes import AttributeMap
from .catalog import CATALOG, ClassCatalog, ElementClass
from .errors import ElementStateError, IncompleteState
from .guides import Handle, SnappingGuide, get_alignment_guides, get_handles

if TYPE_CHECKING:  # pragma: no cover
    from .constraints import AuthoredConstraint
    from .session import SolveSession

logger = logging.getLogger(__name__)

_ID_COUNTER = itertools.count(1)


def unique_id(prefix: str = "element") -> str:
    """Return a process-unique element identifier such as ``glyph12``."""

    return f"{prefix}{next(_ID_COUNTER)}"


class ElementInstance:
    """One element: an id, its class, and (once initialized) its attributes."""

    def __init__(self, cls: ElementClass, *, element_id: Optional[str] = None) -> None:
        self.cls = cls
        self.id = element_id or unique_id(cls.kind)
        self.attributes: Optional[AttributeMap] = None

    @property
    def class_id(self) -> str:
        return self.cls.class_id

    @property
    def initialized(self) -> bool:
        return self.attributes is not None

    @property
    def state(self) -> str:
        return "initialized" if self.initialized else "uninitialized"

    def initialize_state(self) -> None:
        if self.attributes is not None:
            raise ElementStateError(f"element '{self.id}' is already initialized")
        self.attributes = self.cls.new_attribute_map()
        try:
            self.cls.initialize_state(self)
            missing = self.attributes.missing()
            if missing:
                raise IncompleteState(
                    f"class '{self.class_id}' left attributes without a value: {', '.join(missing)}"
                )
        except Exception:
            self.attributes = None
            raise
        logger.debug("Initialized %s (%s)", self.id, self.class_id)

    def require_attributes(self) -> AttributeMap:
        if self.attributes is None:
            raise ElementStateError(f"element '{self.id}' is not initialized")
        return self.attributes

    def build_intrinsic_constraints(self, session: "SolveSession") -> None:
        self.require_attributes()
        self.cls.build_intrinsic_constraints(self, session)

    def get_alignment_guides(self) -> List[SnappingGuide]:
        return get_alignment_guides(self)

    def get_handles(self) -> List[Handle]:
        return get_handles(self)

    def children(self) -> Sequence["ElementInstance"]:
        return ()

    def authored_constraints(self) -> Sequence["AuthoredConstraint"]:
        return ()

    def walk(self) -> Iterator["ElementInstance"]:
        yield self
        for child in self.children():
            yield from child.walk()

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.id} {self.class_id} {self.state}>"


class MarkInstance(ElementInstance):
    pass


class GlyphInstance(ElementInstance):
    """Glyph bound to a data table; ``marks[0]`` is its anchor mark."""

    def __init__(
        self,
        cls: ElementClass,
        *,
        table: Optional[str] = None,
        element_id: Optional[str] = None,
    ) -> None:
        super().__init__(cls, element_id=element_id)
        self.table = table
        self.marks: List[MarkInstance] = []
        self.constraints: List["AuthoredConstraint"] = []

    def add_mark(self, mark: MarkInstance) -> MarkInstance:
        if any(existing.id == mark.id for existing in self.marks):
            raise ElementStateError(f"glyph '{self.id}' already owns mark '{mark.id}'")
        self.marks.append(mark)
        return mark

    def remove_mark(self, index: int) -> MarkInstance:
        if range(len(self.marks))[index] == 0:
            raise ElementStateError("the anchor mark cannot be removed from a glyph")
        return self.marks.pop(index)

    def mark_index(self, mark_id: str) -> int:
        for idx, mark in enumerate(self.marks):
            if mark.id == mark_id:
                return idx
        raise KeyError(mark_id)

    def children(self) -> Sequence[ElementInstance]:
        return tuple(self.marks)

    def authored_constraints(self) -> Sequence["AuthoredConstraint"]:
        return tuple(self.constraints)


class ChartInstance(ElementInstance):
    def __init__(self, cls: ElementClass, *, element_id: Optional[str] = None) -> None:
        super().__init__(cls, element_id=element_id)
        self.glyphs: List[GlyphInstance] = []
        self.constraints: List["AuthoredConstraint"] = []

    def add_glyph(self, glyph: GlyphInstance) -> GlyphInstance:
        if any(existing.id == glyph.id for existing in self.glyphs):
            raise ElementStateError(f"chart '{self.id}' already owns glyph '{glyph.id}'")
        self.glyphs.append(glyph)
        return glyph

    def children(self) -> Sequence[ElementInstance]:
        return tuple(self.glyphs)

    def authored_constraints(self) -> Sequence["AuthoredConstraint"]:
        return tuple(self.constraints)


def create_mark(class_id: str, *, catalog: Optional[ClassCatalog] = None) -> MarkInstance:
    cls = (catalog or CATALOG).get(class_id, "mark")
    mark = MarkInstance(cls)
    mark.initialize_state()
    return mark


def create_glyph(
    class_id: str = "glyph.rectangle",
    *,
    table: Optional[str] = None,
    marks: Sequence[str] = (),
    catalog: Optional[ClassCatalog] = None,
) -> GlyphInstance:
    """Create an initialized glyph holding an anchor mark plus ``marks``."""

    catalog = catalog or CATALOG
    glyph = GlyphInstance(catalog.get(class_id, "glyph"), table=table)
    glyph.add_mark(create_mark("mark.anchor", catalog=catalog))
    for mark_class in marks:
        glyph.add_mark(create_mark(mark_class, catalog=catalog))
    glyph.initialize_state()
    return glyph


def create_chart(
    class_id: str = "chart.rectangle",
    *,
    glyphs: Sequence[GlyphInstance] = (),
    catalog: Optional[ClassCatalog] = None,
) -> ChartInstance:
    chart = ChartInstance((catalog or CATALOG).get(class_id, "chart"))
    chart.initialize_state()
    for glyph in glyphs:
        chart.add_glyph(glyph)
    return chart


__all__ = [
    "ChartInstance",
    "ElementInstance",
    "GlyphInstance",
    "MarkInstance",
    "create_chart",
    "create_glyph",
    "create_mark",
    "unique_id",
]
