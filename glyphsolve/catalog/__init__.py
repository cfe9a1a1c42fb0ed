"""Element class catalog.

Importing this package registers the built-in classes in :data:`CATALOG`.
"""

from .base import ChartClass, ElementClass, GlyphClass, MarkClass
from .registry import CATALOG, ClassCatalog, get_class, register_class
from . import charts, glyphs, marks  # noqa: F401  (registration side effects)
from .charts import RectangleChart
from .glyphs import RectangleGlyph
from .marks import AnchorMark, RectMark, SymbolMark

__all__ = [
    "AnchorMark",
    "CATALOG",
    "ChartClass",
    "ClassCatalog",
    "ElementClass",
    "GlyphClass",
    "MarkClass",
    "RectMark",
    "RectangleChart",
    "RectangleGlyph",
    "SymbolMark",
    "get_class",
    "register_class",
]
