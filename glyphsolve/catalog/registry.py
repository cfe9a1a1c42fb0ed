"""Write-once registry of element classes keyed by class id."""

from __future__ import annotations

import logging
from typing import Dict, List, Optional, Type, TypeVar

from ..errors import CatalogError, CatalogFrozen, UnknownElementClass
from .base import ElementClass

logger = logging.getLogger(__name__)

C = TypeVar("C", bound=Type[ElementClass])


class ClassCatalog:
    """Maps class ids to element class singletons.

    Registration happens at import time; :meth:`freeze` is called before the
    first solve and makes the catalog read-only.
    """

    def __init__(self) -> None:
        self._classes: Dict[str, ElementClass] = {}
        self._frozen = False

    @property
    def frozen(self) -> bool:
        return self._frozen

    def freeze(self) -> None:
        if not self._frozen:
            logger.info("Freezing class catalog with %d classes", len(self._classes))
        self._frozen = True

    def register(self, element_class: ElementClass) -> ElementClass:
        if self._frozen:
            raise CatalogFrozen(f"cannot register '{element_class.class_id}': catalog is frozen")
        class_id = element_class.class_id
        if not class_id:
            raise CatalogError(f"{type(element_class).__name__} does not declare a class_id")
        if class_id in self._classes:
            raise CatalogError(f"class id '{class_id}' is already registered")
        names = element_class.attribute_names
        if len(set(names)) != len(names):
            raise CatalogError(f"class '{class_id}' declares duplicate attributes")
        self._classes[class_id] = element_class
        logger.debug("Registered element class %s (%s)", class_id, element_class.kind)
        return element_class

    def get(self, class_id: str, kind: Optional[str] = None) -> ElementClass:
        try:
            element_class = self._classes[class_id]
        except KeyError:
            raise UnknownElementClass(f"unknown element class '{class_id}'") from None
        if kind is not None and element_class.kind != kind:
            raise CatalogError(f"class '{class_id}' is a {element_class.kind}, not a {kind}")
        return element_class

    def class_ids(self, kind: Optional[str] = None) -> List[str]:
        return [cid for cid, cls in self._classes.items() if kind is None or cls.kind == kind]

    def __contains__(self, class_id: object) -> bool:
        return class_id in self._classes

    def __len__(self) -> int:
        return len(self._classes)


CATALOG = ClassCatalog()


def register_class(cls: C) -> C:
    """Class decorator registering a singleton of ``cls`` in :data:`CATALOG`."""

    CATALOG.register(cls())
    return cls


def get_class(class_id: str, kind: Optional[str] = None) -> ElementClass:
    return CATALOG.get(class_id, kind)


__all__ = [
    "CATALOG",
    "ClassCatalog",
    "get_class",
    "register_class",
]
