"""Attribute schemas and the per-element attribute map."""

from __future__ import annotations

import math
import numbers
from dataclasses import dataclass
from typing import Any, Dict, Iterator, List, Mapping, Optional, Sequence, Tuple

from .errors import AttributeKindError, UnknownAttribute
from .solver.types import VariableStrength

ATTRIBUTE_KINDS = ("number", "boolean", "color", "string")
ATTRIBUTE_ROLES = ("positional", "intrinsic", "computed")


@dataclass(frozen=True)
class AttributeDescription:
    """Schema entry for one attribute of an element class."""

    name: str
    kind: str = "number"
    role: str = "positional"
    strength: VariableStrength = VariableStrength.NONE
    default_range: Optional[Tuple[float, float]] = None
    display_name: Optional[str] = None
    category: Optional[str] = None

    def __post_init__(self) -> None:
        if self.kind not in ATTRIBUTE_KINDS:
            raise ValueError(f"attribute '{self.name}' has unsupported kind '{self.kind}'")
        if self.role not in ATTRIBUTE_ROLES:
            raise ValueError(f"attribute '{self.name}' has unsupported role '{self.role}'")
        if self.default_range is not None:
            low, high = self.default_range
            if low > high:
                raise ValueError(f"attribute '{self.name}' has an empty default range {self.default_range}")
        if self.kind != "number" and self.strength != VariableStrength.NONE:
            raise ValueError(f"non-numeric attribute '{self.name}' cannot carry a variable strength")

    @property
    def is_numeric(self) -> bool:
        return self.kind == "number"


def intrinsic(
    name: str,
    *,
    default_range: Tuple[float, float],
    display_name: Optional[str] = None,
    category: str = "dimensions",
    strength: VariableStrength = VariableStrength.WEAKER,
) -> AttributeDescription:
    return AttributeDescription(
        name=name,
        kind="number",
        role="intrinsic",
        strength=strength,
        default_range=default_range,
        display_name=display_name or name.capitalize(),
        category=category,
    )


def positional(*names: str) -> List[AttributeDescription]:
    return [AttributeDescription(name=name) for name in names]


def _check_kind(description: AttributeDescription, value: Any) -> Any:
    kind = description.kind
    if kind == "number":
        if isinstance(value, bool) or not isinstance(value, numbers.Real):
            raise AttributeKindError(
                f"attribute '{description.name}' is numeric; got {type(value).__name__} {value!r}"
            )
        if not math.isfinite(value):
            raise AttributeKindError(f"attribute '{description.name}' needs a finite number; got {value!r}")
        return float(value)
    if kind == "boolean":
        if not isinstance(value, bool):
            raise AttributeKindError(
                f"attribute '{description.name}' is boolean; got {type(value).__name__} {value!r}"
            )
        return value
    if not isinstance(value, str):
        raise AttributeKindError(
            f"attribute '{description.name}' is a {kind}; got {type(value).__name__} {value!r}"
        )
    return value


class AttributeMap:
    """Named attribute values restricted to a class schema.

    Every schema attribute is present from construction on (``None`` until
    assigned); names outside the schema raise :class:`UnknownAttribute`.
    """

    __slots__ = ("_schema", "_values", "_class_id")

    def __init__(
        self,
        schema: Sequence[AttributeDescription],
        values: Optional[Mapping[str, Any]] = None,
        *,
        class_id: Optional[str] = None,
    ) -> None:
        self._schema: Dict[str, AttributeDescription] = {desc.name: desc for desc in schema}
        self._values: Dict[str, Any] = {desc.name: None for desc in schema}
        self._class_id = class_id
        if values:
            self.update(values)

    def describe(self, name: str) -> AttributeDescription:
        try:
            return self._schema[name]
        except KeyError:
            raise UnknownAttribute(name, self._class_id) from None

    def get(self, name: str) -> Any:
        self.describe(name)
        return self._values[name]

    def set(self, name: str, value: Any) -> None:
        description = self.describe(name)
        self._values[name] = _check_kind(description, value)

    def update(self, values: Mapping[str, Any]) -> None:
        checked = {name: _check_kind(self.describe(name), value) for name, value in values.items()}
        self._values.update(checked)

    def names(self) -> List[str]:
        return list(self._values)

    def numeric_names(self) -> List[str]:
        return [name for name, desc in self._schema.items() if desc.is_numeric]

    def items(self) -> Iterator[Tuple[str, Any]]:
        return iter(list(self._values.items()))

    def missing(self) -> List[str]:
        return [name for name, value in self._values.items() if value is None]

    def as_dict(self) -> Dict[str, Any]:
        return dict(self._values)

    def copy(self) -> "AttributeMap":
        return AttributeMap(self._schema.values(), self._values_without_none(), class_id=self._class_id)

    def _values_without_none(self) -> Dict[str, Any]:
        return {name: value for name, value in self._values.items() if value is not None}

    def __getitem__(self, name: str) -> Any:
        return self.get(name)

    def __setitem__(self, name: str, value: Any) -> None:
        self.set(name, value)

    def __contains__(self, name: object) -> bool:
        return name in self._schema

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        body = ", ".join(f"{name}={value!r}" for name, value in self._values.items())
        return f"AttributeMap({body})"


__all__ = [
    "ATTRIBUTE_KINDS",
    "ATTRIBUTE_ROLES",
    "AttributeDescription",
    "AttributeMap",
    "intrinsic",
    "positional",
]
