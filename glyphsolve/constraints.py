"""User-authored constraints between element attributes.

These are the persisted form of alignment snaps and numeric pins; each solve
turns them into fresh solver constraints.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional, Sequence, Tuple, Union

from .solver.types import ConstraintStrength

if TYPE_CHECKING:  # pragma: no cover
    from .elements import ElementInstance
    from .session import SolveSession

ElementLike = Union["ElementInstance", str]


@dataclass(frozen=True)
class AttributeRef:
    element_id: str
    attribute: str

    def __str__(self) -> str:
        return f"{self.element_id}.{self.attribute}"


RefTerm = Tuple[float, AttributeRef]


@dataclass(frozen=True)
class AuthoredConstraint:
    """``Σ lhs (= | >=) Σ rhs + constant`` over attribute references."""

    strength: ConstraintStrength
    lhs: Tuple[RefTerm, ...]
    rhs: Tuple[RefTerm, ...] = ()
    constant: float = 0.0
    relation: str = "eq"
    weight: float = 1.0
    label: Optional[str] = None

    def __post_init__(self) -> None:
        if self.relation not in ("eq", "ge"):
            raise ValueError(f"unsupported relation '{self.relation}'")
        if self.relation == "ge" and ConstraintStrength(self.strength).is_hard:
            raise ValueError("inequalities are only supported at soft strengths")

    def references(self) -> Tuple[AttributeRef, ...]:
        return tuple(ref for _, ref in self.lhs + self.rhs)

    def emit(self, session: "SolveSession") -> None:
        lhs = [(coeff, session.resolve(ref)) for coeff, ref in self.lhs]
        rhs = [(coeff, session.resolve(ref)) for coeff, ref in self.rhs]
        label = self.label or str(self)
        if self.relation == "eq":
            session.add_linear(self.strength, self.constant, lhs, rhs, weight=self.weight, label=label)
        else:
            session.add_soft_inequality(self.strength, self.constant, lhs, rhs, weight=self.weight, label=label)

    def __str__(self) -> str:
        def side(terms: Sequence[RefTerm]) -> str:
            return " + ".join(f"{coeff:g}*{ref}" for coeff, ref in terms) or "0"

        op = "=" if self.relation == "eq" else ">="
        text = f"{side(self.lhs)} {op} {side(self.rhs)}"
        if self.constant:
            text += f" + {self.constant:g}"
        return text


def ref(element: ElementLike, attribute: str) -> AttributeRef:
    element_id = element if isinstance(element, str) else element.id
    return AttributeRef(element_id, attribute)


def pin(
    element: ElementLike,
    attribute: str,
    value: float,
    strength: ConstraintStrength = ConstraintStrength.STRONG,
) -> AuthoredConstraint:
    """Hold ``element.attribute`` at ``value``."""

    return AuthoredConstraint(
        strength=strength,
        lhs=((1.0, ref(element, attribute)),),
        constant=float(value),
        label=f"pin({ref(element, attribute)}={value:g})",
    )


def align(
    element: ElementLike,
    attribute: str,
    target: ElementLike,
    target_attribute: str,
    strength: ConstraintStrength = ConstraintStrength.HARD,
) -> AuthoredConstraint:
    """Snap ``element.attribute`` onto ``target.target_attribute``."""

    return offset(element, attribute, target, target_attribute, 0.0, strength)


def offset(
    element: ElementLike,
    attribute: str,
    target: ElementLike,
    target_attribute: str,
    distance: float,
    strength: ConstraintStrength = ConstraintStrength.HARD,
) -> AuthoredConstraint:
    return AuthoredConstraint(
        strength=strength,
        lhs=((1.0, ref(element, attribute)),),
        rhs=((1.0, ref(target, target_attribute)),),
        constant=float(distance),
    )


def at_least(
    element: ElementLike,
    attribute: str,
    value: float,
    strength: ConstraintStrength = ConstraintStrength.MEDIUM,
) -> AuthoredConstraint:
    return AuthoredConstraint(
        strength=strength,
        lhs=((1.0, ref(element, attribute)),),
        constant=float(value),
        relation="ge",
    )


__all__ = [
    "AttributeRef",
    "AuthoredConstraint",
    "align",
    "at_least",
    "offset",
    "pin",
    "ref",
]
