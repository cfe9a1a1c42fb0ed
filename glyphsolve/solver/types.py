from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Optional, Sequence, Tuple


class ConstraintStrength(IntEnum):
    """Priority of a constraint; larger values win when constraints conflict."""

    WEAKER = 1
    WEAK = 2
    MEDIUM = 3
    STRONG = 4
    HARD = 5

    @property
    def is_hard(self) -> bool:
        return self is ConstraintStrength.HARD


class VariableStrength(IntEnum):
    """How strongly a variable is held at its seed value during a solve."""

    NONE = 0
    WEAKER = 1
    WEAK = 2
    MEDIUM = 3
    STRONG = 4

    def as_constraint_strength(self) -> Optional[ConstraintStrength]:
        if self is VariableStrength.NONE:
            return None
        return ConstraintStrength(int(self))


SOFT_TIERS: Tuple[ConstraintStrength, ...] = (
    ConstraintStrength.STRONG,
    ConstraintStrength.MEDIUM,
    ConstraintStrength.WEAK,
    ConstraintStrength.WEAKER,
)


@dataclass(eq=False)
class VariableHandle:
    """One scalar unknown of a solver session.

    ``value`` holds the seed until a successful solve writes the result back.
    Handles compare by identity.
    """

    index: int
    value: float
    name: Optional[str] = None
    strength: VariableStrength = VariableStrength.NONE
    seed: float = field(init=False)

    def __post_init__(self) -> None:
        self.value = float(self.value)
        self.seed = self.value

    def __repr__(self) -> str:
        label = self.name or f"v{self.index}"
        return f"VariableHandle({label}={self.value:.6g})"


Term = Tuple[float, VariableHandle]
Terms = Sequence[Term]


__all__ = [
    "ConstraintStrength",
    "SOFT_TIERS",
    "Term",
    "Terms",
    "VariableHandle",
    "VariableStrength",
]
