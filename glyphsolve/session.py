"""Solve session: binds element attributes to solver variables for one pass."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Dict, List, Optional, Sequence, Tuple

from .constraints import AttributeRef
from .errors import AttributeKindError, ElementStateError, UnknownElement
from .solver import ConstraintSolver, ConstraintStrength, SolveResult, SolverOptions, Terms, VariableHandle

if TYPE_CHECKING:  # pragma: no cover
    from .elements import ElementInstance

logger = logging.getLogger(__name__)


class SolveSession:
    """Union of every participating attribute (as a variable) and constraint.

    A session is built, solved and applied once, then discarded.
    """

    def __init__(self, options: Optional[SolverOptions] = None) -> None:
        self.solver = ConstraintSolver(options)
        self._elements: Dict[str, "ElementInstance"] = {}
        self._bindings: Dict[Tuple[str, str], VariableHandle] = {}
        self.result: Optional[SolveResult] = None

    @property
    def elements(self) -> List["ElementInstance"]:
        return list(self._elements.values())

    @property
    def variable_count(self) -> int:
        return len(self.solver.variables)

    @property
    def constraint_count(self) -> int:
        return len(self.solver.constraints)

    def bind(self, element: "ElementInstance") -> None:
        """Allocate one variable per numeric attribute of ``element``."""

        existing = self._elements.get(element.id)
        if existing is element:
            return
        if existing is not None:
            raise ElementStateError(f"two elements share the id '{element.id}'")
        attrs = element.require_attributes()
        self._elements[element.id] = element
        for name in attrs.numeric_names():
            desc = attrs.describe(name)
            self._bindings[(element.id, name)] = self.solver.new_variable(
                attrs.get(name),
                strength=desc.strength,
                name=f"{element.id}.{name}",
            )

    def attr(self, element: "ElementInstance", name: str) -> VariableHandle:
        self.bind(element)
        handle = self._bindings.get((element.id, name))
        if handle is None:
            desc = element.require_attributes().describe(name)
            raise AttributeKindError(f"attribute '{name}' is a {desc.kind} and cannot be solved for")
        return handle

    def attrs(self, element: "ElementInstance", names: Sequence[str]) -> List[VariableHandle]:
        return [self.attr(element, name) for name in names]

    def resolve(self, reference: AttributeRef) -> VariableHandle:
        element = self._elements.get(reference.element_id)
        if element is None:
            raise UnknownElement(f"no element '{reference.element_id}' takes part in this solve")
        return self.attr(element, reference.attribute)

    def add_linear(
        self,
        strength: ConstraintStrength,
        constant: float,
        lhs: Terms,
        rhs: Terms = (),
        *,
        weight: float = 1.0,
        label: Optional[str] = None,
    ) -> None:
        self.solver.add_linear(strength, constant, lhs, rhs, weight=weight, label=label)

    def add_soft_inequality(
        self,
        strength: ConstraintStrength,
        constant: float,
        lhs: Terms,
        rhs: Terms = (),
        *,
        weight: float = 1.0,
        label: Optional[str] = None,
    ) -> None:
        self.solver.add_soft_inequality(strength, constant, lhs, rhs, weight=weight, label=label)

    def solve(self) -> SolveResult:
        self.result = self.solver.solve()
        return self.result

    def values(self) -> Dict[str, Dict[str, float]]:
        """Solved values grouped by element id."""

        if self.result is None:
            raise ElementStateError("session has not been solved")
        grouped: Dict[str, Dict[str, float]] = {}
        for (element_id, name), handle in self._bindings.items():
            grouped.setdefault(element_id, {})[name] = handle.value
        return grouped

    def apply(self) -> None:
        """Copy solved values into every bound element's attribute map."""

        grouped = self.values()
        for element_id, values in grouped.items():
            self._elements[element_id].require_attributes().update(values)
        logger.debug("Applied solved values to %d elements", len(grouped))
