"""Process-wide defaults for solver options."""

from __future__ import annotations

import copy

from .model import SolverOptions

_SOLVER_OPTIONS = SolverOptions()


def get_solver_options() -> SolverOptions:
    return copy.deepcopy(_SOLVER_OPTIONS)


def set_solver_options(options: SolverOptions) -> None:
    global _SOLVER_OPTIONS
    if options.tol <= 0.0:
        raise ValueError("solver tolerance must be positive")
    _SOLVER_OPTIONS = copy.deepcopy(options)
