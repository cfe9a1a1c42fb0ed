from __future__ import annotations

from typing import Optional, Sequence, Tuple

import numpy as np
from scipy import linalg

from .model import LinearConstraint


def _stack_rows(
    constraints: Sequence[LinearConstraint], size: int, *, weighted: bool = False
) -> Tuple[np.ndarray, np.ndarray]:
    """Return ``(matrix, rhs)`` for ``constraints`` over ``size`` variables."""

    matrix = np.zeros((len(constraints), size), dtype=float)
    rhs = np.zeros(len(constraints), dtype=float)
    for row, constraint in enumerate(constraints):
        for idx, coeff in constraint.coefficients.items():
            matrix[row, idx] = coeff
        rhs[row] = constraint.constant
        if weighted:
            w = np.sqrt(constraint.weight)
            matrix[row] *= w
            rhs[row] *= w
    return matrix, rhs


def _min_norm_solution(matrix: np.ndarray, rhs: np.ndarray, rcond: Optional[float]) -> np.ndarray:
    if matrix.shape[1] == 0:
        return np.zeros(0, dtype=float)
    solution, _, _, _ = linalg.lstsq(matrix, rhs, cond=rcond, lapack_driver="gelsd")
    return np.asarray(solution, dtype=float)


def _null_basis(matrix: np.ndarray, rcond: Optional[float]) -> np.ndarray:
    """Orthonormal basis (as columns) of the null space of ``matrix``."""

    cols = matrix.shape[1]
    if cols == 0:
        return np.zeros((0, 0), dtype=float)
    if matrix.shape[0] == 0:
        return np.eye(cols, dtype=float)
    return linalg.null_space(matrix, rcond=rcond)


def _restrict(
    point: np.ndarray,
    basis: np.ndarray,
    matrix: np.ndarray,
    rhs: np.ndarray,
    rcond: Optional[float],
) -> Tuple[np.ndarray, np.ndarray]:
    """Minimise ``|matrix·x - rhs|`` over ``x = point + basis·z``.

    Returns a point of the optimal set and an orthonormal basis of the
    directions along which the optimum is not unique.
    """

    if basis.shape[1] == 0 or matrix.shape[0] == 0:
        return point, basis
    reduced = matrix @ basis
    target = rhs - matrix @ point
    step = _min_norm_solution(reduced, target, rcond)
    new_point = point + basis @ step
    new_basis = basis @ _null_basis(reduced, rcond)
    return new_point, new_basis


def _project(point: np.ndarray, basis: np.ndarray, target: np.ndarray) -> np.ndarray:
    """Closest point to ``target`` on the affine set ``point + span(basis)``."""

    if basis.shape[1] == 0:
        return point
    return point + basis @ (basis.T @ (target - point))


def _rms(values: np.ndarray) -> float:
    if values.size == 0:
        return 0.0
    return float(np.sqrt(np.mean(values * values)))
