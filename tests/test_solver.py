import math

import numpy as np
import pytest

from glyphsolve.errors import Infeasible
from glyphsolve.solver import (
    ConstraintSolver,
    ConstraintStrength,
    SolverOptions,
    VariableStrength,
    get_solver_options,
    set_solver_options,
)

HARD = ConstraintStrength.HARD


def _box_solver(width_seed=60.0, width_strength=VariableStrength.WEAKER):
    solver = ConstraintSolver()
    x1 = solver.new_variable(-30.0, name="x1")
    x2 = solver.new_variable(30.0, name="x2")
    width = solver.new_variable(width_seed, strength=width_strength, name="width")
    solver.add_linear(HARD, 0, [(1, x2), (-1, x1)], [(1, width)])
    return solver, x1, x2, width


def test_hard_offset_moves_variables_as_little_as_possible():
    solver = ConstraintSolver()
    x1 = solver.new_variable(0.0, name="x1")
    x2 = solver.new_variable(0.0, name="x2")
    solver.add_linear(HARD, 10.0, [(1, x2)], [(1, x1)])

    result = solver.solve()

    assert x2.value - x1.value == pytest.approx(10.0, abs=1e-9)
    assert x1.value == pytest.approx(-5.0, abs=1e-9)
    assert x2.value == pytest.approx(5.0, abs=1e-9)
    assert result.dof == 1
    assert result.max_hard_residual <= 1e-9


def test_contradictory_hard_constraints_are_infeasible():
    solver = ConstraintSolver()
    x = solver.new_variable(1.0, name="x1")
    solver.add_linear(HARD, 0.0, [(1, x)])
    solver.add_linear(HARD, 5.0, [(1, x)])

    with pytest.raises(Infeasible) as excinfo:
        solver.solve()

    assert excinfo.value.conflicts
    assert "x1" in str(excinfo.value)
    assert excinfo.value.residual > 1.0
    assert x.value == 1.0


def test_cancelling_terms_check_the_constant():
    solver = ConstraintSolver()
    x = solver.new_variable(2.0, name="x")
    solver.add_linear(HARD, 1.0, [(1, x)], [(1, x)])

    with pytest.raises(Infeasible):
        solver.solve()


def test_redundant_consistent_hard_constraints_are_accepted():
    solver = ConstraintSolver()
    a = solver.new_variable(0.0, name="a")
    b = solver.new_variable(0.0, name="b")
    solver.add_linear(HARD, 3.0, [(1, a), (1, b)])
    solver.add_linear(HARD, 6.0, [(2, a), (2, b)])

    solver.solve()

    assert a.value + b.value == pytest.approx(3.0, abs=1e-9)
    assert a.value == pytest.approx(b.value, abs=1e-9)


def test_stronger_tier_wins_over_weaker_tier():
    solver = ConstraintSolver()
    x = solver.new_variable(0.0, name="x")
    solver.add_linear(ConstraintStrength.WEAK, 0.0, [(1, x)])
    solver.add_linear(ConstraintStrength.STRONG, 10.0, [(1, x)])

    result = solver.solve()

    assert x.value == pytest.approx(10.0, abs=1e-9)
    assert result.tier_residuals["STRONG"] == pytest.approx(0.0, abs=1e-9)
    assert result.tier_residuals["WEAK"] == pytest.approx(10.0, abs=1e-9)


def test_same_tier_constraints_blend_by_weight():
    solver = ConstraintSolver()
    x = solver.new_variable(0.0, name="x")
    y = solver.new_variable(0.0, name="y")
    solver.add_linear(ConstraintStrength.MEDIUM, 10.0, [(1, x)])
    solver.add_linear(ConstraintStrength.MEDIUM, 20.0, [(1, x)])
    solver.add_linear(ConstraintStrength.MEDIUM, 0.0, [(1, y)], weight=3.0)
    solver.add_linear(ConstraintStrength.MEDIUM, 4.0, [(1, y)])

    solver.solve()

    assert x.value == pytest.approx(15.0, abs=1e-9)
    assert y.value == pytest.approx(1.0, abs=1e-9)


def test_variable_strength_anchors_seed_value():
    solver, x1, x2, width = _box_solver(width_seed=80.0)

    solver.solve()

    assert width.value == pytest.approx(80.0, abs=1e-9)
    assert x2.value - x1.value == pytest.approx(80.0, abs=1e-9)
    assert x1.value == pytest.approx(-40.0, abs=1e-9)
    assert x2.value == pytest.approx(40.0, abs=1e-9)


def test_explicit_soft_constraint_beats_weaker_anchor():
    solver, x1, x2, width = _box_solver()
    solver.add_linear(ConstraintStrength.STRONG, 100.0, [(1, width)])

    solver.solve()

    assert width.value == pytest.approx(100.0, abs=1e-9)
    assert x2.value - x1.value == pytest.approx(100.0, abs=1e-9)


def test_consistent_seed_is_a_fixed_point():
    solver, x1, x2, width = _box_solver()

    result = solver.solve()

    assert (x1.value, x2.value, width.value) == pytest.approx((-30.0, 30.0, 60.0), abs=1e-12)
    assert result.warnings == []


def test_solve_is_deterministic():
    def run():
        solver, _, _, width = _box_solver()
        solver.add_linear(ConstraintStrength.MEDIUM, 75.0, [(1, width)])
        solver.add_linear(ConstraintStrength.MEDIUM, 5.0, [(1, solver.variables[0])])
        return solver.solve().values

    first = run()
    second = run()

    assert np.array_equal(first, second)


def test_resolving_from_solution_is_idempotent():
    solver, x1, x2, width = _box_solver()
    solver.add_linear(ConstraintStrength.WEAK, 90.0, [(1, width)])
    solver.add_linear(ConstraintStrength.WEAK, 0.0, [(1, x1)])
    first = solver.solve().values

    again = ConstraintSolver()
    a = again.new_variable(first[0], name="x1")
    b = again.new_variable(first[1], name="x2")
    w = again.new_variable(first[2], strength=VariableStrength.WEAKER, name="width")
    again.add_linear(HARD, 0, [(1, b), (-1, a)], [(1, w)])
    again.add_linear(ConstraintStrength.WEAK, 90.0, [(1, w)])
    again.add_linear(ConstraintStrength.WEAK, 0.0, [(1, a)])
    second = again.solve().values

    assert second == pytest.approx(first, abs=1e-9)


def test_soft_inequality_activates_when_violated():
    solver = ConstraintSolver()
    x = solver.new_variable(0.0, name="x")
    y = solver.new_variable(10.0, name="y")
    solver.add_soft_inequality(ConstraintStrength.MEDIUM, 5.0, [(1, x)])
    solver.add_soft_inequality(ConstraintStrength.MEDIUM, 5.0, [(1, y)])

    result = solver.solve()

    assert x.value == pytest.approx(5.0, abs=1e-9)
    assert y.value == pytest.approx(10.0, abs=1e-9)
    assert len(result.active_inequalities) == 1
    assert ">=" in result.active_inequalities[0]


def test_soft_inequality_losing_to_stronger_tier_warns():
    solver = ConstraintSolver()
    x = solver.new_variable(0.0, name="x")
    solver.add_linear(ConstraintStrength.STRONG, 1.0, [(1, x)])
    solver.add_soft_inequality(ConstraintStrength.WEAK, 5.0, [(1, x)])

    result = solver.solve()

    assert x.value == pytest.approx(1.0, abs=1e-9)
    assert any("soft inequality" in warning for warning in result.warnings)


def test_hard_inequality_is_rejected():
    solver = ConstraintSolver()
    x = solver.new_variable(0.0)
    with pytest.raises(ValueError):
        solver.add_soft_inequality(HARD, 0.0, [(1, x)])


def test_handles_from_another_solver_are_rejected():
    first = ConstraintSolver()
    second = ConstraintSolver()
    foreign = first.new_variable(0.0)
    second.new_variable(0.0)

    with pytest.raises(ValueError):
        second.add_linear(HARD, 0.0, [(1, foreign)])


@pytest.mark.parametrize("value", [math.inf, math.nan])
def test_non_finite_seed_is_rejected(value):
    with pytest.raises(ValueError):
        ConstraintSolver().new_variable(value)


def test_non_positive_weight_is_rejected():
    solver = ConstraintSolver()
    x = solver.new_variable(0.0)
    with pytest.raises(ValueError):
        solver.add_linear(ConstraintStrength.WEAK, 0.0, [(1, x)], weight=0.0)


def test_empty_solver_solves_trivially():
    result = ConstraintSolver().solve()
    assert result.values.size == 0
    assert result.dof == 0


def test_solver_options_are_copied():
    original = get_solver_options()
    try:
        set_solver_options(SolverOptions(tol=1e-6))
        options = get_solver_options()
        options.tol = 1.0
        assert get_solver_options().tol == 1e-6
        assert ConstraintSolver().options.tol == 1e-6
        with pytest.raises(ValueError):
            set_solver_options(SolverOptions(tol=0.0))
    finally:
        set_solver_options(original)


def test_stronger_inequality_holds_against_weaker_equality():
    solver = ConstraintSolver()
    x = solver.new_variable(150.0, name="x")
    solver.add_soft_inequality(ConstraintStrength.MEDIUM, 100.0, [(1, x)])
    solver.add_linear(ConstraintStrength.WEAK, 50.0, [(1, x)])

    result = solver.solve()

    assert x.value == pytest.approx(100.0, abs=1e-9)
    assert result.warnings == []
    assert len(result.active_inequalities) == 1


def test_tightest_stronger_bound_wins_when_several_are_broken():
    solver = ConstraintSolver()
    x = solver.new_variable(10.0, name="x")
    solver.add_soft_inequality(ConstraintStrength.MEDIUM, 0.0, [(1, x)])
    solver.add_soft_inequality(ConstraintStrength.MEDIUM, 5.0, [(1, x)])
    solver.add_linear(ConstraintStrength.WEAK, -1.0, [(1, x)])

    result = solver.solve()

    assert x.value == pytest.approx(5.0, abs=1e-9)
    assert result.warnings == []


def test_stronger_inequality_bounds_weaker_anchor():
    solver = ConstraintSolver()
    x = solver.new_variable(270.0, name="x")
    width = solver.new_variable(30.0, strength=VariableStrength.WEAKER, name="width")
    solver.add_linear(HARD, 0.0, [(1, width)], [(1, x)])
    solver.add_soft_inequality(ConstraintStrength.STRONG, 100.0, [(1, x)])

    solver.solve()

    assert x.value == pytest.approx(100.0, abs=1e-9)
    assert width.value == pytest.approx(100.0, abs=1e-9)
