import logging

import numpy as np

from glyphsolve.logging_utils import _summarize, debug_log_call
from glyphsolve.solver import ConstraintSolver, ConstraintStrength


def test_summarize_large_arrays():
    text = _summarize(np.arange(100.0))
    assert "shape=(100,)" in text
    assert "max=99" in text


def test_debug_log_call_traces_entry_and_exit(caplog):
    logger = logging.getLogger("glyphsolve.tests")

    @debug_log_call(logger)
    def double(value):
        return value * 2

    with caplog.at_level(logging.DEBUG, logger="glyphsolve.tests"):
        assert double(4) == 8

    assert "Entering" in caplog.text
    assert "Exiting" in caplog.text
    assert debug_log_call(logger)(double) is double


def test_solver_methods_are_traced(caplog):
    solver = ConstraintSolver()
    x = solver.new_variable(1.0, name="x")
    solver.add_linear(ConstraintStrength.HARD, 2.0, [(1, x)])

    with caplog.at_level(logging.DEBUG, logger="glyphsolve.solver.solver_core"):
        solver.solve()

    assert "Entering ConstraintSolver.solve" in caplog.text
