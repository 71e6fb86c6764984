import logging
from io import StringIO

import numpy as np

from ledmapping.logging import configure_logging
from ledmapping.optimize import (
    IterationReport,
    Move,
    NelderMeadSolver,
    is_reporting_enabled,
    reporting_context,
    set_reporting_enabled,
)


def bowl(x: np.ndarray) -> float:
    return float((x[0] - 3.0) ** 2 + (x[1] - 4.0) ** 2)


def test_report_format_uses_move_code():
    report = IterationReport(iteration=3, move=Move.INNER_CONTRACT, spread=0.5, best=1.25)
    assert report.format() == "i\t0.5\t1.25"
    assert [m.code for m in Move] == ["r", "e", "c", "i", "s"]


def test_reports_are_logged_when_enabled():
    captured = StringIO()
    configure_logging(level=logging.INFO, stream=captured)
    try:
        solver = NelderMeadSolver(bowl, step=1.0, epsilon=1e-6, report=True)
        res = solver.find_minimum(np.zeros(2), max_iterations=200)
    finally:
        configure_logging(level=logging.WARNING)
    reports = solver.reports
    assert len(reports) == res.nit
    assert [r.iteration for r in reports] == list(range(1, res.nit + 1))
    assert reports[0].move is Move.EXPAND
    assert reports[-1].spread <= 1e-6
    assert reports[-1].best == res.fun
    assert all(r.spread >= 0 for r in reports)
    assert "e\t" in captured.getvalue()


def test_reporting_does_not_change_result():
    quiet = NelderMeadSolver(bowl, step=1.0, epsilon=1e-8, report=False)
    loud = NelderMeadSolver(bowl, step=1.0, epsilon=1e-8, report=True)
    res_quiet = quiet.find_minimum(np.zeros(2))
    res_loud = loud.find_minimum(np.zeros(2))
    assert np.array_equal(res_quiet.x, res_loud.x)
    assert res_quiet.fun == res_loud.fun
    assert res_quiet.nit == res_loud.nit
    assert quiet.reports == []


def test_callback_called_every_iteration():
    seen = []
    solver = NelderMeadSolver(bowl, step=1.0, epsilon=1e-6, callback=seen.append)
    res = solver.find_minimum(np.zeros(2), max_iterations=200)
    assert len(seen) == res.nit
    assert all(isinstance(r, IterationReport) for r in seen)
    bests = [r.best for r in seen]
    assert bests == sorted(bests, reverse=True)


def test_reporting_default_follows_global_flag():
    previous = is_reporting_enabled()
    with reporting_context(True):
        assert NelderMeadSolver(bowl, 1.0, 1e-6).config.report
        assert not NelderMeadSolver(bowl, 1.0, 1e-6, report=False).config.report
    assert is_reporting_enabled() == previous

    set_reporting_enabled(False)
    try:
        assert not NelderMeadSolver(bowl, 1.0, 1e-6).config.report
    finally:
        set_reporting_enabled(previous)
