"""Tests for the optimize() entry point."""

from __future__ import annotations

import numpy as np
import pytest

from simplex_fit import (
    CircleFit,
    ConfigurationError,
    LineFit,
    NelderMeadParams,
    NumericError,
    Paraboloid,
    StoppingCriteria,
    optimize,
    random_initial_guess,
)
from simplex_fit.functions import CIRCLE_SAMPLES, LINE_SAMPLES
from simplex_fit.logging import RunLogger


class TestConvergence:
    """The three demonstration problems reach their known optima."""

    @pytest.mark.parametrize("x0", [[0.5, 0.5], [10.0, -7.0], [-3.25, 120.0]])
    def test_paraboloid_fixed_starts(self, x0):
        result = optimize(Paraboloid(), x0, max_evaluations=10000)
        assert abs(result.point[0]) < 1e-4
        assert abs(result.point[1]) < 1e-4
        assert result.value < 1e-6
        assert result.evaluations <= 10000

    @pytest.mark.parametrize("seed", [0, 1, 2, 3])
    def test_paraboloid_random_starts(self, seed):
        result = optimize(Paraboloid(), random_initial_guess(2, seed=seed))
        assert np.all(np.abs(result.point) < 1e-4)
        assert result.value < 1e-6

    def test_line_fit(self):
        """Samples on y = x give slope 1 and intercept 0."""
        result = optimize(LineFit(*LINE_SAMPLES), [0.5, 0.5])
        slope, intercept = result.point
        assert slope == pytest.approx(1.0, abs=1e-3)
        assert intercept == pytest.approx(0.0, abs=1e-3)
        assert result.value == pytest.approx(0.0, abs=1e-3)

    def test_line_fit_random_start(self):
        result = optimize(LineFit(*LINE_SAMPLES), random_initial_guess(2, seed=7))
        np.testing.assert_allclose(result.point, [1.0, 0.0], atol=1e-3)

    def test_circle_fit(self):
        """Samples on the unit circle give center (0, 0) and radius 1."""
        result = optimize(CircleFit(*CIRCLE_SAMPLES), [0.3, 0.2, 0.7])
        np.testing.assert_allclose(result.point, [0.0, 0.0, 1.0], atol=1e-3)
        assert result.value == pytest.approx(0.0, abs=1e-3)

    def test_circle_fit_random_start(self):
        result = optimize(CircleFit(*CIRCLE_SAMPLES), random_initial_guess(3, seed=11))
        np.testing.assert_allclose(result.point, [0.0, 0.0, 1.0], atol=1e-3)

    def test_plain_callable_any_dimension(self):
        """Objectives without a `dimension` attribute accept any guess length."""
        target = np.array([1.0, -2.0, 3.0])
        result = optimize(lambda x: float(np.sum((x - target) ** 2)), [0.0, 0.0, 0.0])
        np.testing.assert_allclose(result.point, target, atol=1e-4)

    def test_maximize(self):
        """Maximize negates internally but reports values in the caller's sign."""
        result = optimize(lambda x: -(x[0] ** 2 + x[1] ** 2), [2.0, -1.0], goal="maximize")
        assert result.goal == "maximize"
        assert np.all(np.abs(result.point) < 1e-4)
        assert -1e-6 < result.value <= 0.0
        assert all(b >= a for a, b in zip(result.history, result.history[1:]))

    def test_goal_is_case_insensitive(self):
        result = optimize(Paraboloid(), [1.0, 1.0], goal="MINIMIZE")
        assert result.goal == "minimize"

    def test_converged_flag(self):
        result = optimize(Paraboloid(), [1.0, 1.0])
        assert result.converged
        assert result.iterations == len(result.history)


class TestDeterminism:
    """No randomness inside the optimizer."""

    def test_identical_inputs_identical_results(self):
        objective = CircleFit(*CIRCLE_SAMPLES)
        r1 = optimize(objective, [0.3, 0.2, 0.7])
        r2 = optimize(objective, [0.3, 0.2, 0.7])
        np.testing.assert_array_equal(r1.point, r2.point)
        assert r1.value == r2.value
        assert r1.evaluations == r2.evaluations
        assert r1.history == r2.history

    def test_guess_is_not_mutated(self):
        x0 = np.array([3.0, 4.0])
        optimize(Paraboloid(), x0)
        np.testing.assert_array_equal(x0, [3.0, 4.0])


class TestBudget:
    """The evaluation ceiling is a normal terminal state."""

    def test_single_evaluation_returns_best_initial_vertex(self):
        """Vertices (1,2), (2,2), (1,3) score 5, 8, 10."""
        result = optimize(Paraboloid(), [1.0, 2.0], max_evaluations=1)
        assert result.iterations == 0
        assert result.evaluations == 3
        assert not result.converged
        np.testing.assert_array_equal(result.point, [1.0, 2.0])
        assert result.value == 5.0
        assert result.history == ()

    def test_budget_never_exceeded(self):
        result = optimize(Paraboloid(), [10.0, -7.0], max_evaluations=50)
        assert result.evaluations == 50
        assert not result.converged
        assert result.value < 136.0

    def test_max_evaluations_overrides_stopping(self):
        stopping = StoppingCriteria(rel_tol=1e-10, abs_tol=1e-30, max_evaluations=10000)
        result = optimize(Paraboloid(), [10.0, -7.0], stopping=stopping, max_evaluations=20)
        assert result.evaluations == 20

    def test_history_never_worsens(self):
        result = optimize(LineFit(*LINE_SAMPLES), [3.0, -2.0])
        assert all(b <= a for a, b in zip(result.history, result.history[1:]))
        assert result.value <= result.history[-1]

    def test_loose_tolerance_stops_earlier(self):
        tight = optimize(Paraboloid(), [1.0, 1.0])
        loose = optimize(Paraboloid(), [1.0, 1.0], stopping=StoppingCriteria(rel_tol=1e-2, abs_tol=1e-3))
        assert loose.converged
        assert loose.evaluations < tight.evaluations


class TestErrors:
    """Configuration and numeric failures surface to the caller."""

    def test_dimension_mismatch(self):
        with pytest.raises(ConfigurationError, match="expects 2"):
            optimize(Paraboloid(), [1.0, 2.0, 3.0])

    @pytest.mark.parametrize("budget", [0, -5])
    def test_non_positive_budget(self, budget):
        with pytest.raises(ConfigurationError):
            optimize(Paraboloid(), [1.0, 2.0], max_evaluations=budget)

    def test_zero_step_is_degenerate(self):
        with pytest.raises(ConfigurationError, match="Degenerate"):
            optimize(Paraboloid(), [1.0, 2.0], params=NelderMeadParams(step=0.0))

    def test_zero_step_on_one_axis(self):
        with pytest.raises(ConfigurationError, match="axis"):
            optimize(Paraboloid(), [1.0, 2.0], params=NelderMeadParams(step=[1.0, 0.0]))

    def test_step_lost_to_rounding_is_degenerate(self):
        with pytest.raises(ConfigurationError, match="vanishes"):
            optimize(Paraboloid(), [1e20, 0.0])

    def test_step_length_mismatch(self):
        with pytest.raises(ConfigurationError):
            optimize(Paraboloid(), [1.0, 2.0], params=NelderMeadParams(step=[1.0, 1.0, 1.0]))

    def test_unknown_goal(self):
        with pytest.raises(ConfigurationError, match="goal"):
            optimize(Paraboloid(), [1.0, 2.0], goal="sideways")

    @pytest.mark.parametrize("guess", [[], [np.nan, 1.0], [[1.0, 2.0]]])
    def test_bad_guess(self, guess):
        with pytest.raises(ConfigurationError):
            optimize(lambda x: 0.0, guess)

    def test_configuration_error_is_value_error(self):
        with pytest.raises(ValueError):
            optimize(Paraboloid(), [1.0])

    def test_nan_objective(self):
        with pytest.raises(NumericError):
            optimize(lambda x: float("nan"), [1.0, 1.0])

    def test_infinite_value_mid_run(self):
        """Vertex (2, 1) of the initial simplex evaluates to inf."""
        objective = lambda x: float(x[0]) if x[0] < 1.5 else float("inf")
        with pytest.raises(NumericError):
            optimize(objective, [1.0, 1.0])

    def test_non_scalar_objective(self):
        with pytest.raises(NumericError, match="non-scalar"):
            optimize(lambda x: x, [1.0, 1.0])

    def test_circle_sample_at_center(self):
        """A sample at the candidate center raises instead of yielding NaN."""
        with pytest.raises(NumericError, match="coincides"):
            optimize(CircleFit([0.5, 2.0], [0.5, 2.0]), [0.5, 0.5, 1.0])


class TestResult:
    """OptimizationResult is immutable."""

    def test_frozen(self):
        result = optimize(Paraboloid(), [1.0, 1.0], max_evaluations=1)
        with pytest.raises(AttributeError):
            result.value = 0.0
        with pytest.raises(ValueError):
            result.point[0] = 42.0

    def test_unpacks_to_point_and_value(self):
        point, value = optimize(Paraboloid(), [1.0, 2.0], max_evaluations=1)
        np.testing.assert_array_equal(point, [1.0, 2.0])
        assert value == 5.0

    def test_str_matches_runner_format(self):
        result = optimize(Paraboloid(), [1.0, 2.0], max_evaluations=1)
        assert str(result) == "[1., 2.] : 5.0"


class TestLogging:
    """Iteration rows reach the RunLogger."""

    def test_logger_receives_one_row_per_iteration(self, tmp_path):
        logger = RunLogger(base_dir=tmp_path, filename="run.csv", metadata={"problem": "paraboloid"})
        result = optimize(Paraboloid(), [1.0, 1.0], logger=logger)
        rows = logger.records
        assert len(rows) == result.iterations
        assert rows[0]["iteration"] == 1
        assert rows[-1]["best_value"] == result.value
        assert rows[0]["problem"] == "paraboloid"
        assert rows[0]["goal"] == "minimize"
        assert {r["move"] for r in rows} <= {"reflect", "expand", "contract", "shrink"}

    def test_verbose_prints_progress(self, capsys):
        optimize(Paraboloid(), [1.0, 1.0], verbose=True, log_every=5)
        out = capsys.readouterr().out
        assert "Iter 5:" in out
        assert "Done after" in out
