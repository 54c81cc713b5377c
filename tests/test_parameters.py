"""Tests for run parameters and defaults."""

import math

import pytest

from rootfinding_lab.data.parameters import (
    DEFAULT_FIXED_POINT_MAX_ITER,
    DEFAULT_FUNCTION,
    DEFAULT_TOLERANCE,
    DERIVATIVE_THRESHOLD,
    RunParameters,
    SolverSettings,
    coerce_number,
)


class TestDefaults:
    """Tests for module-level defaults."""

    def test_default_inputs(self) -> None:
        """Defaults should match the original form values."""
        params = RunParameters()
        assert params.expression_text == DEFAULT_FUNCTION == "x^2 - 5*sin(x) + x - 1"
        assert params.interval_start == 0.0
        assert params.interval_end == 1.0
        assert params.tolerance == DEFAULT_TOLERANCE == 0.001
        assert params.fixed_point_map is None

    def test_default_settings(self) -> None:
        """Bisection and Newton are unbounded by default."""
        settings = SolverSettings()
        assert settings.max_iterations is None
        assert settings.fixed_point_max_iter == DEFAULT_FIXED_POINT_MAX_ITER == 100
        assert settings.derivative_threshold == DERIVATIVE_THRESHOLD == 1e-10


class TestRunParameters:
    """Tests for RunParameters dataclass."""

    def test_immutable(self) -> None:
        """RunParameters should be immutable."""
        params = RunParameters()
        with pytest.raises(AttributeError):
            params.tolerance = 0.1  # type: ignore[misc]

    def test_start_point_is_midpoint(self) -> None:
        """start_point should be the interval midpoint."""
        assert RunParameters(interval_start=-1.0, interval_end=3.0).start_point == 1.0

    def test_from_form_coerces_text(self) -> None:
        """Raw text fields should be converted to floats."""
        params = RunParameters.from_form("x - 1", "0", "2.5", "1e-6")
        assert params.interval_start == 0.0
        assert params.interval_end == 2.5
        assert params.tolerance == 1e-6

    def test_from_form_invalid_number_is_nan(self) -> None:
        """Unparseable numbers should become NaN instead of raising."""
        params = RunParameters.from_form("x - 1", "abc", "1", "0.001")
        assert math.isnan(params.interval_start)
        assert math.isnan(params.start_point)

    def test_from_form_empty_map_is_none(self) -> None:
        """An empty fixed-point map means the built-in rule."""
        params = RunParameters.from_form("x", "0", "1", "0.1", fixed_point_map="")
        assert params.fixed_point_map is None


class TestCoerceNumber:
    """Tests for coerce_number()."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("0.001", 0.001),
            ("  2 ", 2.0),
            ("-3.5", -3.5),
            ("1e-3", 0.001),
            (".5", 0.5),
            ("1.5abc", 1.5),
            ("12px", 12.0),
            ("1_000", 1.0),
            ("0x10", 0.0),
            ("Infinity", math.inf),
            ("-inf", -math.inf),
            (4, 4.0),
            (0.25, 0.25),
        ],
    )
    def test_valid(self, value, expected: float) -> None:
        """Numbers and numeric prefixes should be parsed."""
        assert coerce_number(value) == expected

    @pytest.mark.parametrize("value", ["", "abc", "x1", "-", ".", "nan"])
    def test_invalid_is_nan(self, value: str) -> None:
        """Anything without a numeric prefix should be NaN."""
        assert math.isnan(coerce_number(value))
