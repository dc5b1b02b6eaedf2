import numpy as np
import pytest

from soilsim.core.exceptions import ErrorContext, ParameterError, PhysicsModelError, SoilSimError
from soilsim.core.types import Advisory
from soilsim.core.validation import (
    as_open_fraction,
    as_positive_int,
    as_positive_scalar,
    as_scalar,
    as_series,
)

ARGS = ("value", "test", "check")


class TestScalarChecks:

    @pytest.mark.parametrize("value", [1, 2.5, np.float64(3.0), np.int32(4), -7.0])
    def test_as_scalar_accepts_reals(self, value):
        assert as_scalar(value, *ARGS) == float(value)

    @pytest.mark.parametrize("value", [None, "1.0", True, np.nan, np.inf, [1.0], 1 + 2j])
    def test_as_scalar_rejects(self, value):
        with pytest.raises(ParameterError):
            as_scalar(value, *ARGS)

    def test_as_scalar_accepts_zero_dim_array(self):
        assert as_scalar(np.array(10.0), *ARGS) == 10.0
        assert isinstance(as_scalar(np.array(3), *ARGS), float)

    @pytest.mark.parametrize("value", [np.array([1.0]), np.array(True), np.array("1.0"), np.array(np.nan)])
    def test_as_scalar_rejects_non_scalar_arrays(self, value):
        with pytest.raises(ParameterError):
            as_scalar(value, *ARGS)

    def test_as_positive_scalar(self):
        assert as_positive_scalar(0.1, *ARGS) == 0.1
        with pytest.raises(ParameterError):
            as_positive_scalar(0.0, *ARGS)

    @pytest.mark.parametrize("value", [0.0, 1.0, -0.2, 1.5])
    def test_as_open_fraction_rejects_bounds(self, value):
        with pytest.raises(ParameterError):
            as_open_fraction(value, *ARGS)

    def test_as_positive_int(self):
        assert as_positive_int(np.int64(3), *ARGS) == 3
        for value in (0, -1, 1.0, False):
            with pytest.raises(ParameterError):
                as_positive_int(value, *ARGS)


class TestSeriesChecks:

    def test_returns_float_copy(self):
        source = np.array([1, 2, 3])
        result = as_series(source, *ARGS)

        assert result.dtype == float
        result[0] = 99
        assert source[0] == 1

    def test_empty_allowed_by_default(self):
        assert as_series([], *ARGS).size == 0
        with pytest.raises(ParameterError):
            as_series([], *ARGS, allow_empty=False)

    def test_min_value(self):
        with pytest.raises(ParameterError):
            as_series([1.0, -0.1], *ARGS, min_value=0.0)


class TestErrors:

    def test_hierarchy(self):
        assert issubclass(ParameterError, PhysicsModelError)
        assert issubclass(PhysicsModelError, SoilSimError)

    def test_str_includes_context(self):
        error = ParameterError("dt must be positive", ErrorContext(component="heat_diffusion", parameter="dt"))

        assert str(error) == "ParameterError: dt must be positive [Component: heat_diffusion] [Parameter: dt]"

    def test_default_context(self):
        assert str(SoilSimError("boom")) == "SoilSimError: boom"


def test_advisory_descriptions():
    for advisory in Advisory:
        assert advisory.description
    assert Advisory("stability_criterion_exceeded") is Advisory.STABILITY_CRITERION_EXCEEDED
