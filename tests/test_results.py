"""Tests for the TestResult and ConfidenceInterval records and their adapters."""
import dataclasses
from types import SimpleNamespace

import numpy as np
import pandas as pd
import pytest

from apaprint.exceptions import InvalidInputError
from apaprint.results import ConfidenceInterval, TestResult


# ---------------------------------------------------------------------------
#  Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def welch_mapping():
    """An R htest-like record of a Welch two-sample t test."""
    return {
        "statistic": {"t": -1.8608},
        "parameter": {"df": 17.776},
        "p.value": 0.07939,
        "conf.int": [-3.3654832, 0.2054832],
        "conf.level": 0.95,
        "estimate": {"mean of x": 0.75, "mean of y": 2.33},
        "method": "Welch Two Sample t-test",
    }


# ===================================================================
#  ConfidenceInterval
# ===================================================================

class TestConfidenceInterval:

    def test_default_level(self):
        ci = ConfidenceInterval(0.11, 0.86)
        assert ci.conf_level == 0.95
        assert ci.as_tuple() == (0.11, 0.86)

    def test_numpy_values_become_floats(self):
        ci = ConfidenceInterval(np.float64(0.1), np.float32(0.5), 0.9)
        assert type(ci.lower) is float
        assert type(ci.upper) is float

    def test_bounds_must_be_finite(self):
        with pytest.raises(InvalidInputError, match="must be finite"):
            ConfidenceInterval(float("-inf"), 0.4)

    def test_lower_above_upper(self):
        with pytest.raises(InvalidInputError, match="exceeds upper bound"):
            ConfidenceInterval(0.9, 0.1)

    def test_level_out_of_range(self):
        with pytest.raises(InvalidInputError):
            ConfidenceInterval(0.1, 0.9, 95)
        with pytest.raises(InvalidInputError):
            ConfidenceInterval(0.1, 0.9, 1.0)

    def test_from_bounds_list(self):
        ci = ConfidenceInterval.from_bounds([0.2, 0.4], 0.9)
        assert ci == ConfidenceInterval(0.2, 0.4, 0.9)

    def test_from_bounds_array_and_series(self):
        assert ConfidenceInterval.from_bounds(np.array([[0.2, 0.4]]), 0.9).upper == 0.4
        assert ConfidenceInterval.from_bounds(pd.Series([0.2, 0.4]), 0.9).lower == 0.2

    def test_from_bounds_passthrough(self):
        ci = ConfidenceInterval(0.2, 0.4)
        assert ConfidenceInterval.from_bounds(ci, None) is ci
        assert ConfidenceInterval.from_bounds(ci, 0.95) is ci

    def test_from_bounds_conflicting_level(self):
        with pytest.raises(InvalidInputError, match="contradicts"):
            ConfidenceInterval.from_bounds(ConfidenceInterval(0.2, 0.4, 0.95), 0.9)

    @pytest.mark.parametrize(
        "bounds", [{"lower": 0.1, "upper": 0.2}, {0.1, 0.2}, "ab", 0.1]
    )
    def test_from_bounds_rejects_non_sequences(self, bounds):
        with pytest.raises(InvalidInputError, match="sequence, array or Series"):
            ConfidenceInterval.from_bounds(bounds, 0.95)

    def test_from_bounds_wrong_length(self):
        with pytest.raises(InvalidInputError, match="length 2"):
            ConfidenceInterval.from_bounds([0.1, 0.2, 0.3], 0.95)

    def test_from_bounds_needs_level(self):
        with pytest.raises(InvalidInputError, match="confidence level"):
            ConfidenceInterval.from_bounds([0.1, 0.2], None)

    def test_frozen(self):
        ci = ConfidenceInterval(0.1, 0.2)
        with pytest.raises(dataclasses.FrozenInstanceError):
            ci.lower = 0.0


# ===================================================================
#  TestResult
# ===================================================================

class TestTestResult:

    def test_minimal(self):
        r = TestResult(statistic=18.5, statistic_name="W", p_value=0.069)
        assert r.parameters == {}
        assert r.estimate is None
        assert r.df is None
        assert r.estimate_names == ()

    def test_df_lookup_is_case_insensitive(self):
        r = TestResult(2.0, "t", 0.05, parameters={"DF": 12})
        assert r.df == 12

    def test_df_ignores_other_parameters(self):
        r = TestResult(2.0, "F", 0.05, parameters={"num df": 2, "denom df": 12})
        assert r.df is None

    def test_mappings_are_copied(self):
        params = {"df": 10}
        estimate = {"cor": 0.3}
        r = TestResult(2.0, "t", 0.05, parameters=params, estimate=estimate)
        params["df"] = 99
        estimate["cor"] = 0.9
        assert r.df == 10
        assert r.estimate == {"cor": 0.3}

    def test_estimate_from_series(self):
        r = TestResult(2.0, "t", 0.05, estimate=pd.Series({"mean of x": 1.0, "mean of y": 2.0}))
        assert r.estimate_names == ("mean of x", "mean of y")
        assert r.estimate_values == (1.0, 2.0)

    def test_frozen(self):
        r = TestResult(2.0, "t", 0.05)
        with pytest.raises(dataclasses.FrozenInstanceError):
            r.p_value = 0.5

    def test_validate_returns_self(self):
        r = TestResult(2.0, "t", 0.05, parameters={"df": 10}, sample_size=12)
        assert r.validate() is r

    @pytest.mark.parametrize(
        "kwargs, message",
        [
            (dict(statistic="2.0"), "statistic"),
            (dict(statistic=float("nan")), "NaN"),
            (dict(statistic_name=""), "must not be empty"),
            (dict(statistic_name=3), "statistic_name"),
            (dict(p_value=1.5), "between 0 and 1"),
            (dict(parameters={"df": "ten"}), "df"),
            (dict(statistic=float("inf")), "must be finite"),
            (dict(parameters={"df": float("nan")}), "NaN"),
            (dict(parameters={"df": float("inf")}), "must be finite"),
            (dict(estimate={"cor": float("-inf")}), "must be finite"),
            (dict(estimate={}), "at least one"),
            (dict(sample_size=-1), "sample_size"),
            (dict(sample_size=3.5), "integer"),
            (dict(confidence_interval=(0.1, 0.2)), "ConfidenceInterval"),
        ],
    )
    def test_validate_rejects(self, kwargs, message):
        fields = dict(statistic=2.0, statistic_name="t", p_value=0.05)
        fields.update(kwargs)
        with pytest.raises(InvalidInputError, match=message):
            TestResult(**fields).validate()

    def test_numpy_sample_size(self):
        TestResult(2.0, "X-squared", 0.05, sample_size=np.int64(40)).validate()


# ===================================================================
#  Adapters
# ===================================================================

class TestFromMapping:

    def test_welch(self, welch_mapping):
        r = TestResult.from_mapping(welch_mapping)
        assert r.statistic_name == "t"
        assert r.statistic == -1.8608
        assert r.df == 17.776
        assert r.p_value == 0.07939
        assert r.estimate_names == ("mean of x", "mean of y")
        assert r.confidence_interval.conf_level == 0.95
        assert r.method == "Welch Two Sample t-test"

    def test_conf_level_in_attributes(self, welch_mapping):
        del welch_mapping["conf.level"]
        welch_mapping["attributes"] = {"conf.level": 0.9}
        assert TestResult.from_mapping(welch_mapping).confidence_interval.conf_level == 0.9

    def test_python_style_keys(self):
        r = TestResult.from_mapping(
            {
                "statistic": {"X-squared": 3.2},
                "parameters": {"df": 1},
                "p_value": 0.07,
                "sample_size": 100,
            }
        )
        assert r.sample_size == 100
        assert r.confidence_interval is None

    def test_statistic_must_be_named(self, welch_mapping):
        welch_mapping["statistic"] = -1.86
        with pytest.raises(InvalidInputError, match="statistic"):
            TestResult.from_mapping(welch_mapping)

    def test_statistic_single_entry(self, welch_mapping):
        welch_mapping["statistic"] = {"t": 1.0, "z": 2.0}
        with pytest.raises(InvalidInputError, match="length 1"):
            TestResult.from_mapping(welch_mapping)

    def test_missing_p_value(self, welch_mapping):
        del welch_mapping["p.value"]
        with pytest.raises(InvalidInputError, match="no p value"):
            TestResult.from_mapping(welch_mapping)

    def test_not_a_mapping(self):
        with pytest.raises(InvalidInputError):
            TestResult.from_mapping([1, 2, 3])


class TestFromScipy:

    def test_duck_typed_result(self):
        fake = SimpleNamespace(statistic=2.0, pvalue=0.04, df=10)
        r = TestResult.from_scipy(fake, "t")
        assert r.df == 10.0
        assert r.confidence_interval is None

    def test_dof_attribute(self):
        fake = SimpleNamespace(statistic=4.1, pvalue=0.04, dof=np.int64(1))
        r = TestResult.from_scipy(fake, "X-squared", sample_size=80)
        assert r.df == 1.0
        assert r.sample_size == 80

    def test_explicit_parameters_override(self):
        fake = SimpleNamespace(statistic=2.0, pvalue=0.04, df=10)
        r = TestResult.from_scipy(fake, "t", parameters={"df": 9.5})
        assert r.df == 9.5

    def test_not_a_result(self):
        with pytest.raises(InvalidInputError, match="statistic"):
            TestResult.from_scipy(object(), "t")

    def test_ttest_ind(self):
        stats = pytest.importorskip("scipy.stats")
        x = np.array([0.7, -1.6, -0.2, -1.2, -0.1, 3.4, 3.7, 0.8, 0.0, 2.0])
        y = np.array([1.9, 0.8, 1.1, 0.1, -0.1, 4.4, 5.5, 1.6, 4.6, 3.4])
        res = stats.ttest_ind(x, y, equal_var=False)
        r = TestResult.from_scipy(
            res,
            "t",
            estimate={"mean of x": x.mean(), "mean of y": y.mean()},
            conf_level=0.95,
            method="Welch Two Sample t-test",
        )
        assert r.df == pytest.approx(float(res.df))
        assert r.p_value == pytest.approx(float(res.pvalue))
        assert r.confidence_interval.lower < r.confidence_interval.upper
        assert r.validate() is r

    def test_chi2_contingency(self):
        stats = pytest.importorskip("scipy.stats")
        res = stats.chi2_contingency([[10, 20], [20, 10]])
        r = TestResult.from_scipy(res, "X-squared", sample_size=60)
        assert r.df == 1.0
        assert r.validate() is r
