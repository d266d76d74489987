# apaprint/results.py
"""
Records describing a computed hypothesis test.

:class:`TestResult` is the single input shape understood by the formatter.
Every optional part (degrees of freedom, estimate, confidence interval,
sample size) is an explicit field that is either present or ``None``.
Adapters build records from R-style ``htest`` mappings and from the result
objects returned by ``scipy.stats``.
"""

import numbers
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Sequence, Tuple

import numpy as np
import pandas as pd

from .exceptions import (
    InvalidInputError,
    validate_integer,
    validate_length,
    validate_number,
    validate_string,
)


def _first_present(mapping: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        if key in mapping and mapping[key] is not None:
            return mapping[key]
    return None


def _as_float_dict(values: Any, name: str, allow_inf: bool = True) -> Dict[str, float]:
    """Copy a mapping (or pandas Series) of named numbers into a plain dict."""
    if isinstance(values, pd.Series):
        values = values.to_dict()
    if not isinstance(values, Mapping):
        raise InvalidInputError.wrong_type(name, values, "a mapping of names to numbers")

    out = {}
    for key, value in values.items():
        if not isinstance(key, str):
            raise InvalidInputError.wrong_type(f"{name} name", key, "a string")
        out[key] = validate_number(value, f"{name}['{key}']", allow_nan=True, allow_inf=allow_inf)
    return out


@dataclass(frozen=True)
class ConfidenceInterval:
    """A confidence interval with its confidence level.

    Attributes:
        lower: Lower bound.
        upper: Upper bound.
        conf_level: Confidence level as a proportion (e.g. ``0.95``).
    """

    lower: float
    upper: float
    conf_level: float = 0.95

    def __post_init__(self):
        lower = validate_number(self.lower, "lower", allow_inf=False)
        upper = validate_number(self.upper, "upper", allow_inf=False)
        level = validate_number(self.conf_level, "conf_level")
        if not 0 < level < 1:
            raise InvalidInputError.out_of_range("conf_level", level, (0, 1))
        if lower > upper:
            raise InvalidInputError(
                f"Lower bound {lower} exceeds upper bound {upper}",
                argument="confidence_interval",
                validation_rule="lower <= upper",
            )

        object.__setattr__(self, "lower", lower)
        object.__setattr__(self, "upper", upper)
        object.__setattr__(self, "conf_level", level)

    @classmethod
    def from_bounds(cls, bounds: Any, conf_level: Optional[float]) -> "ConfidenceInterval":
        """Build an interval from a 2-element sequence, array or Series of bounds."""
        if isinstance(bounds, ConfidenceInterval):
            if conf_level is not None and conf_level != bounds.conf_level:
                raise InvalidInputError(
                    f"conf_level {conf_level} contradicts the interval's own level {bounds.conf_level}",
                    argument="conf_level",
                    value=conf_level,
                    validation_rule="omit conf_level or match ConfidenceInterval.conf_level",
                )
            return bounds
        if isinstance(bounds, pd.Series):
            bounds = bounds.to_numpy()
        if isinstance(bounds, np.ndarray):
            bounds = bounds.ravel()
        elif isinstance(bounds, (str, bytes)) or not isinstance(bounds, Sequence):
            raise InvalidInputError.wrong_type(
                "confidence_interval", bounds, "a sequence, array or Series of two bounds"
            )

        validate_length(bounds, "confidence_interval", 2)
        if conf_level is None:
            raise InvalidInputError(
                "A confidence interval needs a confidence level",
                argument="conf_level",
                validation_rule="conf_level must accompany the bounds",
            )
        return cls(bounds[0], bounds[1], conf_level)

    def as_tuple(self) -> Tuple[float, float]:
        return self.lower, self.upper


@dataclass(frozen=True)
class TestResult:
    """The outcome of a hypothesis test, as produced by the procedure that ran it.

    Attributes:
        statistic: Value of the test statistic.
        statistic_name: Raw name of the statistic (``'t'``, ``'W'``,
            ``'X-squared'``).
        p_value: p value in [0, 1].
        parameters: Distribution parameters by name, e.g. ``{'df': 17.8}``.
            Degrees of freedom are found by case-insensitive match on ``'df'``.
        estimate: Named point estimate(s) in order, e.g. ``{'rho': 0.62}`` or
            ``{'mean of x': 0.75, 'mean of y': 2.33}``.
        confidence_interval: Interval for the estimate, if the test gives one.
        sample_size: Sample size, for tests that embed it.
        method: Human-readable name of the procedure.
    """

    __test__ = False  # not a pytest test class

    statistic: float
    statistic_name: str
    p_value: float
    parameters: Dict[str, float] = field(default_factory=dict)
    estimate: Optional[Dict[str, float]] = None
    confidence_interval: Optional[ConfidenceInterval] = None
    sample_size: Optional[int] = None
    method: str = ""

    def __post_init__(self):
        # Own copies so later changes to the caller's mappings cannot leak in
        object.__setattr__(self, "parameters", dict(self.parameters or {}))
        if self.estimate is not None:
            if isinstance(self.estimate, pd.Series):
                object.__setattr__(self, "estimate", self.estimate.to_dict())
            else:
                object.__setattr__(self, "estimate", dict(self.estimate))

    @property
    def df(self) -> Optional[float]:
        """Degrees of freedom, or None if the test has none."""
        for name, value in self.parameters.items():
            if name.lower() == "df":
                return value
        return None

    @property
    def estimate_names(self) -> Tuple[str, ...]:
        return tuple(self.estimate) if self.estimate else ()

    @property
    def estimate_values(self) -> Tuple[float, ...]:
        return tuple(self.estimate.values()) if self.estimate else ()

    def validate(self) -> "TestResult":
        """Check the structural preconditions and return self.

        Raises:
            InvalidInputError: If any field has the wrong type or range.
        """
        validate_number(self.statistic, "statistic", allow_inf=False)
        validate_string(self.statistic_name, "statistic_name")
        validate_number(self.p_value, "p_value", valid_range=(0, 1))

        _as_float_dict(self.parameters, "parameters")
        if self.df is not None:
            validate_number(self.df, "df", allow_inf=False)

        if self.estimate is not None:
            estimate = _as_float_dict(self.estimate, "estimate", allow_inf=False)
            if not estimate:
                raise InvalidInputError(
                    "The estimate must contain at least one value",
                    argument="estimate",
                    validation_rule="len(estimate) >= 1",
                )

        if self.confidence_interval is not None and not isinstance(
            self.confidence_interval, ConfidenceInterval
        ):
            raise InvalidInputError.wrong_type(
                "confidence_interval", self.confidence_interval, "a ConfidenceInterval"
            )

        if self.sample_size is not None:
            validate_integer(self.sample_size, "sample_size")

        if not isinstance(self.method, str):
            raise InvalidInputError.wrong_type("method", self.method, "a string")

        return self

    # -----------------------------------------------------------------
    #  Adapters
    # -----------------------------------------------------------------

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any]) -> "TestResult":
        """Build a result from an R ``htest``-like mapping.

        Recognised keys: ``statistic`` (a one-entry mapping ``{name: value}``),
        ``parameter``/``parameters``, ``p.value``/``p_value``, ``estimate``,
        ``conf.int``/``conf_int`` with ``conf.level``/``conf_level`` (or an
        ``attributes`` entry holding it), ``sample.size``/``sample_size`` and
        ``method``.

        Example::

            TestResult.from_mapping({
                "statistic": {"t": -1.86},
                "parameter": {"df": 17.78},
                "p.value": 0.079,
                "estimate": {"mean of x": 0.75, "mean of y": 2.33},
                "conf.int": [-3.37, 0.21],
                "conf.level": 0.95,
            })
        """
        if not isinstance(mapping, Mapping):
            raise InvalidInputError.wrong_type("mapping", mapping, "a mapping")

        statistic = mapping.get("statistic")
        if isinstance(statistic, pd.Series):
            statistic = statistic.to_dict()
        if not isinstance(statistic, Mapping):
            raise InvalidInputError.wrong_type("statistic", statistic, "a one-entry mapping {name: value}")
        validate_length(statistic, "statistic", 1)
        ((statistic_name, statistic_value),) = statistic.items()

        p_value = _first_present(mapping, "p.value", "p_value")
        if p_value is None:
            raise InvalidInputError("The test result has no p value", argument="p.value")

        parameters = _first_present(mapping, "parameter", "parameters")
        estimate = mapping.get("estimate")

        confidence_interval = None
        bounds = _first_present(mapping, "conf.int", "conf_int")
        if bounds is not None:
            conf_level = _first_present(mapping, "conf.level", "conf_level")
            if conf_level is None:
                conf_level = (mapping.get("attributes") or {}).get("conf.level")
            confidence_interval = ConfidenceInterval.from_bounds(bounds, conf_level)

        return cls(
            statistic=statistic_value,
            statistic_name=statistic_name,
            p_value=p_value,
            parameters=_as_float_dict(parameters, "parameter") if parameters is not None else {},
            estimate=_as_float_dict(estimate, "estimate") if estimate is not None else None,
            confidence_interval=confidence_interval,
            sample_size=_first_present(mapping, "sample.size", "sample_size"),
            method=mapping.get("method") or "",
        )

    @classmethod
    def from_scipy(
        cls,
        result: Any,
        statistic_name: str,
        estimate: Optional[Mapping[str, float]] = None,
        parameters: Optional[Mapping[str, float]] = None,
        conf_level: Optional[float] = None,
        sample_size: Optional[int] = None,
        method: str = "",
    ) -> "TestResult":
        """Build a result from a ``scipy.stats`` result object.

        Reads ``statistic`` and ``pvalue``; degrees of freedom are taken from
        ``df`` (t tests) or ``dof`` (``chi2_contingency``) when present. If
        ``conf_level`` is given and the result offers ``confidence_interval()``
        (t tests, ``pearsonr``), the interval is taken from it.

        Args:
            result: Object returned by a ``scipy.stats`` test function.
            statistic_name: Raw name of the statistic (scipy results carry none).
            estimate: Named point estimate(s) to report.
            parameters: Extra parameters; override those read from ``result``.
            conf_level: Confidence level of the interval to extract.
            sample_size: Sample size (required later for chi-square tests).
            method: Human-readable name of the procedure.
        """
        statistic = getattr(result, "statistic", None)
        p_value = getattr(result, "pvalue", None)
        if statistic is None or p_value is None:
            raise InvalidInputError(
                f"Expected a scipy.stats result with 'statistic' and 'pvalue', "
                f"got {type(result).__name__}",
                argument="result",
            )

        found = {}
        for attribute in ("df", "dof"):
            value = getattr(result, attribute, None)
            if isinstance(value, (numbers.Real, np.number)) and not isinstance(value, bool):
                found["df"] = float(value)
                break
        if parameters:
            found.update(_as_float_dict(parameters, "parameters"))

        confidence_interval = None
        if conf_level is not None and hasattr(result, "confidence_interval"):
            interval = result.confidence_interval(confidence_level=conf_level)
            confidence_interval = ConfidenceInterval(interval.low, interval.high, conf_level)

        return cls(
            statistic=float(statistic),
            statistic_name=statistic_name,
            p_value=float(p_value),
            parameters=found,
            estimate=_as_float_dict(estimate, "estimate") if estimate is not None else None,
            confidence_interval=confidence_interval,
            sample_size=sample_size,
            method=method,
        )
