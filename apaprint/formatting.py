# apaprint/formatting.py
"""
APA-style reporting of hypothesis test results.

:class:`ResultFormatter` turns a :class:`~apaprint.results.TestResult` into
three strings ready to be pasted into a manuscript::

    >>> result = TestResult(statistic=-1.861, statistic_name="t", p_value=0.0794,
    ...                     parameters={"df": 17.776},
    ...                     estimate={"mean of x": 0.75, "mean of y": 2.33},
    ...                     confidence_interval=ConfidenceInterval(-3.37, 0.21, 0.95))
    >>> out = format_test_result(result)
    >>> out.statistic_clause
    '$t(17.78) = -1.86$, $p = .079$'
    >>> out.estimate_clause
    '$\\\\Delta M = 1.58$, 95\\\\% CI $[-3.37$, $0.21]$'
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

import numpy as np

from . import settings
from .config import PrintConfig
from .exceptions import (
    InvalidInputError,
    MissingSampleSizeError,
    validate_integer,
    validate_string,
)
from .names import StatNameResolver, StatPolicy, StatSymbol, default_resolver
from .numeric import df_digits, equals_sign, format_ci, format_num, format_p
from .results import ConfidenceInterval, TestResult

logger = settings.logger


@dataclass(frozen=True)
class FormatRequest:
    """Caller-supplied options for formatting a single test result.

    Attributes:
        display_name: Overrides the statistic name given in the result. It is
            placed in the output as-is, so LaTeX markup may be used
            (e.g. ``'\\\\tau'``).
        sample_size: Sample size to report; required for chi-square tests
            when the result does not carry it. Takes precedence over
            ``TestResult.sample_size``.
        confidence_interval_override: Interval to report instead of the one in the
            result (e.g. a bootstrapped interval). Either a
            :class:`ConfidenceInterval` or two bounds plus ``conf_level``.
        conf_level: Confidence level for a ``confidence_interval_override`` given as
            plain bounds. With a :class:`ConfidenceInterval` it must be omitted
            or equal to the interval's own level.
        bracket_style: Use square brackets instead of parentheses, for
            strings that will themselves be reported inside parentheses.
    """

    display_name: Optional[str] = None
    sample_size: Optional[int] = None
    confidence_interval_override: Any = None
    conf_level: Optional[float] = None
    bracket_style: bool = False

    def validate(self) -> "FormatRequest":
        """Check the structural preconditions and return self."""
        if self.display_name is not None:
            validate_string(self.display_name, "display_name")
        if self.sample_size is not None:
            validate_integer(self.sample_size, "sample_size")
        if self.confidence_interval_override is not None:
            self.interval()
        if not isinstance(self.bracket_style, bool):
            raise InvalidInputError.wrong_type("bracket_style", self.bracket_style, "a logical (bool)")
        return self

    def interval(self) -> Optional[ConfidenceInterval]:
        """The override interval as a :class:`ConfidenceInterval`, if any."""
        if self.confidence_interval_override is None:
            return None
        return ConfidenceInterval.from_bounds(self.confidence_interval_override, self.conf_level)


@dataclass(frozen=True)
class FormatResult:
    """The formatted strings for one test result.

    Attributes:
        statistic_clause: Test statistic, degrees of freedom and p value.
        estimate_clause: Point estimate and confidence interval, or None if
            the result has no estimate that can be reported.
        combined: ``estimate_clause`` followed by ``statistic_clause``, or
            None whenever ``estimate_clause`` is None.
    """

    statistic_clause: str
    estimate_clause: Optional[str] = None
    combined: Optional[str] = None

    @property
    def stat(self) -> str:
        return self.statistic_clause

    @property
    def est(self) -> Optional[str]:
        return self.estimate_clause

    @property
    def full(self) -> Optional[str]:
        return self.combined

    def as_dict(self) -> Dict[str, str]:
        """The present strings keyed ``stat``, ``est`` and ``full``."""
        out = {"stat": self.statistic_clause}
        if self.estimate_clause is not None:
            out["est"] = self.estimate_clause
            out["full"] = self.combined
        return out


class ResultFormatter:
    """Formats test results as APA-style strings.

    Args:
        config: Formatting options; defaults to :meth:`PrintConfig.from_defaults`.
        resolver: Name table used to translate statistic and estimate names;
            defaults to the module-level ``default_resolver``.
    """

    def __init__(
        self,
        config: Optional[PrintConfig] = None,
        resolver: Optional[StatNameResolver] = None,
    ):
        self.config = config if config is not None else PrintConfig.from_defaults()
        self.resolver = resolver if resolver is not None else default_resolver

    def __repr__(self) -> str:
        return f"ResultFormatter(config={self.config!r}, resolver={self.resolver!r})"

    def format(self, result: TestResult, request: Optional[FormatRequest] = None) -> FormatResult:
        """Format a test result.

        Raises:
            InvalidInputError: If ``result`` or ``request`` is malformed.
            MissingSampleSizeError: If a chi-square statistic is reported
                and neither the request nor the result gives a sample size.
        """
        if not isinstance(result, TestResult):
            raise InvalidInputError.wrong_type("result", result, "a TestResult")
        if request is None:
            request = FormatRequest()
        elif not isinstance(request, FormatRequest):
            raise InvalidInputError.wrong_type("request", request, "a FormatRequest")

        result.validate()
        request.validate()

        statistic_clause = self._statistic_clause(result, request)
        estimate_clause = self._estimate_clause(result, request)

        if estimate_clause is None:
            return FormatResult(statistic_clause)
        return FormatResult(
            statistic_clause,
            estimate_clause,
            f"{estimate_clause}, {statistic_clause}",
        )

    def _math(self, content: str) -> str:
        m = self.config.math_delimiter
        return f"{m}{content}{m}"

    def _statistic_clause(self, result: TestResult, request: FormatRequest) -> str:
        if request.bracket_style:
            op, cp = "[", "]"
        else:
            op, cp = "(", ")"

        stat_name = request.display_name if request.display_name is not None else result.statistic_name
        stat = format_num(result.statistic, digits=self.config.digits, na_string=self.config.na_string)

        df = result.df
        if df is not None:
            symbol = self.resolver.resolve(stat_name)
            if symbol is not None:
                stat_name = symbol.render(self.config.latex)
            df_text = format_num(df, digits=df_digits(df))

            if symbol is not None and symbol.policy is StatPolicy.REQUIRES_SAMPLE_SIZE:
                n = self._sample_size(result, request, stat_name)
                stat_name = f"{stat_name}{op}{df_text}, n = {n}{cp}"
            else:
                stat_name = f"{stat_name}{op}{df_text}{cp}"

        p = format_p(result.p_value, digits=self.config.p_digits, na_string=self.config.na_string)

        return f"{self._math(f'{stat_name} = {stat}')}, {self._math(f'p {equals_sign(p)}{p}')}"

    @staticmethod
    def _sample_size(result: TestResult, request: FormatRequest, stat_name: str) -> int:
        if request.sample_size is not None:
            return int(request.sample_size)
        if result.sample_size is not None:
            return int(result.sample_size)
        raise MissingSampleSizeError.for_statistic(stat_name)

    def _estimate(self, result: TestResult) -> Optional[Tuple[StatSymbol, float]]:
        """Pick the symbol and the single value to report, if there is one."""
        if not result.estimate:
            return None

        symbol = self.resolver.resolve_estimate(result.estimate_names)
        if symbol is None:
            logger.debug(f"No symbol for estimate {list(result.estimate_names)}; estimate omitted")
            return None

        values = result.estimate_values
        if symbol.policy is StatPolicy.DIFFERENCE and len(values) == 2:
            value = values[1] - values[0]
        elif len(values) == 1:
            value = values[0]
        else:
            logger.debug(f"Cannot reduce {len(values)} estimates for '{symbol.latex}'; estimate omitted")
            return None

        if np.isnan(value):
            logger.debug(f"Estimate for '{symbol.latex}' is NaN; estimate omitted")
            return None
        return symbol, value

    def _estimate_clause(self, result: TestResult, request: FormatRequest) -> Optional[str]:
        picked = self._estimate(result)
        if picked is None:
            return None

        symbol, value = picked
        gt1 = symbol.policy is not StatPolicy.BOUNDED
        est = format_num(value, digits=self.config.digits, gt1=gt1, na_string=self.config.na_string)
        clause = self._math(f"{symbol.render(self.config.latex)} {equals_sign(est)}{est}")

        interval = request.interval()
        if interval is not None:
            logger.debug("Reporting the confidence interval supplied with the request")
        else:
            interval = result.confidence_interval

        if interval is not None:
            ci = format_ci(
                *interval.as_tuple(),
                interval.conf_level,
                gt1=gt1,
                digits=self.config.digits,
                math=self.config.math_delimiter,
                percent=self.config.percent_sign,
            )
            clause = f"{clause}, {ci}"

        return clause


def format_test_result(
    result: TestResult,
    request: Optional[FormatRequest] = None,
    *,
    display_name: Optional[str] = None,
    sample_size: Optional[int] = None,
    confidence_interval_override: Any = None,
    conf_level: Optional[float] = None,
    bracket_style: bool = False,
    config: Optional[PrintConfig] = None,
    resolver: Optional[StatNameResolver] = None,
) -> FormatResult:
    """Format a test result as APA-style strings.

    Either pass a :class:`FormatRequest` or the same options as keywords.

    Args:
        result: The test result to report.
        request: Formatting request; keyword options are ignored if given.
        display_name: Overrides the statistic name.
        sample_size: Sample size, required for chi-square tests.
        confidence_interval_override: Interval to report instead of the result's own.
        conf_level: Confidence level of ``confidence_interval_override`` bounds.
        bracket_style: Use brackets instead of parentheses.
        config: Formatting options.
        resolver: Name table for statistic symbols.

    Returns:
        A :class:`FormatResult`.
    """
    if request is None:
        request = FormatRequest(
            display_name=display_name,
            sample_size=sample_size,
            confidence_interval_override=confidence_interval_override,
            conf_level=conf_level,
            bracket_style=bracket_style,
        )
    return ResultFormatter(config=config, resolver=resolver).format(result, request)


apa_print = format_test_result
