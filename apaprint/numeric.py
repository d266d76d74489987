# apaprint/numeric.py
"""
Number, p value and confidence interval formatting.

These are the primitives every printed number passes through. They follow
the APA conventions:

    - Fixed number of decimals (2 for statistics and estimates, 3 for p).
    - Quantities that cannot exceed 1 in magnitude (correlations, p values,
      proportions) are printed without the leading zero (``.42``).
    - p values that round to 0 or 1 are printed as bounds (``< .001``,
      ``> .999``) instead of exact values.
"""

from typing import Any, Callable, List, Union

import numpy as np
import pandas as pd

from .exceptions import InvalidInputError, validate_integer, validate_number

Numeric = Union[float, int, np.number]
ArrayLike = Union[List[Numeric], tuple, np.ndarray, pd.Series]


def _elementwise(func: Callable[..., str], x: Any, **kwargs) -> Union[str, List[str], pd.Series]:
    """Apply a scalar formatter to each element of an array-like."""
    if isinstance(x, pd.Series):
        return x.apply(lambda value: func(value, **kwargs))
    if isinstance(x, (list, tuple, np.ndarray)):
        return [func(value, **kwargs) for value in np.asarray(x, dtype=np.float64).ravel()]
    return func(x, **kwargs)


def _strip_leading_zero(text: str) -> str:
    if text.startswith("0."):
        return text[1:]
    if text.startswith("-0."):
        return "-" + text[2:]
    return text


def _format_scalar(
    x: Numeric, digits: int = 2, gt1: bool = True, zero: bool = True, na_string: str = ""
) -> str:
    digits = validate_integer(digits, "digits")
    value = validate_number(x, "x", allow_nan=True)

    if np.isnan(value):
        return na_string
    if not np.isfinite(value):
        raise InvalidInputError("Cannot format an infinite value", argument="x", value=value)
    if not gt1 and abs(value) > 1:
        raise InvalidInputError(
            "You specified gt1 = False, but passed an absolute value that exceeds 1.",
            argument="x",
            value=value,
            validation_rule="abs(x) <= 1 when gt1 is False",
        )

    text = f"{value:.{digits}f}"
    if float(text) == 0:
        # -0.00 -> 0.00
        text = text.lstrip("-")
        if not zero:
            bound = _format_scalar(10.0 ** -digits, digits=digits, gt1=gt1)
            return f"< {bound}"

    if not gt1:
        text = _strip_leading_zero(text)

    return text


def format_num(
    x: Union[Numeric, ArrayLike],
    digits: int = 2,
    gt1: bool = True,
    zero: bool = True,
    na_string: str = "",
) -> Union[str, List[str], pd.Series]:
    """Format a number (or each number of an array) to a fixed number of decimals.

    Args:
        x: A scalar, list, tuple, numpy array or pandas Series.
        digits: Number of decimal digits. Default 2.
        gt1: If ``False`` the value is known to lie in [-1, 1] and is printed
            without the leading zero (``.42``); larger magnitudes raise.
        zero: If ``False`` a value that rounds to zero is printed as an
            upper bound (``< 0.01``) instead of ``0.00``.
        na_string: String returned for NaN values.

    Returns:
        A string for scalars, a list of strings for lists, tuples and arrays,
        and a Series of strings (same index) for a Series.

    Raises:
        InvalidInputError: For non-numeric input, negative ``digits``,
            infinite values, or ``|x| > 1`` with ``gt1=False``.
    """
    return _elementwise(
        _format_scalar, x, digits=digits, gt1=gt1, zero=zero, na_string=na_string
    )


def _format_p_scalar(p: Numeric, digits: int = 3, na_string: str = "") -> str:
    value = validate_number(p, "p", valid_range=(0, 1), allow_nan=True)
    if np.isnan(value):
        return na_string

    text = _format_scalar(value, digits=digits, gt1=False, zero=False)
    if text == _format_scalar(1.0, digits=digits, gt1=False):
        largest = _format_scalar(1 - 10.0 ** -digits, digits=digits, gt1=False)
        text = f"> {largest}"

    return text


def format_p(
    p: Union[Numeric, ArrayLike], digits: int = 3, na_string: str = ""
) -> Union[str, List[str], pd.Series]:
    """Format a p value following APA style.

    ``0.0312`` becomes ``.031``, ``0.0003`` becomes ``< .001`` and ``0.9999``
    becomes ``> .999``. The result never contains an equality sign; callers
    decide whether one is needed with :func:`is_bound`.

    Args:
        p: A probability (or array of probabilities) in [0, 1].
        digits: Number of decimal digits. Default 3.
        na_string: String returned for NaN values.
    """
    return _elementwise(_format_p_scalar, p, digits=digits, na_string=na_string)


def is_bound(formatted: str) -> bool:
    """Return True if a formatted value is a bound (``< .001``) rather than an exact value."""
    return "<" in formatted or ">" in formatted


def equals_sign(formatted: str) -> str:
    """The '= ' prefix an exact value needs; bounds carry their own relation."""
    return "" if is_bound(formatted) else "= "


def df_digits(df: Numeric) -> int:
    """Digits used to print degrees of freedom: 0 for whole numbers, 2 otherwise."""
    value = validate_number(df, "df")
    return 0 if value % 1 == 0 else 2


def format_ci(
    lower: Numeric,
    upper: Numeric,
    conf_level: Numeric,
    gt1: bool = True,
    digits: int = 2,
    math: str = "$",
    percent: str = "\\%",
) -> str:
    """Format a confidence interval, e.g. ``95\\% CI $[.11$, $.86]$``.

    Args:
        lower: Lower bound.
        upper: Upper bound.
        conf_level: Confidence level as a proportion (e.g. 0.95).
        gt1: Bounds may exceed 1 in magnitude (see :func:`format_num`).
        digits: Number of decimal digits for the bounds.
        math: Math delimiter wrapped around each bound; ``""`` for plain text.
        percent: Percent sign; ``"\\%"`` for LaTeX, ``"%"`` for plain text.
    """
    level = validate_number(conf_level, "conf_level", valid_range=(0, 1))
    lower_text = format_num(lower, digits=digits, gt1=gt1)
    upper_text = format_num(upper, digits=digits, gt1=gt1)

    pct = round(level * 100, 10)
    pct_text = format_num(pct, digits=0 if pct % 1 == 0 else 1)

    return f"{pct_text}{percent} CI {math}[{lower_text}{math}, {math}{upper_text}]{math}"
