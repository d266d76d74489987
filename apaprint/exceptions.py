# apaprint/exceptions.py
"""
Custom exception classes for the apaprint library.

This module defines the exception types raised while turning test results
into APA strings, together with the small structural validators used to
check inputs before any formatting work begins.
"""

import datetime
import numbers
from typing import Any, Dict, List, Optional, Sequence, Tuple

import numpy as np


class ApaPrintError(Exception):
    """
    Base exception class for apaprint library.

    Provides common functionality for all apaprint exceptions including
    context tracking and enhanced error reporting.
    """

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.context = context or {}
        self.timestamp = datetime.datetime.now()

    def add_context(self, key: str, value: Any) -> "ApaPrintError":
        """Add contextual information to the exception."""
        self.context[key] = value
        return self

    def get_context_summary(self) -> str:
        """Get a formatted summary of the error context."""
        if not self.context:
            return "No additional context available."

        lines = ["Error Context:"]
        for key, value in self.context.items():
            lines.append(f"  {key}: {value}")
        return "\n".join(lines)

    def __str__(self) -> str:
        base_msg = super().__str__()
        if self.context:
            return f"{base_msg}\n{self.get_context_summary()}"
        return base_msg


class InvalidInputError(ApaPrintError, ValueError):
    """
    Raised when a structural precondition on a test result or request fails.

    Inherits from ValueError for compatibility with existing error handling
    that expects ValueError for invalid arguments.
    """

    def __init__(
        self,
        message: str,
        argument: Optional[str] = None,
        value: Any = None,
        validation_rule: Optional[str] = None,
    ):
        context = {}
        if argument:
            context["argument"] = argument
        if value is not None:
            context["provided_value"] = value
        if validation_rule:
            context["validation_rule"] = validation_rule

        super().__init__(message, context)
        self.argument = argument
        self.value = value
        self.validation_rule = validation_rule

    @classmethod
    def wrong_type(cls, argument: str, value: Any, expected: str) -> "InvalidInputError":
        """Factory method for values of the wrong type."""
        return cls(
            f"The parameter '{argument}' must be {expected}, got {type(value).__name__}",
            argument=argument,
            value=value,
            validation_rule=f"must be {expected}",
        )

    @classmethod
    def wrong_length(cls, argument: str, actual: int, expected: int) -> "InvalidInputError":
        """Factory method for sequences of the wrong length."""
        return cls(
            f"The parameter '{argument}' must be of length {expected}, got length {actual}",
            argument=argument,
            value=actual,
            validation_rule=f"length == {expected}",
        )

    @classmethod
    def out_of_range(
        cls, argument: str, value: Any, valid_range: Tuple[float, float]
    ) -> "InvalidInputError":
        """Factory method for values outside their admissible range."""
        return cls(
            f"The parameter '{argument}' must be between {valid_range[0]} and "
            f"{valid_range[1]}, got {value}",
            argument=argument,
            value=value,
            validation_rule=f"{valid_range[0]} <= {argument} <= {valid_range[1]}",
        )


class MissingSampleSizeError(ApaPrintError, ValueError):
    """
    Raised when a chi-square statistic is reported without a sample size.

    APA style requires N next to the degrees of freedom of chi-square tests,
    so the caller has to supply it when the test result does not carry it.
    """

    def __init__(self, message: str, statistic_name: Optional[str] = None):
        context = {}
        if statistic_name:
            context["statistic_name"] = statistic_name
        context["suggestion"] = "Pass sample_size=... to report the chi-square test"

        super().__init__(message, context)
        self.statistic_name = statistic_name

    @classmethod
    def for_statistic(cls, statistic_name: str) -> "MissingSampleSizeError":
        """Factory method naming the chi-square statistic that needs N."""
        return cls(
            f"Please provide the sample size to report the chi-square statistic "
            f"'{statistic_name}'.",
            statistic_name=statistic_name,
        )


class ConfigurationError(ApaPrintError):
    """
    Raised when formatting configuration validation fails.

    Helps users understand which configuration options are invalid
    and provides guidance on valid alternatives.
    """

    def __init__(
        self,
        message: str,
        config_info: Optional[Dict[str, Any]] = None,
        invalid_params: Optional[List[str]] = None,
    ):
        context = {}
        if config_info:
            context.update(config_info)
        if invalid_params:
            context["invalid_parameters"] = invalid_params

        super().__init__(message, context)
        self.config_info = config_info or {}
        self.invalid_params = invalid_params or []

    @classmethod
    def invalid_parameter(
        cls,
        param_name: str,
        param_value: Any,
        valid_options: Optional[List[Any]] = None,
        valid_range: Optional[tuple] = None,
    ) -> "ConfigurationError":
        """Factory method for invalid parameter errors."""
        message = f"Invalid value for parameter '{param_name}': {param_value}"

        context = {"parameter": param_name, "provided_value": param_value}
        suggestion_parts = []

        if valid_options:
            context["valid_options"] = valid_options
            suggestion_parts.append(f"Valid options: {valid_options}")

        if valid_range:
            context["valid_range"] = valid_range
            suggestion_parts.append(f"Valid range: {valid_range[0]} to {valid_range[1]}")

        if suggestion_parts:
            message += f". {'; '.join(suggestion_parts)}"

        return cls(message, config_info=context, invalid_params=[param_name])


# Utility functions for common validation patterns
def validate_number(
    value: Any,
    name: str,
    valid_range: Optional[Tuple[float, float]] = None,
    allow_nan: bool = False,
    allow_inf: bool = True,
) -> float:
    """Validate a real scalar and return it as a float."""
    if isinstance(value, (bool, np.bool_)) or not isinstance(value, numbers.Real):
        raise InvalidInputError.wrong_type(name, value, "a number")

    value = float(value)
    if np.isnan(value):
        if allow_nan:
            return value
        raise InvalidInputError(f"The parameter '{name}' is NaN", argument=name)

    if not allow_inf and np.isinf(value):
        raise InvalidInputError(
            f"The parameter '{name}' must be finite, got {value}",
            argument=name,
            value=value,
            validation_rule="must be finite",
        )

    if valid_range is not None and not valid_range[0] <= value <= valid_range[1]:
        raise InvalidInputError.out_of_range(name, value, valid_range)

    return value


def validate_integer(value: Any, name: str, min_value: int = 0) -> int:
    """Validate a whole number (python or numpy integer) not below ``min_value``."""
    if isinstance(value, (bool, np.bool_)) or not isinstance(value, numbers.Integral):
        raise InvalidInputError.wrong_type(name, value, "an integer")

    if value < min_value:
        raise InvalidInputError.out_of_range(name, value, (min_value, float("inf")))

    return int(value)


def validate_string(value: Any, name: str) -> str:
    """Validate a single, non-empty string."""
    if not isinstance(value, str):
        raise InvalidInputError.wrong_type(name, value, "a single string")

    if not value.strip():
        raise InvalidInputError(f"The parameter '{name}' must not be empty", argument=name)

    return value


def validate_length(values: Sequence, name: str, length: int):
    """Validate that a sequence holds exactly ``length`` elements."""
    if not hasattr(values, "__len__"):
        raise InvalidInputError.wrong_type(name, values, f"a sequence of length {length}")

    if len(values) != length:
        raise InvalidInputError.wrong_length(name, len(values), length)
