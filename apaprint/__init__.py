# apaprint/__init__.py
# v.0.1.0

"""
apaprint: APA-style reporting of hypothesis test results

apaprint turns computed test results (t tests, rank tests, correlations,
contingency-table tests and their variants) into manuscript-ready strings
with the test statistic, degrees of freedom, p value, point estimate and
confidence interval, formatted for LaTeX/pandoc or plain text.
"""

# Global settings
from .settings import set_verbose, set_debug, logger

# Configuration
from .config import PrintConfig

# Exception classes
from .exceptions import (
    ApaPrintError,
    InvalidInputError,
    MissingSampleSizeError,
    ConfigurationError
)

# Formatting primitives
from .numeric import format_num, format_p, format_ci, df_digits

# Statistic names
from .names import (
    StatPolicy,
    StatSymbol,
    StatNameResolver,
    default_resolver,
    resolve_stat_name,
    register_stat_name
)

# Test results and the formatter
from .results import TestResult, ConfidenceInterval
from .formatting import (
    FormatRequest,
    FormatResult,
    ResultFormatter,
    format_test_result,
    apa_print
)

# Batch reporting
from .reporting import format_results_dataframe

__all__ = [
    # Settings
    'set_verbose',
    'set_debug',

    # Configuration
    'PrintConfig',

    # Exception classes
    'ApaPrintError',
    'InvalidInputError',
    'MissingSampleSizeError',
    'ConfigurationError',

    # Formatting primitives
    'format_num',
    'format_p',
    'format_ci',
    'df_digits',

    # Statistic names
    'StatPolicy',
    'StatSymbol',
    'StatNameResolver',
    'default_resolver',
    'resolve_stat_name',
    'register_stat_name',

    # Results and formatting
    'TestResult',
    'ConfidenceInterval',
    'FormatRequest',
    'FormatResult',
    'ResultFormatter',
    'format_test_result',
    'apa_print',

    # Reporting
    'format_results_dataframe',
    '__version__',
]

# Library version
__version__ = "0.1.0"


# Feature availability summary
def get_feature_availability() -> dict:
    """Get a summary of which optional features are available."""
    try:
        import scipy
        has_scipy = True
    except ImportError:
        has_scipy = False

    return {
        'scipy_adapter': has_scipy,
        'dataframe_reports': True,
    }
