# apaprint/reporting.py

from typing import List, Mapping, Optional, Sequence, Union

import pandas as pd

from . import settings
from .config import PrintConfig
from .exceptions import InvalidInputError
from .formatting import FormatRequest, ResultFormatter
from .names import StatNameResolver
from .results import TestResult

logger = settings.logger


def format_results_dataframe(
    results: Union[Sequence[TestResult], Mapping[str, TestResult]],
    requests: Optional[Union[Sequence[Optional[FormatRequest]], Mapping[str, FormatRequest]]] = None,
    config: Optional[PrintConfig] = None,
    resolver: Optional[StatNameResolver] = None,
) -> pd.DataFrame:
    """
    Formats several test results into a pandas DataFrame of APA strings.

    Useful for collecting the strings of a whole analysis before they are
    placed into a manuscript, or for exporting them (e.g. to CSV). Each row
    represents a single test result.

    Args:
        results: A list of results, or a mapping from a label to a result.
        requests: Formatting requests matching ``results`` (same length for a
            list, same labels for a mapping). Missing entries use defaults.
        config: Formatting options shared by all rows.
        resolver: Name table shared by all rows.

    Returns:
        pd.DataFrame: One row per result with columns:
            - 'test': The label (mapping key) or position of the result.
            - 'method': The procedure name stored in the result.
            - 'stat': The statistic clause.
            - 'est': The estimate clause, or None.
            - 'full': The combined clause, or None.

    Raises:
        InvalidInputError, MissingSampleSizeError: As raised by
            :meth:`ResultFormatter.format`; no partial frame is returned.
    """
    columns = ["test", "method", "stat", "est", "full"]
    if not results:
        return pd.DataFrame(columns=columns)

    if isinstance(results, Mapping):
        labels: List = list(results.keys())
        items = list(results.values())
        requests = [(requests or {}).get(label) for label in labels]
    else:
        labels = list(range(len(results)))
        items = list(results)
        requests = list(requests) if requests is not None else [None] * len(items)
        if len(requests) != len(items):
            raise InvalidInputError.wrong_length("requests", len(requests), len(items))

    formatter = ResultFormatter(config=config, resolver=resolver)

    rows = []
    for label, result, request in zip(labels, items, requests):
        formatted = formatter.format(result, request)
        rows.append(
            {
                "test": label,
                "method": result.method,
                "stat": formatted.statistic_clause,
                "est": formatted.estimate_clause,
                "full": formatted.combined,
            }
        )

    logger.debug(f"Formatted {len(rows)} test results")
    return pd.DataFrame(rows, columns=columns, dtype=object)
