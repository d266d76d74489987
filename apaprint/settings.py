# apaprint/settings.py
import logging
import sys

# Global Configuration
_VERBOSE: bool = True

# Setup Library Logger
logger = logging.getLogger("apaprint")
logger.setLevel(logging.INFO)

# Default handler (StreamHandler to stdout)
_handler = logging.StreamHandler(sys.stdout)
_handler.setFormatter(logging.Formatter("%(message)s"))  # Simple format like print()
logger.addHandler(_handler)


def set_verbose(verbose: bool):
    """
    Global override for verbosity.

    Args:
        verbose: If True, log level is INFO. If False, WARNING.
    """
    global _VERBOSE
    _VERBOSE = verbose
    level = logging.INFO if verbose else logging.WARNING
    logger.setLevel(level)


def set_debug(debug: bool = True):
    """Switch the library logger to DEBUG (or back to the verbosity level)."""
    if debug:
        logger.setLevel(logging.DEBUG)
    else:
        set_verbose(_VERBOSE)


def is_verbose() -> bool:
    """Internal check for the current verbosity flag."""
    return _VERBOSE
