# apaprint/config.py

from typing import Any, Dict, ItemsView, KeysView, Optional, ValuesView

from .exceptions import ConfigurationError


class PrintConfig:
    """
    A class to manage and store the formatting options used to print results.

    Every option the formatters depend on (digits, markup, symbol spelling)
    lives here, so a formatted string is fully determined by the config that
    was passed alongside it.
    """

    def __init__(self, params: Optional[Dict[str, Any]] = None):
        """Initialize the config with a dictionary of parameters."""
        self.params = dict(self._DEFAULTS)
        if params is not None:
            self.update(params)

    _DEFAULTS: Dict[str, Any] = {
        'digits': 2,
        'p_digits': 3,
        'math_delimiter': '$',
        'percent_sign': '\\%',
        'na_string': '',
        'latex': True,
    }

    def __repr__(self) -> str:
        """Provides a clean string representation."""
        return f"PrintConfig({self.params})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PrintConfig):
            return NotImplemented
        return self.params == other.params

    def __getitem__(self, key: str) -> Any:
        """Allow dictionary-style access like `config['digits']`."""
        if key not in self.params:
            raise KeyError(f"Parameter '{key}' not found in config. Available: {list(self.params.keys())}")
        return self.params[key]

    def __setitem__(self, key: str, value: Any):
        """Allow dictionary-style setting like `config['digits'] = 3`."""
        self.set(key, value)

    def __contains__(self, key: str) -> bool:
        """Support 'in' operator: `'digits' in config`."""
        return key in self.params

    def get(self, key: str, default: Any = None) -> Any:
        """Get parameter with optional default value."""
        return self.params.get(key, default)

    def set(self, key: str, value: Any) -> 'PrintConfig':
        """Set parameter (validated when it is a known option) and return self for chaining."""
        if key in self._DEFAULTS:
            setattr(self, key, value)
        else:
            self.params[key] = value
        return self

    def update(self, other_params: Dict[str, Any]) -> 'PrintConfig':
        """Update multiple parameters at once and return self for chaining."""
        for key, value in other_params.items():
            self.set(key, value)
        return self

    def keys(self) -> KeysView[str]:
        """Get all parameter keys."""
        return self.params.keys()

    def values(self) -> ValuesView[Any]:
        """Get all parameter values."""
        return self.params.values()

    def items(self) -> ItemsView[str, Any]:
        """Get all parameter key-value pairs."""
        return self.params.items()

    def copy(self) -> 'PrintConfig':
        """Create an independent copy of the configuration."""
        return PrintConfig(dict(self.params))

    # Formatting options with validation
    @property
    def digits(self) -> int:
        """Decimal digits for statistics and estimates."""
        return self.params['digits']

    @digits.setter
    def digits(self, value: int):
        """Set digits with validation."""
        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            raise ConfigurationError.invalid_parameter('digits', value, valid_range=(0, 'inf'))
        self.params['digits'] = value

    @property
    def p_digits(self) -> int:
        """Decimal digits for p values."""
        return self.params['p_digits']

    @p_digits.setter
    def p_digits(self, value: int):
        """Set p_digits with validation."""
        if isinstance(value, bool) or not isinstance(value, int) or value < 1:
            raise ConfigurationError.invalid_parameter('p_digits', value, valid_range=(1, 'inf'))
        self.params['p_digits'] = value

    @property
    def math_delimiter(self) -> str:
        """Markup wrapped around each math fragment ('$' for LaTeX, '' for plain text)."""
        return self.params['math_delimiter']

    @math_delimiter.setter
    def math_delimiter(self, value: str):
        if not isinstance(value, str):
            raise ConfigurationError.invalid_parameter('math_delimiter', value, valid_options=['$', ''])
        self.params['math_delimiter'] = value

    @property
    def percent_sign(self) -> str:
        """Percent sign used in confidence interval labels."""
        return self.params['percent_sign']

    @percent_sign.setter
    def percent_sign(self, value: str):
        if not isinstance(value, str) or not value:
            raise ConfigurationError.invalid_parameter('percent_sign', value, valid_options=['\\%', '%'])
        self.params['percent_sign'] = value

    @property
    def na_string(self) -> str:
        """String printed for missing values."""
        return self.params['na_string']

    @na_string.setter
    def na_string(self, value: str):
        if not isinstance(value, str):
            raise ConfigurationError.invalid_parameter('na_string', value)
        self.params['na_string'] = value

    @property
    def latex(self) -> bool:
        """Render statistic symbols as LaTeX (True) or Unicode text (False)."""
        return self.params['latex']

    @latex.setter
    def latex(self, value: bool):
        if not isinstance(value, bool):
            raise ConfigurationError.invalid_parameter('latex', value, valid_options=[True, False])
        self.params['latex'] = value

    # Factory Methods for Smart Defaults

    @classmethod
    def from_defaults(cls) -> 'PrintConfig':
        """Returns a config with the APA defaults, rendered for LaTeX/pandoc."""
        return cls()

    @classmethod
    def for_latex(cls, digits: int = 2) -> 'PrintConfig':
        """Returns a LaTeX config with a custom number of digits."""
        return cls({'digits': digits})

    @classmethod
    def for_plain_text(cls, digits: int = 2) -> 'PrintConfig':
        """Returns a config producing plain text with Unicode symbols."""
        return cls({
            'digits': digits,
            'math_delimiter': '',
            'percent_sign': '%',
            'latex': False,
        })
