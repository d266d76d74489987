# apaprint/names.py
"""
Translation of raw statistic and estimate names into typeset symbols.

Test results label their statistic and estimates with the names of the
procedure that produced them ("X-squared", "rho", "mean in group A").
APA style reports them with conventional symbols (chi^2, r_s, Delta M).
Each symbol also carries a formatting policy telling the formatter how to
print the value attached to it:

    - REQUIRES_SAMPLE_SIZE: N is reported next to the degrees of freedom.
    - BOUNDED: the value lies in [-1, 1] and is printed without leading zero.
    - DIFFERENCE: a pair of estimates is reported as their difference.

New test kinds are supported by registering names, e.g.::

    register_stat_name("cramer's v", StatSymbol("V", "V", StatPolicy.BOUNDED))
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Pattern, Sequence, Tuple

from . import settings
from .exceptions import InvalidInputError

logger = settings.logger


class StatPolicy(Enum):
    """How the value attached to a statistic or estimate is printed."""

    NONE = "none"
    REQUIRES_SAMPLE_SIZE = "requires_sample_size"
    BOUNDED = "bounded"
    DIFFERENCE = "difference"


@dataclass(frozen=True)
class StatSymbol:
    """A typeset statistic symbol.

    Attributes:
        latex: LaTeX spelling (e.g. ``'\\chi^2'``).
        text: Plain-text spelling (e.g. ``'χ²'``).
        policy: The :class:`StatPolicy` governing the attached value.
    """

    latex: str
    text: str
    policy: StatPolicy = StatPolicy.NONE

    def render(self, latex: bool = True) -> str:
        return self.latex if latex else self.text


CHI_SQUARED = StatSymbol("\\chi^2", "χ²", StatPolicy.REQUIRES_SAMPLE_SIZE)
DELTA_M = StatSymbol("\\Delta M", "ΔM", StatPolicy.DIFFERENCE)


class StatNameResolver:
    """Ordered, extensible lookup table from raw names to :class:`StatSymbol`.

    Exact names are matched case-sensitively first and case-insensitively
    second; regular-expression patterns are tried afterwards in registration
    order. Every entry is registered for a number of estimate components so
    that e.g. ``"mean of x"`` alone (one-sample mean) and ``"mean of x"`` /
    ``"mean of y"`` together (two-sample difference) resolve differently.
    """

    def __init__(self):
        self._exact: Dict[Tuple[str, int], StatSymbol] = {}
        self._folded: Dict[Tuple[str, int], StatSymbol] = {}
        self._patterns: List[Tuple[Pattern, int, StatSymbol]] = []

    def __repr__(self) -> str:
        return f"StatNameResolver({len(self._exact)} names, {len(self._patterns)} patterns)"

    def register(
        self, name: str, symbol: StatSymbol, pattern: bool = False, components: int = 1
    ) -> "StatNameResolver":
        """Register a raw name (or regular expression) and return self for chaining.

        Later registrations of the same name replace earlier ones.
        """
        if isinstance(components, bool) or not isinstance(components, int):
            raise InvalidInputError.wrong_type("components", components, "an integer")
        if components < 1:
            raise InvalidInputError.out_of_range("components", components, (1, float("inf")))

        if pattern:
            self._patterns.append((re.compile(name, re.IGNORECASE), components, symbol))
        else:
            self._exact[(name, components)] = symbol
            self._folded[(name.casefold(), components)] = symbol
        return self

    def register_symbol(self, symbol: StatSymbol) -> "StatNameResolver":
        """Make a symbol resolve to itself in both spellings."""
        self.register(symbol.latex, symbol)
        self.register(symbol.text, symbol)
        return self

    def resolve(self, raw_name: str, components: int = 1) -> Optional[StatSymbol]:
        """Return the symbol registered for ``raw_name``, or None if unknown."""
        if not isinstance(raw_name, str):
            return None

        name = raw_name.strip()
        symbol = self._exact.get((name, components))
        if symbol is None:
            symbol = self._folded.get((name.casefold(), components))
        if symbol is None:
            for regex, n, candidate in self._patterns:
                if n == components and regex.fullmatch(name):
                    symbol = candidate
                    break

        return symbol

    def resolve_estimate(self, names: Sequence[str]) -> Optional[StatSymbol]:
        """Resolve the names of a (possibly multi-component) estimate.

        Every name must resolve, for ``len(names)`` components, to the same
        symbol; otherwise None is returned.
        """
        if not names:
            return None

        symbols = {self.resolve(name, components=len(names)) for name in names}
        if len(symbols) != 1 or None in symbols:
            logger.debug(f"Estimate names {list(names)} do not resolve to a single symbol")
            return None
        return symbols.pop()

    def copy(self) -> "StatNameResolver":
        """Create an independent copy that can be extended without side effects."""
        clone = StatNameResolver()
        clone._exact = dict(self._exact)
        clone._folded = dict(self._folded)
        clone._patterns = list(self._patterns)
        return clone

    @classmethod
    def with_defaults(cls) -> "StatNameResolver":
        """A resolver populated with the names produced by common test procedures."""
        resolver = cls()

        # Chi-square family
        for name in (
            "X-squared",
            "chi-squared",
            "chisq",
            "Pearson's Chi-squared",
            "Kruskal-Wallis chi-squared",
            "Friedman chi-squared",
            "McNemar's chi-squared",
            "Fligner-Killeen:med chi-squared",
            "Mantel-Haenszel X-squared",
        ):
            resolver.register(name, CHI_SQUARED)
        resolver.register_symbol(CHI_SQUARED)

        resolver.register("Bartlett's K-squared", StatSymbol("K^2", "K²"))
        resolver.register("df", StatSymbol("df", "df"))

        # Correlations
        for raw, symbol in (
            ("cor", StatSymbol("r", "r", StatPolicy.BOUNDED)),
            ("rho", StatSymbol("r_{\\mathrm{s}}", "r_s", StatPolicy.BOUNDED)),
            ("tau", StatSymbol("\\tau", "τ", StatPolicy.BOUNDED)),
        ):
            resolver.register(raw, symbol)
            resolver.register_symbol(symbol)

        # Location estimates
        resolver.register("mean of x", StatSymbol("M", "M"))
        resolver.register("mean", StatSymbol("M", "M"))
        mean_difference = StatSymbol("M_d", "M_d")
        resolver.register("mean of the differences", mean_difference)
        resolver.register("mean difference", mean_difference)
        resolver.register("mean of differences", mean_difference)
        resolver.register("difference in means", StatSymbol("\\Delta M", "ΔM"))
        resolver.register("difference in location", StatSymbol("\\Delta Mdn", "ΔMdn"))
        resolver.register("(pseudo)median", StatSymbol("Mdn^*", "Mdn*"))

        # Two group means reported as their difference
        resolver.register(r"mean of [xy]", DELTA_M, pattern=True, components=2)
        resolver.register(r"mean in group .+", DELTA_M, pattern=True, components=2)

        # Ratios
        resolver.register("odds ratio", StatSymbol("OR", "OR"))
        resolver.register("ratio of variances", StatSymbol("\\sigma^2_1/\\sigma^2_2", "σ²₁/σ²₂"))
        resolver.register("ratio of scales", StatSymbol("\\sigma_1/\\sigma_2", "σ₁/σ₂"))

        return resolver


default_resolver = StatNameResolver.with_defaults()


def resolve_stat_name(raw_name: str, components: int = 1) -> Optional[StatSymbol]:
    """Resolve a raw name using the default resolver."""
    return default_resolver.resolve(raw_name, components=components)


def register_stat_name(
    name: str, symbol: StatSymbol, pattern: bool = False, components: int = 1
) -> StatNameResolver:
    """Register a raw name with the default resolver."""
    return default_resolver.register(name, symbol, pattern=pattern, components=components)
