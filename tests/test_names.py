"""Tests for statistic name resolution and formatting policies."""
import pytest

from apaprint.exceptions import InvalidInputError
from apaprint.names import (
    CHI_SQUARED,
    DELTA_M,
    StatNameResolver,
    StatPolicy,
    StatSymbol,
    default_resolver,
    register_stat_name,
    resolve_stat_name,
)


@pytest.fixture
def resolver():
    """A private copy so tests can register names freely."""
    return default_resolver.copy()


class TestStatSymbol:

    def test_render(self):
        symbol = StatSymbol("\\tau", "τ", StatPolicy.BOUNDED)
        assert symbol.render() == "\\tau"
        assert symbol.render(latex=False) == "τ"

    def test_default_policy(self):
        assert StatSymbol("M", "M").policy is StatPolicy.NONE


class TestResolve:

    @pytest.mark.parametrize(
        "raw",
        [
            "X-squared",
            "x-squared",
            "Kruskal-Wallis chi-squared",
            "Friedman chi-squared",
            "McNemar's chi-squared",
            "chi-squared",
        ],
    )
    def test_chi_square_family(self, raw):
        symbol = resolve_stat_name(raw)
        assert symbol is CHI_SQUARED
        assert symbol.policy is StatPolicy.REQUIRES_SAMPLE_SIZE

    def test_symbols_resolve_to_themselves(self):
        assert resolve_stat_name("\\chi^2") is CHI_SQUARED
        assert resolve_stat_name("χ²") is CHI_SQUARED

    def test_correlations_are_bounded(self):
        for raw, latex in (("cor", "r"), ("rho", "r_{\\mathrm{s}}"), ("tau", "\\tau")):
            symbol = resolve_stat_name(raw)
            assert symbol.latex == latex
            assert symbol.policy is StatPolicy.BOUNDED

    def test_rho_plain_text(self):
        assert resolve_stat_name("rho").render(latex=False) == "r_s"

    def test_unknown_names(self):
        assert resolve_stat_name("t") is None
        assert resolve_stat_name("W") is None
        assert resolve_stat_name("location shift") is None

    def test_non_string(self):
        assert resolve_stat_name(None) is None

    def test_whitespace_is_ignored(self):
        assert resolve_stat_name("  rho ") is not None


class TestResolveEstimate:

    def test_two_sample_means(self):
        assert default_resolver.resolve_estimate(["mean of x", "mean of y"]) is DELTA_M

    def test_group_means(self):
        names = ["mean in group 1", "mean in group 2"]
        symbol = default_resolver.resolve_estimate(names)
        assert symbol is DELTA_M
        assert symbol.policy is StatPolicy.DIFFERENCE

    def test_single_mean(self):
        symbol = default_resolver.resolve_estimate(["mean of x"])
        assert symbol.latex == "M"
        assert symbol.policy is StatPolicy.NONE

    def test_paired_mean(self):
        assert default_resolver.resolve_estimate(["mean of the differences"]).latex == "M_d"

    def test_unknown_pair(self):
        assert default_resolver.resolve_estimate(["prop 1", "prop 2"]) is None

    def test_mixed_names(self):
        assert default_resolver.resolve_estimate(["mean of x", "rho"]) is None

    def test_three_means_have_no_reduction(self):
        assert default_resolver.resolve_estimate(["mean of x", "mean of y", "mean of z"]) is None

    def test_empty(self):
        assert default_resolver.resolve_estimate([]) is None


class TestRegister:

    def test_register_new_name(self, resolver):
        cramers_v = StatSymbol("V", "V", StatPolicy.BOUNDED)
        resolver.register("cramer's v", cramers_v)
        assert resolver.resolve("Cramer's V") is cramers_v

    def test_copy_is_independent(self, resolver):
        resolver.register("cramer's v", StatSymbol("V", "V", StatPolicy.BOUNDED))
        assert default_resolver.resolve("cramer's v") is None

    def test_exact_case_wins_over_folded(self):
        resolver = StatNameResolver()
        upper = StatSymbol("T", "T")
        lower = StatSymbol("t", "t")
        resolver.register("T", upper).register("t", lower)
        assert resolver.resolve("T") is upper
        assert resolver.resolve("t") is lower

    def test_later_registration_replaces(self, resolver):
        replacement = StatSymbol("\\rho", "ρ", StatPolicy.BOUNDED)
        resolver.register("rho", replacement)
        assert resolver.resolve("rho") is replacement

    def test_pattern(self, resolver):
        proportion_diff = StatSymbol("\\Delta p", "Δp", StatPolicy.DIFFERENCE)
        resolver.register(r"prop \d+", proportion_diff, pattern=True, components=2)
        assert resolver.resolve_estimate(["prop 1", "prop 2"]) is proportion_diff
        assert resolver.resolve("prop 1") is None

    def test_invalid_components(self, resolver):
        with pytest.raises(InvalidInputError, match="between 1 and inf"):
            resolver.register("x", StatSymbol("x", "x"), components=0)
        with pytest.raises(InvalidInputError, match="integer"):
            resolver.register("x", StatSymbol("x", "x"), components=2.0)

    def test_register_stat_name_uses_default(self):
        symbol = StatSymbol("\\eta^2", "η²")
        try:
            register_stat_name("eta squared (test)", symbol)
            assert resolve_stat_name("eta squared (test)") is symbol
        finally:
            default_resolver._exact.pop(("eta squared (test)", 1), None)
            default_resolver._folded.pop(("eta squared (test)", 1), None)

    def test_repr(self, resolver):
        assert "StatNameResolver" in repr(resolver)
