#!/usr/bin/env python3
"""Validate that all advertised functions can actually be imported."""
import sys


def test_basic_import():
    """Test basic apaprint import."""
    try:
        import apaprint
        print(f"✓ apaprint v{apaprint.__version__} imports successfully")
        return True
    except ImportError as e:
        print(f"✗ Failed to import apaprint: {e}")
        return False


def test_all_exports():
    """Test that everything in __all__ actually exists."""
    import apaprint

    missing = [name for name in apaprint.__all__ if not hasattr(apaprint, name)]

    if missing:
        print(f"✗ Missing exports: {missing}")
        return False
    print(f"✓ All {len(apaprint.__all__)} exports verified")
    return True


def test_round_trip():
    """Format one result end to end."""
    from apaprint import TestResult, apa_print

    result = TestResult(statistic=18.5, statistic_name="W", p_value=0.0693)
    clause = apa_print(result).statistic_clause
    if clause != "$W = 18.50$, $p = .069$":
        print(f"✗ Unexpected statistic clause: {clause}")
        return False
    print(f"✓ {clause}")
    return True


def test_optional_features():
    """Report optional dependencies."""
    import apaprint

    for name, available in apaprint.get_feature_availability().items():
        mark = "✓" if available else "⊘"
        print(f"{mark} {name}")
    return True


def main():
    print("=" * 60)
    print("APAPRINT IMPORT VALIDATION")
    print("=" * 60)

    tests = [
        ("Basic Import", test_basic_import),
        ("All Exports Exist", test_all_exports),
        ("Round Trip", test_round_trip),
        ("Optional Features", test_optional_features),
    ]

    results = []
    for name, test_func in tests:
        print(f"\n{name}:")
        results.append(test_func())

    print("\n" + "=" * 60)
    if all(results):
        print("✅ ALL TESTS PASSED")
        return 0
    print("❌ SOME TESTS FAILED")
    return 1


if __name__ == "__main__":
    sys.exit(main())
