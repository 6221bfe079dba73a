"""Life insurance coverage estimates."""

from __future__ import annotations

import pytest

from fincounsel.services.insurance import (
    CoverageMethod,
    InsuranceProfile,
    calculate_coverage,
    compare_methods,
    monthly_premium,
)
from tests.conftest import assert_float_equal


class TestCoverageMethods:
    def test_income_replacement_defaults(self):
        estimate = calculate_coverage(InsuranceProfile())

        assert estimate.coverage == 750000
        assert estimate.monthly_premium == 1
        assert estimate.annual_premium == 13
        assert estimate.method is CoverageMethod.INCOME_REPLACEMENT

    def test_needs_analysis_defaults(self):
        estimate = calculate_coverage(InsuranceProfile(), "needs-analysis")

        assert estimate.coverage == 1602500
        assert estimate.monthly_premium == 2
        assert estimate.annual_premium == 28

    def test_needs_analysis_never_negative(self):
        profile = InsuranceProfile(existing_coverage=10_000_000)

        assert calculate_coverage(profile, CoverageMethod.NEEDS_ANALYSIS).coverage == 0

    def test_dime_defaults(self):
        assert calculate_coverage(InsuranceProfile(), "dime-method").coverage == 825000

    def test_unknown_method_raises(self):
        with pytest.raises(ValueError):
            calculate_coverage(InsuranceProfile(), "gut-feeling")


def test_premium_scales_with_age():
    assert_float_equal(monthly_premium(1_000_000, 25), 1.2, tolerance=1e-9)
    assert monthly_premium(1_000_000, 45) > monthly_premium(1_000_000, 35)


def test_compare_methods_lists_all():
    assert compare_methods(InsuranceProfile()) == {
        "income-replacement": 750000,
        "needs-analysis": 1602500,
        "dime-method": 825000,
    }


def test_estimate_to_dict():
    payload = calculate_coverage(InsuranceProfile(annual_income=100000)).to_dict()

    assert payload == {
        "coverage": 1000000,
        "monthly_premium": 1,
        "annual_premium": 17,
        "method": "income-replacement",
    }
