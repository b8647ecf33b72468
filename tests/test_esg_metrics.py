# -*- coding: utf-8 -*-
"""
ESG Portal - Unit tests for the derived ratio calculations
"""

import math
import os
import sys

import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from esg_portal.errors import ValidationError
from esg_portal.modules.esg_metrics import compute_metrics, overflowing_ratios, safe_ratio, RATIO_DEFINITIONS
from esg_portal.schemas import parse_questionnaire


class TestSafeRatio:
    """Safe division rules"""

    def test_plain_division(self):
        assert safe_ratio(50, 1000) == pytest.approx(0.05)

    def test_scale(self):
        assert safe_ratio(30, 100, 100.0) == pytest.approx(30.0)

    def test_missing_denominator(self):
        assert safe_ratio(50, None) is None

    def test_zero_denominator(self):
        assert safe_ratio(50, 0) is None
        assert safe_ratio(50, 0.0) is None

    def test_missing_numerator_counts_as_zero(self):
        assert safe_ratio(None, 1000) == 0.0

    def test_both_missing(self):
        assert safe_ratio(None, None) is None


class TestComputeMetrics:
    """compute_metrics over partial questionnaires"""

    def test_carbon_intensity(self):
        """50 tCO2e over 1000 revenue"""
        result = compute_metrics({'carbonEmissions': 50, 'totalRevenue': 1000})
        assert result['carbonIntensity'] == pytest.approx(0.05)

    def test_carbon_intensity_absent_without_revenue(self):
        assert 'carbonIntensity' not in compute_metrics({'carbonEmissions': 50})
        assert 'carbonIntensity' not in compute_metrics({'carbonEmissions': 50, 'totalRevenue': 0})

    def test_diversity_ratio(self):
        result = compute_metrics({'femaleEmployees': 30, 'totalEmployees': 100})
        assert result['diversityRatio'] == 30.0

    def test_renewable_ratio(self):
        result = compute_metrics({
            'renewableElectricityConsumption': 25000,
            'totalElectricityConsumption': 100000,
        })
        assert result['renewableElectricityRatio'] == pytest.approx(25.0)

    def test_renewable_ratio_zero_against_known_total(self):
        """No renewables reported against a known total is a real 0%"""
        result = compute_metrics({'totalElectricityConsumption': 100000})
        assert result['renewableElectricityRatio'] == 0.0

    def test_community_spend_ratio(self):
        result = compute_metrics({'communityInvestmentSpend': 20, 'totalRevenue': 2000})
        assert result['communitySpendRatio'] == pytest.approx(1.0)

    def test_revenue_only(self):
        """Revenue alone defines the two revenue-based ratios as zero"""
        result = compute_metrics({'totalRevenue': 1000})
        assert result == {'carbonIntensity': 0.0, 'communitySpendRatio': 0.0}

    def test_empty_input(self):
        assert compute_metrics({}) == {}

    def test_none_values_treated_as_absent(self):
        result = compute_metrics({'carbonEmissions': None, 'totalRevenue': None})
        assert result == {}

    def test_unrelated_fields_ignored(self):
        result = compute_metrics({
            'femaleEmployees': 5,
            'totalEmployees': 10,
            'dataPrivacyPolicy': True,
            'totalFuelConsumption': 12.0,
        })
        assert set(result) == {'diversityRatio'}

    def test_results_finite_and_non_negative(self):
        """Every defined ratio is a finite non-negative float"""
        samples = [
            {'carbonEmissions': 0, 'totalRevenue': 1e-9},
            {'carbonEmissions': 1e12, 'totalRevenue': 3},
            {'femaleEmployees': 0, 'totalEmployees': 1},
            {'renewableElectricityConsumption': 7.5, 'totalElectricityConsumption': 7.5},
            {'communityInvestmentSpend': 1, 'totalRevenue': 3},
        ]
        for sample in samples:
            for value in compute_metrics(sample).values():
                assert isinstance(value, float)
                assert math.isfinite(value)
                assert value >= 0

    def test_absent_iff_denominator_missing_or_zero(self):
        for derived, (numerator, denominator, _) in RATIO_DEFINITIONS.items():
            assert derived not in compute_metrics({numerator: 10})
            assert derived not in compute_metrics({numerator: 10, denominator: 0})
            assert derived in compute_metrics({numerator: 10, denominator: 20})

    def test_no_rounding(self):
        result = compute_metrics({'communityInvestmentSpend': 1, 'totalRevenue': 3})
        assert result['communitySpendRatio'] == 100 * 1 / 3


class TestOverflowingRatios:
    """Quotients of finite inputs that do not fit a float"""

    INPUTS = {
        'carbonEmissions': 1e308,
        'totalRevenue': 1e-10,
        'communityInvestmentSpend': 1e307,
    }

    def test_detects_overflow(self):
        assert overflowing_ratios(self.INPUTS) == {
            'carbonIntensity': ('carbonEmissions', 'totalRevenue'),
            'communitySpendRatio': ('communityInvestmentSpend', 'totalRevenue'),
        }

    def test_finite_ratios_not_reported(self):
        assert overflowing_ratios({'carbonEmissions': 50, 'totalRevenue': 1000}) == {}
        assert overflowing_ratios({'carbonEmissions': 1e308, 'totalRevenue': 0}) == {}
        assert overflowing_ratios({}) == {}

    def test_validated_inputs_give_finite_ratios(self):
        """Anything the questionnaire schema accepts yields finite ratios"""
        with pytest.raises(ValidationError):
            parse_questionnaire({'financialPeriod': 'FY1', **self.INPUTS})

        fields = parse_questionnaire({
            'financialPeriod': 'FY1',
            'carbonEmissions': 1e300,
            'totalRevenue': 1e-5,
            'femaleEmployees': 10 ** 9,
            'totalEmployees': 10 ** 9,
        })
        assert all(math.isfinite(v) for v in compute_metrics(fields).values())


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
