# -*- coding: utf-8 -*-
"""
ESG Portal - Questionnaire and auth body validation
"""

import os
import sys

import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from esg_portal.errors import ValidationError
from esg_portal.schemas import parse_login, parse_period, parse_questionnaire, parse_register


def _details(raw):
    with pytest.raises(ValidationError) as exc_info:
        parse_questionnaire(raw)
    return exc_info.value.details


class TestParseQuestionnaire:

    def test_full_submission(self, full_submission):
        fields = parse_questionnaire(dict(full_submission))
        assert fields == full_submission

    def test_only_period(self):
        assert parse_questionnaire({'financialPeriod': 'FY2021-22'}) == {'financialPeriod': 'FY2021-22'}

    def test_nulls_dropped(self):
        fields = parse_questionnaire({
            'financialPeriod': 'FY2021-22',
            'totalRevenue': None,
            'dataPrivacyPolicy': None,
        })
        assert fields == {'financialPeriod': 'FY2021-22'}

    def test_period_is_trimmed(self):
        assert parse_questionnaire({'financialPeriod': '  FY2024-25 '})['financialPeriod'] == 'FY2024-25'

    def test_missing_period(self):
        assert 'financialPeriod' in _details({'totalRevenue': 10})

    def test_blank_period(self):
        assert 'financialPeriod' in _details({'financialPeriod': '   '})

    def test_numeric_period_rejected(self):
        """Periods are labels, not integers"""
        assert 'financialPeriod' in _details({'financialPeriod': 2024})

    def test_period_too_long(self):
        assert 'financialPeriod' in _details({'financialPeriod': 'FY' * 20})

    def test_negative_value(self):
        details = _details({'financialPeriod': 'FY2023-24', 'carbonEmissions': -1})
        assert list(details) == ['carbonEmissions']

    def test_non_finite_value(self):
        assert 'totalRevenue' in _details({'financialPeriod': 'FY2023-24', 'totalRevenue': float('inf')})
        assert 'totalRevenue' in _details({'financialPeriod': 'FY2023-24', 'totalRevenue': float('nan')})

    def test_numeric_string_rejected(self):
        assert 'totalRevenue' in _details({'financialPeriod': 'FY2023-24', 'totalRevenue': '1000'})

    def test_percentage_bounds(self):
        assert 'percentIndependentBoardMembers' in _details(
            {'financialPeriod': 'FY2023-24', 'percentIndependentBoardMembers': 100.5}
        )
        fields = parse_questionnaire({'financialPeriod': 'FY2023-24', 'percentIndependentBoardMembers': 100})
        assert fields['percentIndependentBoardMembers'] == 100

    def test_headcount_must_be_integer(self):
        assert 'totalEmployees' in _details({'financialPeriod': 'FY2023-24', 'totalEmployees': 10.5})

    def test_female_cannot_exceed_total(self):
        details = _details({'financialPeriod': 'FY2023-24', 'totalEmployees': 10, 'femaleEmployees': 11})
        assert 'femaleEmployees' in details

    def test_female_without_total_accepted(self):
        fields = parse_questionnaire({'financialPeriod': 'FY2023-24', 'femaleEmployees': 11})
        assert fields['femaleEmployees'] == 11

    def test_policy_must_be_boolean(self):
        assert 'dataPrivacyPolicy' in _details({'financialPeriod': 'FY2023-24', 'dataPrivacyPolicy': 'yes'})

    def test_unknown_field_rejected(self):
        assert 'totalWater' in _details({'financialPeriod': 'FY2023-24', 'totalWater': 5})

    def test_derived_field_rejected(self):
        """Derived ratios are never accepted from the client"""
        assert 'carbonIntensity' in _details({'financialPeriod': 'FY2023-24', 'carbonIntensity': 0.5})

    def test_snake_case_rejected(self):
        assert 'total_revenue' in _details({'financialPeriod': 'FY2023-24', 'total_revenue': 5})

    def test_collects_all_field_errors(self):
        details = _details({'carbonEmissions': -1, 'totalEmployees': 'many', 'extra': 1})
        assert {'financialPeriod', 'carbonEmissions', 'totalEmployees', 'extra'} <= set(details)

    def test_body_must_be_object(self):
        assert 'body' in _details(['FY2023-24'])
        assert 'body' in _details(None)

    def test_period_with_slash_rejected(self):
        """Stored periods must stay addressable as one URL segment"""
        assert 'financialPeriod' in _details({'financialPeriod': 'FY2023/24'})

    def test_reserved_period_rejected(self):
        assert 'financialPeriod' in _details({'financialPeriod': 'summary'})
        assert parse_questionnaire({'financialPeriod': 'Summary 2024'})['financialPeriod'] == 'Summary 2024'

    def test_headcount_upper_bound(self):
        assert 'totalEmployees' in _details({'financialPeriod': 'FY2023-24', 'totalEmployees': 10 ** 30})

    def test_overflowing_ratio_names_its_inputs(self):
        details = _details({
            'financialPeriod': 'FY2023-24',
            'carbonEmissions': 1e308,
            'totalRevenue': 1e-10,
            'communityInvestmentSpend': 1e307,
        })
        assert set(details) == {'carbonEmissions', 'totalRevenue', 'communityInvestmentSpend'}

    def test_large_but_finite_ratio_accepted(self):
        fields = parse_questionnaire({'financialPeriod': 'FY2023-24', 'carbonEmissions': 1e12, 'totalRevenue': 1e-6})
        assert fields['carbonEmissions'] == 1e12


class TestParseAuthBodies:

    def test_register_valid(self):
        data = parse_register({'name': ' Ana ', 'email': 'ana@example.com', 'password': 'secret123'})
        assert data.name == 'Ana'
        assert data.email == 'ana@example.com'

    def test_register_invalid(self):
        with pytest.raises(ValidationError) as exc_info:
            parse_register({'name': '', 'email': 'not-an-email', 'password': '123'})
        assert set(exc_info.value.details) == {'name', 'email', 'password'}

    def test_login_requires_fields(self):
        with pytest.raises(ValidationError) as exc_info:
            parse_login({})
        assert set(exc_info.value.details) == {'email', 'password'}


class TestParsePeriod:

    def test_valid(self):
        assert parse_period(' FY2021-22 ') == 'FY2021-22'

    def test_empty(self):
        with pytest.raises(ValidationError):
            parse_period('  ')

    def test_too_long(self):
        with pytest.raises(ValidationError):
            parse_period('X' * 33)


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
