# -*- coding: utf-8 -*-
"""
ESG Portal - Derived sustainability ratios

Pure computation, no I/O. Four ratios are derived from a questionnaire:

    carbonIntensity           = carbonEmissions / totalRevenue
    renewableElectricityRatio = 100 * renewableElectricityConsumption / totalElectricityConsumption
    diversityRatio            = 100 * femaleEmployees / totalEmployees
    communitySpendRatio       = 100 * communityInvestmentSpend / totalRevenue

Safe division: a missing numerator counts as 0, a missing or zero denominator
leaves the ratio undefined and it is omitted from the result. "0% renewable"
is only reported against a known electricity total.
Values are not rounded here; rounding belongs to the presentation.
"""

import math
from typing import Dict, Mapping, Optional, Tuple

# derived field -> (numerator, denominator, scale)
RATIO_DEFINITIONS: Dict[str, Tuple[str, str, float]] = {
    'carbonIntensity': ('carbonEmissions', 'totalRevenue', 1.0),
    'renewableElectricityRatio': ('renewableElectricityConsumption', 'totalElectricityConsumption', 100.0),
    'diversityRatio': ('femaleEmployees', 'totalEmployees', 100.0),
    'communitySpendRatio': ('communityInvestmentSpend', 'totalRevenue', 100.0),
}


def safe_ratio(numerator: Optional[float], denominator: Optional[float], scale: float = 1.0) -> Optional[float]:
    """scale * numerator / denominator, or None when the denominator is missing or zero"""
    if denominator is None or denominator == 0:
        return None
    if numerator is None:
        numerator = 0
    return scale * numerator / denominator


def compute_metrics(inputs: Mapping[str, object]) -> Dict[str, float]:
    """
    Derive the ratio fields from raw questionnaire inputs

    Args:
        inputs: validated questionnaire fields keyed by wire name; absent
            fields may be missing or None

    Returns:
        Only the ratios that are defined for these inputs
    """
    derived = {}
    for field_name, (numerator, denominator, scale) in RATIO_DEFINITIONS.items():
        value = safe_ratio(inputs.get(numerator), inputs.get(denominator), scale)
        if value is not None:
            derived[field_name] = float(value)
    return derived


def overflowing_ratios(inputs: Mapping[str, object]) -> Dict[str, Tuple[str, str]]:
    """Ratios whose quotient is too large for a float, with their (numerator, denominator) fields"""
    overflowing = {}
    for field_name, (numerator, denominator, scale) in RATIO_DEFINITIONS.items():
        value = safe_ratio(inputs.get(numerator), inputs.get(denominator), scale)
        if value is not None and not math.isfinite(value):
            overflowing[field_name] = (numerator, denominator)
    return overflowing
