# -*- coding: utf-8 -*-
"""
ESG Portal - Calculation modules
"""

from esg_portal.modules.esg_metrics import compute_metrics, safe_ratio, RATIO_DEFINITIONS

__all__ = [
    'compute_metrics',
    'safe_ratio',
    'RATIO_DEFINITIONS',
]
