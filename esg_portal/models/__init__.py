# -*- coding: utf-8 -*-
"""
ESG Portal - Data models
"""

from esg_portal.models.database import (
    User, QuestionnaireResponse, RAW_FIELDS, DERIVED_FIELDS
)

__all__ = [
    'User', 'QuestionnaireResponse', 'RAW_FIELDS', 'DERIVED_FIELDS'
]
