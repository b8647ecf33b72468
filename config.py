# -*- coding: utf-8 -*-
"""
ESG Portal - Configuration

Application settings, metric definitions and questionnaire layout.
Secrets and connection strings come from the environment.
"""

import os
from decimal import Decimal

# Base paths
BASE_DIR = os.path.dirname(os.path.abspath(__file__))
DATA_DIR = os.path.join(BASE_DIR, 'data')
EXPORTS_DIR = os.path.join(DATA_DIR, 'exports')

# =============================================================================
# APPLICATION
# =============================================================================
APP_CONFIG = {
    'VERSION': '1.0.0',
    'RELEASE_DATE': '19.10.2026',
    'APP_NAME': 'ESG Portal',
    'APP_SUBTITLE': 'Yearly ESG questionnaire and sustainability ratios',
    'EXPORT_TITLE': 'ESG Questionnaire Summary',
}


def _env_list(name: str, default: str) -> list:
    raw = os.environ.get(name) or default
    return [item.strip() for item in raw.split(',') if item.strip()]


class Config:
    """Base Flask configuration"""
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'esg-portal-dev-secret-key'
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or \
        f'sqlite:///{os.path.join(BASE_DIR, "esg_portal.db")}'
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # No default: a missing secret is a misconfiguration and fails closed
    JWT_SECRET = os.environ.get('JWT_SECRET')
    JWT_ALGORITHM = 'HS256'
    JWT_EXPIRES_DAYS = int(os.environ.get('JWT_EXPIRES_DAYS') or 7)

    CORS_ORIGINS = _env_list('CORS_ORIGINS', 'http://localhost:3000')

    MAX_PERIOD_LENGTH = 32
    # Collides with /api/responses/summary
    RESERVED_PERIODS = ('summary',)
    MAX_HEADCOUNT = 10 ** 9


class TestingConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
    JWT_SECRET = 'test-jwt-secret-0123456789abcdef0123'
    LOG_TO_FILE = False


# =============================================================================
# DERIVED METRICS
# =============================================================================
METRIC_DEFINITIONS = {
    'carbonIntensity': {
        'label': 'Carbon Intensity',
        'unit': 'tCO2e / revenue',
        'precision': 6,
        'percent': False,
    },
    'renewableElectricityRatio': {
        'label': 'Renewables %',
        'unit': '%',
        'precision': 2,
        'percent': True,
    },
    'diversityRatio': {
        'label': 'Diversity %',
        'unit': '%',
        'precision': 2,
        'percent': True,
    },
    'communitySpendRatio': {
        'label': 'Community Spend %',
        'unit': '%',
        'precision': 4,
        'percent': True,
    },
}

# =============================================================================
# QUESTIONNAIRE LAYOUT (used by exports)
# =============================================================================
QUESTIONNAIRE_SECTIONS = {
    'Environmental': [
        ('totalElectricityConsumption', 'Total electricity consumption (kWh)'),
        ('renewableElectricityConsumption', 'Renewable electricity consumption (kWh)'),
        ('totalFuelConsumption', 'Total fuel consumption (litres)'),
        ('carbonEmissions', 'Carbon emissions (tCO2e)'),
    ],
    'Social': [
        ('totalEmployees', 'Total employees'),
        ('femaleEmployees', 'Female employees'),
        ('averageTrainingHoursPerEmployee', 'Average training hours per employee'),
        ('communityInvestmentSpend', 'Community investment spend'),
    ],
    'Governance': [
        ('percentIndependentBoardMembers', '% independent board members'),
        ('dataPrivacyPolicy', 'Data privacy policy'),
        ('totalRevenue', 'Total revenue'),
    ],
}

# =============================================================================
# LOGGING
# =============================================================================
LOGGING_CONFIG = {
    'level': os.environ.get('LOG_LEVEL') or 'INFO',
    'format': '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    'date_format': '%Y-%m-%d %H:%M:%S',
    'file': os.path.join(BASE_DIR, 'logs', 'esg_portal.log'),
    'max_bytes': 10485760,  # 10 MB
    'backup_count': 5,
}


def format_number(value, precision: int = 2) -> str:
    """Format a metric for display; absent values render as a dash"""
    if value is None:
        return '-'
    if isinstance(value, bool):
        return 'Yes' if value else 'No'
    if isinstance(value, (int, float)):
        value = Decimal(str(value))
    return f"{value:,.{precision}f}"


def format_percent(value, precision: int = 2) -> str:
    """Format a 0-100 percentage"""
    if value is None:
        return '-'
    return f"{format_number(value, precision)}%"
