# -*- coding: utf-8 -*-
"""
ESG Portal - shared test fixtures
"""

import os
import sys

import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from config import TestingConfig
from esg_portal import create_app, db


FULL_SUBMISSION = {
    'financialPeriod': 'FY2023-24',
    'totalElectricityConsumption': 200000.0,
    'renewableElectricityConsumption': 50000.0,
    'totalFuelConsumption': 1200.5,
    'carbonEmissions': 50.0,
    'totalEmployees': 100,
    'femaleEmployees': 30,
    'averageTrainingHoursPerEmployee': 12.5,
    'communityInvestmentSpend': 20.0,
    'percentIndependentBoardMembers': 40.0,
    'dataPrivacyPolicy': True,
    'totalRevenue': 2000.0,
}


@pytest.fixture
def full_submission():
    return dict(FULL_SUBMISSION)


@pytest.fixture
def app():
    app = create_app(TestingConfig)
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def app_ctx(app):
    with app.app_context():
        yield app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def register_user(client):
    """Register a user and return (user dict, auth headers)"""

    def _register(email='owner@example.com', name='Owner', password='secret123'):
        response = client.post('/api/auth/register', json={
            'name': name,
            'email': email,
            'password': password,
        })
        assert response.status_code == 200, response.get_json()
        body = response.get_json()
        return body['user'], {'Authorization': f"Bearer {body['token']}"}

    return _register
