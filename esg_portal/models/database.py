# -*- coding: utf-8 -*-
"""
ESG Portal - Database models
Users and their yearly questionnaire responses
"""

from datetime import datetime, timezone

from esg_portal import db


def utcnow():
    return datetime.now(timezone.utc).replace(tzinfo=None)


# Wire (camelCase) name -> column name, for every questionnaire field
RAW_FIELDS = {
    'financialPeriod': 'financial_period',
    # Environmental
    'totalElectricityConsumption': 'total_electricity_consumption',
    'renewableElectricityConsumption': 'renewable_electricity_consumption',
    'totalFuelConsumption': 'total_fuel_consumption',
    'carbonEmissions': 'carbon_emissions',
    # Social
    'totalEmployees': 'total_employees',
    'femaleEmployees': 'female_employees',
    'averageTrainingHoursPerEmployee': 'average_training_hours_per_employee',
    'communityInvestmentSpend': 'community_investment_spend',
    # Governance
    'percentIndependentBoardMembers': 'percent_independent_board_members',
    'dataPrivacyPolicy': 'data_privacy_policy',
    'totalRevenue': 'total_revenue',
}

DERIVED_FIELDS = {
    'carbonIntensity': 'carbon_intensity',
    'renewableElectricityRatio': 'renewable_electricity_ratio',
    'diversityRatio': 'diversity_ratio',
    'communitySpendRatio': 'community_spend_ratio',
}


class User(db.Model):
    """Registered portal user"""
    __tablename__ = 'users'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(200), nullable=False)
    email = db.Column(db.String(255), unique=True, nullable=False, index=True)
    password_hash = db.Column(db.String(255), nullable=False)
    created_at = db.Column(db.DateTime, default=utcnow)

    responses = db.relationship(
        'QuestionnaireResponse', backref='user', lazy=True, cascade='all, delete-orphan'
    )

    def to_dict(self):
        """Public view: the password hash never leaves the server"""
        return {
            'id': self.id,
            'name': self.name,
            'email': self.email,
        }

    def __repr__(self):
        return f'<User {self.email}>'


class QuestionnaireResponse(db.Model):
    """One ESG questionnaire per user per financial period"""
    __tablename__ = 'questionnaire_responses'

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('users.id', ondelete='CASCADE'), nullable=False, index=True)
    financial_period = db.Column(db.String(32), nullable=False)

    # Environmental
    total_electricity_consumption = db.Column(db.Float)
    renewable_electricity_consumption = db.Column(db.Float)
    total_fuel_consumption = db.Column(db.Float)
    carbon_emissions = db.Column(db.Float)

    # Social
    total_employees = db.Column(db.Integer)
    female_employees = db.Column(db.Integer)
    average_training_hours_per_employee = db.Column(db.Float)
    community_investment_spend = db.Column(db.Float)

    # Governance
    percent_independent_board_members = db.Column(db.Float)
    data_privacy_policy = db.Column(db.Boolean)
    total_revenue = db.Column(db.Float)

    # Derived, recomputed on every submission
    carbon_intensity = db.Column(db.Float)
    renewable_electricity_ratio = db.Column(db.Float)
    diversity_ratio = db.Column(db.Float)
    community_spend_ratio = db.Column(db.Float)

    created_at = db.Column(db.DateTime, default=utcnow)
    updated_at = db.Column(db.DateTime, default=utcnow, onupdate=utcnow)

    __table_args__ = (
        db.UniqueConstraint('user_id', 'financial_period', name='uq_user_financial_period'),
    )

    def to_dict(self):
        """Wire representation (camelCase, absent values as null)"""
        result = {
            'id': self.id,
            'userId': self.user_id,
        }
        for wire_name, column in RAW_FIELDS.items():
            result[wire_name] = getattr(self, column)
        for wire_name, column in DERIVED_FIELDS.items():
            result[wire_name] = getattr(self, column)
        result['createdAt'] = self.created_at.isoformat() if self.created_at else None
        result['updatedAt'] = self.updated_at.isoformat() if self.updated_at else None
        return result

    def __repr__(self):
        return f'<QuestionnaireResponse user={self.user_id} period={self.financial_period}>'
