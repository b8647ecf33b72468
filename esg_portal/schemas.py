# -*- coding: utf-8 -*-
"""
ESG Portal - Input schemas

Pydantic models for request bodies. Wire names are camelCase (alias
generator), attributes snake_case. The questionnaire schema is strict:
unknown keys are rejected, numbers must be real JSON numbers, counts must be
integers and every value must be finite.
"""

from typing import Annotated, Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictStr, field_validator
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel

from config import Config
from esg_portal.errors import ValidationError
from esg_portal.modules.esg_metrics import overflowing_ratios

NonNegativeReal = Annotated[float, Field(ge=0, strict=True, allow_inf_nan=False)]
Headcount = Annotated[int, Field(ge=0, le=Config.MAX_HEADCOUNT, strict=True)]
Percentage = Annotated[float, Field(ge=0, le=100, strict=True, allow_inf_nan=False)]

EMAIL_PATTERN = r'^[^@\s]+@[^@\s]+\.[^@\s]+$'


class QuestionnaireInput(BaseModel):
    """One yearly questionnaire submission. Only financialPeriod is required."""
    model_config = ConfigDict(
        extra='forbid',
        alias_generator=to_camel,
        str_strip_whitespace=True,
    )

    financial_period: StrictStr = Field(..., min_length=1, max_length=Config.MAX_PERIOD_LENGTH)

    # Environmental
    total_electricity_consumption: Optional[NonNegativeReal] = None
    renewable_electricity_consumption: Optional[NonNegativeReal] = None
    total_fuel_consumption: Optional[NonNegativeReal] = None
    carbon_emissions: Optional[NonNegativeReal] = None

    # Social
    total_employees: Optional[Headcount] = None
    female_employees: Optional[Headcount] = None
    average_training_hours_per_employee: Optional[NonNegativeReal] = None
    community_investment_spend: Optional[NonNegativeReal] = None

    # Governance
    percent_independent_board_members: Optional[Percentage] = None
    data_privacy_policy: Optional[StrictBool] = None
    total_revenue: Optional[NonNegativeReal] = None

    @field_validator('financial_period')
    @classmethod
    def addressable_period(cls, v):
        if '/' in v:
            raise ValueError("must not contain '/'")
        if v in Config.RESERVED_PERIODS:
            raise ValueError(f"'{v}' is a reserved name")
        return v

    @field_validator('female_employees')
    @classmethod
    def female_within_total(cls, v, info):
        total = info.data.get('total_employees')
        if v is not None and total is not None and v > total:
            raise ValueError('cannot exceed totalEmployees')
        return v


class RegisterInput(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    name: StrictStr = Field(..., min_length=1, max_length=200)
    email: StrictStr = Field(..., max_length=255, pattern=EMAIL_PATTERN)
    password: StrictStr = Field(..., min_length=6)


class LoginInput(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    email: StrictStr = Field(..., max_length=255, pattern=EMAIL_PATTERN)
    password: StrictStr = Field(..., min_length=6)


# =============================================================================
# HELPERS
# =============================================================================

def validation_details(exc: PydanticValidationError) -> Dict[str, str]:
    """Flatten pydantic errors into a field -> reason map (first reason wins)"""
    details = {}
    for error in exc.errors():
        field = '.'.join(str(part) for part in error['loc']) or 'body'
        details.setdefault(field, error['msg'])
    return details


def _validate(model, raw: Any):
    if not isinstance(raw, dict):
        raise ValidationError('Request body must be a JSON object', {'body': 'expected an object'})
    try:
        return model.model_validate(raw)
    except PydanticValidationError as e:
        raise ValidationError('Validation failed', validation_details(e))


def parse_questionnaire(raw: Any) -> Dict[str, Any]:
    """
    Validate a raw questionnaire body

    Returns:
        The present fields keyed by wire name; null / missing fields are dropped

    Raises:
        ValidationError: a field is invalid, or a ratio of the inputs overflows a float
    """
    parsed = _validate(QuestionnaireInput, raw)
    fields = parsed.model_dump(by_alias=True, exclude_none=True)

    details = {}
    for ratio, (numerator, denominator) in overflowing_ratios(fields).items():
        details.setdefault(numerator, f'too large relative to {denominator}, {ratio} overflows')
        details.setdefault(denominator, f'too small relative to {numerator}, {ratio} overflows')
    if details:
        raise ValidationError('Validation failed', details)
    return fields


def parse_register(raw: Any) -> RegisterInput:
    return _validate(RegisterInput, raw)


def parse_login(raw: Any) -> LoginInput:
    return _validate(LoginInput, raw)


def parse_period(value: Optional[str]) -> str:
    """Validate a financial period taken from a URL segment"""
    period = (value or '').strip()
    if not period:
        raise ValidationError('Invalid financial period', {'financialPeriod': 'must not be empty'})
    if len(period) > Config.MAX_PERIOD_LENGTH:
        raise ValidationError(
            'Invalid financial period',
            {'financialPeriod': f'must be at most {Config.MAX_PERIOD_LENGTH} characters'},
        )
    return period
