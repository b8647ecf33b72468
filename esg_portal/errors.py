# -*- coding: utf-8 -*-
"""
ESG Portal - Error taxonomy

Every error raised by the services carries the HTTP status it maps to, so the
blueprints never translate exceptions by hand. Handlers are registered in
create_app().
"""

from typing import Dict, Optional


class ESGPortalError(Exception):
    """Base error for the portal"""
    status_code = 500
    public_message = 'Internal server error'

    def __init__(self, message: Optional[str] = None, details: Optional[Dict[str, str]] = None):
        super().__init__(message or self.public_message)
        self.message = message or self.public_message
        self.details = details or {}

    def to_dict(self) -> Dict:
        body = {'error': self.message}
        if self.details:
            body['details'] = self.details
        return body


class ValidationError(ESGPortalError):
    """Client-fixable input error. details: field -> reason"""
    status_code = 400
    public_message = 'Validation failed'


class AuthError(ESGPortalError):
    """Missing, malformed or expired credential, or bad login"""
    status_code = 401
    public_message = 'Unauthorized'


class NotFoundError(ESGPortalError):
    status_code = 404
    public_message = 'Not found'


class ConflictError(ESGPortalError):
    """Unique constraint violated (duplicate email, concurrent insert)"""
    status_code = 409
    public_message = 'Conflict'


class StoreError(ESGPortalError):
    """Persistence failure. The underlying detail is logged, never returned."""
    status_code = 500
    public_message = 'Internal server error'

    def to_dict(self) -> Dict:
        return {'error': self.public_message}


class ConfigurationError(ESGPortalError):
    """Server misconfiguration, e.g. JWT secret not set"""
    status_code = 500
    public_message = 'Server misconfigured'
