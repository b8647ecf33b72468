# -*- coding: utf-8 -*-
"""
Auth Service - registration, login and bearer tokens

Tokens are stateless HS256 JWTs carrying {id, email} with an expiry.
The signing secret comes from configuration; without it nothing is issued
or accepted.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Tuple

import jwt
from flask import current_app
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from werkzeug.security import check_password_hash, generate_password_hash

from esg_portal import db
from esg_portal.errors import AuthError, ConfigurationError, ConflictError, NotFoundError, StoreError
from esg_portal.models import User
from esg_portal.schemas import parse_login, parse_register

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AuthContext:
    """Identity of the caller for one request"""
    user_id: int
    email: str


class AuthService:

    # =========================================================================
    # TOKENS
    # =========================================================================

    @staticmethod
    def _secret() -> str:
        secret = current_app.config.get('JWT_SECRET')
        if not secret:
            logger.error("JWT_SECRET is not configured")
            raise ConfigurationError('JWT secret not configured')
        return secret

    def issue_token(self, user: User) -> str:
        expires = datetime.now(timezone.utc) + timedelta(days=current_app.config['JWT_EXPIRES_DAYS'])
        payload = {
            'id': user.id,
            'email': user.email,
            'exp': expires,
        }
        return jwt.encode(payload, self._secret(), algorithm=current_app.config['JWT_ALGORITHM'])

    def decode_token(self, token: str) -> AuthContext:
        secret = self._secret()
        try:
            payload = jwt.decode(
                token, secret,
                algorithms=[current_app.config['JWT_ALGORITHM']],
                options={'require': ['exp']},
            )
        except jwt.ExpiredSignatureError:
            raise AuthError('Token expired')
        except jwt.InvalidTokenError:
            raise AuthError('Invalid or expired token')

        user_id = payload.get('id')
        email = payload.get('email')
        if not isinstance(user_id, int) or isinstance(user_id, bool) or not isinstance(email, str):
            raise AuthError('Invalid or expired token')
        return AuthContext(user_id=user_id, email=email)

    def context_from_header(self, header: str) -> AuthContext:
        """Parse 'Authorization: Bearer <token>'"""
        if not header or not header.startswith('Bearer '):
            raise AuthError('Missing token')
        token = header[len('Bearer '):].strip()
        if not token:
            raise AuthError('Missing token')
        return self.decode_token(token)

    # =========================================================================
    # USERS
    # =========================================================================

    def register(self, body: Any) -> Tuple[str, Dict[str, Any]]:
        """
        Create a user and sign them in

        Returns:
            (token, public user dict)

        Raises:
            ValidationError, ConflictError (email already registered)
        """
        data = parse_register(body)
        # Fail before writing anything if tokens cannot be issued
        self._secret()

        if self._find_by_email(data.email) is not None:
            logger.warning(f"Registration rejected, email exists: {data.email}")
            raise ConflictError('Email already registered')

        user = User(
            name=data.name,
            email=data.email,
            password_hash=generate_password_hash(data.password),
        )
        try:
            db.session.add(user)
            db.session.commit()
        except IntegrityError:
            db.session.rollback()
            logger.warning(f"Registration lost race on unique email: {data.email}")
            raise ConflictError('Email already registered')
        except SQLAlchemyError as e:
            db.session.rollback()
            logger.exception(f"Error creating user: {e}")
            raise StoreError(str(e))

        logger.info(f"Registered user {user.id}")
        return self.issue_token(user), user.to_dict()

    def login(self, body: Any) -> Tuple[str, Dict[str, Any]]:
        data = parse_login(body)
        user = self._find_by_email(data.email)
        if user is None or not check_password_hash(user.password_hash, data.password):
            logger.warning(f"Failed login for {data.email}")
            raise AuthError('Invalid credentials')
        return self.issue_token(user), user.to_dict()

    def get_user(self, user_id: int) -> Dict[str, Any]:
        try:
            user = db.session.get(User, user_id)
        except SQLAlchemyError as e:
            logger.exception(f"Error loading user {user_id}: {e}")
            raise StoreError(str(e))
        if user is None:
            raise NotFoundError('User not found')
        return user.to_dict()

    @staticmethod
    def _find_by_email(email: str):
        try:
            return db.session.execute(select(User).where(User.email == email)).scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.exception(f"Error looking up user by email: {e}")
            raise StoreError(str(e))


# Singleton instance
auth_service = AuthService()
