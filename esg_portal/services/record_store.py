# -*- coding: utf-8 -*-
"""
Record Store - keyed persistence for questionnaire responses

Records are addressed by (user_id, financial_period), backed by the unique
index uq_user_financial_period. The store speaks wire (camelCase) field names
on both sides and returns plain dicts.

Upsert is a single INSERT ... ON CONFLICT DO UPDATE statement on SQLite and
PostgreSQL (atomic per key, last writer wins). Other dialects fall back to
select-then-write with one retry if a concurrent insert wins the index.
"""

import logging
from typing import Any, Dict, List, Optional

from sqlalchemy import select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from esg_portal import db
from esg_portal.errors import ConflictError, NotFoundError, StoreError
from esg_portal.models import QuestionnaireResponse, RAW_FIELDS, DERIVED_FIELDS
from esg_portal.models.database import utcnow

logger = logging.getLogger(__name__)

WRITABLE_FIELDS = {**RAW_FIELDS, **DERIVED_FIELDS}

_UPSERT_DIALECTS = {
    'sqlite': sqlite.insert,
    'postgresql': postgresql.insert,
}


class RecordStore:
    """Keyed get / list / upsert / delete over questionnaire_responses"""

    def __init__(self, session=None):
        self._session = session

    @property
    def session(self):
        return self._session or db.session

    # =========================================================================
    # READS
    # =========================================================================

    def get(self, user_id: int, financial_period: str) -> Dict[str, Any]:
        record = self._find(user_id, financial_period)
        if record is None:
            raise NotFoundError(f'No data found for financial period {financial_period}')
        return record.to_dict()

    def list_by_owner(self, user_id: int) -> List[Dict[str, Any]]:
        """All records of one user, financial period ascending"""
        try:
            records = self.session.execute(
                select(QuestionnaireResponse)
                .where(QuestionnaireResponse.user_id == user_id)
                .order_by(QuestionnaireResponse.financial_period.asc())
            ).scalars().all()
        except SQLAlchemyError as e:
            logger.exception(f"Error listing records for user {user_id}: {e}")
            raise StoreError(str(e))
        return [record.to_dict() for record in records]

    # =========================================================================
    # WRITES
    # =========================================================================

    def upsert(self, user_id: int, financial_period: str, fields: Dict[str, Any]) -> Dict[str, Any]:
        """
        Create the record for the key, or merge `fields` over the existing one

        Args:
            user_id: Owner
            financial_period: Period label
            fields: Wire-named values to write; keys not given are left untouched

        Returns:
            The full stored record
        """
        values = self._to_columns(fields)
        values.pop('financial_period', None)

        try:
            insert_factory = _UPSERT_DIALECTS.get(self.session.get_bind().dialect.name)
            if insert_factory is not None:
                self._upsert_on_conflict(insert_factory, user_id, financial_period, values)
            else:
                self._upsert_select_then_write(user_id, financial_period, values)
            self.session.commit()
        except IntegrityError as e:
            self.session.rollback()
            logger.warning(f"Unique constraint violated for user {user_id} / {financial_period}: {e}")
            raise ConflictError(f'Record for financial period {financial_period} conflicts with an existing one')
        except SQLAlchemyError as e:
            self.session.rollback()
            logger.exception(f"Error upserting record for user {user_id} / {financial_period}: {e}")
            raise StoreError(str(e))

        return self.get(user_id, financial_period)

    def delete(self, user_id: int, financial_period: str) -> None:
        record = self._find(user_id, financial_period)
        if record is None:
            raise NotFoundError(f'No data found for financial period {financial_period}')
        try:
            self.session.delete(record)
            self.session.commit()
        except SQLAlchemyError as e:
            self.session.rollback()
            logger.exception(f"Error deleting record for user {user_id} / {financial_period}: {e}")
            raise StoreError(str(e))

    # =========================================================================
    # PRIVATE HELPERS
    # =========================================================================

    def _find(self, user_id: int, financial_period: str) -> Optional[QuestionnaireResponse]:
        try:
            return self.session.execute(
                select(QuestionnaireResponse).where(
                    QuestionnaireResponse.user_id == user_id,
                    QuestionnaireResponse.financial_period == financial_period,
                )
            ).scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.exception(f"Error reading record for user {user_id} / {financial_period}: {e}")
            raise StoreError(str(e))

    @staticmethod
    def _to_columns(fields: Dict[str, Any]) -> Dict[str, Any]:
        unknown = set(fields) - set(WRITABLE_FIELDS)
        if unknown:
            raise ValueError(f'Unknown record fields: {sorted(unknown)}')
        return {WRITABLE_FIELDS[name]: value for name, value in fields.items()}

    def _upsert_on_conflict(self, insert_factory, user_id: int, financial_period: str, values: Dict[str, Any]):
        now = utcnow()
        stmt = insert_factory(QuestionnaireResponse).values(
            user_id=user_id,
            financial_period=financial_period,
            created_at=now,
            updated_at=now,
            **values,
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=['user_id', 'financial_period'],
            set_={**values, 'updated_at': now},
        )
        self.session.execute(stmt)

    def _upsert_select_then_write(self, user_id: int, financial_period: str, values: Dict[str, Any]):
        record = self._find(user_id, financial_period)
        if record is None:
            self.session.add(QuestionnaireResponse(
                user_id=user_id, financial_period=financial_period, **values
            ))
            try:
                self.session.flush()
                return
            except IntegrityError:
                # Lost the race to a concurrent insert; merge over the winner
                self.session.rollback()
                record = self._find(user_id, financial_period)
                if record is None:
                    raise
        for column, value in values.items():
            setattr(record, column, value)
