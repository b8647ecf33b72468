# -*- coding: utf-8 -*-
"""
Submission Service - questionnaire reconciliation

Single entry point for writing and reading questionnaire responses:

1. Validate the raw body (strict schema, field -> reason map on failure)
2. Derive the ratios from the fields present in THIS submission
3. Upsert present raw + present derived fields under (owner, period)

Absent fields never reach the store, so a partial submission leaves the
previously stored values untouched. A failed validation writes nothing.
"""

import logging
from typing import Any, Dict, List

from esg_portal.modules.esg_metrics import compute_metrics
from esg_portal.schemas import parse_period, parse_questionnaire
from esg_portal.services.record_store import RecordStore

logger = logging.getLogger(__name__)


class SubmissionService:
    """Validation, metric derivation and keyed persistence of questionnaires"""

    def __init__(self, store: RecordStore = None):
        self.store = store or RecordStore()

    def submit(self, owner_id: int, raw_input: Any) -> Dict[str, Any]:
        """
        Save one questionnaire for the owner

        Args:
            owner_id: Authenticated user id
            raw_input: Decoded JSON body

        Returns:
            The full stored record

        Raises:
            ValidationError: body rejected, nothing written
            ConflictError, StoreError: persistence failed
        """
        fields = parse_questionnaire(raw_input)
        period = fields.pop('financialPeriod')

        derived = compute_metrics(fields)
        payload = {**fields, **derived}

        record = self.store.upsert(owner_id, period, payload)
        logger.info(
            f"[user {owner_id}] Saved ESG data for {period}: "
            f"{len(fields)} inputs, {len(derived)} derived metrics"
        )
        return record

    def list(self, owner_id: int) -> List[Dict[str, Any]]:
        """Owner's records, financial period ascending"""
        return self.store.list_by_owner(owner_id)

    def get_one(self, owner_id: int, financial_period: str) -> Dict[str, Any]:
        return self.store.get(owner_id, parse_period(financial_period))

    def delete(self, owner_id: int, financial_period: str) -> None:
        period = parse_period(financial_period)
        self.store.delete(owner_id, period)
        logger.info(f"[user {owner_id}] Deleted ESG data for {period}")


# Singleton instance
submission_service = SubmissionService()
