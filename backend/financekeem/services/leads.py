"""
Lead reconciliation: find-or-create by normalized email, merge, advance status
"""
import logging
from datetime import datetime
from typing import List, Optional

from ..errors import Conflict, ValidationError
from ..schemas import LeadCandidate
from ..storage import Store

logger = logging.getLogger(__name__)

# Lifecycle order; "cancelled" sits outside it and overrides everything
STATUS_ORDER = ("new", "contacted", "scheduled", "completed")
CANCELLED = "cancelled"
LEAD_STATUSES = STATUS_ORDER + (CANCELLED,)

# Candidate wins when non-empty, existing value is the fallback
MERGED_FIELDS = ("name", "phone", "quiz_answers", "pillar_scores", "protection_state", "form_data")


def normalize_email(email: Optional[str]) -> Optional[str]:
    """' Foo@Bar.com ' -> 'foo@bar.com', blank -> None"""
    email = (email or "").strip().lower()
    return email or None


def _is_empty(value) -> bool:
    return value is None or value == "" or value == {} or value == []


def _rank(status: str) -> int:
    try:
        return STATUS_ORDER.index(status)
    except ValueError:
        raise ValidationError(f"Unknown lead status: {status}", field="status")


def advance(current: Optional[str], incoming: Optional[str]) -> str:
    """
    Status after an incoming capture event

    Progress only moves forward: new < contacted < scheduled < completed.
    An incoming "cancelled" always wins, and a cancelled lead stays cancelled
    for every later non-cancel event.
    """
    current = current or "new"
    incoming = incoming or "new"

    if incoming == CANCELLED:
        return CANCELLED
    if current == CANCELLED:
        _rank(incoming)
        return CANCELLED
    if _rank(incoming) > _rank(current):
        return incoming
    return current


class LeadService:
    """Lead database operations on top of a store"""

    def __init__(self, store: Store):
        self.store = store

    def reconcile(self, candidate: LeadCandidate) -> dict:
        """
        Create a lead or merge the candidate into the lead with the same email

        Candidates without an email always create a fresh lead. Exactly one
        create or update reaches the store, except when a concurrent writer
        created the same email first: the store's uniqueness conflict is then
        resolved by merging into that lead.
        """
        email = normalize_email(candidate.email)
        if not email:
            return self._create(candidate, None)

        existing = self.store.find_by_field("leads", "email", email)
        if existing is None:
            try:
                return self._create(candidate, email)
            except Conflict:
                existing = self.store.find_by_field("leads", "email", email)
                if existing is None:
                    raise
                logger.info(f"Lead {email} was created concurrently, merging into {existing['id']}")

        return self._merge(existing, candidate, email)

    def _create(self, candidate: LeadCandidate, email: Optional[str]) -> dict:
        now = datetime.now()
        record = {
            "email": email,
            "status": candidate.status or "new",
            "source": candidate.source or None,
            "created_at": now,
            "updated_at": now,
        }
        for field in MERGED_FIELDS:
            value = getattr(candidate, field)
            record[field] = None if _is_empty(value) else value

        lead = self.store.create("leads", record)
        logger.info(f"Lead created: {lead['id']} ({email or 'no email'}, source={lead['source']})")
        return lead

    def _merge(self, existing: dict, candidate: LeadCandidate, email: str) -> dict:
        patch = {
            "email": email,
            "status": advance(existing.get("status"), candidate.status),
            "updated_at": datetime.now(),
        }
        for field in MERGED_FIELDS:
            value = getattr(candidate, field)
            patch[field] = existing.get(field) if _is_empty(value) else value

        lead = self.store.update("leads", existing["id"], patch)
        logger.info(f"Lead merged: {lead['id']} ({email}, status {existing.get('status')} -> {lead['status']})")
        return lead

    # ==================== Admin operations ====================

    def list_leads(self, search: Optional[str] = None, status: Optional[str] = None) -> List[dict]:
        """Leads newest first, optionally filtered by status and a name/email/phone search"""
        leads = self.store.filter("leads", status=status) if status else self.store.get("leads")
        if not search:
            return leads

        term = search.strip().lower()
        return [
            lead for lead in leads
            if term in (lead.get("name") or "").lower()
            or term in (lead.get("email") or "")
            or term in (lead.get("phone") or "")
        ]

    def get_lead(self, lead_id: str) -> dict:
        return self.store.require("leads", lead_id)

    def create_lead(self, candidate: LeadCandidate) -> dict:
        """Manual entry from the admin goes through the same dedup path"""
        if not candidate.source:
            candidate = candidate.model_copy(update={"source": "manual"})
        return self.reconcile(candidate)

    def update_lead(self, lead_id: str, patch: dict) -> dict:
        """
        Manual edit: fields are set as given, status included (no progression rule)
        """
        patch = dict(patch)
        if "email" in patch:
            patch["email"] = normalize_email(patch["email"])
        if "status" in patch and patch["status"] not in LEAD_STATUSES:
            raise ValidationError(f"Unknown lead status: {patch['status']}", field="status")
        patch.pop("source", None)
        patch["updated_at"] = datetime.now()
        return self.store.update("leads", lead_id, patch)

    def delete_lead(self, lead_id: str) -> None:
        self.store.delete("leads", lead_id)
        logger.info(f"Lead deleted: {lead_id}")
