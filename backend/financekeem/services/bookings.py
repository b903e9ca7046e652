"""
Bookings: duplicate-safe creation plus the matching lead update
"""
import logging
from datetime import datetime
from typing import List, Optional, Tuple

from ..errors import Conflict, ValidationError
from ..schemas import BookingCandidate, LeadCandidate
from ..storage import Store
from .leads import LeadService, normalize_email

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = (
    ("client_name", "Name"),
    ("client_email", "Email"),
    ("scheduled_date", "Date"),
    ("scheduled_time", "Time"),
)


def parse_date(value: str):
    """'2026-10-20' -> date, ValidationError otherwise"""
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except (TypeError, ValueError):
        raise ValidationError("Invalid date format, use YYYY-MM-DD", field="scheduled_date")


class BookingService:
    """Booking operations; every new booking also reconciles its lead"""

    def __init__(self, store: Store, leads: Optional[LeadService] = None):
        self.store = store
        self.leads = leads or LeadService(store)

    def find_existing(self, email: str, scheduled_date: str, scheduled_time: str) -> Optional[dict]:
        if not email:
            return None
        return self.store.find_one(
            "bookings",
            client_email=email,
            scheduled_date=scheduled_date,
            scheduled_time=scheduled_time
        )

    def create_booking(self, candidate: BookingCandidate) -> Tuple[dict, bool]:
        """
        Create a booking, or return the one already held by the same email at the same slot

        Returns:
            (booking, created): created is False for a repeated submission,
            in which case the lead is not touched again.

        The booking insert and the lead update are separate writes: if the
        lead update fails, the booking stays.
        """
        for field, label in REQUIRED_FIELDS:
            if not (getattr(candidate, field) or "").strip():
                raise ValidationError(f"{label} is required", field=field)
        parse_date(candidate.scheduled_date)

        email = normalize_email(candidate.client_email)
        scheduled_date = candidate.scheduled_date.strip()
        scheduled_time = candidate.scheduled_time.strip()

        existing = self.find_existing(email, scheduled_date, scheduled_time)
        if existing:
            logger.info(f"Booking already exists for {email} at {scheduled_date} {scheduled_time}")
            return existing, False

        record = candidate.model_dump()
        record.update(
            client_name=candidate.client_name.strip(),
            client_email=email,
            scheduled_date=scheduled_date,
            scheduled_time=scheduled_time,
            status="scheduled",
        )
        try:
            booking = self.store.create("bookings", record)
        except Conflict:
            existing = self.find_existing(email, scheduled_date, scheduled_time)
            if existing is None:
                raise
            logger.info(f"Booking for {email} at {scheduled_date} {scheduled_time} created concurrently")
            return existing, False

        logger.info(f"Booking created: {booking['id']} ({email}, {scheduled_date} {scheduled_time})")

        self.leads.reconcile(LeadCandidate(
            name=candidate.client_name,
            email=email,
            phone=candidate.client_phone,
            status="scheduled",
            source=f"booking:{candidate.booking_page_id or 'direct'}",
        ))
        return booking, True

    def list_bookings(self, scheduled_date: Optional[str] = None,
                      booking_page_id: Optional[str] = None) -> List[dict]:
        """Bookings in appointment order"""
        criteria = {}
        if scheduled_date:
            criteria["scheduled_date"] = scheduled_date
        if booking_page_id:
            criteria["booking_page_id"] = booking_page_id
        return self.store.filter("bookings", **criteria) if criteria else self.store.get("bookings")

    def upcoming(self) -> List[dict]:
        """Scheduled bookings from today on"""
        today = datetime.now().strftime("%Y-%m-%d")
        return [
            b for b in self.store.filter("bookings", status="scheduled")
            if b["scheduled_date"] >= today
        ]

    def get_booking(self, booking_id: str) -> dict:
        return self.store.require("bookings", booking_id)

    def update_booking(self, booking_id: str, patch: dict) -> dict:
        if patch.get("scheduled_date"):
            parse_date(patch["scheduled_date"])
        booking = self.store.update("bookings", booking_id, patch)
        logger.info(f"Booking updated: {booking_id} ({booking['status']})")
        return booking

    def delete_booking(self, booking_id: str) -> None:
        self.store.delete("bookings", booking_id)
        logger.info(f"Booking deleted: {booking_id}")
