"""
Booking page availability and time slots
"""
from datetime import date, time, datetime, timedelta
from typing import List, Optional

from ..errors import ValidationError
from ..storage import Store

WEEKDAYS = ["monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday"]

DEFAULT_AVAILABILITY = {
    "days": ["monday", "tuesday", "wednesday", "thursday", "friday"],
    "startTime": "09:00",
    "endTime": "17:00",
}
DEFAULT_DURATION_MINUTES = 30
DEFAULT_BUFFER_MINUTES = 15


def parse_time(value: str) -> time:
    try:
        return datetime.strptime(value, "%H:%M").time()
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid time {value!r}, use HH:MM", field="availability")


class ScheduleService:
    """Slot calculation for a booking page"""

    def __init__(self, store: Store):
        self.store = store

    def get_working_hours(self, page: dict, target_date: date) -> Optional[dict]:
        """
        Availability window of a booking page on a date
        Returns dict with start_time, end_time or None on a day off
        """
        availability = page.get("availability") or DEFAULT_AVAILABILITY
        if WEEKDAYS[target_date.weekday()] not in availability.get("days", []):
            return None

        start = parse_time(availability.get("startTime", DEFAULT_AVAILABILITY["startTime"]))
        end = parse_time(availability.get("endTime", DEFAULT_AVAILABILITY["endTime"]))
        if start >= end:
            return None
        return {"start_time": start, "end_time": end}

    @staticmethod
    def generate_time_slots(start: time, end: time, duration_minutes: int, step_minutes: int) -> List[time]:
        """
        Every start time between start and end where a meeting of
        duration_minutes still ends inside the window
        """
        slots = []
        current = datetime.combine(date.today(), start)
        end_dt = datetime.combine(date.today(), end)

        while current + timedelta(minutes=duration_minutes) <= end_dt:
            slots.append(current.time())
            current += timedelta(minutes=step_minutes)

        return slots

    def get_booked_times(self, page: dict, date_str: str) -> set:
        bookings = self.store.filter(
            "bookings",
            booking_page_id=page["id"],
            scheduled_date=date_str,
            status="scheduled"
        )
        return {b["scheduled_time"] for b in bookings}

    def get_slots(self, page: dict, target_date: date) -> List[dict]:
        """
        Slots of a booking page on a date, each flagged available or taken
        Consecutive slots are duration + bufferTime apart
        """
        if target_date < date.today():
            raise ValidationError("Cannot book a date in the past", field="date")

        working = self.get_working_hours(page, target_date)
        if not working:
            return []

        duration = page.get("duration") or DEFAULT_DURATION_MINUTES
        settings = page.get("settings") or {}
        buffer_minutes = settings.get("bufferTime", DEFAULT_BUFFER_MINUTES) or 0

        slots = self.generate_time_slots(
            working["start_time"],
            working["end_time"],
            duration,
            duration + buffer_minutes
        )
        booked = self.get_booked_times(page, target_date.strftime("%Y-%m-%d"))

        return [
            {"time": slot.strftime("%H:%M"), "available": slot.strftime("%H:%M") not in booked}
            for slot in slots
        ]
