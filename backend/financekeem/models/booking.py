"""
Booking model
"""
from sqlalchemy import Column, String, Text, TIMESTAMP, UniqueConstraint
from ..database import Base


class Booking(Base):
    """Scheduled call with a client"""

    __tablename__ = "bookings"
    __table_args__ = (
        UniqueConstraint("client_email", "scheduled_date", "scheduled_time", name="uq_booking_slot_per_email"),
    )

    id = Column(String(36), primary_key=True)
    client_name = Column(String(200), nullable=False)
    client_email = Column(String(255), nullable=False, index=True)
    client_phone = Column(String(50), nullable=True)
    scheduled_date = Column(String(10), nullable=False, index=True)  # YYYY-MM-DD
    scheduled_time = Column(String(20), nullable=False)  # as shown on the booking page
    booking_page_id = Column(String(36), nullable=True, index=True)
    booking_type = Column(String(200), nullable=True)
    status = Column(String(20), nullable=False, default="scheduled")  # scheduled, completed, cancelled
    notes = Column(Text, nullable=True)
    created_at = Column(TIMESTAMP, nullable=False)

    def __repr__(self):
        return f"<Booking {self.scheduled_date} {self.scheduled_time} {self.client_email} ({self.status})>"
