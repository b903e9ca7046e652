"""
Booking page model
"""
from sqlalchemy import Column, Integer, String, Text, JSON, TIMESTAMP
from ..database import Base


class BookingPage(Base):
    """Public scheduling page published at /book/<slug>"""

    __tablename__ = "booking_pages"

    id = Column(String(36), primary_key=True)
    name = Column(String(200), nullable=False)
    slug = Column(String(250), unique=True, nullable=False, index=True)
    description = Column(Text, nullable=True)
    duration = Column(Integer, nullable=False, default=30)  # minutes
    availability = Column(JSON, nullable=False)  # {days: [...], startTime: "09:00", endTime: "17:00"}
    settings = Column(JSON, nullable=True)  # {bufferTime, collectPhone, confirmationMessage}
    status = Column(String(20), nullable=False, default="active")
    created_at = Column(TIMESTAMP, nullable=False)
    updated_at = Column(TIMESTAMP, nullable=False)

    def __repr__(self):
        return f"<BookingPage {self.name} ({self.duration} min)>"
