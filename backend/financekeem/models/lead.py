"""
Lead model (prospective client keyed by normalized email)
"""
from sqlalchemy import Column, String, JSON, TIMESTAMP
from ..database import Base


class Lead(Base):
    """Lead captured from a quiz, form, booking or manual entry"""

    __tablename__ = "leads"

    id = Column(String(36), primary_key=True)
    name = Column(String(200), nullable=True)
    # NULL for email-less leads, so they never collide on the unique index
    email = Column(String(255), unique=True, nullable=True, index=True)
    phone = Column(String(50), nullable=True)
    status = Column(String(20), nullable=False, default="new")  # new, contacted, scheduled, completed, cancelled
    source = Column(String(200), nullable=True)  # first-touch attribution, never overwritten
    quiz_answers = Column(JSON, nullable=True)
    pillar_scores = Column(JSON, nullable=True)
    protection_state = Column(String(50), nullable=True)
    form_data = Column(JSON, nullable=True)
    created_at = Column(TIMESTAMP, nullable=False)
    updated_at = Column(TIMESTAMP, nullable=False)

    def __repr__(self):
        return f"<Lead {self.name} <{self.email}> ({self.status})>"
