"""
Quiz model
"""
from sqlalchemy import Column, String, Text, JSON, TIMESTAMP
from ..database import Base


class Quiz(Base):
    """Quiz published at /quiz/<slug>"""

    __tablename__ = "quizzes"

    id = Column(String(36), primary_key=True)
    name = Column(String(200), nullable=False)
    slug = Column(String(250), unique=True, nullable=False, index=True)
    description = Column(Text, nullable=True)
    questions = Column(JSON, nullable=False)
    results = Column(JSON, nullable=True)
    settings = Column(JSON, nullable=True)
    status = Column(String(20), nullable=False, default="active")
    created_at = Column(TIMESTAMP, nullable=False)
    updated_at = Column(TIMESTAMP, nullable=False)

    def __repr__(self):
        return f"<Quiz {self.name} /{self.slug}>"
