"""
Append-only submission logs for forms and quizzes
"""
from sqlalchemy import Column, String, JSON, TIMESTAMP
from ..database import Base


class FormSubmission(Base):
    """Raw form payload"""

    __tablename__ = "form_submissions"

    id = Column(String(36), primary_key=True)
    form_id = Column(String(36), nullable=False, index=True)
    data = Column(JSON, nullable=False)
    created_at = Column(TIMESTAMP, nullable=False)

    def __repr__(self):
        return f"<FormSubmission {self.id} form={self.form_id}>"


class QuizResponse(Base):
    """Quiz answers with the computed result"""

    __tablename__ = "quiz_responses"

    id = Column(String(36), primary_key=True)
    quiz_id = Column(String(36), nullable=True, index=True)
    answers = Column(JSON, nullable=False)
    result = Column(JSON, nullable=True)
    created_at = Column(TIMESTAMP, nullable=False)

    def __repr__(self):
        return f"<QuizResponse {self.id} quiz={self.quiz_id}>"
