"""
SQLAlchemy models
"""
from .lead import Lead
from .form import Form
from .quiz import Quiz
from .booking_page import BookingPage
from .booking import Booking
from .submission import FormSubmission, QuizResponse

__all__ = [
    "Lead",
    "Form",
    "Quiz",
    "BookingPage",
    "Booking",
    "FormSubmission",
    "QuizResponse"
]
