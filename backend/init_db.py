"""
Storage initialization script
Creates tables (SQL backend) and seeds the assessment quiz and the default booking page
"""
import logging

from financekeem.services.catalog import BookingPageService, QuizService
from financekeem.services.quiz import public_questions
from financekeem.storage import get_store

logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
logger = logging.getLogger("init_db")

ASSESSMENT_QUIZ = {
    "name": "Protection & Alignment Assessment",
    "description": "12 questions across protection, alignment and oversight.",
    "settings": {"collectEmail": True, "collectPhone": True, "showResults": True},
}

DEFAULT_BOOKING_PAGE = {
    "name": "Protection Clarity Conversation",
    "description": "A 30 minute conversation to review your protection structure.",
    "duration": 30,
}


def seed(store=None):
    """Add the default quiz and booking page unless a record with the same name exists"""
    store = store or get_store()

    quizzes = QuizService(store)
    if any(q["name"] == ASSESSMENT_QUIZ["name"] for q in quizzes.list()):
        logger.info("Assessment quiz already exists, skipping")
    else:
        quiz = quizzes.create({**ASSESSMENT_QUIZ, "questions": public_questions()})
        logger.info(f"Assessment quiz created: /quiz/{quiz['slug']}")

    pages = BookingPageService(store)
    if any(p["name"] == DEFAULT_BOOKING_PAGE["name"] for p in pages.list()):
        logger.info("Booking page already exists, skipping")
    else:
        page = pages.create(DEFAULT_BOOKING_PAGE)
        logger.info(f"Booking page created: /book/{page['slug']}")


if __name__ == "__main__":
    seed()
    print("\nInitialization complete!")
    print("Start the server: uvicorn financekeem.main:app --reload --app-dir backend")
