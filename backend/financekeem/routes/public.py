"""
Public pages: quizzes, forms and booking pages by slug, plus the protection assessment
"""
from typing import Any, Dict, List

from fastapi import APIRouter, Depends, Query, Response

from ..schemas import BookingCandidate, BookingOut, TimeSlot, QuizSubmission
from ..services import quiz as assessment
from ..services.bookings import BookingService, parse_date
from ..services.catalog import BookingPageService, FormService, QuizService
from ..services.notifications import notify_assessment, notify_form_submission, notify_new_booking
from ..services.schedule import ScheduleService
from ..storage import Store, get_store

router = APIRouter(tags=["public"])


def _public_page(record: dict) -> dict:
    """Strip admin-only fields"""
    return {key: value for key, value in record.items() if key not in ("created_at", "updated_at", "status")}


# ==================== Assessment ====================

@router.get("/api/assessment/questions")
async def get_assessment_questions():
    """The 12 assessment questions without option weights"""
    return {
        "pillars": list(assessment.PILLARS),
        "questions": assessment.public_questions(),
    }


@router.post("/api/assessment")
async def submit_assessment(submission: QuizSubmission, store: Store = Depends(get_store)):
    """Score the assessment; contact details, when given, land in leads"""
    response, lead = QuizService(store).submit_assessment(submission)
    if lead:
        await notify_assessment(lead)
    return {"success": True, "response_id": response["id"], "result": response["result"]}


# ==================== Quizzes ====================

@router.get("/quiz/{slug}")
async def get_public_quiz(slug: str, store: Store = Depends(get_store)):
    return _public_page(QuizService(store).get_by_slug(slug))


@router.post("/quiz/{slug}")
async def submit_quiz(slug: str, submission: QuizSubmission, store: Store = Depends(get_store)):
    service = QuizService(store)
    quiz = service.get_by_slug(slug)
    response, lead = service.submit(quiz["id"], submission)
    if lead:
        await notify_assessment(lead, quiz["name"])
    return {
        "success": True,
        "response_id": response["id"],
        "result": response["result"] if (quiz.get("settings") or {}).get("showResults", True) else None,
    }


# ==================== Forms ====================

@router.get("/form/{slug}")
async def get_public_form(slug: str, store: Store = Depends(get_store)):
    return _public_page(FormService(store).get_by_slug(slug))


@router.post("/form/{slug}")
async def submit_form(slug: str, data: Dict[str, Any], store: Store = Depends(get_store)):
    service = FormService(store)
    form = service.get_by_slug(slug)
    submission, lead = service.submit(form["id"], data)
    await notify_form_submission(form, lead)
    return {
        "success": True,
        "submission_id": submission["id"],
        "message": (form.get("settings") or {}).get("successMessage"),
    }


# ==================== Booking pages ====================

@router.get("/book/{slug}")
async def get_public_booking_page(slug: str, store: Store = Depends(get_store)):
    return _public_page(BookingPageService(store).get_by_slug(slug))


@router.get("/book/{slug}/slots", response_model=List[TimeSlot])
async def get_slots(
    slug: str,
    date: str = Query(..., description="YYYY-MM-DD"),
    store: Store = Depends(get_store)
):
    """Start times of a booking page on a date, taken ones flagged unavailable"""
    page = BookingPageService(store).get_by_slug(slug)
    return ScheduleService(store).get_slots(page, parse_date(date))


@router.post("/book/{slug}")
async def book(slug: str, candidate: BookingCandidate, response: Response, store: Store = Depends(get_store)):
    """
    Book a meeting on a booking page

    Submitting the same email, date and time again returns the original
    booking with created=False and sends no second notification.
    """
    page = BookingPageService(store).get_by_slug(slug)
    candidate = candidate.model_copy(update={
        "booking_page_id": page["id"],
        "booking_type": candidate.booking_type or page["name"],
    })

    booking, created = BookingService(store).create_booking(candidate)
    if created:
        response.status_code = 201
        await notify_new_booking(booking, page["name"])

    return {
        "success": True,
        "created": created,
        "booking": BookingOut(**booking),
        "message": (page.get("settings") or {}).get("confirmationMessage"),
    }
