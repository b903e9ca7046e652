"""
Forms, quizzes and booking pages built in the admin, plus their submissions
"""
import logging
from copy import deepcopy
from typing import List, Optional, Tuple

from ..errors import NotFound, ValidationError
from ..schemas import LeadCandidate, QuizSubmission
from ..storage import Store
from . import quiz as assessment
from .ids import new_slug
from .leads import LeadService
from .schedule import DEFAULT_AVAILABILITY, DEFAULT_BUFFER_MINUTES, DEFAULT_DURATION_MINUTES

logger = logging.getLogger(__name__)

ASSESSMENT_SOURCE = "protection_assessment"

DEFAULT_FORM_FIELDS = [
    {"id": "name", "type": "text", "label": "Full Name", "required": True},
    {"id": "email", "type": "email", "label": "Email", "required": True},
    {"id": "phone", "type": "tel", "label": "Phone", "required": False},
]
DEFAULT_FORM_SETTINGS = {
    "submitButtonText": "Submit",
    "successMessage": "Thank you for your submission!",
}
DEFAULT_QUIZ_SETTINGS = {
    "collectEmail": True,
    "collectPhone": False,
    "showResults": True,
}
DEFAULT_BOOKING_SETTINGS = {
    "bufferTime": DEFAULT_BUFFER_MINUTES,
    "collectPhone": True,
    "confirmationMessage": "Your booking has been confirmed!",
}


def _contact_value(data: dict, key: str) -> Optional[str]:
    """Contact field of a form payload as text; numbers and booleans are stringified"""
    value = data.get(key)
    if value is None or isinstance(value, str):
        return value
    if isinstance(value, (int, float, bool)):
        return str(value)
    raise ValidationError(f"{key} must be text", field=key)


class _PageService:
    """CRUD shared by forms, quizzes and booking pages"""

    collection = ""
    default_name = ""
    slug_fallback = ""

    def __init__(self, store: Store, leads: Optional[LeadService] = None):
        self.store = store
        self.leads = leads or LeadService(store)

    def list(self) -> List[dict]:
        return self.store.get(self.collection)

    def get(self, record_id: str) -> dict:
        return self.store.require(self.collection, record_id)

    def get_by_slug(self, slug: str, active_only: bool = True) -> dict:
        """Public lookup; inactive pages are hidden"""
        record = self.store.find_by_field(self.collection, "slug", slug)
        if record is None or (active_only and record.get("status") != "active"):
            raise NotFound(self.collection, slug)
        return record

    def _new_record(self, data: dict) -> dict:
        name = (data.get("name") or "").strip() or self.default_name
        return {
            "name": name,
            "slug": new_slug(data.get("name") or self.slug_fallback),
            "description": data.get("description") or "",
            "status": "active",
        }

    def create(self, data: dict) -> dict:
        record = self.store.create(self.collection, {**data, **self._new_record(data)})
        logger.info(f"{self.collection}: created {record['id']} /{record['slug']}")
        return record

    def update(self, record_id: str, patch: dict) -> dict:
        if "name" in patch and not (patch["name"] or "").strip():
            raise ValidationError("Name cannot be empty", field="name")
        return self.store.update(self.collection, record_id, patch)

    def delete(self, record_id: str) -> None:
        self.store.delete(self.collection, record_id)
        logger.info(f"{self.collection}: deleted {record_id}")


class FormService(_PageService):
    collection = "forms"
    default_name = "Untitled Form"
    slug_fallback = "form"

    def create(self, data: dict) -> dict:
        return super().create({
            **data,
            "fields": data.get("fields") or deepcopy(DEFAULT_FORM_FIELDS),
            "settings": data.get("settings") or deepcopy(DEFAULT_FORM_SETTINGS),
        })

    def submit(self, form_id: str, data: dict) -> Tuple[dict, dict]:
        """
        Log a submission and reconcile its lead (source form:<id>)

        Returns:
            (submission, lead)
        """
        form = self.get(form_id)
        if form.get("status") != "active":
            raise NotFound(self.collection, form_id)

        for field in form.get("fields") or []:
            value = data.get(field["id"])
            if field.get("required") and (value is None or str(value).strip() == ""):
                raise ValidationError(f"{field.get('label') or field['id']} is required", field=field["id"])

        candidate = LeadCandidate(
            name=_contact_value(data, "name"),
            email=_contact_value(data, "email"),
            phone=_contact_value(data, "phone"),
            source=f"form:{form_id}",
            form_data=data,
        )

        submission = self.store.create("form_submissions", {"form_id": form_id, "data": data})
        lead = self.leads.reconcile(candidate)
        return submission, lead

    def submissions(self, form_id: str) -> List[dict]:
        self.get(form_id)
        return self.store.filter("form_submissions", form_id=form_id)


class QuizService(_PageService):
    collection = "quizzes"
    default_name = "Untitled Quiz"
    slug_fallback = "quiz"

    def create(self, data: dict) -> dict:
        return super().create({
            **data,
            "questions": data.get("questions") or [],
            "results": data.get("results") or [],
            "settings": data.get("settings") or deepcopy(DEFAULT_QUIZ_SETTINGS),
        })

    def _record_response(self, quiz_id: Optional[str], submission: QuizSubmission,
                         source: str) -> Tuple[dict, Optional[dict]]:
        result = assessment.score(submission.answers)
        response = self.store.create("quiz_responses", {
            "quiz_id": quiz_id,
            "answers": submission.answers,
            "result": result,
        })

        lead = None
        if (submission.email or "").strip():
            lead = self.leads.reconcile(LeadCandidate(
                name=submission.name,
                email=submission.email,
                phone=submission.phone,
                source=source,
                quiz_answers=submission.answers,
                pillar_scores=result["pillar_scores"],
                protection_state=result["protection_state"],
            ))
        return response, lead

    def submit(self, quiz_id: str, submission: QuizSubmission) -> Tuple[dict, Optional[dict]]:
        """
        Score and log a quiz response; a lead is reconciled only when an email is given

        Returns:
            (response, lead or None)
        """
        quiz = self.get(quiz_id)
        if quiz.get("status") != "active":
            raise NotFound(self.collection, quiz_id)
        return self._record_response(quiz_id, submission, f"quiz:{quiz_id}")

    def submit_assessment(self, submission: QuizSubmission) -> Tuple[dict, Optional[dict]]:
        """Standalone protection assessment, not tied to a quiz record"""
        return self._record_response(None, submission, ASSESSMENT_SOURCE)

    def responses(self, quiz_id: Optional[str] = None) -> List[dict]:
        if quiz_id:
            return self.store.filter("quiz_responses", quiz_id=quiz_id)
        return self.store.get("quiz_responses")


class BookingPageService(_PageService):
    collection = "booking_pages"
    default_name = "Untitled Booking Page"
    slug_fallback = "booking"

    def create(self, data: dict) -> dict:
        return super().create({
            **data,
            "duration": data.get("duration") or DEFAULT_DURATION_MINUTES,
            "availability": data.get("availability") or deepcopy(DEFAULT_AVAILABILITY),
            "settings": data.get("settings") or deepcopy(DEFAULT_BOOKING_SETTINGS),
        })
