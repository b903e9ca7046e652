"""
Pydantic schemas shared by the services and the API
"""
from datetime import datetime
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

LeadStatus = Literal["new", "contacted", "scheduled", "completed", "cancelled"]
BookingStatus = Literal["scheduled", "completed", "cancelled"]
PageStatus = Literal["active", "inactive"]
Weekday = Literal["monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday"]

TIME_PATTERN = r"^\d{2}:\d{2}$"  # HH:MM
DATE_PATTERN = r"^\d{4}-\d{2}-\d{2}$"  # YYYY-MM-DD


# ==================== Leads ====================

class LeadCandidate(BaseModel):
    """Contact data arriving from a capture event or manual entry"""
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    status: Optional[LeadStatus] = None
    source: Optional[str] = None
    quiz_answers: Optional[Dict[str, str]] = None
    pillar_scores: Optional[Dict[str, int]] = None
    protection_state: Optional[str] = None
    form_data: Optional[Dict[str, Any]] = None


class LeadUpdate(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    status: Optional[LeadStatus] = None
    quiz_answers: Optional[Dict[str, str]] = None
    pillar_scores: Optional[Dict[str, int]] = None
    protection_state: Optional[str] = None
    form_data: Optional[Dict[str, Any]] = None


class LeadOut(BaseModel):
    id: str
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    status: str
    source: Optional[str] = None
    quiz_answers: Optional[Dict[str, Any]] = None
    pillar_scores: Optional[Dict[str, int]] = None
    protection_state: Optional[str] = None
    form_data: Optional[Dict[str, Any]] = None
    created_at: datetime
    updated_at: datetime


# ==================== Forms ====================

class FormField(BaseModel):
    id: str
    type: str = "text"  # text, email, tel, textarea, select, checkbox
    label: str = ""
    required: bool = False
    options: Optional[List[str]] = None


class FormCreate(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None
    fields: Optional[List[FormField]] = None
    settings: Optional[Dict[str, Any]] = None


class FormUpdate(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None
    fields: Optional[List[FormField]] = None
    settings: Optional[Dict[str, Any]] = None
    status: Optional[PageStatus] = None


class FormOut(BaseModel):
    id: str
    name: str
    slug: str
    description: Optional[str] = None
    fields: List[Dict[str, Any]]
    settings: Optional[Dict[str, Any]] = None
    status: str
    created_at: datetime
    updated_at: datetime


class FormSubmissionOut(BaseModel):
    id: str
    form_id: str
    data: Dict[str, Any]
    created_at: datetime


# ==================== Quizzes ====================

class QuizCreate(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None
    questions: Optional[List[Dict[str, Any]]] = None
    results: Optional[List[Dict[str, Any]]] = None
    settings: Optional[Dict[str, Any]] = None


class QuizUpdate(QuizCreate):
    status: Optional[PageStatus] = None


class QuizOut(BaseModel):
    id: str
    name: str
    slug: str
    description: Optional[str] = None
    questions: List[Dict[str, Any]]
    results: Optional[List[Dict[str, Any]]] = None
    settings: Optional[Dict[str, Any]] = None
    status: str
    created_at: datetime
    updated_at: datetime


class QuizSubmission(BaseModel):
    """Answers plus optional contact details from a quiz taker"""
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    answers: Dict[str, str] = Field(default_factory=dict)


class QuizResponseOut(BaseModel):
    id: str
    quiz_id: Optional[str] = None
    answers: Dict[str, Any]
    result: Optional[Dict[str, Any]] = None
    created_at: datetime


# ==================== Booking pages ====================

class Availability(BaseModel):
    days: List[Weekday] = ["monday", "tuesday", "wednesday", "thursday", "friday"]
    startTime: str = Field("09:00", pattern=TIME_PATTERN)
    endTime: str = Field("17:00", pattern=TIME_PATTERN)


class BookingPageSettings(BaseModel):
    model_config = ConfigDict(extra="allow")

    bufferTime: int = Field(15, ge=0)
    collectPhone: bool = True
    confirmationMessage: str = "Your booking has been confirmed!"


class BookingPageCreate(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None
    duration: Optional[int] = Field(None, gt=0, le=480)
    availability: Optional[Availability] = None
    settings: Optional[BookingPageSettings] = None


class BookingPageUpdate(BookingPageCreate):
    status: Optional[PageStatus] = None


class BookingPageOut(BaseModel):
    id: str
    name: str
    slug: str
    description: Optional[str] = None
    duration: int
    availability: Dict[str, Any]
    settings: Optional[Dict[str, Any]] = None
    status: str
    created_at: datetime
    updated_at: datetime


class TimeSlot(BaseModel):
    time: str  # HH:MM
    available: bool = True


# ==================== Bookings ====================

class BookingCandidate(BaseModel):
    """Booking request; required fields are checked by the booking service"""
    client_name: Optional[str] = None
    client_email: Optional[str] = None
    client_phone: Optional[str] = None
    scheduled_date: Optional[str] = None
    scheduled_time: Optional[str] = None
    booking_page_id: Optional[str] = None
    booking_type: Optional[str] = None
    notes: Optional[str] = None


class BookingUpdate(BaseModel):
    status: Optional[BookingStatus] = None
    notes: Optional[str] = None
    scheduled_date: Optional[str] = Field(None, pattern=DATE_PATTERN)
    scheduled_time: Optional[str] = None


class BookingOut(BaseModel):
    id: str
    client_name: str
    client_email: str
    client_phone: Optional[str] = None
    scheduled_date: str
    scheduled_time: str
    booking_page_id: Optional[str] = None
    booking_type: Optional[str] = None
    status: str
    notes: Optional[str] = None
    created_at: datetime
