"""
Admin API for bookings
"""
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response

from ..schemas import BookingCandidate, BookingOut, BookingUpdate
from ..services.bookings import BookingService
from ..storage import Store, get_store

router = APIRouter(prefix="/api/bookings", tags=["bookings"])


def get_booking_service(store: Store = Depends(get_store)) -> BookingService:
    return BookingService(store)


@router.get("", response_model=List[BookingOut])
async def list_bookings(
    date: Optional[str] = Query(None, pattern=r"^\d{4}-\d{2}-\d{2}$"),
    booking_page_id: Optional[str] = None,
    service: BookingService = Depends(get_booking_service)
):
    """Bookings by appointment date and time"""
    return service.list_bookings(scheduled_date=date, booking_page_id=booking_page_id)


@router.post("", response_model=BookingOut, status_code=201)
async def create_booking(
    candidate: BookingCandidate,
    response: Response,
    service: BookingService = Depends(get_booking_service)
):
    """
    Create a booking; a repeat for the same email and slot returns
    the existing booking with 200
    """
    booking, created = service.create_booking(candidate)
    if not created:
        response.status_code = 200
    return booking


@router.get("/{booking_id}", response_model=BookingOut)
async def get_booking(booking_id: str, service: BookingService = Depends(get_booking_service)):
    return service.get_booking(booking_id)


@router.put("/{booking_id}", response_model=BookingOut)
async def update_booking(
    booking_id: str,
    data: BookingUpdate,
    service: BookingService = Depends(get_booking_service)
):
    """Status, notes or reschedule"""
    return service.update_booking(booking_id, data.model_dump(exclude_unset=True))


@router.delete("/{booking_id}")
async def delete_booking(booking_id: str, service: BookingService = Depends(get_booking_service)):
    service.delete_booking(booking_id)
    return {"success": True}
