"""
Admin API for booking pages
"""
from typing import List

from fastapi import APIRouter, Depends

from ..schemas import BookingPageCreate, BookingPageOut, BookingPageUpdate
from ..services.catalog import BookingPageService
from ..storage import Store, get_store

router = APIRouter(prefix="/api/booking-pages", tags=["booking-pages"])


def get_page_service(store: Store = Depends(get_store)) -> BookingPageService:
    return BookingPageService(store)


@router.get("", response_model=List[BookingPageOut])
async def list_booking_pages(service: BookingPageService = Depends(get_page_service)):
    return service.list()


@router.post("", response_model=BookingPageOut, status_code=201)
async def create_booking_page(data: BookingPageCreate, service: BookingPageService = Depends(get_page_service)):
    """New booking page; weekdays 09:00-17:00, 30 minutes, 15 minute buffer unless given"""
    return service.create(data.model_dump(exclude_none=True))


@router.get("/{page_id}", response_model=BookingPageOut)
async def get_booking_page(page_id: str, service: BookingPageService = Depends(get_page_service)):
    return service.get(page_id)


@router.put("/{page_id}", response_model=BookingPageOut)
async def update_booking_page(
    page_id: str,
    data: BookingPageUpdate,
    service: BookingPageService = Depends(get_page_service)
):
    return service.update(page_id, data.model_dump(exclude_unset=True))


@router.delete("/{page_id}")
async def delete_booking_page(page_id: str, service: BookingPageService = Depends(get_page_service)):
    service.delete(page_id)
    return {"success": True}
