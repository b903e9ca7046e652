"""
Admin API for leads
"""
from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from ..schemas import LeadCandidate, LeadOut, LeadStatus, LeadUpdate
from ..services.leads import LeadService
from ..storage import Store, get_store

router = APIRouter(prefix="/api/leads", tags=["leads"])


def get_lead_service(store: Store = Depends(get_store)) -> LeadService:
    return LeadService(store)


@router.get("", response_model=List[LeadOut])
async def list_leads(
    search: Optional[str] = Query(None, description="Name, email or phone fragment"),
    status: Optional[LeadStatus] = None,
    service: LeadService = Depends(get_lead_service)
):
    """Leads, newest first"""
    return service.list_leads(search=search, status=status)


@router.post("", response_model=LeadOut, status_code=201)
async def create_lead(candidate: LeadCandidate, service: LeadService = Depends(get_lead_service)):
    """Manual entry; an existing email is merged instead of duplicated"""
    return service.create_lead(candidate)


@router.get("/{lead_id}", response_model=LeadOut)
async def get_lead(lead_id: str, service: LeadService = Depends(get_lead_service)):
    return service.get_lead(lead_id)


@router.put("/{lead_id}", response_model=LeadOut)
async def update_lead(lead_id: str, data: LeadUpdate, service: LeadService = Depends(get_lead_service)):
    return service.update_lead(lead_id, data.model_dump(exclude_unset=True))


@router.delete("/{lead_id}")
async def delete_lead(lead_id: str, service: LeadService = Depends(get_lead_service)):
    service.delete_lead(lead_id)
    return {"success": True}
