"""
Admin API for forms and their submissions
"""
from typing import List

from fastapi import APIRouter, Depends

from ..schemas import FormCreate, FormOut, FormSubmissionOut, FormUpdate
from ..services.catalog import FormService
from ..storage import Store, get_store

router = APIRouter(prefix="/api/forms", tags=["forms"])


def get_form_service(store: Store = Depends(get_store)) -> FormService:
    return FormService(store)


@router.get("", response_model=List[FormOut])
async def list_forms(service: FormService = Depends(get_form_service)):
    return service.list()


@router.post("", response_model=FormOut, status_code=201)
async def create_form(data: FormCreate, service: FormService = Depends(get_form_service)):
    """New form; missing fields and settings get the defaults"""
    return service.create(data.model_dump(exclude_none=True))


@router.get("/{form_id}", response_model=FormOut)
async def get_form(form_id: str, service: FormService = Depends(get_form_service)):
    return service.get(form_id)


@router.put("/{form_id}", response_model=FormOut)
async def update_form(form_id: str, data: FormUpdate, service: FormService = Depends(get_form_service)):
    return service.update(form_id, data.model_dump(exclude_unset=True))


@router.delete("/{form_id}")
async def delete_form(form_id: str, service: FormService = Depends(get_form_service)):
    service.delete(form_id)
    return {"success": True}


@router.get("/{form_id}/submissions", response_model=List[FormSubmissionOut])
async def list_submissions(form_id: str, service: FormService = Depends(get_form_service)):
    return service.submissions(form_id)
