"""
Admin API for quizzes and quiz responses
"""
from typing import List, Optional

from fastapi import APIRouter, Depends

from ..schemas import QuizCreate, QuizOut, QuizResponseOut, QuizUpdate
from ..services.catalog import QuizService
from ..storage import Store, get_store

router = APIRouter(prefix="/api/quizzes", tags=["quizzes"])


def get_quiz_service(store: Store = Depends(get_store)) -> QuizService:
    return QuizService(store)


@router.get("", response_model=List[QuizOut])
async def list_quizzes(service: QuizService = Depends(get_quiz_service)):
    return service.list()


@router.post("", response_model=QuizOut, status_code=201)
async def create_quiz(data: QuizCreate, service: QuizService = Depends(get_quiz_service)):
    return service.create(data.model_dump(exclude_none=True))


@router.get("/responses", response_model=List[QuizResponseOut])
async def list_all_responses(
    quiz_id: Optional[str] = None,
    service: QuizService = Depends(get_quiz_service)
):
    """All quiz responses, the standalone assessment included"""
    return service.responses(quiz_id)


@router.get("/{quiz_id}", response_model=QuizOut)
async def get_quiz(quiz_id: str, service: QuizService = Depends(get_quiz_service)):
    return service.get(quiz_id)


@router.put("/{quiz_id}", response_model=QuizOut)
async def update_quiz(quiz_id: str, data: QuizUpdate, service: QuizService = Depends(get_quiz_service)):
    return service.update(quiz_id, data.model_dump(exclude_unset=True))


@router.delete("/{quiz_id}")
async def delete_quiz(quiz_id: str, service: QuizService = Depends(get_quiz_service)):
    service.delete(quiz_id)
    return {"success": True}


@router.get("/{quiz_id}/responses", response_model=List[QuizResponseOut])
async def list_responses(quiz_id: str, service: QuizService = Depends(get_quiz_service)):
    service.get(quiz_id)
    return service.responses(quiz_id)
