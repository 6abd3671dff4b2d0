import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from gymbook.auth.permissions import ensure_gym_admin, require_gym_owner, require_session_owner
from gymbook.dependencies import get_db
from gymbook.errors.base import NotFoundError, ConflictError
from gymbook.schemas.common import ApiResponse
from gymbook.schemas.training_session import (
    TrainingSessionCreate,
    TrainingSessionUpdate,
    TrainingSessionResponse,
)
from gymbook.services.gym import GymService
from gymbook.services.training_session import TrainingSessionService
from gymbook.utils.responses import success_response

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/sessions", tags=["Sessions"])


@router.get("", response_model=ApiResponse[List[TrainingSessionResponse]])
def get_all_sessions(gym_id: Optional[int] = Query(None, alias="gymId"), db: Session = Depends(get_db)):
    sessions = TrainingSessionService(db).get_sessions(gym_id=gym_id)
    return success_response(
        [TrainingSessionResponse.model_validate(s) for s in sessions],
        "Session retrieved successfully.",
    )


@router.get("/search", response_model=ApiResponse[List[TrainingSessionResponse]])
def search_sessions(keyword: Optional[str] = None, db: Session = Depends(get_db)):
    sessions = TrainingSessionService(db).search_sessions(keyword)
    return success_response(
        [TrainingSessionResponse.model_validate(s) for s in sessions],
        "Session retrieved successfully.",
    )


@router.get("/{session_id}", response_model=ApiResponse[TrainingSessionResponse])
def get_session(session_id: int, db: Session = Depends(get_db)):
    try:
        training_session = TrainingSessionService(db).get_session(session_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)
    return success_response(TrainingSessionResponse.model_validate(training_session), "Session retrieved successfully.")


@router.post("", response_model=ApiResponse[TrainingSessionResponse], status_code=201)
def create_session(
    data: TrainingSessionCreate,
    current_user=Depends(ensure_gym_admin),
    db: Session = Depends(get_db),
):
    """
    Создание занятия в зале, которым управляет администратор.
    """
    try:
        GymService(db).get_gym(data.gym_id)
        require_gym_owner(db, current_user["id"], data.gym_id)
        training_session = TrainingSessionService(db).create_session(data)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)
    return success_response(
        TrainingSessionResponse.model_validate(training_session),
        "Session has been successfully created.",
    )


@router.put("/{session_id}", response_model=ApiResponse[TrainingSessionResponse])
def update_session(
    session_id: int,
    data: TrainingSessionUpdate,
    current_user=Depends(ensure_gym_admin),
    db: Session = Depends(get_db),
):
    """
    Обновление занятия. Перенос в другой зал требует прав и на новый зал.
    """
    service = TrainingSessionService(db)
    try:
        service.get_session(session_id)
        require_session_owner(db, current_user["id"], session_id)
        if data.gym_id is not None:
            GymService(db).get_gym(data.gym_id)
            require_gym_owner(db, current_user["id"], data.gym_id)
        training_session = service.update_session(session_id, data)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)
    except ConflictError as e:
        raise HTTPException(status_code=400, detail=e.message)
    return success_response(
        TrainingSessionResponse.model_validate(training_session),
        "Session has been successfully updated.",
    )


@router.delete("/{session_id}", response_model=ApiResponse[None])
def delete_session(
    session_id: int,
    current_user=Depends(ensure_gym_admin),
    db: Session = Depends(get_db),
):
    service = TrainingSessionService(db)
    try:
        service.get_session(session_id)
        require_session_owner(db, current_user["id"], session_id)
        service.delete_session(session_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)
    return success_response(None, "Session has been successfully deleted.")
