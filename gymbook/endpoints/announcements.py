import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from gymbook.auth.permissions import ensure_gym_admin, require_session_owner, require_announcement_owner
from gymbook.dependencies import get_db
from gymbook.errors.base import NotFoundError
from gymbook.schemas.announcement import AnnouncementCreate, AnnouncementUpdate, AnnouncementResponse
from gymbook.schemas.common import ApiResponse
from gymbook.services.announcement import AnnouncementService
from gymbook.services.training_session import TrainingSessionService
from gymbook.utils.responses import success_response

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/announcements", tags=["Announcements"])


@router.get("", response_model=ApiResponse[List[AnnouncementResponse]])
def get_announcements(
    session_id: Optional[int] = Query(None, alias="sessionId"),
    db: Session = Depends(get_db),
):
    announcements = AnnouncementService(db).get_announcements(session_id=session_id)
    return success_response(
        [AnnouncementResponse.model_validate(a) for a in announcements],
        "Announcements retrieved successfully",
    )


@router.get("/{announcement_id}", response_model=ApiResponse[AnnouncementResponse])
def get_announcement(announcement_id: int, db: Session = Depends(get_db)):
    try:
        announcement = AnnouncementService(db).get_announcement(announcement_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)
    return success_response(AnnouncementResponse.model_validate(announcement), "Announcement retrieved successfully")


@router.post("", response_model=ApiResponse[AnnouncementResponse], status_code=201)
def create_announcement(
    data: AnnouncementCreate,
    current_user=Depends(ensure_gym_admin),
    db: Session = Depends(get_db),
):
    try:
        TrainingSessionService(db).get_session(data.session_id)
        require_session_owner(db, current_user["id"], data.session_id)
        announcement = AnnouncementService(db).create_announcement(data)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)
    return success_response(AnnouncementResponse.model_validate(announcement), "Announcement created successfully")


@router.put("/{announcement_id}", response_model=ApiResponse[AnnouncementResponse])
def update_announcement(
    announcement_id: int,
    data: AnnouncementUpdate,
    current_user=Depends(ensure_gym_admin),
    db: Session = Depends(get_db),
):
    service = AnnouncementService(db)
    try:
        service.get_announcement(announcement_id)
        require_announcement_owner(db, current_user["id"], announcement_id)
        announcement = service.update_announcement(announcement_id, data)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)
    return success_response(AnnouncementResponse.model_validate(announcement), "Announcement updated successfully")


@router.delete("/{announcement_id}", response_model=ApiResponse[None])
def delete_announcement(
    announcement_id: int,
    current_user=Depends(ensure_gym_admin),
    db: Session = Depends(get_db),
):
    service = AnnouncementService(db)
    try:
        service.get_announcement(announcement_id)
        require_announcement_owner(db, current_user["id"], announcement_id)
        service.delete_announcement(announcement_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)
    return success_response(None, "Announcement deleted successfully")
