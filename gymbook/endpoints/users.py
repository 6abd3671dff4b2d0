import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from gymbook.auth.permissions import get_current_user, authorize_self
from gymbook.dependencies import get_db
from gymbook.errors.base import NotFoundError, ConflictError, AuthenticationError
from gymbook.models.user import UserRole
from gymbook.schemas.common import ApiResponse
from gymbook.schemas.training_session import TrainingSessionResponse
from gymbook.schemas.user import (
    UserRegister,
    LoginRequest,
    UserUpdate,
    UserResponse,
    UserPublicResponse,
    UserProfileResponse,
    TokenResponse,
    BookSessionRequest,
)
from gymbook.services.booking import BookingService
from gymbook.services.user import UserService
from gymbook.utils.responses import success_response

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/users", tags=["Users"])


# Регистрация пользователя
@router.post("/register", response_model=ApiResponse[TokenResponse], status_code=201)
def register_user(data: UserRegister, db: Session = Depends(get_db)):
    service = UserService(db)
    try:
        payload = service.register(data)
    except ConflictError as e:
        raise HTTPException(status_code=400, detail=e.message)
    return success_response(TokenResponse(**payload), "User registered successfully")


@router.post("/login", response_model=ApiResponse[TokenResponse])
def login_user(data: LoginRequest, db: Session = Depends(get_db)):
    service = UserService(db)
    try:
        payload = service.login(data.email, data.password)
    except AuthenticationError as e:
        raise HTTPException(status_code=401, detail=e.message)
    return success_response(TokenResponse(**payload), "User logged in successfully")


@router.get("/search", response_model=ApiResponse[List[UserPublicResponse]])
def search_users(
    username: str = Query(..., min_length=1),
    current_user=Depends(get_current_user()),
    db: Session = Depends(get_db),
):
    users = UserService(db).search_users(username)
    return success_response([UserPublicResponse.model_validate(u) for u in users], "Users retrieved successfully")


@router.get("/{user_id}", response_model=ApiResponse[UserProfileResponse])
def get_user_profile(
    user_id: int,
    current_user=Depends(get_current_user()),
    db: Session = Depends(get_db),
):
    """
    Полный профиль - только владельцу, остальным {id, username}.
    """
    try:
        user = UserService(db).get_user(user_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)

    if current_user["role"] == UserRole.USER.value and current_user["id"] == user_id:
        return success_response(UserResponse.model_validate(user), "User profile retrieved successfully")
    return success_response(UserPublicResponse.model_validate(user), "User profile retrieved successfully")


@router.put("/{user_id}", response_model=ApiResponse[UserResponse])
def update_user_profile(
    user_id: int,
    data: UserUpdate,
    current_user=Depends(authorize_self),
    db: Session = Depends(get_db),
):
    try:
        user = UserService(db).update_user(user_id, data)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)
    except ConflictError as e:
        raise HTTPException(status_code=400, detail=e.message)
    return success_response(UserResponse.model_validate(user), "User profile updated successfully")


@router.delete("/{user_id}", response_model=ApiResponse[None])
def delete_user(
    user_id: int,
    current_user=Depends(authorize_self),
    db: Session = Depends(get_db),
):
    try:
        UserService(db).delete_user(user_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)
    return success_response(None, "User deleted successfully")


# =============================================================================
# БРОНИРОВАНИЯ
# =============================================================================

@router.post("/{user_id}/sessions", response_model=ApiResponse[TrainingSessionResponse])
def book_user_into_session(
    user_id: int,
    data: BookSessionRequest,
    current_user=Depends(authorize_self),
    db: Session = Depends(get_db),
):
    service = BookingService(db)
    try:
        training_session = service.book_session(user_id, data.session_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)
    except ConflictError as e:
        raise HTTPException(status_code=400, detail=e.message)
    return success_response(TrainingSessionResponse.model_validate(training_session), "Session booked successfully")


@router.delete("/{user_id}/sessions/{session_id}", response_model=ApiResponse[None])
def unbook_user_from_session(
    user_id: int,
    session_id: int,
    current_user=Depends(authorize_self),
    db: Session = Depends(get_db),
):
    service = BookingService(db)
    try:
        service.unbook_session(user_id, session_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)
    return success_response(None, "Session unbooked successfully")


@router.get("/{user_id}/sessions", response_model=ApiResponse[List[TrainingSessionResponse]])
def get_user_booked_sessions(
    user_id: int,
    current_user=Depends(authorize_self),
    db: Session = Depends(get_db),
):
    service = BookingService(db)
    try:
        sessions = service.get_booked_sessions(user_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)
    return success_response(
        [TrainingSessionResponse.model_validate(s) for s in sessions],
        "Booked sessions retrieved successfully",
    )
