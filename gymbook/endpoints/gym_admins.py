import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from gymbook.auth.permissions import get_current_user, ensure_gym_admin
from gymbook.dependencies import get_db
from gymbook.errors.base import NotFoundError, ConflictError, AuthenticationError, PermissionDenied
from gymbook.schemas.common import ApiResponse
from gymbook.schemas.gym_admin import GymAdminRegister, GymAdminResponse, AddGymRequest
from gymbook.schemas.user import LoginRequest, TokenResponse
from gymbook.services.gym_admin import GymAdminService
from gymbook.utils.responses import success_response

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/gym-admins", tags=["Gym admins"])


@router.post("", response_model=ApiResponse[GymAdminResponse], status_code=201)
def create_gym_admin(data: GymAdminRegister, db: Session = Depends(get_db)):
    try:
        admin = GymAdminService(db).register(data)
    except ConflictError as e:
        raise HTTPException(status_code=400, detail=e.message)
    return success_response(GymAdminResponse.model_validate(admin), "Gym admin created successfully")


@router.post("/login", response_model=ApiResponse[TokenResponse])
def login_gym_admin(data: LoginRequest, db: Session = Depends(get_db)):
    try:
        payload = GymAdminService(db).login(data.email, data.password)
    except AuthenticationError as e:
        raise HTTPException(status_code=401, detail=e.message)
    return success_response(TokenResponse(**payload), "Gym admin logged in successfully")


@router.get("/{admin_id}", response_model=ApiResponse[GymAdminResponse])
def get_gym_admin(
    admin_id: int,
    current_user=Depends(get_current_user()),
    db: Session = Depends(get_db),
):
    try:
        admin = GymAdminService(db).get_admin(admin_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)
    return success_response(GymAdminResponse.model_validate(admin), "Gym admin retrieved successfully")


@router.post("/{admin_id}/gyms", response_model=ApiResponse[GymAdminResponse])
def add_gym_to_admin(
    admin_id: int,
    data: AddGymRequest,
    current_user=Depends(ensure_gym_admin),
    db: Session = Depends(get_db),
):
    """
    Привязка существующего зала к себе.
    """
    if current_user["id"] != admin_id:
        raise HTTPException(status_code=403, detail="Forbidden: you can only manage your own gyms")
    try:
        admin = GymAdminService(db).add_gym(admin_id, data.gym_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)
    except PermissionDenied as e:
        raise HTTPException(status_code=403, detail=e.message)
    return success_response(GymAdminResponse.model_validate(admin), "Gym added to admin successfully")
