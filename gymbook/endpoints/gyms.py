import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from gymbook.auth.permissions import ensure_gym_admin, require_gym_owner
from gymbook.dependencies import get_db
from gymbook.errors.base import NotFoundError
from gymbook.schemas.common import ApiResponse
from gymbook.schemas.gym import GymCreate, GymUpdate, GymResponse, GymFilter
from gymbook.services.gym import GymService
from gymbook.utils.responses import success_response

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/gyms", tags=["Gyms"])


def _gym_list(gyms) -> List[GymResponse]:
    return [GymResponse.model_validate(gym) for gym in gyms]


@router.get("", response_model=ApiResponse[List[GymResponse]])
def get_all_gyms(db: Session = Depends(get_db)):
    return success_response(_gym_list(GymService(db).get_gyms()), "Gyms retrieved successfully")


@router.get("/filter", response_model=ApiResponse[List[GymResponse]])
def filter_gyms(
    session_type: Optional[str] = Query(None, alias="sessionType"),
    latitude: Optional[float] = Query(None, ge=-90, le=90),
    longitude: Optional[float] = Query(None, ge=-180, le=180),
    distance: Optional[float] = Query(None, gt=0, description="Максимальное расстояние в км"),
    db: Session = Depends(get_db),
):
    filters = GymFilter(session_type=session_type, latitude=latitude, longitude=longitude, distance=distance)
    return success_response(_gym_list(GymService(db).filter_gyms(filters)), "Gyms retrieved successfully")


@router.get("/search", response_model=ApiResponse[List[GymResponse]])
def search_gyms(keyword: Optional[str] = None, db: Session = Depends(get_db)):
    return success_response(_gym_list(GymService(db).search_gyms(keyword)), "Gyms retrieved successfully")


@router.get("/{gym_id}", response_model=ApiResponse[GymResponse])
def get_gym(gym_id: int, db: Session = Depends(get_db)):
    try:
        gym = GymService(db).get_gym(gym_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)
    return success_response(GymResponse.model_validate(gym), "Gym retrieved successfully")


@router.post("", response_model=ApiResponse[GymResponse], status_code=201)
def create_gym(
    data: GymCreate,
    current_user=Depends(ensure_gym_admin),
    db: Session = Depends(get_db),
):
    try:
        gym = GymService(db).create_gym(data, admin_id=current_user["id"])
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)
    return success_response(GymResponse.model_validate(gym), "Gym created successfully")


@router.put("/{gym_id}", response_model=ApiResponse[GymResponse])
def update_gym(
    gym_id: int,
    data: GymUpdate,
    current_user=Depends(ensure_gym_admin),
    db: Session = Depends(get_db),
):
    service = GymService(db)
    try:
        service.get_gym(gym_id)
        require_gym_owner(db, current_user["id"], gym_id)
        gym = service.update_gym(gym_id, data)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)
    return success_response(GymResponse.model_validate(gym), "Gym updated successfully")


@router.delete("/{gym_id}", response_model=ApiResponse[None])
def delete_gym(
    gym_id: int,
    current_user=Depends(ensure_gym_admin),
    db: Session = Depends(get_db),
):
    service = GymService(db)
    try:
        service.get_gym(gym_id)
        require_gym_owner(db, current_user["id"], gym_id)
        service.delete_gym(gym_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)
    return success_response(None, "Gym deleted successfully")
