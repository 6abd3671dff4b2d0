import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from gymbook.auth.permissions import authorize_self
from gymbook.dependencies import get_db
from gymbook.errors.base import NotFoundError
from gymbook.schemas.common import ApiResponse
from gymbook.schemas.subscription import (
    SubscriptionPackageResponse,
    SubscriptionAssign,
    SubscriptionResponse,
    SubscriptionUpdate,
)
from gymbook.services.subscription import SubscriptionService
from gymbook.utils.responses import success_response

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Subscriptions"])


# Каталог пакетов
@router.get("/subscriptionPackages", response_model=ApiResponse[List[SubscriptionPackageResponse]])
def get_subscription_packages(db: Session = Depends(get_db)):
    packages = SubscriptionService(db).get_packages()
    return success_response(
        [SubscriptionPackageResponse.model_validate(p) for p in packages],
        "All subscription packages retrieved successfully",
    )


@router.get("/subscriptionPackages/{package_code}", response_model=ApiResponse[SubscriptionPackageResponse])
def get_subscription_package(package_code: str, db: Session = Depends(get_db)):
    try:
        package = SubscriptionService(db).get_package_by_code(package_code)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)
    return success_response(SubscriptionPackageResponse.model_validate(package), "Subscription package retrieved successfully")


# Подписки пользователя
@router.post(
    "/users/{user_id}/subscription",
    response_model=ApiResponse[SubscriptionResponse],
    status_code=201,
)
def create_user_subscription(
    user_id: int,
    data: SubscriptionAssign,
    current_user=Depends(authorize_self),
    db: Session = Depends(get_db),
):
    service = SubscriptionService(db)
    try:
        subscription = service.assign_subscription(
            user_id=user_id,
            package_id=data.subscription_package_id,
            start_date=data.start_date,
        )
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)
    return success_response(SubscriptionResponse.model_validate(subscription), "Subscription created successfully.")


@router.get("/users/{user_id}/subscription", response_model=ApiResponse[List[SubscriptionResponse]])
def get_user_subscriptions(
    user_id: int,
    current_user=Depends(authorize_self),
    db: Session = Depends(get_db),
):
    try:
        subscriptions = SubscriptionService(db).get_user_subscriptions(user_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)
    return success_response(
        [SubscriptionResponse.model_validate(s) for s in subscriptions],
        "Subscriptions retrieved successfully.",
    )


@router.put("/users/{user_id}/subscription/{subscription_id}", response_model=ApiResponse[SubscriptionResponse])
def update_user_subscription(
    user_id: int,
    subscription_id: int,
    data: SubscriptionUpdate,
    current_user=Depends(authorize_self),
    db: Session = Depends(get_db),
):
    """
    Изменение даты начала (дата окончания пересчитывается) или активности подписки.
    """
    service = SubscriptionService(db)
    try:
        subscription = service.update_subscription(user_id, subscription_id, data)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)
    return success_response(SubscriptionResponse.model_validate(subscription), "Subscription updated successfully.")


@router.delete("/users/{user_id}/subscription/{subscription_id}", response_model=ApiResponse[SubscriptionResponse])
def cancel_user_subscription(
    user_id: int,
    subscription_id: int,
    current_user=Depends(authorize_self),
    db: Session = Depends(get_db),
):
    service = SubscriptionService(db)
    try:
        subscription = service.cancel_subscription(user_id, subscription_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)
    return success_response(SubscriptionResponse.model_validate(subscription), "Subscription cancelled successfully.")
