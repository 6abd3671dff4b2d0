from datetime import datetime
from typing import Optional

from pydantic import Field

from gymbook.schemas.common import CamelModel, UpdateModel


class SubscriptionPackageResponse(CamelModel):
    """Пакет из каталога"""
    id: int
    code: str = Field(..., description="Бизнес-идентификатор, например basic_monthly")
    name: str
    description: str
    price: float
    duration_days: int
    session_limit: int
    gym_limit: str


class SubscriptionAssign(CamelModel):
    """Назначение подписки пользователю"""
    subscription_package_id: int = Field(..., description="ID пакета (технический)")
    start_date: Optional[datetime] = Field(None, description="Дата начала, по умолчанию сейчас")


class SubscriptionResponse(CamelModel):
    id: int
    user_id: int
    package_id: int
    start_date: datetime
    end_date: datetime
    is_active: bool
    created_at: datetime


class SubscriptionUpdate(UpdateModel):
    """Изменение подписки: дата начала (дата окончания пересчитывается) и активность"""
    start_date: Optional[datetime] = None
    is_active: Optional[bool] = None
