from datetime import datetime
from typing import List, Optional

from pydantic import AliasChoices, Field

from gymbook.schemas.common import CamelModel, UpdateModel


class GymBase(CamelModel):
    name: str = Field(..., min_length=1, description="Название зала")
    location: str = Field(..., min_length=1, description="Адрес")
    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)
    rating: float = Field(0, ge=0, le=5)
    keywords: List[str] = Field(default_factory=list, description="Теги для поиска")


class GymCreate(GymBase):
    pass


class GymUpdate(UpdateModel):
    name: Optional[str] = Field(None, min_length=1)
    location: Optional[str] = Field(None, min_length=1)
    latitude: Optional[float] = Field(None, ge=-90, le=90)
    longitude: Optional[float] = Field(None, ge=-180, le=180)
    rating: Optional[float] = Field(None, ge=0, le=5)
    keywords: Optional[List[str]] = None


class GymResponse(GymBase):
    id: int
    sessions: List[int] = Field(default_factory=list, validation_alias=AliasChoices("session_ids", "sessions"))
    created_at: datetime


class GymFilter(CamelModel):
    """Фильтр залов по типу занятий и расстоянию"""
    session_type: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    distance: Optional[float] = Field(None, gt=0, description="Максимальное расстояние в км")
