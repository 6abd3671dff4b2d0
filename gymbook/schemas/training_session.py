from datetime import datetime
from typing import List, Optional

from pydantic import AliasChoices, Field

from gymbook.schemas.common import CamelModel, UpdateModel


class TrainingSessionBase(CamelModel):
    """Базовая схема занятия"""
    gym_id: int = Field(..., description="ID зала")
    name: str = Field(..., min_length=1)
    date_time: datetime = Field(..., description="Дата и время начала")
    description: str
    type: str = Field(..., min_length=1, description="Тип занятия (yoga, crossfit, ...)")
    capacity: int = Field(..., gt=0, description="Максимум участников")
    trainer_name: str = Field(..., min_length=1)


class TrainingSessionCreate(TrainingSessionBase):
    pass


class TrainingSessionUpdate(UpdateModel):
    gym_id: Optional[int] = None
    name: Optional[str] = Field(None, min_length=1)
    date_time: Optional[datetime] = None
    description: Optional[str] = None
    type: Optional[str] = Field(None, min_length=1)
    capacity: Optional[int] = Field(None, gt=0)
    trainer_name: Optional[str] = Field(None, min_length=1)


class TrainingSessionResponse(TrainingSessionBase):
    id: int
    participants: List[int] = Field(default_factory=list, validation_alias=AliasChoices("participant_ids", "participants"))
    created_at: datetime
