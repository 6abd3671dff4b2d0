from datetime import datetime
from typing import List

from pydantic import EmailStr, Field

from gymbook.schemas.common import CamelModel
from gymbook.schemas.gym import GymResponse


class GymAdminRegister(CamelModel):
    username: str = Field(..., min_length=3, max_length=50)
    email: EmailStr
    password: str = Field(..., min_length=6, max_length=128)


class GymAdminResponse(CamelModel):
    id: int
    username: str
    email: str
    gyms: List[GymResponse] = Field(default_factory=list)
    created_at: datetime


class AddGymRequest(CamelModel):
    gym_id: int
