from datetime import datetime
from typing import Annotated, List, Optional, Union

from pydantic import AliasChoices, EmailStr, Field, field_validator

from gymbook.schemas.common import CamelModel, UpdateModel


class UserRegister(CamelModel):
    username: str = Field(..., min_length=3, max_length=50)
    email: EmailStr
    password: str = Field(..., min_length=6, max_length=128)

    @field_validator('username')
    @classmethod
    def validate_username(cls, v: str) -> str:
        if not v.strip():
            raise ValueError('Username cannot be empty')
        return v.strip()


class LoginRequest(CamelModel):
    """Email или username в поле email"""
    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class UserUpdate(UpdateModel):
    username: Optional[str] = Field(None, min_length=3, max_length=50)
    email: Optional[EmailStr] = None
    password: Optional[str] = Field(None, min_length=6, max_length=128)


class UserResponse(CamelModel):
    id: int
    username: str
    email: str
    is_subscribed: bool
    package_id: Optional[str] = Field(None, validation_alias=AliasChoices("package_code", "packageID"), serialization_alias="packageID")
    booked_sessions: List[int] = Field(default_factory=list, validation_alias=AliasChoices("booked_session_ids", "bookedSessions"))
    created_at: datetime


class UserPublicResponse(CamelModel):
    id: int
    username: str


class TokenResponse(CamelModel):
    id: int
    username: str
    email: str
    role: str
    token: str


class BookSessionRequest(CamelModel):
    session_id: int


# Свой профиль - полный, чужой - только {id, username}
UserProfileResponse = Annotated[Union[UserResponse, UserPublicResponse], Field(union_mode="left_to_right")]
