from datetime import datetime
from typing import Optional

from pydantic import Field

from gymbook.schemas.common import CamelModel, UpdateModel


class AnnouncementCreate(CamelModel):
    session_id: int
    content: str = Field(..., min_length=1)


class AnnouncementUpdate(UpdateModel):
    content: Optional[str] = Field(None, min_length=1)


class AnnouncementResponse(CamelModel):
    id: int
    session_id: int
    content: str
    created_at: datetime
    updated_at: datetime
