import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from gymbook.crud import announcement as crud
from gymbook.crud import training_session as session_crud
from gymbook.database import transactional
from gymbook.errors.booking_errors import SessionNotFound
from gymbook.errors.gym_errors import AnnouncementNotFound
from gymbook.models import Announcement
from gymbook.schemas.announcement import AnnouncementCreate, AnnouncementUpdate

logger = logging.getLogger(__name__)


class AnnouncementService:
    def __init__(self, db: Session):
        self.db = db

    def get_announcements(self, session_id: Optional[int] = None) -> List[Announcement]:
        return crud.get_announcements(self.db, session_id=session_id)

    def get_announcement(self, announcement_id: int) -> Announcement:
        announcement = crud.get_announcement_by_id(self.db, announcement_id)
        if not announcement:
            raise AnnouncementNotFound()
        return announcement

    def create_announcement(self, data: AnnouncementCreate) -> Announcement:
        with transactional(self.db) as session:
            if not session_crud.get_session_by_id(session, data.session_id):
                raise SessionNotFound()
            announcement = crud.create_announcement(session, data.session_id, data.content)
        logger.info(f"Announcement {announcement.id} posted to session {data.session_id}")
        return announcement

    def update_announcement(self, announcement_id: int, data: AnnouncementUpdate) -> Announcement:
        with transactional(self.db) as session:
            announcement = crud.get_announcement_by_id(session, announcement_id)
            if not announcement:
                raise AnnouncementNotFound()
            if data.content is None:
                return announcement
            return crud.update_announcement(session, announcement, data.content)

    def delete_announcement(self, announcement_id: int) -> None:
        with transactional(self.db) as session:
            announcement = crud.get_announcement_by_id(session, announcement_id)
            if not announcement:
                raise AnnouncementNotFound()
            crud.delete_announcement(session, announcement)
