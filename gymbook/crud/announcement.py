from typing import List, Optional
from sqlalchemy.orm import Session

from gymbook.models import Announcement


def get_announcement_by_id(db: Session, announcement_id: int) -> Optional[Announcement]:
    return db.query(Announcement).filter(Announcement.id == announcement_id).first()


def get_announcements(db: Session, session_id: Optional[int] = None) -> List[Announcement]:
    query = db.query(Announcement)
    if session_id is not None:
        query = query.filter(Announcement.session_id == session_id)
    return query.order_by(Announcement.created_at.desc(), Announcement.id.desc()).all()


def create_announcement(db: Session, session_id: int, content: str) -> Announcement:
    db_announcement = Announcement(session_id=session_id, content=content)
    db.add(db_announcement)
    db.flush()
    db.refresh(db_announcement)
    return db_announcement


def update_announcement(db: Session, announcement: Announcement, content: str) -> Announcement:
    announcement.content = content
    db.flush()
    return announcement


def delete_announcement(db: Session, announcement: Announcement) -> None:
    db.delete(announcement)
