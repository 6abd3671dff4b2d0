from typing import List, Optional

from sqlalchemy import or_
from sqlalchemy.orm import Session

from gymbook.models import TrainingSession, User


# =============================================================================
# ПРОСТЫЕ CRUD ОПЕРАЦИИ С ЗАНЯТИЯМИ
# =============================================================================

def get_session_by_id(db: Session, session_id: int) -> Optional[TrainingSession]:
    return db.query(TrainingSession).filter(TrainingSession.id == session_id).first()


def get_session_for_update(db: Session, session_id: int) -> Optional[TrainingSession]:
    """
    Получение занятия с блокировкой строки (SELECT ... FOR UPDATE).
    SQLite блокировку игнорирует.
    """
    return (
        db.query(TrainingSession)
        .filter(TrainingSession.id == session_id)
        .with_for_update()
        .first()
    )


def get_sessions(db: Session, gym_id: Optional[int] = None) -> List[TrainingSession]:
    query = db.query(TrainingSession)
    if gym_id is not None:
        query = query.filter(TrainingSession.gym_id == gym_id)
    return query.order_by(TrainingSession.date_time).all()


def get_session_ids_by_type(db: Session, session_type: str) -> List[int]:
    rows = db.query(TrainingSession.id).filter(TrainingSession.type.ilike(f"%{session_type}%")).all()
    return [row.id for row in rows]


def search_sessions(db: Session, keyword: str) -> List[TrainingSession]:
    pattern = f"%{keyword}%"
    return (
        db.query(TrainingSession)
        .filter(or_(TrainingSession.name.ilike(pattern), TrainingSession.description.ilike(pattern)))
        .order_by(TrainingSession.date_time)
        .all()
    )


def create_session(db: Session, session_data: dict) -> TrainingSession:
    db_session = TrainingSession(**session_data)
    db.add(db_session)
    # НЕ делаем commit здесь - это делает сервис
    db.flush()
    db.refresh(db_session)
    return db_session


def update_session(db: Session, training_session: TrainingSession, update_data: dict) -> TrainingSession:
    for key, value in update_data.items():
        setattr(training_session, key, value)
    db.flush()
    return training_session


def delete_session(db: Session, training_session: TrainingSession) -> None:
    db.delete(training_session)


# =============================================================================
# БРОНИРОВАНИЯ
# =============================================================================

def add_participant(db: Session, training_session: TrainingSession, user: User) -> TrainingSession:
    """
    Одна запись в session_bookings: участник занятия и занятие пользователя
    """
    training_session.participants.append(user)
    db.flush()
    return training_session


def remove_participant(db: Session, training_session: TrainingSession, user: User) -> bool:
    """
    Удаление бронирования. Возвращает False, если брони не было.
    """
    if user not in training_session.participants:
        return False
    training_session.participants.remove(user)
    db.flush()
    return True
