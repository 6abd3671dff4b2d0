from typing import List, Optional

from sqlalchemy.orm import Session

from gymbook.models import Gym, TrainingSession


def get_gym_by_id(db: Session, gym_id: int) -> Optional[Gym]:
    return db.query(Gym).filter(Gym.id == gym_id).first()


def get_gyms(db: Session) -> List[Gym]:
    return db.query(Gym).order_by(Gym.name).all()


def get_gyms_with_sessions(db: Session, session_ids: List[int]) -> List[Gym]:
    """
    Залы, в которых есть хотя бы одно из указанных занятий
    """
    gym_ids = db.query(TrainingSession.gym_id).filter(TrainingSession.id.in_(session_ids))
    return (
        db.query(Gym)
        .filter(Gym.id.in_(gym_ids))
        .order_by(Gym.name)
        .all()
    )


def create_gym(db: Session, gym_data: dict) -> Gym:
    db_gym = Gym(**gym_data)
    db.add(db_gym)
    # НЕ делаем commit здесь - это делает сервис
    db.flush()
    db.refresh(db_gym)
    return db_gym


def update_gym(db: Session, gym: Gym, update_data: dict) -> Gym:
    for key, value in update_data.items():
        setattr(gym, key, value)
    db.flush()
    return gym


def delete_gym(db: Session, gym: Gym) -> None:
    db.delete(gym)
