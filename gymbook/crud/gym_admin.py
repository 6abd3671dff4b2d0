from typing import Optional

from sqlalchemy import or_
from sqlalchemy.orm import Session

from gymbook.models import GymAdmin, Gym


def get_admin_by_id(db: Session, admin_id: int) -> Optional[GymAdmin]:
    return db.query(GymAdmin).filter(GymAdmin.id == admin_id).first()


def get_admin_by_email(db: Session, email: str) -> Optional[GymAdmin]:
    return db.query(GymAdmin).filter(GymAdmin.email == email).first()


def get_admin_by_login(db: Session, identifier: str) -> Optional[GymAdmin]:
    return (
        db.query(GymAdmin)
        .filter(or_(GymAdmin.email == identifier, GymAdmin.username == identifier))
        .first()
    )


def create_admin(db: Session, username: str, email: str, password_hash: str) -> GymAdmin:
    db_admin = GymAdmin(username=username, email=email, password_hash=password_hash)
    db.add(db_admin)
    db.flush()
    db.refresh(db_admin)
    return db_admin


def add_gym(db: Session, admin: GymAdmin, gym: Gym) -> GymAdmin:
    """
    Привязка зала к администратору (без дублей)
    """
    if gym not in admin.gyms:
        admin.gyms.append(gym)
        db.flush()
    return admin
