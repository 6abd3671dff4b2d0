from typing import List, Optional

from sqlalchemy import or_
from sqlalchemy.orm import Session

from gymbook.models import User


def get_user_by_id(db: Session, user_id: int) -> Optional[User]:
    return db.query(User).filter(User.id == user_id).first()


def get_user_by_email(db: Session, email: str) -> Optional[User]:
    return db.query(User).filter(User.email == email).first()


def get_user_by_login(db: Session, identifier: str) -> Optional[User]:
    """
    Поиск по email или username
    """
    return db.query(User).filter(or_(User.email == identifier, User.username == identifier)).first()


def search_users_by_name(db: Session, keyword: str, limit: int = 50) -> List[User]:
    return (
        db.query(User)
        .filter(User.username.ilike(f"%{keyword}%"))
        .order_by(User.username)
        .limit(limit)
        .all()
    )


def create_user(db: Session, username: str, email: str, password_hash: str) -> User:
    db_user = User(
        username=username,
        email=email,
        password_hash=password_hash,
        is_subscribed=False,
        package_code=None,
    )
    db.add(db_user)
    # НЕ делаем commit здесь - это делает сервис
    db.flush()
    db.refresh(db_user)
    return db_user


def update_user(db: Session, user: User, update_data: dict) -> User:
    for field, value in update_data.items():
        setattr(user, field, value)
    db.flush()
    return user


def delete_user(db: Session, user: User) -> None:
    db.delete(user)


def set_subscription_flags(db: Session, user: User, is_subscribed: bool, package_code: Optional[str]) -> User:
    """
    Обновление флага подписки и кода текущего пакета
    """
    user.is_subscribed = is_subscribed
    user.package_code = package_code
    db.flush()
    return user
