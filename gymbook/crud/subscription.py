from typing import List, Optional
from sqlalchemy.orm import Session

from gymbook.models import Subscription, SubscriptionPackage


# =============================================================================
# КАТАЛОГ ПАКЕТОВ (SubscriptionPackage)
# =============================================================================

def get_packages(db: Session) -> List[SubscriptionPackage]:
    """
    Получение списка всех пакетов
    """
    return db.query(SubscriptionPackage).order_by(SubscriptionPackage.price).all()


def get_package_by_id(db: Session, package_id: int) -> Optional[SubscriptionPackage]:
    """
    Поиск пакета по техническому ID
    """
    return db.query(SubscriptionPackage).filter(SubscriptionPackage.id == package_id).first()


def get_package_by_code(db: Session, code: str) -> Optional[SubscriptionPackage]:
    """
    Поиск пакета по бизнес-идентификатору ('basic_monthly')
    """
    return db.query(SubscriptionPackage).filter(SubscriptionPackage.code == code).first()


# =============================================================================
# ПОДПИСКИ ПОЛЬЗОВАТЕЛЕЙ (Subscription)
# =============================================================================

def get_user_subscriptions(db: Session, user_id: int) -> List[Subscription]:
    return (
        db.query(Subscription)
        .filter(Subscription.user_id == user_id)
        .order_by(Subscription.start_date.desc(), Subscription.id.desc())
        .all()
    )


def get_user_subscription(db: Session, user_id: int, subscription_id: int) -> Optional[Subscription]:
    """
    Подписка, принадлежащая пользователю
    """
    return db.query(Subscription).filter(
        Subscription.id == subscription_id,
        Subscription.user_id == user_id,
    ).first()


def get_active_subscriptions(db: Session, user_id: int) -> List[Subscription]:
    """
    Активные подписки пользователя, новые первыми
    """
    return db.query(Subscription).filter(
        Subscription.user_id == user_id,
        Subscription.is_active == True,
    ).order_by(Subscription.id.desc()).all()


def create_subscription(
    db: Session,
    user_id: int,
    package_id: int,
    start_date,
    end_date,
) -> Subscription:
    db_subscription = Subscription(
        user_id=user_id,
        package_id=package_id,
        start_date=start_date,
        end_date=end_date,
        is_active=True,
    )
    db.add(db_subscription)
    # НЕ делаем commit здесь - это делает сервис
    db.flush()
    db.refresh(db_subscription)
    return db_subscription


def deactivate_subscription(db: Session, subscription: Subscription) -> Subscription:
    subscription.is_active = False
    db.flush()
    return subscription


def update_subscription(db: Session, subscription: Subscription, update_data: dict) -> Subscription:
    for key, value in update_data.items():
        setattr(subscription, key, value)
    db.flush()
    return subscription
