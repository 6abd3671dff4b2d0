from typing import List, Optional
from sqlalchemy import desc
from sqlalchemy.orm import Session

from gymbook.models import Payment, PaymentStatus


def get_payment_by_transaction_id(db: Session, transaction_id: str) -> Optional[Payment]:
    return db.query(Payment).filter(Payment.transaction_id == transaction_id).first()


def get_user_payments(db: Session, user_id: int, skip: int = 0, limit: int = 100) -> List[Payment]:
    """
    История платежей пользователя, новые сверху
    """
    return (
        db.query(Payment)
        .filter(Payment.user_id == user_id)
        .order_by(desc(Payment.created_at), desc(Payment.id))
        .offset(skip)
        .limit(limit)
        .all()
    )


def create_payment(
    db: Session,
    transaction_id: str,
    amount: float,
    user_id: int,
    package_id: Optional[int] = None,
    status: PaymentStatus = PaymentStatus.SUCCESS,
) -> Payment:
    db_payment = Payment(
        transaction_id=transaction_id,
        status=status,
        amount=amount,
        user_id=user_id,
        package_id=package_id,
    )
    db.add(db_payment)
    # НЕ делаем commit здесь - это делает сервис
    db.flush()
    db.refresh(db_payment)
    return db_payment
