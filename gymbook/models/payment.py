from datetime import datetime, timezone
from enum import Enum as PyEnum

from sqlalchemy import Column, Integer, String, Float, ForeignKey, DateTime, Enum
from sqlalchemy.orm import relationship

from gymbook.database import Base


class PaymentStatus(str, PyEnum):
    SUCCESS = "success"
    FAILED = "failed"
    PENDING = "pending"


class Payment(Base):
    """Модель платежа. Записи только добавляются."""
    __tablename__ = "payments"

    id = Column(Integer, primary_key=True, index=True)
    transaction_id = Column(String, unique=True, nullable=False, index=True)
    status = Column(Enum(PaymentStatus, values_callable=lambda e: [m.value for m in e]), nullable=False)
    amount = Column(Float, nullable=False)
    # При удалении пользователя платеж остается в истории
    user_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True)
    package_id = Column(Integer, ForeignKey("subscription_packages.id"), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))

    # Relationships
    user = relationship("User", back_populates="payments")
    package = relationship("SubscriptionPackage")

    def __repr__(self):
        return f"<Payment(id={self.id}, transaction_id={self.transaction_id}, amount={self.amount})>"
