from datetime import datetime, timezone

from sqlalchemy import Column, Integer, String, Float, Boolean, DateTime, ForeignKey
from sqlalchemy.orm import relationship

from gymbook.database import Base


class SubscriptionPackage(Base):
    """
    Каталог пакетов. Запись неизменяема после загрузки.

    id - технический идентификатор, code - бизнес-идентификатор ('basic_monthly').
    """
    __tablename__ = "subscription_packages"

    id = Column(Integer, primary_key=True, index=True)
    code = Column(String, unique=True, nullable=False, index=True)
    name = Column(String, nullable=False)
    description = Column(String, nullable=False)
    price = Column(Float, nullable=False)
    duration_days = Column(Integer, nullable=False)  # Срок действия в днях
    session_limit = Column(Integer, nullable=False)
    gym_limit = Column(String, nullable=False)


class Subscription(Base):
    """Подписка пользователя, созданная из пакета."""
    __tablename__ = "subscriptions"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    package_id = Column(Integer, ForeignKey("subscription_packages.id"), nullable=False)
    start_date = Column(DateTime(timezone=True), nullable=False)
    end_date = Column(DateTime(timezone=True), nullable=False)  # start_date + duration_days
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))

    # Relationships
    user = relationship("User", back_populates="subscriptions")
    package = relationship("SubscriptionPackage")

    def __repr__(self):
        return f"<Subscription(id={self.id}, user_id={self.user_id}, package_id={self.package_id})>"
