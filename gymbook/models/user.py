from datetime import datetime, timezone
from enum import Enum as PyEnum

from sqlalchemy import Column, Integer, String, Boolean, DateTime, ForeignKey, Table
from sqlalchemy.orm import relationship

from gymbook.database import Base


# Роли в JWT: пользователь и администратор зала
class UserRole(str, PyEnum):
    USER = "user"
    GYM_ADMIN = "gymAdmin"


# Бронирования: одна строка связывает пользователя и занятие,
# поэтому session.participants и user.booked_sessions всегда совпадают
session_bookings = Table(
    "session_bookings",
    Base.metadata,
    Column("user_id", Integer, ForeignKey("users.id", ondelete="CASCADE"), primary_key=True),
    Column("session_id", Integer, ForeignKey("training_sessions.id", ondelete="CASCADE"), primary_key=True),
)


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String, nullable=False, index=True)
    email = Column(String, unique=True, nullable=False)  # Уникальный Email
    password_hash = Column(String, nullable=False)
    is_subscribed = Column(Boolean, nullable=False, default=False)
    # Бизнес-идентификатор текущего пакета (SubscriptionPackage.code)
    package_code = Column(String, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))

    # Relationships
    booked_sessions = relationship(
        "TrainingSession",
        secondary=session_bookings,
        back_populates="participants",
        order_by="TrainingSession.date_time",
    )
    subscriptions = relationship("Subscription", back_populates="user", cascade="all, delete-orphan")
    payments = relationship("Payment", back_populates="user")

    @property
    def booked_session_ids(self):
        return [session.id for session in self.booked_sessions]

    def __repr__(self):
        return f"<User(id={self.id}, username={self.username})>"
