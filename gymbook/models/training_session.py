from datetime import datetime, timezone

from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, CheckConstraint
from sqlalchemy.orm import relationship

from gymbook.database import Base
from gymbook.models.user import session_bookings


class TrainingSession(Base):
    """Занятие в зале. Число участников ограничено capacity."""
    __tablename__ = "training_sessions"
    __table_args__ = (
        CheckConstraint("capacity > 0", name="ck_training_sessions_capacity_positive"),
    )

    id = Column(Integer, primary_key=True, index=True)
    gym_id = Column(Integer, ForeignKey("gyms.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String, nullable=False)
    date_time = Column(DateTime(timezone=True), nullable=False)
    description = Column(String, nullable=False)
    type = Column(String, nullable=False)
    capacity = Column(Integer, nullable=False)
    trainer_name = Column(String, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))

    # Relationships
    gym = relationship("Gym", back_populates="sessions")
    participants = relationship("User", secondary=session_bookings, back_populates="booked_sessions")
    announcements = relationship("Announcement", back_populates="session", cascade="all, delete-orphan")

    @property
    def participant_ids(self):
        return [user.id for user in self.participants]

    @property
    def is_full(self) -> bool:
        return len(self.participants) >= self.capacity

    def __repr__(self):
        return f"<TrainingSession(id={self.id}, gym_id={self.gym_id}, capacity={self.capacity})>"
