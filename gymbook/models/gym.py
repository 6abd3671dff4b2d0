from datetime import datetime, timezone

from sqlalchemy import Column, Integer, String, Float, DateTime, JSON
from sqlalchemy.orm import relationship, validates

from gymbook.database import Base


class Gym(Base):
    __tablename__ = "gyms"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False, index=True)
    location = Column(String, nullable=False)
    latitude = Column(Float, nullable=False)
    longitude = Column(Float, nullable=False)
    rating = Column(Float, nullable=False, default=0)  # 0..5
    keywords = Column(JSON, nullable=False, default=list)  # Теги для поиска
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))

    # Занятия зала определяются через training_sessions.gym_id
    sessions = relationship(
        "TrainingSession",
        back_populates="gym",
        cascade="all, delete-orphan",
        order_by="TrainingSession.date_time",
    )
    admins = relationship("GymAdmin", secondary="gym_admin_gyms", back_populates="gyms")

    @property
    def session_ids(self):
        return [session.id for session in self.sessions]

    @validates("rating")
    def validate_rating(self, key, value):
        if value is not None and not 0 <= value <= 5:
            raise ValueError("Rating must be between 0 and 5")
        return value

    def __repr__(self):
        return f"<Gym(id={self.id}, name={self.name})>"
