from datetime import datetime, timezone

from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Table
from sqlalchemy.orm import relationship

from gymbook.database import Base


# Ассоциативная таблица: администратор может управлять несколькими залами и наоборот
gym_admin_gyms = Table(
    "gym_admin_gyms",
    Base.metadata,
    Column("gym_admin_id", Integer, ForeignKey("gym_admins.id", ondelete="CASCADE"), primary_key=True),
    Column("gym_id", Integer, ForeignKey("gyms.id", ondelete="CASCADE"), primary_key=True),
)


class GymAdmin(Base):
    __tablename__ = "gym_admins"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String, nullable=False, index=True)
    email = Column(String, unique=True, nullable=False)
    password_hash = Column(String, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))

    gyms = relationship("Gym", secondary=gym_admin_gyms, back_populates="admins")

    @property
    def gym_ids(self):
        return [gym.id for gym in self.gyms]

    def __repr__(self):
        return f"<GymAdmin(id={self.id}, email={self.email})>"
