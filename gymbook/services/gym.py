import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from gymbook.crud import gym as crud
from gymbook.crud import gym_admin as admin_crud
from gymbook.crud import training_session as session_crud
from gymbook.database import transactional
from gymbook.errors.account_errors import GymAdminNotFound
from gymbook.errors.gym_errors import GymNotFound
from gymbook.models import Gym
from gymbook.schemas.gym import GymCreate, GymUpdate, GymFilter
from gymbook.utils.geo import haversine_distance_km

logger = logging.getLogger(__name__)


class GymService:
    def __init__(self, db: Session):
        self.db = db

    def get_gyms(self) -> List[Gym]:
        return crud.get_gyms(self.db)

    def get_gym(self, gym_id: int) -> Gym:
        gym = crud.get_gym_by_id(self.db, gym_id)
        if not gym:
            raise GymNotFound()
        return gym

    def create_gym(self, data: GymCreate, admin_id: int) -> Gym:
        """Creates a gym owned by the admin who created it."""
        with transactional(self.db) as session:
            admin = admin_crud.get_admin_by_id(session, admin_id)
            if not admin:
                raise GymAdminNotFound()
            gym = crud.create_gym(session, data.model_dump())
            admin_crud.add_gym(session, admin, gym)
        logger.info(f"Gym {gym.id} created by admin {admin_id}")
        return gym

    def update_gym(self, gym_id: int, data: GymUpdate) -> Gym:
        with transactional(self.db) as session:
            gym = crud.get_gym_by_id(session, gym_id)
            if not gym:
                raise GymNotFound()
            return crud.update_gym(session, gym, data.model_dump(exclude_unset=True))

    def delete_gym(self, gym_id: int) -> None:
        """Sessions of the gym, their bookings and announcements go with it."""
        with transactional(self.db) as session:
            gym = crud.get_gym_by_id(session, gym_id)
            if not gym:
                raise GymNotFound()
            crud.delete_gym(session, gym)
        logger.info(f"Gym {gym_id} deleted")

    def search_gyms(self, keyword: Optional[str]) -> List[Gym]:
        """
        Case-insensitive match on the name or any keyword tag.
        An empty keyword returns every gym.
        """
        gyms = crud.get_gyms(self.db)
        if not keyword or not keyword.strip():
            return gyms
        needle = keyword.strip().lower()
        return [
            gym for gym in gyms
            if needle in gym.name.lower() or any(needle in tag.lower() for tag in (gym.keywords or []))
        ]

    def filter_gyms(self, filters: GymFilter) -> List[Gym]:
        """
        Filters by session type (substring) and by distance from a point.
        Without a distance every gym is kept when coordinates are given.
        """
        if filters.session_type:
            session_ids = session_crud.get_session_ids_by_type(self.db, filters.session_type)
            if not session_ids:
                return []
            gyms = crud.get_gyms_with_sessions(self.db, session_ids)
        else:
            gyms = crud.get_gyms(self.db)

        if filters.latitude is None or filters.longitude is None:
            return gyms

        filtered = []
        for gym in gyms:
            distance_km = haversine_distance_km(filters.latitude, filters.longitude, gym.latitude, gym.longitude)
            logger.debug(f"Gym {gym.name}: {distance_km:.2f} km")
            if filters.distance is None or distance_km <= filters.distance:
                filtered.append(gym)
        return filtered
