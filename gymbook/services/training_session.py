import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from gymbook.crud import gym as gym_crud
from gymbook.crud import training_session as crud
from gymbook.database import transactional
from gymbook.errors.booking_errors import SessionNotFound, CapacityBelowParticipants
from gymbook.errors.gym_errors import GymNotFound
from gymbook.models import TrainingSession
from gymbook.schemas.training_session import TrainingSessionCreate, TrainingSessionUpdate

logger = logging.getLogger(__name__)


class TrainingSessionService:
    """
    Sessions belong to exactly one gym through gym_id; gym.sessions is read
    from the same column, so moving a session updates both gyms at once.
    """

    def __init__(self, db: Session):
        self.db = db

    def get_sessions(self, gym_id: Optional[int] = None) -> List[TrainingSession]:
        return crud.get_sessions(self.db, gym_id=gym_id)

    def get_session(self, session_id: int) -> TrainingSession:
        training_session = crud.get_session_by_id(self.db, session_id)
        if not training_session:
            raise SessionNotFound()
        return training_session

    def search_sessions(self, keyword: Optional[str]) -> List[TrainingSession]:
        if not keyword or not keyword.strip():
            return []
        return crud.search_sessions(self.db, keyword.strip())

    def create_session(self, data: TrainingSessionCreate) -> TrainingSession:
        with transactional(self.db) as session:
            if not gym_crud.get_gym_by_id(session, data.gym_id):
                raise GymNotFound()
            training_session = crud.create_session(session, data.model_dump())
        logger.info(f"Session {training_session.id} created in gym {data.gym_id}")
        return training_session

    def update_session(self, session_id: int, data: TrainingSessionUpdate) -> TrainingSession:
        with transactional(self.db) as session:
            training_session = crud.get_session_for_update(session, session_id)
            if not training_session:
                raise SessionNotFound()

            update_data = data.model_dump(exclude_unset=True)

            new_capacity = update_data.get("capacity")
            if new_capacity is not None and new_capacity < len(training_session.participants):
                raise CapacityBelowParticipants(len(training_session.participants))

            new_gym_id = update_data.pop("gym_id", None)
            if new_gym_id is not None and new_gym_id != training_session.gym_id:
                gym = gym_crud.get_gym_by_id(session, new_gym_id)
                if not gym:
                    raise GymNotFound()
                logger.info(f"Session {session_id} moved from gym {training_session.gym_id} to gym {gym.id}")
                training_session.gym = gym

            return crud.update_session(session, training_session, update_data)

    def delete_session(self, session_id: int) -> None:
        """Bookings and announcements of the session are deleted with it."""
        with transactional(self.db) as session:
            training_session = crud.get_session_by_id(session, session_id)
            if not training_session:
                raise SessionNotFound()
            crud.delete_session(session, training_session)
        logger.info(f"Session {session_id} deleted")
