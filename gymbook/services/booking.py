import logging
from typing import List

from sqlalchemy.orm import Session

from gymbook.crud import training_session as session_crud
from gymbook.crud import user as user_crud
from gymbook.database import transactional
from gymbook.errors.booking_errors import (
    SessionNotFound,
    UserNotFound,
    SessionFull,
    AlreadyBooked,
)
from gymbook.models import TrainingSession

logger = logging.getLogger(__name__)


class BookingService:
    """
    Bookings link users and sessions through one session_bookings row, so
    session.participants and user.booked_sessions are two views of the same
    record. Every public method runs in a single transaction.
    """

    def __init__(self, db: Session):
        self.db = db

    # --- Public Methods (Transactional) ---

    def book_session(self, user_id: int, session_id: int) -> TrainingSession:
        """Reserves one place in the session for the user."""
        with transactional(self.db) as session:
            return self._book_session_logic(session, user_id, session_id)

    def unbook_session(self, user_id: int, session_id: int) -> None:
        """Removes the booking if it exists; a missing booking is not an error."""
        with transactional(self.db) as session:
            self._unbook_session_logic(session, user_id, session_id)

    def get_booked_sessions(self, user_id: int) -> List[TrainingSession]:
        user = user_crud.get_user_by_id(self.db, user_id)
        if not user:
            raise UserNotFound()
        return list(user.booked_sessions)

    # --- Private Logic Methods (Non-Transactional) ---

    def _book_session_logic(self, session: Session, user_id: int, session_id: int) -> TrainingSession:
        training_session = session_crud.get_session_for_update(session, session_id)
        if not training_session:
            raise SessionNotFound()

        user = user_crud.get_user_by_id(session, user_id)
        if not user:
            raise UserNotFound()

        if len(training_session.participants) >= training_session.capacity:
            raise SessionFull()

        if user in training_session.participants:
            raise AlreadyBooked()

        session_crud.add_participant(session, training_session, user)
        logger.info(
            f"User {user_id} booked session {session_id} "
            f"({len(training_session.participants)}/{training_session.capacity})"
        )
        session.refresh(training_session)
        return training_session

    def _unbook_session_logic(self, session: Session, user_id: int, session_id: int) -> None:
        training_session = session_crud.get_session_by_id(session, session_id)
        if not training_session:
            raise SessionNotFound()

        user = user_crud.get_user_by_id(session, user_id)
        if not user:
            raise UserNotFound()

        removed = session_crud.remove_participant(session, training_session, user)
        if removed:
            logger.info(f"User {user_id} unbooked from session {session_id}")
        else:
            logger.debug(f"User {user_id} had no booking in session {session_id}, nothing to remove")
