import logging

from sqlalchemy.orm import Session

from gymbook.auth.jwt_handler import create_access_token
from gymbook.auth.password import hash_password, verify_password
from gymbook.crud import gym_admin as crud
from gymbook.crud import gym as gym_crud
from gymbook.crud import training_session as session_crud
from gymbook.crud import announcement as announcement_crud
from gymbook.database import transactional
from gymbook.errors.account_errors import EmailAlreadyExists, InvalidCredentials, GymAdminNotFound
from gymbook.errors.gym_errors import GymNotFound, GymManagedByAnotherAdmin
from gymbook.models import GymAdmin, UserRole
from gymbook.schemas.gym_admin import GymAdminRegister

logger = logging.getLogger(__name__)


class GymAdminService:
    def __init__(self, db: Session):
        self.db = db

    def get_admin(self, admin_id: int) -> GymAdmin:
        admin = crud.get_admin_by_id(self.db, admin_id)
        if not admin:
            raise GymAdminNotFound()
        return admin

    def register(self, data: GymAdminRegister) -> GymAdmin:
        with transactional(self.db) as session:
            if crud.get_admin_by_email(session, data.email):
                raise EmailAlreadyExists()
            admin = crud.create_admin(
                session,
                username=data.username,
                email=data.email,
                password_hash=hash_password(data.password),
            )
        logger.info(f"Gym admin {admin.id} registered")
        return admin

    def login(self, identifier: str, password: str) -> dict:
        admin = crud.get_admin_by_login(self.db, identifier)
        if not admin or not verify_password(password, admin.password_hash):
            raise InvalidCredentials()
        token = create_access_token(data={"id": admin.id, "role": UserRole.GYM_ADMIN.value})
        return {
            "id": admin.id,
            "username": admin.username,
            "email": admin.email,
            "role": UserRole.GYM_ADMIN.value,
            "token": token,
        }

    def add_gym(self, admin_id: int, gym_id: int) -> GymAdmin:
        """
        Attaches an existing gym to the admin; attaching twice is a no-op.
        A gym that already has other owners cannot be claimed.
        """
        with transactional(self.db) as session:
            admin = crud.get_admin_by_id(session, admin_id)
            if not admin:
                raise GymAdminNotFound()
            gym = gym_crud.get_gym_by_id(session, gym_id)
            if not gym:
                raise GymNotFound()
            if gym.admins and admin not in gym.admins:
                raise GymManagedByAnotherAdmin()
            return crud.add_gym(session, admin, gym)

    # --- Ownership checks ---

    def owns_gym(self, admin_id: int, gym_id: int) -> bool:
        admin = crud.get_admin_by_id(self.db, admin_id)
        if not admin:
            return False
        return gym_id in admin.gym_ids

    def owns_session(self, admin_id: int, session_id: int) -> bool:
        training_session = session_crud.get_session_by_id(self.db, session_id)
        if not training_session:
            return False
        return self.owns_gym(admin_id, training_session.gym_id)

    def owns_announcement(self, admin_id: int, announcement_id: int) -> bool:
        announcement = announcement_crud.get_announcement_by_id(self.db, announcement_id)
        if not announcement:
            return False
        return self.owns_session(admin_id, announcement.session_id)
