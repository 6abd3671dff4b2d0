import logging
from typing import List

from sqlalchemy.orm import Session

from gymbook.auth.jwt_handler import create_access_token
from gymbook.auth.password import hash_password, verify_password
from gymbook.crud import user as crud
from gymbook.database import transactional
from gymbook.errors.account_errors import EmailAlreadyExists, InvalidCredentials
from gymbook.errors.booking_errors import UserNotFound
from gymbook.models import User, UserRole
from gymbook.schemas.user import UserRegister, UserUpdate

logger = logging.getLogger(__name__)


class UserService:
    def __init__(self, db: Session):
        self.db = db

    def get_user(self, user_id: int) -> User:
        user = crud.get_user_by_id(self.db, user_id)
        if not user:
            raise UserNotFound()
        return user

    def search_users(self, keyword: str) -> List[User]:
        return crud.search_users_by_name(self.db, keyword.strip())

    def register(self, data: UserRegister) -> dict:
        """Creates the account and returns it together with an access token."""
        with transactional(self.db) as session:
            if crud.get_user_by_email(session, data.email):
                raise EmailAlreadyExists()
            user = crud.create_user(
                session,
                username=data.username,
                email=data.email,
                password_hash=hash_password(data.password),
            )
        logger.info(f"User {user.id} registered")
        return self._token_payload(user)

    def login(self, identifier: str, password: str) -> dict:
        user = crud.get_user_by_login(self.db, identifier)
        if not user or not verify_password(password, user.password_hash):
            logger.debug(f"Failed login attempt for {identifier}")
            raise InvalidCredentials()
        return self._token_payload(user)

    def update_user(self, user_id: int, data: UserUpdate) -> User:
        with transactional(self.db) as session:
            user = crud.get_user_by_id(session, user_id)
            if not user:
                raise UserNotFound()

            update_data = data.model_dump(exclude_unset=True)
            if "email" in update_data and update_data["email"] != user.email:
                if crud.get_user_by_email(session, update_data["email"]):
                    raise EmailAlreadyExists()
            if "password" in update_data:
                update_data["password_hash"] = hash_password(update_data.pop("password"))
            return crud.update_user(session, user, update_data)

    def delete_user(self, user_id: int) -> None:
        """Bookings and subscriptions are removed with the account; payments stay."""
        with transactional(self.db) as session:
            user = crud.get_user_by_id(session, user_id)
            if not user:
                raise UserNotFound()
            crud.delete_user(session, user)
        logger.info(f"User {user_id} deleted")

    @staticmethod
    def _token_payload(user: User) -> dict:
        token = create_access_token(data={"id": user.id, "role": UserRole.USER.value})
        return {
            "id": user.id,
            "username": user.username,
            "email": user.email,
            "role": UserRole.USER.value,
            "token": token,
        }
