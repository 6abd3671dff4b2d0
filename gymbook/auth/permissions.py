"""
Role and ownership checks for FastAPI endpoints.
"""

from typing import List, Optional
from fastapi import Depends, HTTPException, status
from sqlalchemy.orm import Session

from gymbook.auth.jwt_handler import verify_jwt_token
from gymbook.models.user import UserRole
from gymbook.services.gym_admin import GymAdminService


def get_current_user(allowed_roles: Optional[List[str]] = None):
    """
    Dependency factory to create a get_current_user dependency with role checking.

    Args:
        allowed_roles: List of role strings that are allowed to access the endpoint.
                      If None, any authenticated principal can access.

    Example:
        @router.post("/gyms")
        def create_gym(current_user=Depends(get_current_user([UserRole.GYM_ADMIN.value]))):
            ...
    """
    def dependency(current_user_data = Depends(verify_jwt_token)):
        if not current_user_data:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Authentication required"
            )

        if allowed_roles is None:
            return current_user_data

        user_role = current_user_data.get("role")
        if user_role not in allowed_roles:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"Access denied. Required roles: {allowed_roles}, your role: {user_role}"
            )

        return current_user_data

    return dependency


def authorize_self(
    user_id: int,
    current_user=Depends(get_current_user([UserRole.USER.value])),
):
    """Only the user themselves may act on /users/{user_id}/... resources."""
    if current_user["id"] != user_id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Forbidden: You do not have permission to perform this action on another user's resource.",
        )
    return current_user


def ensure_gym_admin(current_user=Depends(get_current_user([UserRole.GYM_ADMIN.value]))):
    return current_user


# --- Ownership checks for gym admins ---

def require_gym_owner(db: Session, admin_id: int, gym_id: int) -> None:
    if not GymAdminService(db).owns_gym(admin_id, gym_id):
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Forbidden: you do not manage this gym")


def require_session_owner(db: Session, admin_id: int, session_id: int) -> None:
    if not GymAdminService(db).owns_session(admin_id, session_id):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Forbidden: you do not manage the gym for this session",
        )


def require_announcement_owner(db: Session, admin_id: int, announcement_id: int) -> None:
    if not GymAdminService(db).owns_announcement(admin_id, announcement_id):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Forbidden: you do not manage the gym for this announcement",
        )
