import logging
from datetime import datetime, timezone, timedelta
from typing import List, Optional

from sqlalchemy.orm import Session

from gymbook.crud import subscription as crud
from gymbook.crud import user as user_crud
from gymbook.database import transactional
from gymbook.errors.booking_errors import UserNotFound
from gymbook.errors.subscription_errors import (
    SubscriptionPackageNotFound,
    SubscriptionNotFound,
)
from gymbook.models import Subscription, SubscriptionPackage
from gymbook.schemas.subscription import SubscriptionUpdate

logger = logging.getLogger(__name__)


class SubscriptionService:
    def __init__(self, db: Session):
        self.db = db

    # --- Catalogue (read only) ---

    def get_packages(self) -> List[SubscriptionPackage]:
        return crud.get_packages(self.db)

    def get_package_by_code(self, code: str) -> SubscriptionPackage:
        package = crud.get_package_by_code(self.db, code)
        if not package:
            raise SubscriptionPackageNotFound()
        return package

    def get_user_subscriptions(self, user_id: int) -> List[Subscription]:
        if not user_crud.get_user_by_id(self.db, user_id):
            raise UserNotFound()
        return crud.get_user_subscriptions(self.db, user_id)

    # --- Public Methods (Transactional) ---

    def assign_subscription(
        self,
        user_id: int,
        package_id: int,
        start_date: Optional[datetime] = None,
    ) -> Subscription:
        """
        Creates a subscription from a package and marks the user as subscribed.

        Other active subscriptions of the user stay active.
        """
        with transactional(self.db) as session:
            return self._assign_subscription_logic(session, user_id, package_id, start_date)

    def cancel_subscription(self, user_id: int, subscription_id: int) -> Subscription:
        """
        Deactivates the subscription. packageID moves to the newest remaining
        active subscription; the flags are cleared only when
        no other active subscription is left.
        """
        with transactional(self.db) as session:
            return self._cancel_subscription_logic(session, user_id, subscription_id)

    def update_subscription(self, user_id: int, subscription_id: int, data: SubscriptionUpdate) -> Subscription:
        """
        Changes the start date (the end date follows the package duration)
        and/or the active flag of the user's own subscription.
        """
        with transactional(self.db) as session:
            return self._update_subscription_logic(session, user_id, subscription_id, data)

    # --- Private Logic Methods (Non-Transactional) ---

    def _assign_subscription_logic(
        self,
        session: Session,
        user_id: int,
        package_id: int,
        start_date: Optional[datetime],
    ) -> Subscription:
        package = crud.get_package_by_id(session, package_id)
        if not package:
            raise SubscriptionPackageNotFound()

        user = user_crud.get_user_by_id(session, user_id)
        if not user:
            raise UserNotFound()

        start_date = start_date or datetime.now(timezone.utc)
        end_date = start_date + timedelta(days=package.duration_days)

        subscription = crud.create_subscription(
            session,
            user_id=user_id,
            package_id=package.id,
            start_date=start_date,
            end_date=end_date,
        )
        user_crud.set_subscription_flags(session, user, is_subscribed=True, package_code=package.code)

        logger.info(
            f"Subscription {subscription.id} ({package.code}) assigned to user {user_id}, "
            f"{start_date.isoformat()} - {end_date.isoformat()}"
        )
        return subscription

    def _update_subscription_logic(
        self,
        session: Session,
        user_id: int,
        subscription_id: int,
        data: SubscriptionUpdate,
    ) -> Subscription:
        subscription = crud.get_user_subscription(session, user_id, subscription_id)
        if not subscription:
            raise SubscriptionNotFound()

        update_data = data.model_dump(exclude_unset=True)
        if "start_date" in update_data:
            update_data["end_date"] = update_data["start_date"] + timedelta(days=subscription.package.duration_days)

        crud.update_subscription(session, subscription, update_data)
        if "is_active" in update_data:
            self._sync_user_flags(session, user_id)

        logger.info(f"Subscription {subscription_id} of user {user_id} updated: {sorted(update_data)}")
        return subscription

    def _cancel_subscription_logic(self, session: Session, user_id: int, subscription_id: int) -> Subscription:
        subscription = crud.get_user_subscription(session, user_id, subscription_id)
        if not subscription:
            raise SubscriptionNotFound()

        crud.deactivate_subscription(session, subscription)
        self._sync_user_flags(session, user_id)

        logger.info(f"Subscription {subscription_id} of user {user_id} cancelled")
        return subscription

    def _sync_user_flags(self, session: Session, user_id: int) -> None:
        """packageID - пакет самой новой активной подписки, без активных подписок флаги сбрасываются"""
        user = user_crud.get_user_by_id(session, user_id)
        active = crud.get_active_subscriptions(session, user_id)
        if active:
            user_crud.set_subscription_flags(session, user, is_subscribed=True, package_code=active[0].package.code)
        else:
            user_crud.set_subscription_flags(session, user, is_subscribed=False, package_code=None)
            logger.info(f"User {user_id} has no active subscriptions left")
