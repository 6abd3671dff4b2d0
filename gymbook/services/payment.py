import logging
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, List, Optional

from sqlalchemy.orm import Session

from gymbook.crud import payment as crud
from gymbook.database import transactional
from gymbook.models import Payment, PaymentStatus, Subscription
from gymbook.services.subscription import SubscriptionService
from gymbook.validators.payment_validators import validate_payment_details

logger = logging.getLogger(__name__)

SUBSCRIPTION_WARNING = "Payment succeeded but the subscription could not be created"


def generate_transaction_id() -> str:
    """Opaque, collision-free transaction identifier."""
    return f"txn_{uuid.uuid4().hex}"


@dataclass
class CheckoutResult:
    transaction_id: str
    status: PaymentStatus
    amount: float
    subscription: Optional[Subscription] = None
    warning: Optional[str] = None


class PaymentService:
    """
    Mock payment gateway. A successful payment is recorded first and is never
    rolled back; the subscription is assigned afterwards on a best-effort basis.
    """

    def __init__(self, db: Session):
        self.db = db
        self.subscription_service = SubscriptionService(db)

    def get_payment_history(self, user_id: int, skip: int = 0, limit: int = 100) -> List[Payment]:
        return crud.get_user_payments(self.db, user_id, skip=skip, limit=limit)

    def checkout(
        self,
        user_id: int,
        package_code: str,
        card_number: Any,
        expiry_date: Any,
        cvv: Any,
    ) -> CheckoutResult:
        """
        Pays for a catalogue package and subscribes the user to it.

        Raises:
            SubscriptionPackageNotFound: unknown package code
            PaymentValidationError: rejected card details
        """
        package = self.subscription_service.get_package_by_code(package_code)

        # Сумма всегда берется из каталога
        amount = validate_payment_details(
            amount=package.price,
            card_number=card_number,
            cvv=cvv,
            expiry_date=expiry_date,
        )

        with transactional(self.db) as session:
            payment = crud.create_payment(
                session,
                transaction_id=generate_transaction_id(),
                amount=amount,
                user_id=user_id,
                package_id=package.id,
                status=PaymentStatus.SUCCESS,
            )
        logger.info(f"Payment {payment.transaction_id} of {amount} recorded for user {user_id} ({package.code})")

        result = CheckoutResult(
            transaction_id=payment.transaction_id,
            status=payment.status,
            amount=payment.amount,
        )

        try:
            result.subscription = self.subscription_service.assign_subscription(
                user_id=user_id,
                package_id=package.id,
                start_date=datetime.now(timezone.utc),
            )
        except Exception as e:
            logger.error(
                f"Payment {payment.transaction_id} succeeded but subscription assignment failed "
                f"for user {user_id}: {str(e)}"
            )
            result.warning = SUBSCRIPTION_WARNING

        return result
