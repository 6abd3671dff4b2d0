import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from gymbook.auth.permissions import get_current_user
from gymbook.dependencies import get_db
from gymbook.errors.base import NotFoundError, ValidationFailure
from gymbook.models.user import UserRole
from gymbook.schemas.common import ApiResponse
from gymbook.schemas.payment import CheckoutRequest, CheckoutResponse, PaymentResponse
from gymbook.schemas.subscription import SubscriptionResponse
from gymbook.services.payment import PaymentService
from gymbook.utils.responses import success_response

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/payments", tags=["Payments"])


@router.post("/checkout/{package_id}", response_model=ApiResponse[CheckoutResponse])
def process_payment(
    package_id: str,
    data: CheckoutRequest,
    current_user=Depends(get_current_user([UserRole.USER.value])),
    db: Session = Depends(get_db),
):
    """
    Оплата пакета (mock). package_id - бизнес-идентификатор пакета,
    сумма берется из каталога, пользователь - из токена.
    """
    service = PaymentService(db)
    try:
        result = service.checkout(
            user_id=current_user["id"],
            package_code=package_id,
            card_number=data.card_number,
            expiry_date=data.expiry_date,
            cvv=data.cvv,
        )
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)
    except ValidationFailure as e:
        raise HTTPException(status_code=400, detail=e.message)

    response = CheckoutResponse(
        transaction_id=result.transaction_id,
        status=result.status,
        amount=result.amount,
        subscription=SubscriptionResponse.model_validate(result.subscription) if result.subscription else None,
        warning=result.warning,
    )
    return success_response(response, "Payment processed successfully")


@router.get("/history", response_model=ApiResponse[List[PaymentResponse]])
def get_payment_history(
    skip: int = 0,
    limit: int = 100,
    current_user=Depends(get_current_user([UserRole.USER.value])),
    db: Session = Depends(get_db),
):
    payments = PaymentService(db).get_payment_history(current_user["id"], skip=skip, limit=limit)
    return success_response([PaymentResponse.model_validate(p) for p in payments], "Payment history retrieved successfully")
