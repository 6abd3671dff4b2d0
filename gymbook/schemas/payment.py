from datetime import datetime
from typing import Optional, Union

from pydantic import Field

from gymbook.models.payment import PaymentStatus
from gymbook.schemas.common import CamelModel
from gymbook.schemas.subscription import SubscriptionResponse


class CheckoutRequest(CamelModel):
    """
    Данные карты. Поля намеренно не валидируются схемой:
    проверки с понятными сообщениями делает PaymentService.
    Клиентская сумма игнорируется, цена берется из каталога.
    """
    card_number: Optional[Union[str, int]] = None
    expiry_date: Optional[str] = None
    cvv: Optional[Union[str, int]] = None


class CheckoutResponse(CamelModel):
    transaction_id: str
    status: PaymentStatus
    amount: float
    subscription: Optional[SubscriptionResponse] = None
    warning: Optional[str] = None


class PaymentResponse(CamelModel):
    id: int
    transaction_id: str
    status: PaymentStatus
    amount: float
    user_id: Optional[int] = None
    package_id: Optional[int] = None
    created_at: datetime
