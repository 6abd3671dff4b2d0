# gymbook/errors/payment_errors.py
from gymbook.errors.base import ValidationFailure


class PaymentValidationError(ValidationFailure):
    """Raised when a payment instrument field is rejected."""
    pass


class InvalidAmount(PaymentValidationError):
    def __init__(self):
        super().__init__("Invalid amount")


class InvalidCardNumber(PaymentValidationError):
    def __init__(self):
        super().__init__("cardNumber must be a 16 digit number")


class InvalidCvv(PaymentValidationError):
    def __init__(self):
        super().__init__("Invalid cvv")


class InvalidExpiryFormat(PaymentValidationError):
    def __init__(self):
        super().__init__("Invalid expiry date format")


class CardExpired(PaymentValidationError):
    def __init__(self):
        super().__init__("Card expiry date is in the past")
