import calendar
import math
import re
from datetime import date, datetime
from typing import Any, Optional

from gymbook.errors.payment_errors import (
    InvalidAmount,
    InvalidCardNumber,
    InvalidCvv,
    InvalidExpiryFormat,
    CardExpired,
)


_CARD_NUMBER_RE = re.compile(r"^[0-9]{16}$")
_CVV_RE = re.compile(r"^[0-9]{3,4}$")
_MONTH_YEAR_RE = re.compile(r"^([0-9]{1,2})/([0-9]{2}|[0-9]{4})$")  # MM/YY, MM/YYYY
_YEAR_MONTH_RE = re.compile(r"^([0-9]{4})-([0-9]{1,2})$")  # YYYY-MM


# =============================================================================
# ВАЛИДАЦИЯ ДАННЫХ КАРТЫ
# =============================================================================

def validate_amount(amount: Any) -> float:
    """
    Сумма должна быть числом больше нуля
    """
    if amount is None or isinstance(amount, bool):
        raise InvalidAmount()
    try:
        value = float(amount)
    except (TypeError, ValueError):
        raise InvalidAmount()
    if math.isnan(value) or value <= 0:
        raise InvalidAmount()
    return value


def validate_card_number(card_number: Any) -> str:
    """
    Номер карты без пробелов должен состоять ровно из 16 цифр
    """
    if card_number is None:
        raise InvalidCardNumber()
    normalized = re.sub(r"\s+", "", str(card_number))
    if not _CARD_NUMBER_RE.match(normalized):
        raise InvalidCardNumber()
    return normalized


def validate_cvv(cvv: Any) -> str:
    if cvv is None:
        raise InvalidCvv()
    normalized = str(cvv).strip()
    if not _CVV_RE.match(normalized):
        raise InvalidCvv()
    return normalized


def _last_day_of_month(year: int, month: int) -> date:
    if not 1 <= month <= 12:
        raise InvalidExpiryFormat()
    return date(year, month, calendar.monthrange(year, month)[1])


def parse_expiry_date(value: Any) -> date:
    """
    Разбор срока действия карты.

    Форматы MM/YY, MM/YYYY и YYYY-MM означают последний день месяца,
    ISO-дата (2030-12-31, 2030-12-31T00:00:00Z) - сам этот день.
    """
    if not isinstance(value, str) or not value.strip():
        raise InvalidExpiryFormat()
    value = value.strip()
    if not value.isascii():
        raise InvalidExpiryFormat()

    match = _MONTH_YEAR_RE.match(value)
    if match:
        month, year = int(match.group(1)), match.group(2)
        full_year = 2000 + int(year) if len(year) == 2 else int(year)
        return _last_day_of_month(full_year, month)

    match = _YEAR_MONTH_RE.match(value)
    if match:
        return _last_day_of_month(int(match.group(1)), int(match.group(2)))

    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00")).date()
    except ValueError:
        raise InvalidExpiryFormat()


def validate_expiry_not_past(expiry: date, today: Optional[date] = None) -> date:
    today = today or date.today()
    if expiry < today:
        raise CardExpired()
    return expiry


def validate_payment_details(
    amount: Any,
    card_number: Any,
    cvv: Any,
    expiry_date: Any,
    today: Optional[date] = None,
) -> float:
    """
    Проверки в фиксированном порядке: сумма, номер карты, cvv, формат срока,
    срок не в прошлом. Первая неудачная проверка выбрасывает PaymentValidationError.

    Returns:
        проверенная сумма
    """
    checked_amount = validate_amount(amount)
    validate_card_number(card_number)
    validate_cvv(cvv)
    expiry = parse_expiry_date(expiry_date)
    validate_expiry_not_past(expiry, today)
    return checked_amount
