# gymbook/errors/subscription_errors.py
from gymbook.errors.base import NotFoundError


class SubscriptionPackageNotFound(NotFoundError):
    def __init__(self):
        super().__init__("Subscription package not found")


class SubscriptionNotFound(NotFoundError):
    """Raised when a subscription is missing or owned by another user."""

    def __init__(self):
        super().__init__("Subscription not found")
