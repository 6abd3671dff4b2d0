# gymbook/errors/gym_errors.py
from gymbook.errors.base import NotFoundError, PermissionDenied


class GymNotFound(NotFoundError):
    def __init__(self):
        super().__init__("Gym not found")


class GymManagedByAnotherAdmin(PermissionDenied):
    """Raised when an admin tries to take over a gym that already has owners."""

    def __init__(self):
        super().__init__("Forbidden: this gym is managed by another admin")


class AnnouncementNotFound(NotFoundError):
    def __init__(self):
        super().__init__("Announcement not found")
