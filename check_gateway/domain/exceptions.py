"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class SnapshotUnavailableError(DomainException):
    """Check store returned an error, timed out, or sent an unreadable snapshot"""

    pass


class NotificationNotFoundError(DomainException):
    """No notification with the requested id in the inbox"""

    pass
