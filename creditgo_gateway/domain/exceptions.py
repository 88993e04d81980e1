"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class MessageStoreUnavailableError(DomainException):
    """Device message export is missing, unreadable or malformed"""

    pass


class ProfileNotFoundError(DomainException):
    """No financial profile has been stored for the user"""

    pass
