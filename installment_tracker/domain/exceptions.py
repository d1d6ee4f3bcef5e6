"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class InvalidScheduleParameters(DomainException):
    """Schedule generator received a non-positive duration or a non-finite amount"""

    pass


class ValidationError(DomainException):
    """Plan input (name, start, duration, amount) is missing or malformed"""

    pass


class NotFoundError(DomainException):
    """Operation referenced a plan id that is not in the collection"""

    pass


class IndexOutOfRange(DomainException):
    """Due index is outside [0, duration_months)"""

    pass


class InvalidSnapshot(DomainException):
    """Imported snapshot has the wrong shape or breaks a plan invariant"""

    pass
