"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class InvalidProfileError(DomainException):
    """Profile data cannot be turned into a consistent snapshot"""

    pass
