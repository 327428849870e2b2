"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class InvalidInputError(DomainException):
    """Ledger or profile data violates a precondition (negative amount, bad percentage, unknown kind)"""

    pass


class ProviderUnavailable(DomainException):
    """Advice text provider failed, timed out, or is disabled"""

    pass


class InsufficientDataError(DomainException):
    """Not enough history to compute the requested metric"""

    pass


class ProfileNotFoundError(DomainException):
    """No financial profile exists for the user"""

    pass


class EntryNotFoundError(DomainException):
    """Ledger entry does not exist or belongs to another user"""

    pass
