"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class InvalidPlanRequest(DomainException):
    """Plan request is structurally invalid (counts, cadence, rate, principal)"""

    pass


class InvalidAmount(DomainException, ValueError):
    """Raw monetary input could not be parsed to a finite decimal"""

    pass


class CreditAPIError(DomainException):
    """Credit-creation API returned an error or is unavailable"""

    pass
