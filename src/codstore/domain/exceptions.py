"""Domain-level exceptions.

All failures are expressed as subclasses of DomainException so the HTTP
and CLI layers can catch them uniformly.  Each subclass maps to exactly
one outward behavior (400, 502, or a warning attached to a success).
"""


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A required field is missing or malformed.

    ``field`` names the offending input when there is a single one.
    """

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message)
        self.field = field


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class RouteResolutionError(DomainException):
    """City / zone / area listing or price lookup failed upstream."""


class DeliveryProviderError(DomainException):
    """The courier rejected or could not receive a consignment request."""


class AuditSinkError(DomainException):
    """The order log did not accept the record; the order is not placed."""
