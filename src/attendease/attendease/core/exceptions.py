class DomainError(Exception):
    """Base exception for business rule violations."""

    status_code = 400
    code = "DOMAIN_ERROR"


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""

    code = "VALIDATION_ERROR"


class DuplicateActionError(DomainError):
    """Raised when the requested action repeats the previous session type."""

    code = "DUPLICATE_ACTION"


class NoCheckInYetError(DomainError):
    """Raised on a check-out before any check-in of the day."""

    code = "NO_CHECK_IN"


class GeofenceViolationError(DomainError):
    """Raised when the submitted location is outside every active geofence."""

    status_code = 403
    code = "OUTSIDE_GEOFENCE"

    def __init__(self, nearest_distance: int):
        super().__init__(
            f"You are {nearest_distance}m away from the nearest allowed location. Please move closer."
        )
        self.nearest_distance = nearest_distance


class RateLimitedError(DomainError):
    """Raised when a user sends too many actions in a short window."""

    status_code = 429
    code = "RATE_LIMITED"


class CollaboratorError(Exception):
    """Failure of an external collaborator (geocoder, mail server, ...).

    Never surfaced to callers of the primary operations.
    """
