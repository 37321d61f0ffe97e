"""Domain errors for FleetGrid.

Every failure a caller can trigger is raised as one of these typed errors at
the point of detection. The API layer translates them into HTTP responses in
a single place (see ``infrastructure/api/app.py``).
"""


class FleetGridError(Exception):
    """Base class for all domain errors."""

    title = "Error"

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class UnauthorizedError(FleetGridError):
    """Raised when no valid credential accompanies the request."""

    title = "Unauthorized"

    def __init__(self, message: str = "Unauthorized") -> None:
        super().__init__(message)


class ForbiddenRoleError(FleetGridError):
    """Raised when the caller's role does not allow the operation."""

    title = "Forbidden"


class ValidationError(FleetGridError):
    """Raised for malformed input: missing fields, wrong types, bad identifiers."""

    title = "Validation error"


class ConflictError(FleetGridError):
    """Raised when a write collides with existing state (duplicate email, stale version)."""

    title = "Conflict"


class NotFoundError(FleetGridError):
    """Raised for missing resources and for ownership mismatches alike."""

    title = "Not found"
