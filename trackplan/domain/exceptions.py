"""Domain exceptions for the tracking plan service.

Defines domain-level exceptions that represent business rule violations.
These exceptions are independent of infrastructure concerns. Presentation
layer maps them to HTTP responses in exception handlers.
"""

from typing import Any


class TrackplanException(Exception):
    """Base exception for all tracking plan errors.

    All custom exceptions inherit from this class to allow consistent
    error handling and logging. Presentation layer maps these to HTTP
    responses using message, error_code, and details.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. field, resource_id).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Serialize for API responses (error, message, details)."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class ValidationException(TrackplanException):
    """Raised when input validation fails (e.g. empty category name)."""

    def __init__(self, message: str, field: str | None = None) -> None:
        """Initialize with message and optional field name.

        Args:
            message: Description of the validation failure.
            field: Optional field that failed validation.
        """
        details = {"field": field} if field else {}
        self.field = field
        super().__init__(message, "VALIDATION_ERROR", details)


class ResourceNotFoundException(TrackplanException):
    """Raised when a requested resource is not found."""

    def __init__(self, resource_type: str, resource_id: str) -> None:
        """Initialize with resource type and id.

        Args:
            resource_type: Type of resource (e.g. 'event', 'event_version').
            resource_id: The ID that was not found.
        """
        super().__init__(
            f"{resource_type} not found: {resource_id}",
            "RESOURCE_NOT_FOUND",
            {"resource_type": resource_type, "resource_id": resource_id},
        )


class ConflictException(TrackplanException):
    """Raised on duplicate creation or a deletion blocked by references."""

    def __init__(
        self,
        message: str,
        reason: str,
        details_extra: dict[str, Any] | None = None,
        error_code: str = "CONFLICT",
    ) -> None:
        """Initialize with message and conflict context.

        Args:
            message: Human-readable description.
            reason: Short machine-readable reason (e.g. 'category_in_use').
            details_extra: Optional extra keys (e.g. event_count).
            error_code: Override for subclasses.
        """
        details = dict(details_extra or {})
        details["reason"] = reason
        super().__init__(message, error_code, details)


class VersionConflictException(ConflictException):
    """Raised when a concurrent request already advanced the event version (optimistic lock)."""

    def __init__(self, event_id: str, expected_version: int) -> None:
        super().__init__(
            "Event was updated by another request; reload and retry.",
            "version_changed",
            {"event_id": event_id, "expected_version": expected_version},
            error_code="VERSION_CONFLICT",
        )


class AuthenticationException(TrackplanException):
    """Raised when authentication fails (e.g. invalid credentials or token)."""

    def __init__(self, message: str = "Authentication failed") -> None:
        super().__init__(message, "AUTHENTICATION_ERROR")


class AuthorizationException(TrackplanException):
    """Raised when the user's role lacks the capability for the operation."""

    def __init__(self, capability: str | None = None, role: str | None = None) -> None:
        """Initialize with the missing capability and the caller's role.

        Args:
            capability: Capability name that was required (e.g. 'can_edit_events').
            role: Role of the acting user.
        """
        message = "Permission denied"
        details: dict[str, Any] = {}
        if capability:
            message = f"Permission denied: {capability}"
            details["capability"] = capability
        if role:
            details["role"] = role
        super().__init__(message, "PERMISSION_DENIED", details)


class UserAlreadyExistsException(TrackplanException):
    """Raised when creating a user whose username already exists."""

    def __init__(self, username: str) -> None:
        super().__init__(
            f"Username already registered: {username}",
            "USER_ALREADY_EXISTS",
            {"username": username},
        )


class AnalyticsNotConfiguredException(TrackplanException):
    """Raised when an analytics call is made but Matomo URL/token are not set."""

    def __init__(self) -> None:
        super().__init__(
            "Analytics backend is not configured (set MATOMO_URL and MATOMO_TOKEN).",
            "ANALYTICS_NOT_CONFIGURED",
        )


class AnalyticsUnavailableException(TrackplanException):
    """Raised when the analytics API returns an error or cannot be reached."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        details: dict[str, Any] = {}
        if status_code is not None:
            details["upstream_status"] = status_code
        super().__init__(message, "ANALYTICS_UNAVAILABLE", details)
