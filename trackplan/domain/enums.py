"""Domain enumerations for the tracking plan.

Enums represent fixed sets of domain values (platforms, rollout statuses, roles).
"""

from enum import Enum


class Platform(str, Enum):
    """Platform an event is implemented on."""

    WEB = "web"
    IOS = "ios"
    ANDROID = "android"
    BACKEND = "backend"

    @classmethod
    def values(cls) -> list[str]:
        """Return all valid platform values as strings."""
        return [platform.value for platform in cls]


class ImplementationStatus(str, Enum):
    """Implementation state of an event on one platform for one version."""

    DRAFT = "draft"
    IN_DEVELOPMENT = "in_development"
    IMPLEMENTED = "implemented"
    ARCHIVED = "archived"


class ValidationStatus(str, Enum):
    """Validation state of an event on one platform for one version."""

    PENDING = "pending"
    VALID = "valid"
    ERROR = "error"
    WARNING = "warning"


class StatusType(str, Enum):
    """Which status field a history entry records."""

    IMPLEMENTATION = "implementation"
    VALIDATION = "validation"


class UserRole(str, Enum):
    """User role; mapped to a fixed permission set in domain.permissions."""

    VIEWER = "viewer"
    DEVELOPER = "developer"
    ANALYST = "analyst"
    ADMIN = "admin"
