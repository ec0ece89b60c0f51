"""Domain layer: enums, value objects, permissions, and exceptions.

No dependencies on infrastructure or presentation. Used by application
and infrastructure layers.
"""

from trackplan.domain.enums import (
    ImplementationStatus,
    Platform,
    StatusType,
    UserRole,
    ValidationStatus,
)
from trackplan.domain.exceptions import (
    AuthenticationException,
    AuthorizationException,
    ConflictException,
    ResourceNotFoundException,
    TrackplanException,
    ValidationException,
    VersionConflictException,
)
from trackplan.domain.permissions import Capability, RolePermissions, permissions_for
from trackplan.domain.value_objects import PropertySpec

__all__ = [
    "AuthenticationException",
    "AuthorizationException",
    "Capability",
    "ConflictException",
    "ImplementationStatus",
    "Platform",
    "PropertySpec",
    "ResourceNotFoundException",
    "RolePermissions",
    "StatusType",
    "TrackplanException",
    "UserRole",
    "ValidationException",
    "ValidationStatus",
    "VersionConflictException",
    "permissions_for",
]
