"""Role → permission capability map.

Each role maps to one fixed RolePermissions record. Route dependencies
check a single Capability per request; the versioning core assumes the
caller is already authorized.
"""

from dataclasses import dataclass, fields
from enum import Enum

from trackplan.domain.enums import UserRole


class Capability(str, Enum):
    """Boolean capabilities a role may hold (field names of RolePermissions)."""

    VIEW_EVENTS = "can_view_events"
    CREATE_EVENTS = "can_create_events"
    EDIT_EVENTS = "can_edit_events"
    DELETE_EVENTS = "can_delete_events"
    CHANGE_STATUSES = "can_change_statuses"
    COMMENT = "can_comment"
    MANAGE_ALERTS = "can_manage_alerts"
    ADMINISTER = "can_administer"


@dataclass(frozen=True)
class RolePermissions:
    """Fixed set of boolean permissions for one role."""

    can_view_events: bool = True
    can_create_events: bool = False
    can_edit_events: bool = False
    can_delete_events: bool = False
    can_change_statuses: bool = False
    can_comment: bool = True
    can_manage_alerts: bool = False
    can_administer: bool = False

    def allows(self, capability: Capability) -> bool:
        return bool(getattr(self, capability.value))

    def granted(self) -> list[str]:
        """Names of capabilities set to True (for /auth/me)."""
        return [f.name for f in fields(self) if getattr(self, f.name)]


ROLE_PERMISSIONS: dict[UserRole, RolePermissions] = {
    UserRole.VIEWER: RolePermissions(),
    UserRole.DEVELOPER: RolePermissions(can_change_statuses=True),
    UserRole.ANALYST: RolePermissions(
        can_create_events=True,
        can_edit_events=True,
        can_change_statuses=True,
        can_manage_alerts=True,
    ),
    UserRole.ADMIN: RolePermissions(
        can_create_events=True,
        can_edit_events=True,
        can_delete_events=True,
        can_change_statuses=True,
        can_manage_alerts=True,
        can_administer=True,
    ),
}


def permissions_for(role: UserRole) -> RolePermissions:
    """Return the permission record for a role."""
    return ROLE_PERMISSIONS[role]
