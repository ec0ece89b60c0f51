"""DTOs for user use cases (no dependency on ORM)."""

from dataclasses import dataclass

from trackplan.domain.enums import UserRole
from trackplan.domain.permissions import RolePermissions, permissions_for


@dataclass(frozen=True)
class UserResult:
    """User read-model (result of get_by_id, create_user, etc.). No password."""

    id: str
    username: str
    email: str | None
    name: str | None
    role: UserRole
    is_active: bool

    @property
    def permissions(self) -> RolePermissions:
        return permissions_for(self.role)

    @property
    def display_name(self) -> str:
        """Name shown as comment author: name, else username."""
        return self.name or self.username


@dataclass(frozen=True)
class UserCreate:
    username: str
    password: str
    role: UserRole = UserRole.VIEWER
    email: str | None = None
    name: str | None = None
