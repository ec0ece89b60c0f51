"""User API schemas."""

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from trackplan.application.dtos.user import UserResult
from trackplan.domain.enums import UserRole


class UserCreateRequest(BaseModel):
    username: str = Field(..., min_length=1, max_length=100)
    password: str = Field(..., min_length=8, description="Password (min 8 characters)")
    role: UserRole = UserRole.VIEWER
    email: EmailStr | None = None
    name: str | None = Field(None, max_length=200)


class UserResponse(BaseModel):
    """User with the capability map of its role."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    username: str
    email: str | None = None
    name: str | None = None
    role: UserRole
    is_active: bool
    permissions: list[str]

    @classmethod
    def from_result(cls, user: UserResult) -> "UserResponse":
        return cls(
            id=user.id,
            username=user.username,
            email=user.email,
            name=user.name,
            role=user.role,
            is_active=user.is_active,
            permissions=user.permissions.granted(),
        )
