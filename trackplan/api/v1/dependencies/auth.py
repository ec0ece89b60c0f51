"""Authentication and role-capability dependencies."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from trackplan.application.dtos.user import UserResult
from trackplan.core.config import Settings, get_settings
from trackplan.domain.exceptions import AuthenticationException, AuthorizationException
from trackplan.domain.permissions import Capability
from trackplan.infrastructure.persistence.database import get_db
from trackplan.infrastructure.persistence.repositories import UserRepository
from trackplan.infrastructure.security.jwt import verify_token

_http_bearer = HTTPBearer(auto_error=False)


async def get_current_user_optional(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(_http_bearer)],
    db: Annotated[AsyncSession, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> UserResult | None:
    """Return current user from the bearer token if present and valid; else None."""
    if not credentials:
        return None
    try:
        payload = verify_token(credentials.credentials, settings)
    except ValueError:
        return None
    user_id = payload.get("sub")
    if not user_id:
        return None
    user = await UserRepository(db).get_by_id(user_id)
    if user is None or not user.is_active:
        return None
    return user


async def get_current_user(
    current_user: Annotated[UserResult | None, Depends(get_current_user_optional)],
) -> UserResult:
    """Return current user; 401 if the token is missing or invalid."""
    if current_user is None:
        raise AuthenticationException("Not authenticated")
    return current_user


def require_permission(capability: Capability):
    """Dependency factory: require an authenticated user whose role grants capability."""

    async def _require(
        current_user: Annotated[UserResult, Depends(get_current_user)],
    ) -> UserResult:
        if not current_user.permissions.allows(capability):
            raise AuthorizationException(capability.value, current_user.role.value)
        return current_user

    return _require


CurrentUser = Annotated[UserResult, Depends(get_current_user)]
CanView = Annotated[UserResult, Depends(require_permission(Capability.VIEW_EVENTS))]
CanCreate = Annotated[UserResult, Depends(require_permission(Capability.CREATE_EVENTS))]
CanEdit = Annotated[UserResult, Depends(require_permission(Capability.EDIT_EVENTS))]
CanDelete = Annotated[UserResult, Depends(require_permission(Capability.DELETE_EVENTS))]
CanChangeStatuses = Annotated[
    UserResult, Depends(require_permission(Capability.CHANGE_STATUSES))
]
CanComment = Annotated[UserResult, Depends(require_permission(Capability.COMMENT))]
CanManageAlerts = Annotated[
    UserResult, Depends(require_permission(Capability.MANAGE_ALERTS))
]
IsAdmin = Annotated[UserResult, Depends(require_permission(Capability.ADMINISTER))]
