"""Auth API: login and current user."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from trackplan.api.v1.dependencies import CurrentUser, get_user_query_service
from trackplan.application.use_cases.users import UserService
from trackplan.core.limiter import limit_auth
from trackplan.schemas.auth import LoginRequest, TokenResponse
from trackplan.schemas.user import UserResponse

router = APIRouter()


@router.post("/login", response_model=TokenResponse)
@limit_auth
async def login(
    request: Request,
    body: LoginRequest,
    user_service: Annotated[UserService, Depends(get_user_query_service)],
):
    """Authenticate with username and password; return a bearer token."""
    token = await user_service.login(body.username, body.password)
    return TokenResponse(access_token=token)


@router.get("/me", response_model=UserResponse)
async def get_me(current_user: CurrentUser):
    """Return the authenticated user and the capabilities of their role."""
    return UserResponse.from_result(current_user)
