"""User administration API (admin only)."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.exc import IntegrityError

from trackplan.api.v1.dependencies import (
    IsAdmin,
    get_user_query_service,
    get_user_service,
)
from trackplan.application.dtos.user import UserCreate
from trackplan.application.use_cases.users import UserService
from trackplan.core.limiter import limit_writes
from trackplan.domain.exceptions import UserAlreadyExistsException
from trackplan.schemas.user import UserCreateRequest, UserResponse

router = APIRouter()


@router.get("", response_model=list[UserResponse])
async def list_users(
    _: IsAdmin,
    user_service: Annotated[UserService, Depends(get_user_query_service)],
    skip: Annotated[int, Query(ge=0)] = 0,
    limit: Annotated[int, Query(ge=1, le=500)] = 100,
):
    users = await user_service.list_users(skip=skip, limit=limit)
    return [UserResponse.from_result(u) for u in users]


@router.post("", response_model=UserResponse, status_code=201)
@limit_writes
async def create_user(
    request: Request,
    body: UserCreateRequest,
    _: IsAdmin,
    user_service: Annotated[UserService, Depends(get_user_service)],
):
    try:
        user = await user_service.create_user(
            UserCreate(
                username=body.username,
                password=body.password,
                role=body.role,
                email=body.email,
                name=body.name,
            )
        )
    except IntegrityError:
        raise UserAlreadyExistsException(body.username) from None
    return UserResponse.from_result(user)


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(
    user_id: str,
    _: IsAdmin,
    user_service: Annotated[UserService, Depends(get_user_query_service)],
):
    return UserResponse.from_result(await user_service.get_user(user_id))
