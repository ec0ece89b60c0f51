"""Platform status API: per-version statuses with history, transitions, add/remove platform."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request, Response

from trackplan.api.v1.dependencies import (
    CanChangeStatuses,
    CanEdit,
    CanView,
    get_platform_status_query_service,
    get_platform_status_service,
)
from trackplan.application.use_cases.events import PlatformStatusService
from trackplan.core.limiter import limit_writes
from trackplan.domain.enums import Platform
from trackplan.schemas.platform_status import (
    AddPlatformRequest,
    PlatformStatusResponse,
    PlatformStatusUpdateRequest,
)

router = APIRouter()


@router.get("/{event_id}/platform-statuses", response_model=list[PlatformStatusResponse])
async def list_platform_statuses(
    event_id: str,
    _: CanView,
    status_service: Annotated[
        PlatformStatusService, Depends(get_platform_status_query_service)
    ],
    version: Annotated[int | None, Query(ge=1)] = None,
):
    """Statuses of one version (current by default), each with its history."""
    items = await status_service.list_platform_statuses(event_id, version)
    return [PlatformStatusResponse.from_result(i) for i in items]


@router.post(
    "/{event_id}/platform-statuses",
    response_model=PlatformStatusResponse,
    status_code=201,
)
@limit_writes
async def add_platform(
    request: Request,
    event_id: str,
    body: AddPlatformRequest,
    _: CanEdit,
    status_service: Annotated[PlatformStatusService, Depends(get_platform_status_service)],
):
    """Add a platform to the current version with a draft/pending status."""
    await status_service.add_platform(event_id, body.platform)
    return PlatformStatusResponse.from_result(
        await status_service.get_event_platform_status(event_id, body.platform)
    )


@router.get(
    "/{event_id}/platform-statuses/{platform}", response_model=PlatformStatusResponse
)
async def get_platform_status(
    event_id: str,
    platform: Platform,
    _: CanView,
    status_service: Annotated[
        PlatformStatusService, Depends(get_platform_status_query_service)
    ],
    version: Annotated[int | None, Query(ge=1)] = None,
):
    return PlatformStatusResponse.from_result(
        await status_service.get_event_platform_status(event_id, platform, version)
    )


@router.patch(
    "/{event_id}/platform-statuses/{platform}", response_model=PlatformStatusResponse
)
@limit_writes
async def set_platform_status(
    request: Request,
    event_id: str,
    platform: Platform,
    body: PlatformStatusUpdateRequest,
    current_user: CanChangeStatuses,
    status_service: Annotated[PlatformStatusService, Depends(get_platform_status_service)],
):
    """Change statuses; one history entry is recorded per field that actually changes."""
    result = await status_service.set_platform_status(
        event_id, platform, body.to_change(), current_user.id
    )
    return PlatformStatusResponse.from_result(result)


@router.delete("/{event_id}/platform-statuses/{platform}", status_code=204)
@limit_writes
async def remove_platform(
    request: Request,
    event_id: str,
    platform: Platform,
    _: CanEdit,
    status_service: Annotated[PlatformStatusService, Depends(get_platform_status_service)],
):
    """Remove a platform from the current version with its status and history."""
    await status_service.remove_platform(event_id, platform)
    return Response(status_code=204)
