"""Event version history API."""

from typing import Annotated

from fastapi import APIRouter, Depends, Path

from trackplan.api.v1.dependencies import CanView, get_event_query_service
from trackplan.application.use_cases.events import EventService
from trackplan.schemas.event import EventVersionResponse

router = APIRouter()


@router.get("/{event_id}/versions", response_model=list[EventVersionResponse])
async def list_versions(
    event_id: str,
    _: CanView,
    event_service: Annotated[EventService, Depends(get_event_query_service)],
):
    """All versions of the event, newest first."""
    versions = await event_service.list_versions(event_id)
    return [EventVersionResponse.model_validate(v) for v in versions]


@router.get("/{event_id}/versions/{version}", response_model=EventVersionResponse)
async def get_version(
    event_id: str,
    version: Annotated[int, Path(ge=1)],
    _: CanView,
    event_service: Annotated[EventService, Depends(get_event_query_service)],
):
    return EventVersionResponse.model_validate(
        await event_service.get_version(event_id, version)
    )
