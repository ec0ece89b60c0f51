"""Events API: list/filter, create, get, partial update (versioned), delete, stats."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request, Response

from trackplan.api.v1.dependencies import (
    CanCreate,
    CanDelete,
    CanEdit,
    CanView,
    get_event_query_service,
    get_event_service,
)
from trackplan.application.dtos.event import EventListFilters
from trackplan.application.use_cases.events import EventService
from trackplan.core.limiter import limit_writes
from trackplan.domain.enums import ImplementationStatus, Platform, ValidationStatus
from trackplan.schemas.event import (
    EventCreateRequest,
    EventListResponse,
    EventResponse,
    EventStatsResponse,
    EventUpdateRequest,
)

router = APIRouter()


@router.get("", response_model=EventListResponse)
async def list_events(
    _: CanView,
    event_service: Annotated[EventService, Depends(get_event_query_service)],
    search: str | None = None,
    category: str | None = None,
    platform: Platform | None = None,
    owner_id: str | None = None,
    author_id: str | None = None,
    implementation_status: ImplementationStatus | None = None,
    validation_status: ValidationStatus | None = None,
    jira: str | None = None,
    limit: Annotated[int, Query(ge=1)] = 50,
    offset: Annotated[int, Query(ge=0)] = 0,
):
    """List events newest first. Status, platform and jira filters use current-version statuses."""
    filters = EventListFilters(
        search=search,
        category=category,
        platform=platform,
        owner_id=owner_id,
        author_id=author_id,
        implementation_status=implementation_status,
        validation_status=validation_status,
        jira=jira,
        limit=limit,
        offset=offset,
    )
    page = await event_service.list_events(filters)
    return EventListResponse(
        items=[EventResponse.model_validate(e) for e in page.items],
        total=page.total,
        limit=min(limit, event_service.max_list_limit),
        offset=offset,
    )


@router.get("/stats", response_model=EventStatsResponse)
async def get_stats(
    _: CanView,
    event_service: Annotated[EventService, Depends(get_event_query_service)],
):
    return EventStatsResponse.model_validate(await event_service.get_stats())


@router.post("", response_model=EventResponse, status_code=201)
@limit_writes
async def create_event(
    request: Request,
    body: EventCreateRequest,
    current_user: CanCreate,
    event_service: Annotated[EventService, Depends(get_event_service)],
):
    """Create an event at version 1 with draft/pending statuses for each platform."""
    event = await event_service.create_event(body.to_draft(), author_id=current_user.id)
    return EventResponse.model_validate(event)


@router.get("/{event_id}", response_model=EventResponse)
async def get_event(
    event_id: str,
    _: CanView,
    event_service: Annotated[EventService, Depends(get_event_query_service)],
):
    return EventResponse.model_validate(await event_service.get_event(event_id))


@router.patch("/{event_id}", response_model=EventResponse)
@limit_writes
async def update_event(
    request: Request,
    event_id: str,
    body: EventUpdateRequest,
    current_user: CanEdit,
    event_service: Annotated[EventService, Depends(get_event_service)],
):
    """Update an event; identity changes create a new version with fresh statuses."""
    event = await event_service.update_event(
        event_id,
        body.to_changes(),
        change_description=body.change_description,
        author_id=current_user.id,
        expected_version=body.expected_version,
    )
    return EventResponse.model_validate(event)


@router.delete("/{event_id}", status_code=204)
@limit_writes
async def delete_event(
    request: Request,
    event_id: str,
    _: CanDelete,
    event_service: Annotated[EventService, Depends(get_event_service)],
):
    """Delete the event with its versions, statuses, history and comments."""
    await event_service.delete_event(event_id)
    return Response(status_code=204)
