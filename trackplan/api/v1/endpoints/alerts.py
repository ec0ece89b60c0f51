"""Drop alerts API: list, delete, run a check, and alert settings."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request, Response

from trackplan.api.v1.dependencies import (
    CanManageAlerts,
    CanView,
    IsAdmin,
    get_alert_query_service,
    get_alert_service,
    get_drop_detection_service,
)
from trackplan.application.use_cases.alerts import AlertService, DropDetectionService
from trackplan.core.limiter import limit_alert_check, limit_writes
from trackplan.schemas.alert import (
    AlertBulkDeleteRequest,
    AlertCheckResponse,
    AlertDeleteResponse,
    AlertListResponse,
    AlertResponse,
    AlertSettingsRequest,
    AlertSettingsResponse,
)

router = APIRouter()


@router.get("", response_model=AlertListResponse)
async def list_alerts(
    _: CanView,
    alert_service: Annotated[AlertService, Depends(get_alert_query_service)],
    limit: Annotated[int, Query(ge=1, le=500)] = 50,
    offset: Annotated[int, Query(ge=0)] = 0,
):
    page = await alert_service.list_alerts(limit, offset)
    return AlertListResponse(
        items=[AlertResponse.model_validate(a) for a in page.items],
        total=page.total,
        limit=limit,
        offset=offset,
    )


@router.delete("", response_model=AlertDeleteResponse)
@limit_writes
async def delete_alerts(
    request: Request,
    body: AlertBulkDeleteRequest,
    _: CanManageAlerts,
    alert_service: Annotated[AlertService, Depends(get_alert_service)],
):
    return AlertDeleteResponse(deleted=await alert_service.delete_alerts(body.ids))


@router.post("/check", response_model=AlertCheckResponse)
@limit_alert_check
async def run_check(
    request: Request,
    _: CanManageAlerts,
    detection: Annotated[DropDetectionService, Depends(get_drop_detection_service)],
):
    """Run a drop check now (yesterday vs the day before)."""
    return AlertCheckResponse.model_validate(await detection.check_drops())


@router.get("/settings", response_model=AlertSettingsResponse)
async def get_alert_settings(
    _: IsAdmin,
    alert_service: Annotated[AlertService, Depends(get_alert_query_service)],
):
    return AlertSettingsResponse.from_result(await alert_service.get_settings())


@router.put("/settings", response_model=AlertSettingsResponse)
@limit_writes
async def update_alert_settings(
    request: Request,
    body: AlertSettingsRequest,
    _: IsAdmin,
    alert_service: Annotated[AlertService, Depends(get_alert_service)],
):
    """Store settings; omitted token keeps the stored one, empty token clears it."""
    return AlertSettingsResponse.from_result(
        await alert_service.save_settings(body.to_update())
    )


@router.delete("/{alert_id}", status_code=204)
@limit_writes
async def delete_alert(
    request: Request,
    alert_id: str,
    _: CanManageAlerts,
    alert_service: Annotated[AlertService, Depends(get_alert_service)],
):
    await alert_service.delete_alert(alert_id)
    return Response(status_code=204)
