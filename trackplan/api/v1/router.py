"""API v1 router aggregation.

Includes all endpoint modules with consistent prefix and tags.
"""

from fastapi import APIRouter

from trackplan.api.v1.endpoints import (
    alerts,
    analytics,
    auth,
    categories,
    comments,
    events,
    health,
    platform_statuses,
    users,
    versions,
)

api_router = APIRouter()

api_router.include_router(health.router, prefix="/health", tags=["health"])
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(users.router, prefix="/users", tags=["users"])
api_router.include_router(categories.router, prefix="/categories", tags=["categories"])
api_router.include_router(events.router, prefix="/events", tags=["events"])
api_router.include_router(versions.router, prefix="/events", tags=["event-versions"])
api_router.include_router(
    platform_statuses.router, prefix="/events", tags=["platform-statuses"]
)
api_router.include_router(comments.router, prefix="/events", tags=["comments"])
api_router.include_router(analytics.router, prefix="/analytics", tags=["analytics"])
api_router.include_router(alerts.router, prefix="/alerts", tags=["alerts"])
