"""Presentation-layer dependency injection (composition root).

Routes depend only on these dependencies, not on infrastructure directly.
Write services share the request transaction (get_db_transactional); query
services use a plain session (get_db).
"""

from trackplan.api.v1.dependencies.auth import (
    CanChangeStatuses,
    CanComment,
    CanCreate,
    CanDelete,
    CanEdit,
    CanManageAlerts,
    CanView,
    CurrentUser,
    IsAdmin,
    get_current_user,
    get_current_user_optional,
    require_permission,
)
from trackplan.api.v1.dependencies.services import (
    get_alert_query_service,
    get_alert_service,
    get_analytics_cache,
    get_analytics_service,
    get_category_query_service,
    get_category_service,
    get_comment_query_service,
    get_comment_service,
    get_drop_detection_service,
    get_event_query_service,
    get_event_service,
    get_http_client,
    get_platform_status_query_service,
    get_platform_status_service,
    get_user_query_service,
    get_user_service,
)

__all__ = [
    "CanChangeStatuses",
    "CanComment",
    "CanCreate",
    "CanDelete",
    "CanEdit",
    "CanManageAlerts",
    "CanView",
    "CurrentUser",
    "IsAdmin",
    "get_alert_query_service",
    "get_alert_service",
    "get_analytics_cache",
    "get_analytics_service",
    "get_category_query_service",
    "get_category_service",
    "get_comment_query_service",
    "get_comment_service",
    "get_current_user",
    "get_current_user_optional",
    "get_drop_detection_service",
    "get_event_query_service",
    "get_event_service",
    "get_http_client",
    "get_platform_status_query_service",
    "get_platform_status_service",
    "get_user_query_service",
    "get_user_service",
    "require_permission",
]
