"""Application ports: repository and service protocols."""

from trackplan.application.interfaces.repositories import (
    IAlertRepository,
    IAlertSettingsRepository,
    ICategoryRepository,
    ICommentRepository,
    IEventRepository,
    IEventVersionRepository,
    IEventVersionWriter,
    IPlatformStatusRepository,
    IUserRepository,
)
from trackplan.application.interfaces.services import (
    IAnalyticsCache,
    IAnalyticsClient,
    IPasswordHasher,
    IRateLimiter,
    ITokenIssuer,
)

__all__ = [
    "IAlertRepository",
    "IAlertSettingsRepository",
    "IAnalyticsCache",
    "IAnalyticsClient",
    "ICategoryRepository",
    "ICommentRepository",
    "IEventRepository",
    "IEventVersionRepository",
    "IEventVersionWriter",
    "IPasswordHasher",
    "IPlatformStatusRepository",
    "IRateLimiter",
    "ITokenIssuer",
    "IUserRepository",
]
