"""Analytics backend adapters: Matomo client and outbound rate limiter."""

from trackplan.infrastructure.external.analytics.matomo_client import MatomoClient
from trackplan.infrastructure.external.analytics.rate_limiter import (
    OutboundRateLimiter,
)

__all__ = ["MatomoClient", "OutboundRateLimiter"]
