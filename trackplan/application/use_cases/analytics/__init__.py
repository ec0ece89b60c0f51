"""Analytics proxy use cases."""

from trackplan.application.use_cases.analytics.analytics_operations import (
    AnalyticsService,
    analytics_cache_key,
    event_label,
)

__all__ = ["AnalyticsService", "analytics_cache_key", "event_label"]
