"""Event use cases: versioned writes, reads, and the platform status ledger."""

from trackplan.application.use_cases.events.event_operations import (
    EventService,
    normalize_draft,
)
from trackplan.application.use_cases.events.platform_status_operations import (
    PlatformStatusService,
    build_history_entries,
)

__all__ = [
    "EventService",
    "PlatformStatusService",
    "build_history_entries",
    "normalize_draft",
]
