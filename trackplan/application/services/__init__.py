"""Application services: pure policies shared by use cases."""

from trackplan.application.services.site_mapping import parse_site_mapping
from trackplan.application.services.version_policy import (
    NON_VERSIONED_FIELDS,
    VERSIONED_FIELDS,
    VersionDecision,
    decide_version,
)

__all__ = [
    "NON_VERSIONED_FIELDS",
    "VERSIONED_FIELDS",
    "VersionDecision",
    "decide_version",
    "parse_site_mapping",
]
