"""Shared utilities: UTC datetime helpers and id generators."""

from trackplan.shared.utils.datetime import days_ago, ensure_utc, format_day, utc_now
from trackplan.shared.utils.generators import generate_cuid, generate_request_id

__all__ = [
    "days_ago",
    "ensure_utc",
    "format_day",
    "generate_cuid",
    "generate_request_id",
    "utc_now",
]
