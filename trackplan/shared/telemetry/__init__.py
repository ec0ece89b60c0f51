"""Shared telemetry: logging setup and OpenTelemetry config."""

from trackplan.shared.telemetry.logging import RequestIdFilter, get_logger, setup_logging
from trackplan.shared.telemetry.telemetry import (
    TelemetryConfig,
    get_telemetry,
    set_telemetry,
)

__all__ = [
    "RequestIdFilter",
    "TelemetryConfig",
    "get_logger",
    "get_telemetry",
    "set_telemetry",
    "setup_logging",
]
