"""Drop alert use cases."""

from trackplan.application.use_cases.alerts.alert_operations import AlertService
from trackplan.application.use_cases.alerts.drop_detection import (
    DropDetectionService,
    compute_drop_percent,
)

__all__ = ["AlertService", "DropDetectionService", "compute_drop_percent"]
