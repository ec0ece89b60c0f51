"""Background jobs run inside the application process."""

from trackplan.jobs.alert_job import run_alert_check, run_alert_scheduler

__all__ = ["run_alert_check", "run_alert_scheduler"]
