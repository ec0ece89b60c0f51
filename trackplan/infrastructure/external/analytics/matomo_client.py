"""Matomo Reporting API client (Events.getCategory).

All calls go through one shared httpx.AsyncClient (created in lifespan).
Retryable responses (429/502/503/504) and transport errors are retried with
exponential backoff; Retry-After is honored when the server sends it. Every
failure that survives the retries is raised as AnalyticsUnavailableException.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Any

import httpx

from trackplan.core.constants import RETRYABLE_STATUS_CODES
from trackplan.domain.exceptions import AnalyticsUnavailableException

logger = logging.getLogger(__name__)

MAX_RETRY_AFTER_SECONDS = 60.0


def _retry_after_seconds(response: httpx.Response) -> float | None:
    raw = response.headers.get("Retry-After")
    if raw is None:
        return None
    try:
        return min(max(float(raw), 0.0), MAX_RETRY_AFTER_SECONDS)
    except ValueError:
        return None


def _nb_events(payload: Any) -> int:
    """Read nb_events from a single-day Events.getCategory response (list or object)."""
    if isinstance(payload, list):
        payload = payload[0] if payload else {}
    if not isinstance(payload, dict):
        return 0
    try:
        return int(payload.get("nb_events") or 0)
    except (TypeError, ValueError):
        return 0


class MatomoClient:
    """Async Matomo API client with retry and backoff."""

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        base_url: str,
        token: str,
        timeout: float = 30.0,
        max_retries: int = 3,
        initial_backoff: float = 1.0,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self.http = http_client
        self.base_url = base_url
        self.token = token
        self.timeout = timeout
        self.max_retries = max_retries
        self.initial_backoff = initial_backoff
        self._sleep = sleep

    def _params(self, site_id: int, label: str, date: str) -> dict[str, str]:
        return {
            "module": "API",
            "format": "JSON",
            "method": "Events.getCategory",
            "idSite": str(site_id),
            "period": "day",
            "date": date,
            "label": label,
            "filter_limit": "100",
            "format_metrics": "1",
            "expanded": "1",
            "showMetadata": "0",
            "token_auth": self.token,
        }

    async def _get(self, params: dict[str, str]) -> Any:
        backoff = self.initial_backoff
        attempt = 0
        while True:
            try:
                response = await self.http.get(
                    self.base_url, params=params, timeout=self.timeout
                )
            except httpx.TransportError as e:
                if attempt >= self.max_retries:
                    raise AnalyticsUnavailableException(
                        f"Analytics API unreachable: {e}"
                    ) from e
                delay = backoff
                logger.warning(
                    "Analytics request failed (%s); retry %d/%d in %.1fs",
                    type(e).__name__,
                    attempt + 1,
                    self.max_retries,
                    delay,
                )
            else:
                if response.status_code not in RETRYABLE_STATUS_CODES:
                    return self._decode(response)
                if attempt >= self.max_retries:
                    raise AnalyticsUnavailableException(
                        "Analytics API returned an error", response.status_code
                    )
                delay = _retry_after_seconds(response) or backoff
                logger.warning(
                    "Analytics API returned %d; retry %d/%d in %.1fs",
                    response.status_code,
                    attempt + 1,
                    self.max_retries,
                    delay,
                )
            await self._sleep(delay)
            attempt += 1
            backoff *= 2

    @staticmethod
    def _decode(response: httpx.Response) -> Any:
        if response.is_error:
            raise AnalyticsUnavailableException(
                "Analytics API returned an error", response.status_code
            )
        try:
            data = response.json()
        except ValueError as e:
            raise AnalyticsUnavailableException(
                "Analytics API returned invalid JSON", response.status_code
            ) from e
        if isinstance(data, dict) and data.get("result") == "error":
            raise AnalyticsUnavailableException(
                data.get("message") or "Analytics API error", response.status_code
            )
        return data

    async def get_event_rows(
        self, site_id: int, label: str, start_date: str, end_date: str
    ) -> list[dict[str, Any]]:
        """Return daily rows for label over [start_date, end_date].

        Matomo answers a date range with an object keyed by day; it is
        flattened to rows carrying a "date" key, ordered by day.
        """
        data = await self._get(self._params(site_id, label, f"{start_date},{end_date}"))
        if isinstance(data, list):
            return data
        rows: list[dict[str, Any]] = []
        for day in sorted(data or {}):
            entries = data[day]
            if isinstance(entries, dict):
                entries = [entries]
            for entry in entries or []:
                rows.append({"date": day, **entry})
        return rows

    async def get_daily_count(self, site_id: int, label: str, day: str) -> int:
        return _nb_events(await self._get(self._params(site_id, label, day)))
