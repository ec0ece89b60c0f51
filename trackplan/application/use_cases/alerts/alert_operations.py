"""Alert listing/deletion and alert settings (stored values over environment defaults)."""

import logging
from collections.abc import Sequence
from dataclasses import replace

from trackplan.application.dtos.alert import (
    AlertPage,
    AlertSettingsResult,
    AlertSettingsUpdate,
    EffectiveAlertSettings,
)
from trackplan.application.interfaces.repositories import (
    IAlertRepository,
    IAlertSettingsRepository,
)
from trackplan.application.services.site_mapping import parse_site_mapping
from trackplan.core.config import Settings
from trackplan.domain.exceptions import ResourceNotFoundException, ValidationException

logger = logging.getLogger(__name__)

MAX_ALERT_PAGE = 500


class AlertService:
    def __init__(
        self,
        alert_repo: IAlertRepository,
        settings_repo: IAlertSettingsRepository,
        settings: Settings,
    ) -> None:
        self.alert_repo = alert_repo
        self.settings_repo = settings_repo
        self.settings = settings

    async def list_alerts(self, limit: int = 50, offset: int = 0) -> AlertPage:
        return await self.alert_repo.list_alerts(
            max(1, min(limit, MAX_ALERT_PAGE)), max(0, offset)
        )

    async def delete_alert(self, alert_id: str) -> None:
        if not await self.alert_repo.delete_alert(alert_id):
            raise ResourceNotFoundException("alert", alert_id)

    async def delete_alerts(self, alert_ids: Sequence[str]) -> int:
        if not alert_ids:
            raise ValidationException("At least one alert id is required", field="ids")
        return await self.alert_repo.delete_alerts(list(dict.fromkeys(alert_ids)))

    def _defaults(self) -> AlertSettingsResult:
        token = self.settings.matomo_token
        return AlertSettingsResult(
            matomo_url=self.settings.matomo_url,
            matomo_token=token.get_secret_value() if token else None,
            matomo_site_ids=self.settings.matomo_site_ids,
            drop_threshold=self.settings.alert_drop_threshold,
            max_concurrency=self.settings.alert_max_concurrency,
            is_enabled=True,
        )

    async def get_settings(self) -> AlertSettingsResult:
        """Stored settings with unset Matomo fields filled from the environment."""
        defaults = self._defaults()
        stored = await self.settings_repo.get_settings()
        if stored is None:
            return defaults
        return AlertSettingsResult(
            matomo_url=stored.matomo_url or defaults.matomo_url,
            matomo_token=stored.matomo_token or defaults.matomo_token,
            matomo_site_ids=stored.matomo_site_ids or defaults.matomo_site_ids,
            drop_threshold=stored.drop_threshold,
            max_concurrency=stored.max_concurrency,
            is_enabled=stored.is_enabled,
        )

    async def get_effective_settings(self) -> EffectiveAlertSettings:
        current = await self.get_settings()
        return EffectiveAlertSettings(
            matomo_url=current.matomo_url,
            matomo_token=current.matomo_token,
            site_ids=parse_site_mapping(current.matomo_site_ids),
            drop_threshold=current.drop_threshold,
            max_concurrency=current.max_concurrency,
            is_enabled=current.is_enabled,
        )

    async def save_settings(self, data: AlertSettingsUpdate) -> AlertSettingsResult:
        """Validate and store alert settings.

        Raises:
            ValidationException: threshold outside 0-100, concurrency below 1,
                or malformed site mapping.
        """
        if not 0 <= data.drop_threshold <= 100:
            raise ValidationException(
                "drop_threshold must be between 0 and 100", field="drop_threshold"
            )
        if data.max_concurrency < 1:
            raise ValidationException(
                "max_concurrency must be at least 1", field="max_concurrency"
            )
        parse_site_mapping(data.matomo_site_ids)
        if data.matomo_token is None:
            # Omitted token keeps the stored one; "" clears it
            stored = await self.settings_repo.get_settings()
            if stored is not None:
                data = replace(data, matomo_token=stored.matomo_token)
        elif not data.matomo_token.strip():
            data = replace(data, matomo_token=None)
        await self.settings_repo.save_settings(data)
        logger.info(
            "Alert settings saved (enabled=%s, threshold=%d%%)",
            data.is_enabled,
            data.drop_threshold,
        )
        return await self.get_settings()
