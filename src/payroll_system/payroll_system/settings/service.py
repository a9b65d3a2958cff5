from __future__ import annotations

import logging
from typing import Any, Mapping

from ..common.payloads import deduction_settings_from_payload
from ..core.exceptions import MissingSettings
from .model import DeductionSettings, validate_deduction_settings
from .repository import SalarySettingsRepository

logger = logging.getLogger(__name__)


class SalarySettingsService:
    def __init__(self, settings: SalarySettingsRepository):
        self._settings = settings

    def get(self) -> DeductionSettings:
        settings = self._settings.get()
        if settings is None:
            raise MissingSettings("Deduction settings are not configured")
        return validate_deduction_settings(settings)

    def update(self, payload: Mapping[str, Any]) -> DeductionSettings:
        """Replace the settings wholesale; partial updates are rejected."""
        settings = deduction_settings_from_payload(payload)
        self._settings.save(settings)
        logger.info(
            "Salary settings updated: absent=%s leave=%s late=%s/%smin early=%s/%smin payday=%s",
            settings.absent_deduction,
            settings.leave_deduction,
            settings.late_deduction,
            settings.late_time_block,
            settings.early_leave_deduction,
            settings.early_leave_time_block,
            settings.salary_payment_date,
        )
        return settings
