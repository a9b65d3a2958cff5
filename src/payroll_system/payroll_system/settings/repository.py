from __future__ import annotations

from typing import Optional, Protocol

from .model import DeductionSettings


class SalarySettingsRepository(Protocol):
    def get(self) -> Optional[DeductionSettings]:
        """Current settings, or None when never configured.

        Implementations must not fill in defaults for missing columns; a
        partially configured row is returned with ``None`` in those fields.
        """

        raise NotImplementedError

    def save(self, settings: DeductionSettings) -> None:
        raise NotImplementedError
