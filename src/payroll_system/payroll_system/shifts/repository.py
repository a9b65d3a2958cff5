from __future__ import annotations

from typing import Optional, Protocol

from .model import Shift


class ShiftRepository(Protocol):
    def get_by_id(self, shift_id: str) -> Optional[Shift]:
        raise NotImplementedError
