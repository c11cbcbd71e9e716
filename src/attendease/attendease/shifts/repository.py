from __future__ import annotations

from typing import Optional, Protocol

from .model import Shift


class ShiftRepository(Protocol):
    def get_by_id(self, shift_id: int) -> Optional[Shift]:
        raise NotImplementedError

    def get_default(self) -> Optional[Shift]:
        raise NotImplementedError
