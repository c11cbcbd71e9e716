from __future__ import annotations

from typing import Protocol, Sequence

from .model import GeoFence


class GeoFenceRepository(Protocol):
    def list_active(self) -> Sequence[GeoFence]:
        raise NotImplementedError
