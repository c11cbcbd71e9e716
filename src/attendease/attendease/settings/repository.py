from __future__ import annotations

from typing import Iterable, Mapping, Protocol


class AppConfigRepository(Protocol):
    def get_values(self, keys: Iterable[str]) -> Mapping[str, str]:
        """Return stored values for the given keys; missing keys are simply absent."""
        raise NotImplementedError
