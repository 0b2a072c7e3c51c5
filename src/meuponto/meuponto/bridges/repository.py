from __future__ import annotations

from typing import Optional, Protocol

from .model import BridgeDayConfig


class BridgeConfigRepository(Protocol):
    def get(self, *, employment_id: int, year: int) -> Optional[BridgeDayConfig]:
        raise NotImplementedError

    def save(self, config: BridgeDayConfig) -> None:
        """Insert or replace the config of (employment, year)."""

        raise NotImplementedError
