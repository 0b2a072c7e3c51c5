from __future__ import annotations

import threading
from typing import Optional

from .model import BridgeDayConfig


class InMemoryBridgeConfigRepository:
    def __init__(self):
        self._lock = threading.Lock()
        self._configs: dict[tuple[int, int], BridgeDayConfig] = {}

    def get(self, *, employment_id: int, year: int) -> Optional[BridgeDayConfig]:
        with self._lock:
            return self._configs.get((employment_id, year))

    def save(self, config: BridgeDayConfig) -> None:
        with self._lock:
            self._configs[(config.employment_id, config.year)] = config
