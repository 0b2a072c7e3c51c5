from __future__ import annotations

import threading
from datetime import date
from typing import Optional, Sequence

from .model import EmploymentRules, RulesHistory


class InMemoryRulesRepository:
    """Versioned rules store; a save with an existing effective date replaces that version."""

    def __init__(self, versions: Sequence[EmploymentRules] = ()):
        self._lock = threading.Lock()
        self._by_employment: dict[int, dict[date, EmploymentRules]] = {}
        for rules in versions:
            self.save(rules)

    def get_effective(self, *, employment_id: int, on_date: date) -> Optional[EmploymentRules]:
        history = RulesHistory(employment_id=employment_id, versions=tuple(self.list_versions(employment_id=employment_id)))
        return history.effective_on(on_date)

    def list_versions(self, *, employment_id: int) -> Sequence[EmploymentRules]:
        with self._lock:
            versions = self._by_employment.get(employment_id, {})
            return sorted(versions.values(), key=lambda v: v.effective_from)

    def save(self, rules: EmploymentRules) -> None:
        with self._lock:
            self._by_employment.setdefault(rules.employment_id, {})[rules.effective_from] = rules
