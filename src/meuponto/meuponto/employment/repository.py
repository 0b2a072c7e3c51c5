from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import EmploymentRules


class RulesRepository(Protocol):
    def get_effective(self, *, employment_id: int, on_date: date) -> Optional[EmploymentRules]:
        """Rules version in force for the employment on `on_date`."""

        raise NotImplementedError

    def list_versions(self, *, employment_id: int) -> Sequence[EmploymentRules]:
        raise NotImplementedError

    def save(self, rules: EmploymentRules) -> None:
        raise NotImplementedError
