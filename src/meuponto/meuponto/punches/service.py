from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Callable, Optional

from ..common.datetime_utils import now_local
from ..common.locks import EmploymentLocks
from ..core.enums import PunchKind
from ..core.exceptions import ValidationError
from ..employment.model import EmploymentRules
from ..employment.repository import RulesRepository
from ..workcalendar.service import CalendarService
from .model import Punch
from .repository import PunchRepository
from .tolerance import ToleranceApplier, ToleranceOutcome
from .validation.base import PunchCandidate
from .validation.pipeline import PunchValidationPipeline, PunchValidationResult

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PunchRegistration:
    validation: PunchValidationResult
    punch: Optional[Punch] = None

    @property
    def accepted(self) -> bool:
        return self.punch is not None


class PunchService:
    def __init__(
        self,
        punches: PunchRepository,
        rules: RulesRepository,
        calendar: CalendarService,
        *,
        pipeline: Optional[PunchValidationPipeline] = None,
        tolerance: Optional[ToleranceApplier] = None,
        clock: Callable[[], datetime] = now_local,
    ):
        self._punches = punches
        self._rules = rules
        self._calendar = calendar
        self._pipeline = pipeline or PunchValidationPipeline()
        self._tolerance = tolerance or ToleranceApplier()
        self._clock = clock
        self._locks = EmploymentLocks()

    def _rules_for(self, employment_id: int, day: date) -> EmploymentRules:
        rules = self._rules.get_effective(employment_id=employment_id, on_date=day)
        if not rules:
            raise ValidationError(f"No rules configured for employment {employment_id} on {day.isoformat()}")
        return rules

    def validate(
        self,
        *,
        employment_id: int,
        day: date,
        at: time,
        declared_kind: Optional[PunchKind] = None,
        allow_future_time: bool = False,
        allow_non_working_day: bool = False,
        now: Optional[datetime] = None,
    ) -> PunchValidationResult:
        """Dry run of every acceptance rule against the current day snapshot."""
        rules = self._rules_for(employment_id, day)
        candidate = PunchCandidate(
            employment_id=employment_id,
            day=day,
            at=at,
            declared_kind=declared_kind,
            allow_future_time=allow_future_time,
            allow_non_working_day=allow_non_working_day,
        )
        return self._pipeline.validate(
            candidate,
            existing=self._punches.list_for_date(employment_id=employment_id, day=day),
            rules=rules,
            now=now or self._clock(),
            resolution=self._calendar.resolve(day, rules),
            previous_punch=self._punches.last_before(employment_id=employment_id, day=day),
        )

    def register(
        self,
        *,
        employment_id: int,
        day: date,
        at: time,
        declared_kind: Optional[PunchKind] = None,
        allow_future_time: bool = False,
        allow_non_working_day: bool = False,
        note: Optional[str] = None,
        manually_edited: bool = False,
        now: Optional[datetime] = None,
    ) -> PunchRegistration:
        with self._locks.for_employment(employment_id):
            result = self.validate(
                employment_id=employment_id,
                day=day,
                at=at,
                declared_kind=declared_kind,
                allow_future_time=allow_future_time,
                allow_non_working_day=allow_non_working_day,
                now=now,
            )
            if not result.accepted:
                return PunchRegistration(validation=result)

            punch_id = self._punches.create(
                employment_id=employment_id,
                timestamp=result.candidate.timestamp,
                manually_edited=manually_edited,
                note=(note or "").strip() or None,
            )
            outcome = self.recompute_tolerance(employment_id=employment_id, day=day)
        logger.info("Punch %s registered for employment %s at %s", punch_id, employment_id, result.candidate.timestamp)

        stored = next(p for p in outcome.punches if p.punch_id == punch_id)
        return PunchRegistration(validation=result, punch=stored)

    def delete(self, *, employment_id: int, punch_id: int) -> Punch:
        """Remove one of the employment's punches and re-derive its day."""
        with self._locks.for_employment(employment_id):
            punch = self._punches.get(punch_id=punch_id)
            if punch is None or punch.employment_id != employment_id:
                raise ValidationError("Punch not found")
            self._punches.delete(punch_id=punch_id)
            logger.info("Punch %s of employment %s deleted", punch_id, employment_id)
            self.recompute_tolerance(employment_id=employment_id, day=punch.day)
        return punch

    def list_day(self, *, employment_id: int, day: date) -> list[Punch]:
        return list(self._punches.list_for_date(employment_id=employment_id, day=day))

    def recompute_tolerance(self, *, employment_id: int, day: date) -> ToleranceOutcome:
        """Re-derive considered times for the whole day and store the ones that changed."""
        rules = self._rules_for(employment_id, day)
        policy = rules.break_policy(day)
        stored = self._punches.list_for_date(employment_id=employment_id, day=day)
        outcome = self._tolerance.apply(
            stored,
            min_break_minutes=policy.min_break_minutes,
            tolerance_minutes=policy.tolerance_minutes,
            ideal_break_start=policy.ideal_break_start,
        )
        before = {p.punch_id: p.considered_timestamp for p in stored}
        for punch in outcome.punches:
            if before.get(punch.punch_id) != punch.considered_timestamp:
                self._punches.update_considered(punch_id=punch.punch_id, considered_timestamp=punch.considered_timestamp)
        return outcome
