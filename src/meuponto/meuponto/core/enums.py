from __future__ import annotations

from enum import Enum


class PunchKind(str, Enum):
    """Kind of a punch, inferred from its position in the day."""

    CLOCK_IN = "CLOCK_IN"
    CLOCK_OUT = "CLOCK_OUT"

    @classmethod
    def for_index(cls, index: int) -> "PunchKind":
        return cls.CLOCK_IN if index % 2 == 0 else cls.CLOCK_OUT


class HolidayKind(str, Enum):
    NATIONAL = "NATIONAL"
    STATE = "STATE"
    MUNICIPAL = "MUNICIPAL"
    OPTIONAL = "OPTIONAL"
    BRIDGE = "BRIDGE"

    @property
    def priority(self) -> int:
        """Lower wins when several holidays fall on the same date."""
        return _HOLIDAY_PRIORITY[self]


_HOLIDAY_PRIORITY = {
    HolidayKind.MUNICIPAL: 0,
    HolidayKind.STATE: 1,
    HolidayKind.NATIONAL: 2,
    HolidayKind.OPTIONAL: 3,
    HolidayKind.BRIDGE: 4,
}


class HolidayRecurrence(str, Enum):
    ANNUAL = "ANNUAL"
    SINGLE_YEAR = "SINGLE_YEAR"


class HolidayScope(str, Enum):
    GLOBAL = "GLOBAL"
    EMPLOYMENT = "EMPLOYMENT"


class AbsenceType(str, Enum):
    """Absence types and whether they zero the expected time of a day."""

    VACATION = ("VACATION", True, False)
    MEDICAL = ("MEDICAL", True, True)
    DECLARATION = ("DECLARATION", True, True)
    JUSTIFIED_ABSENCE = ("JUSTIFIED_ABSENCE", True, False)
    DAY_OFF = ("DAY_OFF", False, False)
    UNJUSTIFIED_ABSENCE = ("UNJUSTIFIED_ABSENCE", False, False)

    def __new__(cls, value: str, zeroes_expected: bool, requires_document: bool):
        member = str.__new__(cls, value)
        member._value_ = value
        member.zeroes_expected = zeroes_expected
        member.requires_document = requires_document
        return member


class ClosureKind(str, Enum):
    WEEKLY = "WEEKLY"
    MONTHLY = "MONTHLY"
    TIME_BANK_CYCLE = "TIME_BANK_CYCLE"

    @property
    def label(self) -> str:
        return _CLOSURE_LABELS[self]


_CLOSURE_LABELS = {
    ClosureKind.WEEKLY: "Weekly closing",
    ClosureKind.MONTHLY: "Monthly closing",
    ClosureKind.TIME_BANK_CYCLE: "Time bank cycle",
}


class AuditAction(str, Enum):
    ADJUST = "ADJUST"
    CLOSE = "CLOSE"
    DELETE_CLOSURE = "DELETE_CLOSURE"


class CycleUnit(str, Enum):
    WEEKS = "WEEKS"
    MONTHS = "MONTHS"


class DayKind(str, Enum):
    NORMAL = "NORMAL"
    WEEKEND = "WEEKEND"
    HOLIDAY = "HOLIDAY"
    OPTIONAL = "OPTIONAL"
    BRIDGE = "BRIDGE"
    ABSENCE = "ABSENCE"


class ValidationRule(str, Enum):
    """Identifiers of the checks run before a punch is accepted."""

    FUTURE_DATE = "FUTURE_DATE"
    FUTURE_TIME = "FUTURE_TIME"
    MAX_PUNCHES_REACHED = "MAX_PUNCHES_REACHED"
    DUPLICATE_TIME = "DUPLICATE_TIME"
    SEQUENCE_MISMATCH = "SEQUENCE_MISMATCH"
    SPACING_TOO_SHORT = "SPACING_TOO_SHORT"
    SHIFT_TOO_LONG = "SHIFT_TOO_LONG"
    DAY_NOT_ALLOWED = "DAY_NOT_ALLOWED"
    INSUFFICIENT_REST = "INSUFFICIENT_REST"


class FailureCode(str, Enum):
    INVALID_PERIOD = "INVALID_PERIOD"
    CYCLE_NOT_ENDED = "CYCLE_NOT_ENDED"
    PERIOD_ALREADY_CLOSED = "PERIOD_ALREADY_CLOSED"
    CLOSURE_NOT_FOUND = "CLOSURE_NOT_FOUND"
    NO_BASELINE = "NO_BASELINE"
    INVALID_ADJUSTMENT = "INVALID_ADJUSTMENT"
    WRONG_EMPLOYMENT = "WRONG_EMPLOYMENT"
    ABSENCE_OVERLAP = "ABSENCE_OVERLAP"
    TIME_BANK_DISABLED = "TIME_BANK_DISABLED"
    RULES_NOT_FOUND = "RULES_NOT_FOUND"
