"""
Workforce Records (``labor_modules.workforce.models``).

Responsibility
--------------
Frozen dataclass value objects for the inputs of the labor cost engines:
employees with their effective-dated compensation history, raw time-clock
punches, and scheduled shifts.  Each record has a ``from_dict`` constructor
that parses the wire shape handed over by the surrounding application
(ISO-8601 strings, integer cents, wire enum strings).

Architecture position
---------------------
**Modules layer** -- pure data definitions with ZERO I/O.  Consumed by the
``labor_engines`` calculators and by ``LaborCostService``.  No dependency on
engines or config.

Invariants enforced
-------------------
* All records are ``frozen=True`` (immutable after construction).
* All input money fields are integer cents.  Conversion to dollars happens
  only in ``labor_kernel.domain.values.cents_to_dollars``.
* Enum values equal the wire strings (``"bi-weekly"``, ``"per-job"``).
* Parsed timestamps are naive wall-clock readings; any UTC offset is dropped.

Failure modes
-------------
* ``from_dict`` raises ``InvalidRecordError`` for missing or unparseable
  fields and ``UnknownEnumValueError`` for unrecognised enum strings.
* Direct construction performs no validation; the engines tolerate
  incomplete compensation terms by costing them at zero.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Any, TypeVar

from labor_kernel.domain.dates import wall_clock
from labor_kernel.exceptions import InvalidRecordError, UnknownEnumValueError

_E = TypeVar("_E", bound=Enum)


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------


class EmployeeStatus(str, Enum):
    """Employment lifecycle states."""
    ACTIVE = "active"
    INACTIVE = "inactive"
    TERMINATED = "terminated"


class CompensationType(str, Enum):
    """The four pay models."""
    HOURLY = "hourly"
    SALARY = "salary"
    CONTRACTOR = "contractor"
    DAILY_RATE = "daily_rate"


class PayPeriodType(str, Enum):
    """Salary pay cycles."""
    WEEKLY = "weekly"
    BI_WEEKLY = "bi-weekly"
    SEMI_MONTHLY = "semi-monthly"
    MONTHLY = "monthly"


class ContractorPaymentInterval(str, Enum):
    """Contractor payment cycles.  PER_JOB is never amortized daily."""
    WEEKLY = "weekly"
    BI_WEEKLY = "bi-weekly"
    MONTHLY = "monthly"
    PER_JOB = "per-job"


class PunchType(str, Enum):
    """Time-clock events."""
    CLOCK_IN = "clock_in"
    CLOCK_OUT = "clock_out"
    BREAK_START = "break_start"
    BREAK_END = "break_end"


# ---------------------------------------------------------------------------
# Records
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class CompensationHistoryEntry:
    """Pay terms that took effect on ``effective_date``."""
    effective_date: date
    compensation_type: CompensationType
    amount_cents: int
    pay_period_type: PayPeriodType | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> CompensationHistoryEntry:
        record = "compensation_history"
        return cls(
            effective_date=_parse_date(record, "effective_date", _require(record, data, "effective_date")),
            compensation_type=_parse_enum(
                CompensationType, record, "compensation_type",
                _require(record, data, "compensation_type"),
            ),
            amount_cents=_parse_cents(record, "amount_cents", _require(record, data, "amount_cents")),
            pay_period_type=_parse_optional_enum(
                PayPeriodType, record, "pay_period_type", data.get("pay_period_type"),
            ),
        )


@dataclass(frozen=True)
class Employee:
    """An employee as seen by labor costing.

    The top-level compensation fields describe the employee's *current*
    terms.  ``compensation_history`` holds effective-dated terms; historical
    costing always resolves through it first.
    """
    id: str
    status: EmployeeStatus
    compensation_type: CompensationType
    hourly_rate: int = 0  # cents
    salary_amount: int | None = None  # cents per pay period
    pay_period_type: PayPeriodType | None = None
    contractor_payment_amount: int | None = None  # cents per interval
    contractor_payment_interval: ContractorPaymentInterval | None = None
    daily_rate_amount: int | None = None  # cents per day worked
    hire_date: date | None = None
    termination_date: date | None = None
    compensation_history: tuple[CompensationHistoryEntry, ...] = ()
    name: str = ""

    @property
    def is_active(self) -> bool:
        return self.status == EmployeeStatus.ACTIVE

    def is_employed_on(self, day: date) -> bool:
        """True unless ``day`` falls before hire or after termination."""
        if self.hire_date is not None and day < self.hire_date:
            return False
        if self.termination_date is not None and day > self.termination_date:
            return False
        return True

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Employee:
        record = "employee"
        history_raw = data.get("compensation_history") or ()
        return cls(
            id=str(_require(record, data, "id")),
            status=_parse_enum(EmployeeStatus, record, "status", data.get("status", "active")),
            compensation_type=_parse_enum(
                CompensationType, record, "compensation_type",
                _require(record, data, "compensation_type"),
            ),
            hourly_rate=_parse_cents(record, "hourly_rate", data.get("hourly_rate")) or 0,
            salary_amount=_parse_cents(record, "salary_amount", data.get("salary_amount")),
            pay_period_type=_parse_optional_enum(
                PayPeriodType, record, "pay_period_type", data.get("pay_period_type"),
            ),
            contractor_payment_amount=_parse_cents(
                record, "contractor_payment_amount", data.get("contractor_payment_amount"),
            ),
            contractor_payment_interval=_parse_optional_enum(
                ContractorPaymentInterval, record, "contractor_payment_interval",
                data.get("contractor_payment_interval"),
            ),
            daily_rate_amount=_parse_cents(record, "daily_rate_amount", data.get("daily_rate_amount")),
            hire_date=_parse_optional_date(record, "hire_date", data.get("hire_date")),
            termination_date=_parse_optional_date(record, "termination_date", data.get("termination_date")),
            compensation_history=tuple(
                CompensationHistoryEntry.from_dict(entry) for entry in history_raw
            ),
            name=str(data.get("name") or ""),
        )


@dataclass(frozen=True)
class TimePunch:
    """A single time-clock event."""
    id: str
    employee_id: str
    punch_time: datetime
    punch_type: PunchType

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> TimePunch:
        record = "time_punch"
        return cls(
            id=str(data.get("id", "")),
            employee_id=str(_require(record, data, "employee_id")),
            punch_time=_parse_datetime(record, "punch_time", _require(record, data, "punch_time")),
            punch_type=_parse_enum(PunchType, record, "punch_type", _require(record, data, "punch_type")),
        )


@dataclass(frozen=True)
class Shift:
    """A planned shift.  ``break_duration`` is in minutes."""
    employee_id: str
    start_time: datetime
    end_time: datetime
    break_duration: int = 0
    id: str | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Shift:
        record = "shift"
        break_raw = data.get("break_duration") or 0
        try:
            break_minutes = int(break_raw)
        except (TypeError, ValueError) as exc:
            raise InvalidRecordError(record, "break_duration", break_raw, "not an integer") from exc
        return cls(
            employee_id=str(_require(record, data, "employee_id")),
            start_time=_parse_datetime(record, "start_time", _require(record, data, "start_time")),
            end_time=_parse_datetime(record, "end_time", _require(record, data, "end_time")),
            break_duration=break_minutes,
            id=str(data["id"]) if data.get("id") is not None else None,
        )


# ---------------------------------------------------------------------------
# Wire parsing helpers
# ---------------------------------------------------------------------------


def _require(record: str, data: Mapping[str, Any], field: str) -> Any:
    value = data.get(field)
    if value is None or value == "":
        raise InvalidRecordError(record, field, value, "required")
    return value


def _parse_enum(enum_cls: type[_E], record: str, field: str, value: Any) -> _E:
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError as exc:
        allowed = tuple(member.value for member in enum_cls)
        raise UnknownEnumValueError(record, field, value, allowed) from exc


def _parse_optional_enum(enum_cls: type[_E], record: str, field: str, value: Any) -> _E | None:
    if value is None or value == "":
        return None
    return _parse_enum(enum_cls, record, field, value)


def _parse_cents(record: str, field: str, value: Any) -> int | None:
    if value is None or value == "":
        return None
    if isinstance(value, bool):
        raise InvalidRecordError(record, field, value, "expected integer cents")
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError as exc:
            raise InvalidRecordError(record, field, value, "expected integer cents") from exc
    raise InvalidRecordError(record, field, value, "expected integer cents")


def _parse_date(record: str, field: str, value: Any) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            # Timestamps are accepted and truncated to their calendar day
            return date.fromisoformat(value[:10])
        except ValueError as exc:
            raise InvalidRecordError(record, field, value, "expected YYYY-MM-DD") from exc
    raise InvalidRecordError(record, field, value, "expected YYYY-MM-DD")


def _parse_optional_date(record: str, field: str, value: Any) -> date | None:
    if value is None or value == "":
        return None
    return _parse_date(record, field, value)


def _parse_datetime(record: str, field: str, value: Any) -> datetime:
    if isinstance(value, datetime):
        return wall_clock(value)
    if isinstance(value, str):
        try:
            return wall_clock(datetime.fromisoformat(value))
        except ValueError as exc:
            raise InvalidRecordError(record, field, value, "expected ISO-8601 timestamp") from exc
    raise InvalidRecordError(record, field, value, "expected ISO-8601 timestamp")
