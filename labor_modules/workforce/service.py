"""
Workforce Labor Cost Service (``labor_modules.workforce.service``).

Responsibility
--------------
Runs the labor cost engines over records as the surrounding application
holds them.  Raw dicts (ISO-8601 strings, integer cents, wire enum strings)
are parsed into typed records, request-scoped log context is bound, and
the work is delegated to ``ActualLaborCostCalculator`` or
``ScheduledLaborCostCalculator``.

Architecture position
---------------------
**Modules layer** -- thin glue.  ``LaborCostService`` is the public entry
point for callers that have raw records.  It composes the stateless
calculators and owns no calculation logic of its own.

Invariants enforced
-------------------
* Record parsing happens before any calculation starts: a malformed record
  fails the whole call, never half of it.
* Employees whose current compensation terms are incomplete are logged as
  warnings; they still cost zero rather than failing the call.

Failure modes
-------------
* Malformed raw record  -> ``InvalidRecordError`` / ``UnknownEnumValueError``.
* Unparseable date argument  -> ``InvalidRecordError``.

Usage::

    service = LaborCostService()
    result = service.actual_labor_cost(
        employees=[{"id": "e1", "compensation_type": "hourly", "hourly_rate": 2000}],
        time_punches=[...],
        start_date="2024-01-01",
        end_date="2024-01-07",
        restaurant_id="r-42",
    )
    payload = result.to_dict()
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from datetime import date, datetime
from typing import Any

from labor_config import get_active_policy
from labor_config.schema import LaborCostPolicy
from labor_engines.actual_cost import ActualLaborCostCalculator
from labor_engines.compensation import validate_compensation_fields
from labor_engines.results import LaborCostResult
from labor_engines.scheduled_cost import ScheduledLaborCostCalculator
from labor_kernel.exceptions import InvalidRecordError
from labor_kernel.logging_config import LogContext, get_logger
from labor_modules.workforce.models import Employee, Shift, TimePunch

logger = get_logger("modules.workforce.service")

EmployeeInput = Employee | Mapping[str, Any]
TimePunchInput = TimePunch | Mapping[str, Any]
ShiftInput = Shift | Mapping[str, Any]


class LaborCostService:
    """
    Labor cost calculations over raw or typed workforce records.

    The service holds only its policy and the two stateless calculators,
    so one instance can serve any number of restaurants.
    """

    def __init__(self, policy: LaborCostPolicy | None = None):
        self._policy = policy or get_active_policy()
        self._actual = ActualLaborCostCalculator(self._policy)
        self._scheduled = ScheduledLaborCostCalculator(self._policy)

    @property
    def policy(self) -> LaborCostPolicy:
        return self._policy

    def actual_labor_cost(
        self,
        *,
        employees: Iterable[EmployeeInput],
        time_punches: Iterable[TimePunchInput],
        start_date: date | datetime | str,
        end_date: date | datetime | str,
        restaurant_id: str | None = None,
        correlation_id: str | None = None,
        calculation_id: str | None = None,
    ) -> LaborCostResult:
        """Historical labor cost from time punches."""
        with LogContext.bind(
            restaurant_id=restaurant_id,
            correlation_id=correlation_id,
            calculation_id=calculation_id,
        ):
            staff = self._prepare_employees(employees)
            punches = tuple(_coerce(TimePunch, raw) for raw in time_punches)
            start, end = _parse_day("start_date", start_date), _parse_day("end_date", end_date)

            logger.info("actual_labor_cost_requested", extra={
                "start_date": start,
                "end_date": end,
                "employee_count": len(staff),
                "punch_count": len(punches),
            })
            return self._actual.calculate(
                employees=staff,
                time_punches=punches,
                start_date=start,
                end_date=end,
            )

    def scheduled_labor_cost(
        self,
        *,
        shifts: Iterable[ShiftInput],
        employees: Iterable[EmployeeInput],
        start_date: date | datetime | str,
        end_date: date | datetime | str,
        restaurant_id: str | None = None,
        correlation_id: str | None = None,
        calculation_id: str | None = None,
    ) -> LaborCostResult:
        """Projected labor cost from scheduled shifts."""
        with LogContext.bind(
            restaurant_id=restaurant_id,
            correlation_id=correlation_id,
            calculation_id=calculation_id,
        ):
            staff = self._prepare_employees(employees)
            planned = tuple(_coerce(Shift, raw) for raw in shifts)
            start, end = _parse_day("start_date", start_date), _parse_day("end_date", end_date)

            logger.info("scheduled_labor_cost_requested", extra={
                "start_date": start,
                "end_date": end,
                "employee_count": len(staff),
                "shift_count": len(planned),
            })
            return self._scheduled.calculate(
                shifts=planned,
                employees=staff,
                start_date=start,
                end_date=end,
            )

    def _prepare_employees(self, employees: Iterable[EmployeeInput]) -> tuple[Employee, ...]:
        staff = tuple(_coerce(Employee, raw) for raw in employees)
        for employee in staff:
            problems = validate_compensation_fields(employee)
            if problems:
                logger.warning("employee_compensation_incomplete", extra={
                    "employee_id": employee.id,
                    "compensation_type": employee.compensation_type,
                    "problems": problems,
                })
        return staff


def _coerce(record_cls: type, raw: Any) -> Any:
    if isinstance(raw, record_cls):
        return raw
    return record_cls.from_dict(raw)


def _parse_day(field: str, value: date | datetime | str) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return date.fromisoformat(value[:10])
        except ValueError as exc:
            raise InvalidRecordError("request", field, value, "expected YYYY-MM-DD") from exc
    raise InvalidRecordError("request", field, value, "expected YYYY-MM-DD")
