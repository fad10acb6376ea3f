"""
Module: labor_engines.scheduled_cost
Responsibility:
    Projected labor cost from scheduled shifts.  Same output shape as the
    actual calculator, but hours come straight from shift records instead
    of being reconstructed from punches.

Architecture position:
    Engines -- pure calculation layer, zero I/O.

Invariants enforced:
    - Only active employees are considered, for shifts and fixed pay alike.
    - A shift belongs to the calendar day of its ``start_time``; shifts
      starting outside the range are ignored.
    - Hourly hours = max(shift minutes - break minutes, 0) / 60, costed
      per shift with the terms resolved for the shift's day.
    - A daily-rate employee is charged at most once per day, however many
      shifts they have that day.
    - Contractor headcount excludes per-job contractors.

Failure modes:
    - None for data problems.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import date
from decimal import Decimal

from labor_config.schema import DEFAULT_POLICY, LaborCostPolicy
from labor_engines.compensation import CompensationResolver, employee_daily_cost_cents
from labor_engines.fixed_pay import contractor_pay_for_period, salary_for_period
from labor_engines.results import DailyLedger, LaborCostResult
from labor_engines.tracer import traced_engine
from labor_kernel.domain.dates import date_range
from labor_kernel.domain.values import (
    ZERO,
    cents_to_dollars,
    hours_between,
    minutes_to_hours,
    round_hours,
)
from labor_kernel.logging_config import get_logger
from labor_modules.workforce.models import (
    CompensationType,
    ContractorPaymentInterval,
    Employee,
    Shift,
)

logger = get_logger("engines.scheduled_cost")


def scheduled_hours(shift: Shift) -> Decimal:
    """Paid hours of a shift: its length less the unpaid break, never negative."""
    worked = hours_between(shift.start_time, shift.end_time) - minutes_to_hours(shift.break_duration)
    return max(worked, ZERO)


class ScheduledLaborCostCalculator:
    """
    Labor cost of a schedule.

    Contract:
        ``calculate`` takes keyword arguments only and returns a fresh
        ``LaborCostResult`` with no diagnostics.
    Guarantees:
        - Deterministic for identical inputs.
    """

    def __init__(self, policy: LaborCostPolicy | None = None):
        self._policy = policy or DEFAULT_POLICY

    @traced_engine(
        "scheduled_labor_cost", "1.0",
        fingerprint_fields=("start_date", "end_date", "shifts", "employees"),
    )
    def calculate(
        self,
        *,
        shifts: Sequence[Shift],
        employees: Sequence[Employee],
        start_date: date,
        end_date: date,
    ) -> LaborCostResult:
        policy = self._policy
        shifts = tuple(shifts)
        days = date_range(start_date, end_date)
        ledger = DailyLedger(days)

        active = [employee for employee in employees if employee.is_active]
        resolvers = {employee.id: CompensationResolver(employee) for employee in active}
        daily_rate_charged: set[tuple[date, str]] = set()
        skipped = 0

        for shift in shifts:
            resolver = resolvers.get(shift.employee_id)
            shift_day = shift.start_time.date()
            if resolver is None or shift_day not in ledger:
                skipped += 1
                continue

            snapshot = resolver.resolve(shift_day)
            if snapshot.compensation_type == CompensationType.HOURLY:
                hours = scheduled_hours(shift)
                cents = employee_daily_cost_cents(snapshot, hours, policy)
                ledger.add_hourly(shift_day, cents_to_dollars(cents), hours)
            elif snapshot.compensation_type == CompensationType.DAILY_RATE:
                key = (shift_day, shift.employee_id)
                if key not in daily_rate_charged:
                    daily_rate_charged.add(key)
                    cents = employee_daily_cost_cents(snapshot, policy=policy)
                    ledger.add_daily_rate(shift_day, cents_to_dollars(cents))

        for employee in active:
            resolver = resolvers[employee.id]
            if resolver.employee is not employee:
                resolver = CompensationResolver(employee)
            salary_cents = salary_for_period(employee, start_date, end_date, policy, resolver)
            if salary_cents > 0:
                ledger.spread_salary(cents_to_dollars(salary_cents))
            contractor_cents = contractor_pay_for_period(
                employee, start_date, end_date, policy, resolver,
            )
            if contractor_cents > 0:
                ledger.spread_contractor(cents_to_dollars(contractor_cents))

        result = ledger.freeze(
            salary_employees=sum(
                1 for e in active if e.compensation_type == CompensationType.SALARY
            ),
            contractor_employees=sum(
                1 for e in active
                if e.compensation_type == CompensationType.CONTRACTOR
                and e.contractor_payment_interval != ContractorPaymentInterval.PER_JOB
            ),
            daily_rate_employees=sum(
                1 for e in active if e.compensation_type == CompensationType.DAILY_RATE
            ),
        )

        logger.info(
            "scheduled_labor_cost_calculated",
            extra={
                "start_date": start_date,
                "end_date": end_date,
                "employee_count": len(active),
                "shift_count": len(shifts),
                "skipped_shift_count": skipped,
                "day_count": len(days),
                "total_cost": result.total,
                "hours_worked": round_hours(result.breakdown.hourly.hours),
            },
        )
        return result


def calculate_scheduled_labor_cost(
    shifts: Sequence[Shift],
    employees: Sequence[Employee],
    start_date: date,
    end_date: date,
    policy: LaborCostPolicy | None = None,
) -> LaborCostResult:
    """Module-level convenience around ``ScheduledLaborCostCalculator``."""
    return ScheduledLaborCostCalculator(policy).calculate(
        shifts=shifts,
        employees=employees,
        start_date=start_date,
        end_date=end_date,
    )
