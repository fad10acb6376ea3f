"""
Module: labor_engines.actual_cost
Responsibility:
    Historical labor cost from time-clock punches.  Hourly and daily-rate
    pay is costed from reconstructed work periods; salary and contractor
    pay is amortized over the requested range independently of punches.

Architecture position:
    Engines -- pure calculation layer, zero I/O.
    Orchestrates the parser, the compensation resolver and the fixed-pay
    walkers, accumulating into a ``DailyLedger``.

Algorithm:
    1. Group punches per employee and parse them into work periods.
    2. Hours attribute to the day a period starts; the employee is active
       on every day the period spans.
    3. Per day and active employee, resolve that day's terms:
       hourly  -> round(rate_cents * hours) cents,
       daily_rate -> the flat amount, once per employee per day.
    4. Salary and contractor totals are accrued day by day for every
       employee and spread evenly over every day of the range.

Invariants enforced:
    - Every cost uses the compensation resolved for its own day.
    - Break periods never contribute hours or cost.
    - Punches for unknown employees are ignored.
    - Employee counts use the employee's current type and active status.

Failure modes:
    - None for data problems.  An inverted range yields an all-zero result
      with no days.
"""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Sequence
from datetime import date
from decimal import Decimal

from labor_config.schema import DEFAULT_POLICY, LaborCostPolicy
from labor_engines.compensation import CompensationResolver, employee_daily_cost_cents
from labor_engines.fixed_pay import contractor_pay_for_period, salary_for_period
from labor_engines.results import DailyLedger, LaborCostResult
from labor_engines.tracer import traced_engine
from labor_engines.work_periods import PunchDiagnostic, WorkPeriodParser
from labor_kernel.domain.dates import date_range
from labor_kernel.domain.values import ZERO, cents_to_dollars, round_hours
from labor_kernel.logging_config import get_logger
from labor_modules.workforce.models import CompensationType, Employee, TimePunch

logger = get_logger("engines.actual_cost")


class ActualLaborCostCalculator:
    """
    Labor cost of what actually happened.

    Contract:
        ``calculate`` takes keyword arguments only and returns a fresh
        ``LaborCostResult``.  The calculator holds no per-call state and can
        be shared.
    Guarantees:
        - Deterministic for identical inputs.
        - ``breakdown.total`` equals the sum of daily ``total_cost``.
    """

    def __init__(self, policy: LaborCostPolicy | None = None):
        self._policy = policy or DEFAULT_POLICY
        self._parser = WorkPeriodParser(self._policy)

    @traced_engine(
        "actual_labor_cost", "1.0",
        fingerprint_fields=("start_date", "end_date", "employees", "time_punches"),
    )
    def calculate(
        self,
        *,
        employees: Sequence[Employee],
        time_punches: Sequence[TimePunch],
        start_date: date,
        end_date: date,
    ) -> LaborCostResult:
        policy = self._policy
        employees = tuple(employees)
        time_punches = tuple(time_punches)
        days = date_range(start_date, end_date)
        ledger = DailyLedger(days)

        employees_by_id = {employee.id: employee for employee in employees}
        resolvers = {
            employee_id: CompensationResolver(employee)
            for employee_id, employee in employees_by_id.items()
        }

        punches_by_employee: dict[str, list[TimePunch]] = defaultdict(list)
        for punch in time_punches:
            punches_by_employee[punch.employee_id].append(punch)

        hours_by_day: dict[tuple[str, date], Decimal] = defaultdict(lambda: ZERO)
        # Insertion-ordered so accumulation order is stable
        active_by_day: dict[date, dict[str, None]] = defaultdict(dict)
        diagnostics: list[PunchDiagnostic] = []

        for employee_id, punches in punches_by_employee.items():
            if employee_id not in employees_by_id:
                continue
            parsed = self._parser.parse(punches)
            diagnostics.extend(parsed.diagnostics)
            for period in parsed.work_periods:
                hours_by_day[(employee_id, period.work_day)] += period.hours
                for day in period.days_spanned():
                    active_by_day[day][employee_id] = None

        for day in days:
            for employee_id in active_by_day.get(day, ()):
                snapshot = resolvers[employee_id].resolve(day)
                hours = hours_by_day.get((employee_id, day), ZERO)

                if snapshot.compensation_type == CompensationType.HOURLY and hours > 0:
                    cents = employee_daily_cost_cents(snapshot, hours, policy)
                    ledger.add_hourly(day, cents_to_dollars(cents), hours)
                elif snapshot.compensation_type == CompensationType.DAILY_RATE:
                    cents = employee_daily_cost_cents(snapshot, policy=policy)
                    ledger.add_daily_rate(day, cents_to_dollars(cents))

        for employee in employees:
            resolver = resolvers[employee.id]
            # Repeated ids: punches use the last record, fixed pay uses each
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

        active = [employee for employee in employees if employee.is_active]
        result = ledger.freeze(
            salary_employees=_count_type(active, CompensationType.SALARY),
            contractor_employees=_count_type(active, CompensationType.CONTRACTOR),
            daily_rate_employees=_count_type(active, CompensationType.DAILY_RATE),
            diagnostics=diagnostics,
        )

        logger.info(
            "actual_labor_cost_calculated",
            extra={
                "start_date": start_date,
                "end_date": end_date,
                "employee_count": len(employees),
                "punch_count": len(time_punches),
                "day_count": len(days),
                "total_cost": result.total,
                "hours_worked": round_hours(result.breakdown.hourly.hours),
                "diagnostic_count": len(diagnostics),
            },
        )
        return result


def _count_type(employees: Sequence[Employee], comp_type: CompensationType) -> int:
    return sum(1 for employee in employees if employee.compensation_type == comp_type)


def calculate_actual_labor_cost(
    employees: Sequence[Employee],
    time_punches: Sequence[TimePunch],
    start_date: date,
    end_date: date,
    policy: LaborCostPolicy | None = None,
) -> LaborCostResult:
    """Module-level convenience around ``ActualLaborCostCalculator``."""
    return ActualLaborCostCalculator(policy).calculate(
        employees=employees,
        time_punches=time_punches,
        start_date=start_date,
        end_date=end_date,
    )
