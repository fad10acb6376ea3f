"""
Module: labor_engines.compensation
Responsibility:
    Resolve which pay terms applied to an employee on a given day, and cost
    one day of work under those terms.  Historical costing must never read
    the employee's present-day record directly: every date goes through
    ``CompensationResolver`` first.

Architecture position:
    Engines -- pure calculation layer, zero I/O.
    Depends on ``labor_engines.allocation`` for fixed-pay day shares.

Invariants enforced:
    - The snapshot for a day comes from the history entry with the greatest
      ``effective_date`` on or before that day; with no such entry the
      employee's top-level fields are used.
    - A snapshot only carries the fields of its resolved compensation type.
    - Terms with missing amounts cost zero; they never raise.

Failure modes:
    - None at calculation time.  ``validate_compensation_fields`` reports
      incomplete terms as human-readable messages for callers that want to
      surface them.

Usage:
    from labor_engines.compensation import CompensationResolver, employee_daily_cost_cents

    resolver = CompensationResolver(employee)
    snapshot = resolver.resolve(date(2024, 2, 1))
    cents = employee_daily_cost_cents(snapshot, hours=Decimal("8"))
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal

from labor_config.schema import DEFAULT_POLICY, LaborCostPolicy
from labor_engines.allocation import daily_contractor_allocation, daily_salary_allocation
from labor_kernel.domain.dates import to_calendar_day
from labor_kernel.domain.values import round_half_up
from labor_modules.workforce.models import (
    CompensationHistoryEntry,
    CompensationType,
    ContractorPaymentInterval,
    Employee,
    PayPeriodType,
)

# Pay periods per year, for annualizing a salary
_PERIODS_PER_YEAR: dict[PayPeriodType, int] = {
    PayPeriodType.WEEKLY: 52,
    PayPeriodType.BI_WEEKLY: 26,
    PayPeriodType.SEMI_MONTHLY: 24,
    PayPeriodType.MONTHLY: 12,
}
_WEEKS_PER_YEAR = 52


@dataclass(frozen=True)
class CompensationSnapshot:
    """
    Pay terms in force on one day.

    Contract:
        Only the fields belonging to ``compensation_type`` are populated;
        the rest stay at their defaults.
    Guarantees:
        - ``effective_date`` is the matched history entry's date, or None
          when the employee's top-level terms were used.
    """

    compensation_type: CompensationType
    effective_date: date | None = None
    hourly_rate: int = 0
    salary_amount: int | None = None
    pay_period_type: PayPeriodType | None = None
    contractor_payment_amount: int | None = None
    contractor_payment_interval: ContractorPaymentInterval | None = None
    daily_rate_amount: int | None = None

    @property
    def from_history(self) -> bool:
        return self.effective_date is not None


class CompensationResolver:
    """
    Per-employee resolver.  Sorts the compensation history once so a
    calculator can resolve every day of a range cheaply.
    """

    def __init__(self, employee: Employee):
        self._employee = employee
        # Newest first; sort is stable so equal dates keep input order
        self._history: tuple[CompensationHistoryEntry, ...] = tuple(
            sorted(employee.compensation_history, key=lambda h: h.effective_date, reverse=True)
        )

    @property
    def employee(self) -> Employee:
        return self._employee

    def entry_for(self, day: date | datetime) -> CompensationHistoryEntry | None:
        """The history entry in force on ``day``, if any."""
        target = to_calendar_day(day)
        for entry in self._history:
            if entry.effective_date <= target:
                return entry
        return None

    def resolve(self, day: date | datetime) -> CompensationSnapshot:
        employee = self._employee
        entry = self.entry_for(day)
        if entry is None:
            comp_type = employee.compensation_type
            effective = None
        else:
            comp_type = entry.compensation_type
            effective = entry.effective_date

        if comp_type == CompensationType.HOURLY:
            rate = entry.amount_cents if entry is not None else employee.hourly_rate
            return CompensationSnapshot(comp_type, effective, hourly_rate=rate or 0)

        if comp_type == CompensationType.SALARY:
            if entry is not None:
                return CompensationSnapshot(
                    comp_type, effective,
                    salary_amount=entry.amount_cents,
                    pay_period_type=entry.pay_period_type or employee.pay_period_type,
                )
            return CompensationSnapshot(
                comp_type, effective,
                salary_amount=employee.salary_amount,
                pay_period_type=employee.pay_period_type,
            )

        if comp_type == CompensationType.CONTRACTOR:
            amount = (
                entry.amount_cents if entry is not None
                else employee.contractor_payment_amount
            )
            # History carries no interval
            return CompensationSnapshot(
                comp_type, effective,
                contractor_payment_amount=amount,
                contractor_payment_interval=employee.contractor_payment_interval,
            )

        amount = entry.amount_cents if entry is not None else employee.daily_rate_amount
        return CompensationSnapshot(comp_type, effective, daily_rate_amount=amount)


def resolve_compensation_for_date(employee: Employee, day: date | datetime) -> CompensationSnapshot:
    """One-off resolution; build a ``CompensationResolver`` for repeated days."""
    return CompensationResolver(employee).resolve(day)


def employee_daily_cost_cents(
    snapshot: CompensationSnapshot,
    hours: Decimal | None = None,
    policy: LaborCostPolicy = DEFAULT_POLICY,
) -> int:
    """
    Cost in cents of one day under ``snapshot``.

    Hourly terms need ``hours``; the other types ignore it.  Missing
    amounts cost zero.
    """
    comp_type = snapshot.compensation_type

    if comp_type == CompensationType.HOURLY:
        if not hours:
            return 0
        return round_half_up(Decimal(snapshot.hourly_rate) * hours)

    if comp_type == CompensationType.SALARY:
        if not snapshot.salary_amount or snapshot.pay_period_type is None:
            return 0
        return daily_salary_allocation(snapshot.salary_amount, snapshot.pay_period_type, policy)

    if comp_type == CompensationType.CONTRACTOR:
        if not snapshot.contractor_payment_amount or snapshot.contractor_payment_interval is None:
            return 0
        return daily_contractor_allocation(
            snapshot.contractor_payment_amount, snapshot.contractor_payment_interval, policy,
        )

    return snapshot.daily_rate_amount or 0


def validate_compensation_fields(employee: Employee) -> list[str]:
    """Problems with the employee's current terms; empty when complete."""
    errors: list[str] = []
    comp_type = employee.compensation_type

    if comp_type == CompensationType.HOURLY:
        if not employee.hourly_rate or employee.hourly_rate <= 0:
            errors.append("Hourly rate must be greater than 0")

    elif comp_type == CompensationType.SALARY:
        if not employee.salary_amount or employee.salary_amount <= 0:
            errors.append("Salary amount must be greater than 0")
        if employee.pay_period_type is None:
            errors.append("Pay period type is required for salaried employees")

    elif comp_type == CompensationType.CONTRACTOR:
        if not employee.contractor_payment_amount or employee.contractor_payment_amount <= 0:
            errors.append("Payment amount must be greater than 0")
        if employee.contractor_payment_interval is None:
            errors.append("Payment interval is required for contractors")

    elif comp_type == CompensationType.DAILY_RATE:
        if not employee.daily_rate_amount or employee.daily_rate_amount <= 0:
            errors.append("Daily rate must be greater than 0")

    return errors


def is_compensation_valid(employee: Employee) -> bool:
    return not validate_compensation_fields(employee)


def effective_hourly_rate_cents(
    salary_amount: int,
    pay_period_type: PayPeriodType,
    hours_per_week: Decimal | int = DEFAULT_POLICY.standard_hours_per_week,
) -> int:
    """
    A salary expressed as cents per hour.

    The salary is annualized (52/26/24/12 periods per year) and divided by
    ``hours_per_week * 52``.

    Example:
        effective_hourly_rate_cents(5_200_000, PayPeriodType.MONTHLY) -> 30000
    """
    annual = Decimal(salary_amount) * _PERIODS_PER_YEAR[pay_period_type]
    hours_per_year = Decimal(hours_per_week) * _WEEKS_PER_YEAR
    return round_half_up(annual / hours_per_year)
