"""
Module: labor_engines.fixed_pay
Responsibility:
    Salary and contractor cost of one employee over a date range.  Every
    day is resolved on its own, so an employee who switches pay model
    mid-range only accrues fixed pay on the days the fixed terms applied.

Architecture position:
    Engines -- pure calculation layer, zero I/O.
    Combines ``labor_engines.compensation`` (which terms applied) with
    ``labor_engines.allocation`` (how much one day is worth).

Invariants enforced:
    - Days before ``hire_date`` or after ``termination_date`` accrue nothing.
    - Salary: unrounded day shares are summed and the total is rounded once.
    - Contractor: whole-cent day allocations are summed; per-job accrues 0.
"""

from __future__ import annotations

from datetime import date, datetime

from labor_config.schema import DEFAULT_POLICY, LaborCostPolicy
from labor_engines.allocation import daily_contractor_allocation, daily_salary_share
from labor_engines.compensation import CompensationResolver
from labor_kernel.domain.dates import iter_days
from labor_kernel.domain.values import ZERO, round_half_up
from labor_modules.workforce.models import CompensationType, Employee


def salary_for_period(
    employee: Employee,
    start: date | datetime,
    end: date | datetime,
    policy: LaborCostPolicy = DEFAULT_POLICY,
    resolver: CompensationResolver | None = None,
) -> int:
    """Salary cost in cents accrued from ``start`` to ``end`` inclusive."""
    resolver = resolver or CompensationResolver(employee)
    total = ZERO
    for day in iter_days(start, end):
        if not employee.is_employed_on(day):
            continue
        snapshot = resolver.resolve(day)
        if (
            snapshot.compensation_type != CompensationType.SALARY
            or not snapshot.salary_amount
            or snapshot.pay_period_type is None
        ):
            continue
        total += daily_salary_share(snapshot.salary_amount, snapshot.pay_period_type, policy)
    return round_half_up(total)


def contractor_pay_for_period(
    employee: Employee,
    start: date | datetime,
    end: date | datetime,
    policy: LaborCostPolicy = DEFAULT_POLICY,
    resolver: CompensationResolver | None = None,
) -> int:
    """Contractor cost in cents accrued from ``start`` to ``end`` inclusive."""
    resolver = resolver or CompensationResolver(employee)
    total = 0
    for day in iter_days(start, end):
        if not employee.is_employed_on(day):
            continue
        snapshot = resolver.resolve(day)
        if (
            snapshot.compensation_type != CompensationType.CONTRACTOR
            or not snapshot.contractor_payment_amount
            or snapshot.contractor_payment_interval is None
        ):
            continue
        total += daily_contractor_allocation(
            snapshot.contractor_payment_amount, snapshot.contractor_payment_interval, policy,
        )
    return total
