"""
Module: labor_engines.allocation
Responsibility:
    Pro-rata math for fixed pay.  Converts a salary or contractor payment
    into a per-day amount using average days-per-period tables, spreads a
    period total evenly over a date range, and computes pay period bounds.

Architecture position:
    Engines -- pure calculation layer, zero I/O.
    May only import labor_kernel/domain and labor_config.

Invariants enforced:
    - Daily allocations are whole cents, rounded half-up.
    - PER_JOB contractors are never amortized: their allocation is 0.
    - ``spread_evenly`` conserves the amount exactly: the parts always sum
      to the input and differ by at most one cent.
    - Purity: no clock access, no I/O.

Failure modes:
    - None for valid enum members.  ``spread_evenly`` returns an empty
      tuple for a non-positive day count.

Usage:
    from labor_engines.allocation import daily_salary_allocation, spread_evenly

    daily_salary_allocation(140000, PayPeriodType.BI_WEEKLY)  # -> 10000
    spread_evenly(Decimal("100.00"), 3)  # -> (33.33, 33.33, 33.34)
"""

from __future__ import annotations

import calendar
from datetime import date, timedelta
from decimal import Decimal

from labor_config.schema import DEFAULT_POLICY, LaborCostPolicy
from labor_kernel.domain.values import CENT, CENTS_PER_DOLLAR, round_cents, round_half_up
from labor_modules.workforce.models import ContractorPaymentInterval, PayPeriodType

# Weekly pay periods start on Sunday
_WEEK_START = 6  # date.weekday() value for Sunday
_BI_WEEKLY_DAYS = 14


def daily_salary_share(
    amount_cents: int,
    pay_period_type: PayPeriodType,
    policy: LaborCostPolicy = DEFAULT_POLICY,
) -> Decimal:
    """Unrounded cents per day for a salary paid each ``pay_period_type``."""
    return Decimal(amount_cents) / policy.days_in_pay_period(pay_period_type)


def daily_salary_allocation(
    amount_cents: int,
    pay_period_type: PayPeriodType,
    policy: LaborCostPolicy = DEFAULT_POLICY,
) -> int:
    """Whole cents per day for a salary paid each ``pay_period_type``."""
    return round_half_up(daily_salary_share(amount_cents, pay_period_type, policy))


def daily_contractor_allocation(
    amount_cents: int,
    interval: ContractorPaymentInterval,
    policy: LaborCostPolicy = DEFAULT_POLICY,
) -> int:
    """Whole cents per day for a contractor paid each ``interval``.

    Returns 0 for per-job contractors.
    """
    days = policy.days_in_contractor_interval(interval)
    if days is None:
        return 0
    return round_half_up(Decimal(amount_cents) / days)


def spread_evenly(amount: Decimal, days: int) -> tuple[Decimal, ...]:
    """
    Split a dollar amount into ``days`` whole-cent parts.

    The base share is the floor of the even split; the leftover cents are
    handed out one each to the trailing days.

    Example:
        spread_evenly(Decimal("0.05"), 3) -> (0.01, 0.02, 0.02)
    """
    if days <= 0:
        return ()
    total_cents = int(round_cents(amount) * CENTS_PER_DOLLAR)
    base, leftover = divmod(total_cents, days)
    plain = Decimal(base) / CENTS_PER_DOLLAR
    bumped = Decimal(base + 1) / CENTS_PER_DOLLAR
    return tuple(
        (bumped if index >= days - leftover else plain).quantize(CENT)
        for index in range(days)
    )


def pay_period_bounds(
    day: date,
    pay_period_type: PayPeriodType,
    policy: LaborCostPolicy = DEFAULT_POLICY,
) -> tuple[date, date]:
    """
    First and last calendar day of the pay period that contains ``day``.

    - weekly: Sunday through Saturday.
    - bi-weekly: 14-day blocks counted from ``policy.bi_weekly_anchor``.
    - semi-monthly: the 1st-15th, or the 16th through month end.
    - monthly: the calendar month.
    """
    if pay_period_type == PayPeriodType.WEEKLY:
        start = day - timedelta(days=(day.weekday() - _WEEK_START) % 7)
        return start, start + timedelta(days=6)

    if pay_period_type == PayPeriodType.BI_WEEKLY:
        offset = (day - policy.bi_weekly_anchor).days % _BI_WEEKLY_DAYS
        start = day - timedelta(days=offset)
        return start, start + timedelta(days=_BI_WEEKLY_DAYS - 1)

    last_day = calendar.monthrange(day.year, day.month)[1]
    if pay_period_type == PayPeriodType.SEMI_MONTHLY:
        if day.day <= 15:
            return day.replace(day=1), day.replace(day=15)
        return day.replace(day=16), day.replace(day=last_day)

    return day.replace(day=1), day.replace(day=last_day)
