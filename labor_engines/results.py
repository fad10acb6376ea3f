"""
Module: labor_engines.results
Responsibility:
    Result value objects shared by the actual and scheduled labor cost
    calculators, and ``DailyLedger``, the per-call accumulator both use to
    build them.

Architecture position:
    Engines -- pure calculation layer, zero I/O.

Invariants enforced:
    - All costs are ``Decimal`` dollars with two decimal places; hours are
      exact ``Decimal`` values, rounded to four places only in ``to_dict``.
    - ``DailyLaborCost.total_cost`` equals the sum of its four buckets.
    - ``LaborCostBreakdown.total`` equals the sum of the daily totals.
    - ``days_scheduled`` counts days whose bucket is strictly positive.

Output shape:
    ``to_dict()`` produces the wire shape consumed by dashboards:

        {"breakdown": {"hourly": {"cost", "hours"},
                       "salary": {"cost", "employees", "daysScheduled"},
                       "contractor": {...}, "daily_rate": {...},
                       "total"},
         "dailyCosts": [{"date": "YYYY-MM-DD", "hourly_cost", "salary_cost",
                         "contractor_cost", "daily_rate_cost", "total_cost",
                         "hours_worked"}],
         "diagnostics": [...]}
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Any

from labor_engines.allocation import spread_evenly
from labor_engines.work_periods import PunchDiagnostic
from labor_kernel.domain.dates import format_day
from labor_kernel.domain.values import ZERO, round_cents, round_hours

_MONEY_ZERO = Decimal("0.00")


@dataclass(frozen=True)
class DailyLaborCost:
    """Labor cost of one calendar day, split by pay model."""

    date: date
    hourly_cost: Decimal = _MONEY_ZERO
    salary_cost: Decimal = _MONEY_ZERO
    contractor_cost: Decimal = _MONEY_ZERO
    daily_rate_cost: Decimal = _MONEY_ZERO
    total_cost: Decimal = _MONEY_ZERO
    hours_worked: Decimal = ZERO

    def to_dict(self) -> dict[str, Any]:
        return {
            "date": format_day(self.date),
            "hourly_cost": self.hourly_cost,
            "salary_cost": self.salary_cost,
            "contractor_cost": self.contractor_cost,
            "daily_rate_cost": self.daily_rate_cost,
            "total_cost": self.total_cost,
            "hours_worked": round_hours(self.hours_worked),
        }


@dataclass(frozen=True)
class HourlyCostSummary:
    cost: Decimal = _MONEY_ZERO
    hours: Decimal = ZERO

    def to_dict(self) -> dict[str, Any]:
        return {"cost": self.cost, "hours": round_hours(self.hours)}


@dataclass(frozen=True)
class FixedCostSummary:
    """Totals for salary, contractor or daily-rate pay."""

    cost: Decimal = _MONEY_ZERO
    employees: int = 0
    days_scheduled: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "cost": self.cost,
            "employees": self.employees,
            "daysScheduled": self.days_scheduled,
        }


@dataclass(frozen=True)
class LaborCostBreakdown:
    hourly: HourlyCostSummary = field(default_factory=HourlyCostSummary)
    salary: FixedCostSummary = field(default_factory=FixedCostSummary)
    contractor: FixedCostSummary = field(default_factory=FixedCostSummary)
    daily_rate: FixedCostSummary = field(default_factory=FixedCostSummary)
    total: Decimal = _MONEY_ZERO

    def to_dict(self) -> dict[str, Any]:
        return {
            "hourly": self.hourly.to_dict(),
            "salary": self.salary.to_dict(),
            "contractor": self.contractor.to_dict(),
            "daily_rate": self.daily_rate.to_dict(),
            "total": self.total,
        }


@dataclass(frozen=True)
class LaborCostResult:
    """
    Complete output of one labor cost calculation.

    Contract:
        Constructed fresh per call and owned by the caller.
    Guarantees:
        - ``daily_costs`` holds one entry per day of the requested range,
          ascending by date.
        - ``diagnostics`` lists punch anomalies found while parsing; it is
          always empty for schedule projections.
    """

    breakdown: LaborCostBreakdown
    daily_costs: tuple[DailyLaborCost, ...]
    diagnostics: tuple[PunchDiagnostic, ...] = ()

    @property
    def total(self) -> Decimal:
        return self.breakdown.total

    def cost_for(self, day: date) -> DailyLaborCost | None:
        for daily in self.daily_costs:
            if daily.date == day:
                return daily
        return None

    def to_dict(self) -> dict[str, Any]:
        return {
            "breakdown": self.breakdown.to_dict(),
            "dailyCosts": [daily.to_dict() for daily in self.daily_costs],
            "diagnostics": [d.to_dict() for d in self.diagnostics],
        }


# ---------------------------------------------------------------------------
# Accumulation
# ---------------------------------------------------------------------------


@dataclass
class _DayBuckets:
    hourly: Decimal = _MONEY_ZERO
    salary: Decimal = _MONEY_ZERO
    contractor: Decimal = _MONEY_ZERO
    daily_rate: Decimal = _MONEY_ZERO
    hours: Decimal = ZERO


class DailyLedger:
    """
    Mutable per-call accumulator keyed by calendar day.

    Only days inside the requested range can receive amounts; amounts for
    other days are ignored.  ``freeze`` turns the ledger into a
    ``LaborCostResult``.
    """

    def __init__(self, days: Sequence[date]):
        self._days = tuple(days)
        self._buckets: dict[date, _DayBuckets] = {day: _DayBuckets() for day in self._days}

    @property
    def days(self) -> tuple[date, ...]:
        return self._days

    def __contains__(self, day: object) -> bool:
        return day in self._buckets

    def add_hourly(self, day: date, cost: Decimal, hours: Decimal) -> None:
        bucket = self._buckets.get(day)
        if bucket is not None:
            bucket.hourly += cost
            bucket.hours += hours

    def add_daily_rate(self, day: date, cost: Decimal) -> None:
        bucket = self._buckets.get(day)
        if bucket is not None:
            bucket.daily_rate += cost

    def spread_salary(self, amount: Decimal) -> None:
        """Spread a period salary total evenly over every day of the range."""
        for bucket, part in zip(self._buckets.values(), spread_evenly(amount, len(self._days))):
            bucket.salary += part

    def spread_contractor(self, amount: Decimal) -> None:
        for bucket, part in zip(self._buckets.values(), spread_evenly(amount, len(self._days))):
            bucket.contractor += part

    def freeze(
        self,
        *,
        salary_employees: int,
        contractor_employees: int,
        daily_rate_employees: int,
        diagnostics: Iterable[PunchDiagnostic] = (),
    ) -> LaborCostResult:
        daily_costs = tuple(
            DailyLaborCost(
                date=day,
                hourly_cost=round_cents(bucket.hourly),
                salary_cost=round_cents(bucket.salary),
                contractor_cost=round_cents(bucket.contractor),
                daily_rate_cost=round_cents(bucket.daily_rate),
                total_cost=round_cents(
                    bucket.hourly + bucket.salary + bucket.contractor + bucket.daily_rate
                ),
                hours_worked=bucket.hours,
            )
            for day, bucket in self._buckets.items()
        )

        breakdown = LaborCostBreakdown(
            hourly=HourlyCostSummary(
                cost=_sum(d.hourly_cost for d in daily_costs),
                hours=sum((d.hours_worked for d in daily_costs), ZERO),
            ),
            salary=FixedCostSummary(
                cost=_sum(d.salary_cost for d in daily_costs),
                employees=salary_employees,
                days_scheduled=sum(1 for d in daily_costs if d.salary_cost > 0),
            ),
            contractor=FixedCostSummary(
                cost=_sum(d.contractor_cost for d in daily_costs),
                employees=contractor_employees,
                days_scheduled=sum(1 for d in daily_costs if d.contractor_cost > 0),
            ),
            daily_rate=FixedCostSummary(
                cost=_sum(d.daily_rate_cost for d in daily_costs),
                employees=daily_rate_employees,
                days_scheduled=sum(1 for d in daily_costs if d.daily_rate_cost > 0),
            ),
            total=_sum(d.total_cost for d in daily_costs),
        )
        return LaborCostResult(
            breakdown=breakdown,
            daily_costs=daily_costs,
            diagnostics=tuple(diagnostics),
        )


def _sum(values: Iterable[Decimal]) -> Decimal:
    return round_cents(sum(values, _MONEY_ZERO))
