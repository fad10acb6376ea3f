"""
LaborCostPolicy schema.

The static lookup tables and tolerances used by the labor cost engines,
held in one frozen object.  Tables are exposed as read-only mappings so a
policy can be shared freely between concurrent calculations.

  LaborCostPolicy  = runtime artifact (validated, immutable)
  sets/*.yaml      = source artifact (human-authored, parsed by the loader)
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import date, timedelta
from decimal import Decimal
from types import MappingProxyType

from labor_kernel.exceptions import InvalidPolicyError
from labor_modules.workforce.models import ContractorPaymentInterval, PayPeriodType

# ---------------------------------------------------------------------------
# Default tables
# ---------------------------------------------------------------------------

DAYS_PER_PAY_PERIOD: Mapping[PayPeriodType, Decimal] = MappingProxyType({
    PayPeriodType.WEEKLY: Decimal("7"),
    PayPeriodType.BI_WEEKLY: Decimal("14"),
    PayPeriodType.SEMI_MONTHLY: Decimal("15.22"),  # 365.25 / 24
    PayPeriodType.MONTHLY: Decimal("30.44"),  # 365.25 / 12
})

DAYS_PER_CONTRACTOR_INTERVAL: Mapping[ContractorPaymentInterval, Decimal] = MappingProxyType({
    ContractorPaymentInterval.WEEKLY: Decimal("7"),
    ContractorPaymentInterval.BI_WEEKLY: Decimal("14"),
    ContractorPaymentInterval.MONTHLY: Decimal("30.44"),
})

MAX_SHIFT_GAP_HOURS = Decimal("18")
DEDUP_WINDOW_MINUTES = 5
BI_WEEKLY_ANCHOR = date(2024, 1, 1)  # a Monday


@dataclass(frozen=True)
class LaborCostPolicy:
    """
    Tables and tolerances governing labor costing.

    Contract:
        Immutable once constructed; ``__post_init__`` freezes the tables
        into ``MappingProxyType`` and validates every setting.
    Guarantees:
        - Every ``PayPeriodType`` has a positive day count.
        - Every interval except PER_JOB has a positive day count; PER_JOB
          never has one.
        - ``max_shift_hours`` is positive; ``dedup_window_minutes`` is not
          negative.
    """

    name: str = "default"
    version: int = 1
    days_per_pay_period: Mapping[PayPeriodType, Decimal] = field(
        default_factory=lambda: DAYS_PER_PAY_PERIOD
    )
    days_per_contractor_interval: Mapping[ContractorPaymentInterval, Decimal] = field(
        default_factory=lambda: DAYS_PER_CONTRACTOR_INTERVAL
    )
    max_shift_hours: Decimal = MAX_SHIFT_GAP_HOURS
    dedup_window_minutes: int = DEDUP_WINDOW_MINUTES
    bi_weekly_anchor: date = BI_WEEKLY_ANCHOR
    standard_hours_per_week: Decimal = Decimal("40")

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "days_per_pay_period", MappingProxyType(dict(self.days_per_pay_period))
        )
        object.__setattr__(
            self,
            "days_per_contractor_interval",
            MappingProxyType(dict(self.days_per_contractor_interval)),
        )

        for period_type in PayPeriodType:
            days = self.days_per_pay_period.get(period_type)
            if days is None or days <= 0:
                raise InvalidPolicyError(
                    f"days_per_pay_period.{period_type.value}", days, "must be a positive day count"
                )

        for interval in ContractorPaymentInterval:
            days = self.days_per_contractor_interval.get(interval)
            if interval == ContractorPaymentInterval.PER_JOB:
                if days is not None:
                    raise InvalidPolicyError(
                        "days_per_contractor_interval.per-job", days,
                        "per-job contractors are not amortized daily",
                    )
                continue
            if days is None or days <= 0:
                raise InvalidPolicyError(
                    f"days_per_contractor_interval.{interval.value}", days,
                    "must be a positive day count",
                )

        if self.max_shift_hours <= 0:
            raise InvalidPolicyError("max_shift_hours", self.max_shift_hours, "must be positive")
        if self.dedup_window_minutes < 0:
            raise InvalidPolicyError(
                "dedup_window_minutes", self.dedup_window_minutes, "cannot be negative"
            )
        if self.standard_hours_per_week <= 0:
            raise InvalidPolicyError(
                "standard_hours_per_week", self.standard_hours_per_week, "must be positive"
            )

    @property
    def dedup_window(self) -> timedelta:
        return timedelta(minutes=self.dedup_window_minutes)

    def days_in_pay_period(self, period_type: PayPeriodType) -> Decimal:
        return self.days_per_pay_period[period_type]

    def days_in_contractor_interval(
        self, interval: ContractorPaymentInterval,
    ) -> Decimal | None:
        """Day count for an interval, or None for per-job."""
        return self.days_per_contractor_interval.get(interval)


DEFAULT_POLICY = LaborCostPolicy()
