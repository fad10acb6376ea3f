"""
Module: labor_engines
Responsibility:
    Package entrypoint that re-exports the public symbols of the pure labor
    cost engines.  This is the canonical import surface for higher layers
    (``labor_modules.workforce.service``, ``scripts``).

Architecture position:
    Engines -- pure calculation layer, zero I/O.
    May only import labor_kernel, labor_config and the workforce records.
    MUST NOT import labor_modules.workforce.service.

Invariants enforced:
    - Purity: engines NEVER call ``datetime.now()`` or ``date.today()``.
      Date ranges are always passed in by the caller.
    - Decimal-only arithmetic: input money is integer cents, output money
      is ``Decimal`` dollars; floats are never used.
    - Determinism: identical inputs always produce identical outputs.

Failure modes:
    - Engines do not raise for malformed data; they degrade to zero cost
      and report punch anomalies as diagnostics.

Audit relevance:
    The two calculators are traced via ``@traced_engine`` (see
    ``labor_engines.tracer``), emitting LABOR_ENGINE_TRACE log records with
    engine name, version, input fingerprint and duration.

Usage:
    from labor_engines import ActualLaborCostCalculator, ScheduledLaborCostCalculator
    from labor_engines import WorkPeriodParser, CompensationResolver
"""

from labor_kernel.logging_config import get_logger

logger = get_logger("engines")

from labor_engines.actual_cost import (
    ActualLaborCostCalculator,
    calculate_actual_labor_cost,
)
from labor_engines.allocation import (
    daily_contractor_allocation,
    daily_salary_allocation,
    pay_period_bounds,
    spread_evenly,
)
from labor_engines.compensation import (
    CompensationResolver,
    CompensationSnapshot,
    effective_hourly_rate_cents,
    employee_daily_cost_cents,
    is_compensation_valid,
    resolve_compensation_for_date,
    validate_compensation_fields,
)
from labor_engines.fixed_pay import (
    contractor_pay_for_period,
    salary_for_period,
)
from labor_engines.punches import deduplicate_punches
from labor_engines.results import (
    DailyLaborCost,
    FixedCostSummary,
    HourlyCostSummary,
    LaborCostBreakdown,
    LaborCostResult,
)
from labor_engines.scheduled_cost import (
    ScheduledLaborCostCalculator,
    calculate_scheduled_labor_cost,
    scheduled_hours,
)
from labor_engines.tracer import traced_engine
from labor_engines.work_periods import (
    ParseResult,
    ParserState,
    PunchAnomaly,
    PunchDiagnostic,
    WorkPeriod,
    WorkPeriodParser,
    parse_work_periods,
)

__all__ = [
    # Calculators
    "ActualLaborCostCalculator",
    "ScheduledLaborCostCalculator",
    "calculate_actual_labor_cost",
    "calculate_scheduled_labor_cost",
    "scheduled_hours",
    # Results
    "DailyLaborCost",
    "FixedCostSummary",
    "HourlyCostSummary",
    "LaborCostBreakdown",
    "LaborCostResult",
    # Punch parsing
    "ParseResult",
    "ParserState",
    "PunchAnomaly",
    "PunchDiagnostic",
    "WorkPeriod",
    "WorkPeriodParser",
    "deduplicate_punches",
    "parse_work_periods",
    # Compensation
    "CompensationResolver",
    "CompensationSnapshot",
    "effective_hourly_rate_cents",
    "employee_daily_cost_cents",
    "is_compensation_valid",
    "resolve_compensation_for_date",
    "validate_compensation_fields",
    # Allocation
    "contractor_pay_for_period",
    "daily_contractor_allocation",
    "daily_salary_allocation",
    "pay_period_bounds",
    "salary_for_period",
    "spread_evenly",
    # Tracing
    "traced_engine",
]
