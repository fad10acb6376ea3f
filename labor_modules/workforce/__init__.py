"""
Workforce Module (``labor_modules.workforce``).

Responsibility
--------------
Typed records for employees (with effective-dated compensation history),
time-clock punches and scheduled shifts, plus ``LaborCostService`` -- the
facade that turns raw application records into these types and runs the
labor cost engines over them.

Architecture position
---------------------
**Modules layer** -- records are pure data; the service delegates every
calculation to ``labor_engines`` and owns only parsing and log context.
"""

from labor_modules.workforce.models import (
    CompensationHistoryEntry,
    CompensationType,
    ContractorPaymentInterval,
    Employee,
    EmployeeStatus,
    PayPeriodType,
    PunchType,
    Shift,
    TimePunch,
)

__all__ = [
    "CompensationHistoryEntry",
    "CompensationType",
    "ContractorPaymentInterval",
    "Employee",
    "EmployeeStatus",
    "PayPeriodType",
    "PunchType",
    "Shift",
    "TimePunch",
]
