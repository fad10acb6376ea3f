"""
Pytest fixtures for the labor cost test suite.

Provides:
- Structured logging setup and a JSON log capture fixture
- Record factories for employees, punches and shifts
"""

import json
import logging
from datetime import date, datetime
from io import StringIO

import pytest

from labor_kernel.logging_config import (
    LogContext,
    StructuredFormatter,
    configure_logging,
    reset_logging,
)
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


# =============================================================================
# Logging fixtures
# =============================================================================


@pytest.fixture(autouse=True, scope="session")
def _configure_test_logging():
    """Configure structured logging for the test suite."""
    reset_logging()
    configure_logging(level=logging.DEBUG)
    yield
    reset_logging()


@pytest.fixture(autouse=True)
def _clear_log_context():
    """Clear LogContext between tests to prevent cross-test contamination."""
    LogContext.clear()
    yield
    LogContext.clear()


@pytest.fixture
def captured_logs():
    """
    Capture labor_kernel logs as parsed JSON dicts.

    Usage::

        def test_something(captured_logs):
            calculate_actual_labor_cost(...)
            logs = captured_logs()
            assert any(r["message"] == "LABOR_ENGINE_TRACE" for r in logs)
    """
    stream = StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(StructuredFormatter())
    root = logging.getLogger("labor_kernel")
    previous_level = root.level
    root.setLevel(logging.DEBUG)
    root.addHandler(handler)

    def _get_records() -> list[dict]:
        lines = stream.getvalue().strip().split("\n")
        return [json.loads(line) for line in lines if line]

    yield _get_records

    root.removeHandler(handler)
    root.setLevel(previous_level)


# =============================================================================
# Record factories
# =============================================================================


def make_hourly(employee_id="emp-hourly", rate_cents=2000, **kwargs) -> Employee:
    kwargs.setdefault("status", EmployeeStatus.ACTIVE)
    return Employee(
        id=employee_id,
        compensation_type=CompensationType.HOURLY,
        hourly_rate=rate_cents,
        **kwargs,
    )


def make_salaried(
    employee_id="emp-salary",
    amount_cents=140_000,
    pay_period_type=PayPeriodType.BI_WEEKLY,
    **kwargs,
) -> Employee:
    kwargs.setdefault("status", EmployeeStatus.ACTIVE)
    return Employee(
        id=employee_id,
        compensation_type=CompensationType.SALARY,
        salary_amount=amount_cents,
        pay_period_type=pay_period_type,
        **kwargs,
    )


def make_contractor(
    employee_id="emp-contractor",
    amount_cents=70_000,
    interval=ContractorPaymentInterval.WEEKLY,
    **kwargs,
) -> Employee:
    kwargs.setdefault("status", EmployeeStatus.ACTIVE)
    return Employee(
        id=employee_id,
        compensation_type=CompensationType.CONTRACTOR,
        contractor_payment_amount=amount_cents,
        contractor_payment_interval=interval,
        **kwargs,
    )


def make_daily_rate(employee_id="emp-daily", amount_cents=15_000, **kwargs) -> Employee:
    kwargs.setdefault("status", EmployeeStatus.ACTIVE)
    return Employee(
        id=employee_id,
        compensation_type=CompensationType.DAILY_RATE,
        daily_rate_amount=amount_cents,
        **kwargs,
    )


def history(effective, comp_type, amount_cents, pay_period_type=None) -> CompensationHistoryEntry:
    if isinstance(effective, str):
        effective = date.fromisoformat(effective)
    return CompensationHistoryEntry(
        effective_date=effective,
        compensation_type=comp_type,
        amount_cents=amount_cents,
        pay_period_type=pay_period_type,
    )


_punch_seq = iter(range(1, 1_000_000))


def punch(when, punch_type, employee_id="emp-hourly", punch_id=None) -> TimePunch:
    if isinstance(when, str):
        when = datetime.fromisoformat(when)
    if isinstance(punch_type, str):
        punch_type = PunchType(punch_type)
    return TimePunch(
        id=punch_id or f"p-{next(_punch_seq)}",
        employee_id=employee_id,
        punch_time=when,
        punch_type=punch_type,
    )


def shift(start, end, employee_id="emp-hourly", break_minutes=0) -> Shift:
    return Shift(
        employee_id=employee_id,
        start_time=datetime.fromisoformat(start),
        end_time=datetime.fromisoformat(end),
        break_duration=break_minutes,
    )
