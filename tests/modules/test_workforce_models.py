"""Tests for parsing raw workforce records with from_dict."""

from datetime import date, datetime, timedelta, timezone

import pytest

from labor_kernel.exceptions import InvalidRecordError, UnknownEnumValueError
from labor_modules.workforce.models import (
    CompensationType,
    ContractorPaymentInterval,
    Employee,
    EmployeeStatus,
    PayPeriodType,
    PunchType,
    Shift,
    TimePunch,
)


class TestEmployeeFromDict:

    def test_full_record(self):
        employee = Employee.from_dict({
            "id": "e1",
            "name": "Line Cook",
            "status": "active",
            "compensation_type": "salary",
            "salary_amount": 140000,
            "pay_period_type": "bi-weekly",
            "hire_date": "2023-06-01",
            "compensation_history": [
                {
                    "effective_date": "2024-02-01",
                    "compensation_type": "hourly",
                    "amount_cents": "2500",
                },
            ],
        })

        assert employee.id == "e1"
        assert employee.compensation_type == CompensationType.SALARY
        assert employee.salary_amount == 140_000
        assert employee.pay_period_type == PayPeriodType.BI_WEEKLY
        assert employee.hire_date == date(2023, 6, 1)
        assert employee.hourly_rate == 0
        entry = employee.compensation_history[0]
        assert entry.effective_date == date(2024, 2, 1)
        assert entry.amount_cents == 2500
        assert entry.pay_period_type is None

    def test_status_defaults_to_active(self):
        employee = Employee.from_dict({"id": 7, "compensation_type": "hourly", "hourly_rate": 2000})
        assert employee.id == "7"
        assert employee.status == EmployeeStatus.ACTIVE

    def test_per_job_interval(self):
        employee = Employee.from_dict({
            "id": "c1",
            "compensation_type": "contractor",
            "contractor_payment_amount": 50000,
            "contractor_payment_interval": "per-job",
        })
        assert employee.contractor_payment_interval == ContractorPaymentInterval.PER_JOB

    def test_integral_float_cents_accepted(self):
        employee = Employee.from_dict({"id": "e1", "compensation_type": "hourly", "hourly_rate": 2000.0})
        assert employee.hourly_rate == 2000

    def test_fractional_cents_rejected(self):
        with pytest.raises(InvalidRecordError) as exc_info:
            Employee.from_dict({"id": "e1", "compensation_type": "hourly", "hourly_rate": 20.5})
        assert exc_info.value.field == "hourly_rate"

    def test_boolean_cents_rejected(self):
        with pytest.raises(InvalidRecordError):
            Employee.from_dict({"id": "e1", "compensation_type": "daily_rate", "daily_rate_amount": True})

    def test_unknown_compensation_type(self):
        with pytest.raises(UnknownEnumValueError) as exc_info:
            Employee.from_dict({"id": "e1", "compensation_type": "commission"})
        err = exc_info.value
        assert err.code == "UNKNOWN_ENUM_VALUE"
        assert err.field == "compensation_type"
        assert "daily_rate" in err.allowed

    def test_missing_id(self):
        with pytest.raises(InvalidRecordError) as exc_info:
            Employee.from_dict({"compensation_type": "hourly"})
        assert exc_info.value.code == "INVALID_RECORD"
        assert exc_info.value.field == "id"

    def test_history_entry_missing_amount(self):
        with pytest.raises(InvalidRecordError) as exc_info:
            Employee.from_dict({
                "id": "e1",
                "compensation_type": "hourly",
                "compensation_history": [
                    {"effective_date": "2024-01-01", "compensation_type": "hourly"},
                ],
            })
        assert exc_info.value.record_type == "compensation_history"

    def test_bad_hire_date(self):
        with pytest.raises(InvalidRecordError):
            Employee.from_dict({"id": "e1", "compensation_type": "hourly", "hire_date": "June"})


class TestEmploymentWindow:

    def test_is_employed_on(self):
        employee = Employee(
            id="e1",
            status=EmployeeStatus.TERMINATED,
            compensation_type=CompensationType.HOURLY,
            hire_date=date(2024, 1, 10),
            termination_date=date(2024, 1, 20),
        )
        assert not employee.is_employed_on(date(2024, 1, 9))
        assert employee.is_employed_on(date(2024, 1, 10))
        assert employee.is_employed_on(date(2024, 1, 20))
        assert not employee.is_employed_on(date(2024, 1, 21))
        assert not employee.is_active

    def test_open_ended(self):
        employee = Employee(id="e1", status=EmployeeStatus.ACTIVE, compensation_type=CompensationType.HOURLY)
        assert employee.is_employed_on(date(1999, 1, 1))


class TestTimePunchFromDict:

    def test_parse(self):
        p = TimePunch.from_dict({
            "id": "p1",
            "employee_id": "e1",
            "punch_time": "2024-01-01T09:00:00",
            "punch_type": "clock_in",
        })
        assert p.punch_time == datetime(2024, 1, 1, 9, 0)
        assert p.punch_type == PunchType.CLOCK_IN

    def test_utc_suffix(self):
        p = TimePunch.from_dict({
            "employee_id": "e1",
            "punch_time": "2024-01-01T09:00:00Z",
            "punch_type": "clock_out",
        })
        assert p.punch_time == datetime(2024, 1, 1, 9, 0)
        assert p.punch_time.tzinfo is None
        assert p.id == ""

    def test_offset_dropped_keeping_wall_clock(self):
        p = TimePunch.from_dict({
            "employee_id": "e1",
            "punch_time": "2024-01-01T09:00:00-05:00",
            "punch_type": "break_start",
        })
        assert p.punch_time == datetime(2024, 1, 1, 9, 0)

    def test_unknown_punch_type(self):
        with pytest.raises(UnknownEnumValueError):
            TimePunch.from_dict({
                "employee_id": "e1",
                "punch_time": "2024-01-01T09:00:00",
                "punch_type": "lunch",
            })

    def test_bad_timestamp(self):
        with pytest.raises(InvalidRecordError) as exc_info:
            TimePunch.from_dict({"employee_id": "e1", "punch_time": "9am", "punch_type": "clock_in"})
        assert exc_info.value.field == "punch_time"


class TestShiftFromDict:

    def test_parse(self):
        s = Shift.from_dict({
            "id": 12,
            "employee_id": "e1",
            "start_time": "2024-01-01T09:00:00",
            "end_time": "2024-01-01T17:00:00",
            "break_duration": "30",
        })
        assert s.break_duration == 30
        assert s.id == "12"

    def test_break_defaults_to_zero(self):
        s = Shift.from_dict({
            "employee_id": "e1",
            "start_time": "2024-01-01T09:00:00",
            "end_time": "2024-01-01T17:00:00",
        })
        assert s.break_duration == 0
        assert s.id is None

    def test_mixed_offset_and_naive_ends(self):
        s = Shift.from_dict({
            "employee_id": "e1",
            "start_time": "2024-01-01T09:00:00Z",
            "end_time": "2024-01-01T17:00:00",
        })
        assert s.end_time - s.start_time == timedelta(hours=8)

    def test_aware_datetime_values_made_naive(self):
        s = Shift.from_dict({
            "employee_id": "e1",
            "start_time": datetime(2024, 1, 1, 9, 0, tzinfo=timezone.utc),
            "end_time": datetime(2024, 1, 1, 17, 0),
        })
        assert s.start_time == datetime(2024, 1, 1, 9, 0)

    def test_bad_break(self):
        with pytest.raises(InvalidRecordError) as exc_info:
            Shift.from_dict({
                "employee_id": "e1",
                "start_time": "2024-01-01T09:00:00",
                "end_time": "2024-01-01T17:00:00",
                "break_duration": "half an hour",
            })
        assert exc_info.value.field == "break_duration"


class TestRecordsAreFrozen:

    def test_employee_immutable(self):
        employee = Employee(id="e1", status=EmployeeStatus.ACTIVE, compensation_type=CompensationType.HOURLY)
        with pytest.raises(AttributeError):
            employee.hourly_rate = 5000
