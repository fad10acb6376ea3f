"""
Tests for historical labor cost from punches.

Covers:
- Hourly cost from reconstructed periods (breaks unpaid)
- Daily-rate charges on every day a period spans
- Effective-dated compensation per day
- Salary and contractor amortization and headcounts
- Diagnostics and trace logging
"""

from datetime import date
from decimal import Decimal

from labor_engines.actual_cost import ActualLaborCostCalculator, calculate_actual_labor_cost
from labor_engines.work_periods import PunchAnomaly
from labor_modules.workforce.models import (
    CompensationType,
    ContractorPaymentInterval,
    EmployeeStatus,
    PayPeriodType,
)
from tests.conftest import (
    history,
    make_contractor,
    make_daily_rate,
    make_hourly,
    make_salaried,
    punch,
)

JAN_1 = date(2024, 1, 1)
JAN_2 = date(2024, 1, 2)
JAN_7 = date(2024, 1, 7)


def _shift_punches(start, end, employee_id="emp-hourly"):
    return [
        punch(start, "clock_in", employee_id),
        punch(end, "clock_out", employee_id),
    ]


class TestHourlyCost:

    def test_single_shift(self):
        result = calculate_actual_labor_cost(
            [make_hourly(rate_cents=2000)],
            _shift_punches("2024-01-01T09:00", "2024-01-01T17:00"),
            JAN_1, JAN_1,
        )

        assert result.breakdown.hourly.cost == Decimal("160.00")
        assert result.breakdown.hourly.hours == Decimal("8")
        assert result.daily_costs[0].hourly_cost == Decimal("160.00")
        assert result.daily_costs[0].hours_worked == Decimal("8")
        assert result.total == Decimal("160.00")

    def test_break_is_unpaid(self):
        punches = [
            punch("2024-01-01T09:00", "clock_in"),
            punch("2024-01-01T12:00", "break_start"),
            punch("2024-01-01T12:30", "break_end"),
            punch("2024-01-01T17:00", "clock_out"),
        ]
        result = calculate_actual_labor_cost([make_hourly()], punches, JAN_1, JAN_1)
        assert result.breakdown.hourly.cost == Decimal("150.00")
        assert result.breakdown.hourly.hours == Decimal("7.5")

    def test_overnight_hours_on_start_day(self):
        result = calculate_actual_labor_cost(
            [make_hourly()],
            _shift_punches("2024-01-01T22:00", "2024-01-02T06:00"),
            JAN_1, JAN_2,
        )
        first, second = result.daily_costs
        assert first.hours_worked == Decimal("8")
        assert first.hourly_cost == Decimal("160.00")
        assert second.hourly_cost == Decimal("0.00")

    def test_shift_starting_before_range_ignored(self):
        result = calculate_actual_labor_cost(
            [make_hourly()],
            _shift_punches("2023-12-31T22:00", "2024-01-01T06:00"),
            JAN_1, JAN_1,
        )
        assert result.total == Decimal("0.00")

    def test_unknown_employee_punches_ignored(self):
        punches = _shift_punches("2024-01-01T09:00", "2024-01-01T17:00", employee_id="ghost")
        result = calculate_actual_labor_cost([make_hourly()], punches, JAN_1, JAN_1)
        assert result.total == Decimal("0.00")
        assert result.diagnostics == ()

    def test_accepts_generators(self):
        result = calculate_actual_labor_cost(
            (e for e in [make_hourly()]),
            (p for p in _shift_punches("2024-01-01T09:00", "2024-01-01T17:00")),
            JAN_1, JAN_1,
        )
        assert result.total == Decimal("160.00")


class TestDailyRateCost:

    def test_charged_once_per_day(self):
        punches = (
            _shift_punches("2024-01-01T08:00", "2024-01-01T11:00", "emp-daily")
            + _shift_punches("2024-01-01T15:00", "2024-01-01T20:00", "emp-daily")
        )
        result = calculate_actual_labor_cost([make_daily_rate()], punches, JAN_1, JAN_1)
        assert result.breakdown.daily_rate.cost == Decimal("150.00")
        assert result.breakdown.daily_rate.days_scheduled == 1
        # Daily-rate hours are not hourly hours
        assert result.breakdown.hourly.hours == Decimal("0")

    def test_overnight_charged_both_days(self):
        result = calculate_actual_labor_cost(
            [make_daily_rate()],
            _shift_punches("2024-01-01T22:00", "2024-01-02T06:00", "emp-daily"),
            JAN_1, JAN_2,
        )
        assert [d.daily_rate_cost for d in result.daily_costs] == [
            Decimal("150.00"), Decimal("150.00"),
        ]
        assert result.breakdown.daily_rate.days_scheduled == 2

    def test_amount_from_history(self):
        employee = make_daily_rate(
            compensation_history=(history("2024-01-01", CompensationType.DAILY_RATE, 20_000),),
        )
        result = calculate_actual_labor_cost(
            [employee],
            _shift_punches("2024-01-02T10:00", "2024-01-02T18:00", "emp-daily"),
            JAN_1, JAN_7,
        )
        assert result.breakdown.daily_rate.cost == Decimal("200.00")


class TestFixedPay:

    def test_salary_spread_over_range(self):
        result = calculate_actual_labor_cost([make_salaried()], [], JAN_1, JAN_7)
        assert all(d.salary_cost == Decimal("100.00") for d in result.daily_costs)
        assert result.breakdown.salary.cost == Decimal("700.00")
        assert result.breakdown.salary.employees == 1
        assert result.breakdown.salary.days_scheduled == 7

    def test_salary_independent_of_punches(self):
        punches = _shift_punches("2024-01-01T09:00", "2024-01-01T17:00", "emp-salary")
        with_punches = calculate_actual_labor_cost([make_salaried()], punches, JAN_1, JAN_7)
        without = calculate_actual_labor_cost([make_salaried()], [], JAN_1, JAN_7)
        assert with_punches.breakdown == without.breakdown

    def test_contractor(self):
        result = calculate_actual_labor_cost([make_contractor()], [], JAN_1, JAN_7)
        assert result.breakdown.contractor.cost == Decimal("700.00")
        assert result.breakdown.contractor.employees == 1

    def test_per_job_contractor_costs_nothing_but_is_counted(self):
        employee = make_contractor(interval=ContractorPaymentInterval.PER_JOB)
        result = calculate_actual_labor_cost([employee], [], JAN_1, JAN_7)
        assert result.breakdown.contractor.cost == Decimal("0.00")
        assert result.breakdown.contractor.employees == 1
        assert result.breakdown.contractor.days_scheduled == 0

    def test_inactive_employee_costed_but_not_counted(self):
        employee = make_salaried(status=EmployeeStatus.INACTIVE)
        result = calculate_actual_labor_cost([employee], [], JAN_1, JAN_7)
        assert result.breakdown.salary.cost == Decimal("700.00")
        assert result.breakdown.salary.employees == 0

    def test_switch_from_hourly_to_salary(self):
        employee = make_hourly(
            compensation_history=(
                history("2024-02-01", CompensationType.SALARY, 140_000, PayPeriodType.BI_WEEKLY),
            ),
        )
        punches = (
            _shift_punches("2024-01-31T09:00", "2024-01-31T17:00")
            + _shift_punches("2024-02-01T09:00", "2024-02-01T17:00")
        )
        result = calculate_actual_labor_cost(
            [employee], punches, date(2024, 1, 31), date(2024, 2, 1),
        )

        jan_31, feb_1 = result.daily_costs
        assert jan_31.hourly_cost == Decimal("160.00")
        assert feb_1.hourly_cost == Decimal("0.00")
        # Only the Feb 1 salary accrues, spread over the two-day range
        assert result.breakdown.salary.cost == Decimal("100.00")
        assert result.breakdown.hourly.hours == Decimal("8")
        assert result.total == Decimal("260.00")


class TestResultContract:

    def test_inverted_range_is_empty(self):
        result = calculate_actual_labor_cost(
            [make_salaried(), make_hourly()],
            _shift_punches("2024-01-01T09:00", "2024-01-01T17:00"),
            JAN_7, JAN_1,
        )
        assert result.daily_costs == ()
        assert result.total == Decimal("0.00")

    def test_total_matches_daily_sum(self):
        employees = [make_hourly(), make_salaried(), make_contractor(), make_daily_rate()]
        punches = (
            _shift_punches("2024-01-02T09:00", "2024-01-02T17:00")
            + _shift_punches("2024-01-03T10:00", "2024-01-03T14:00", "emp-daily")
        )
        result = calculate_actual_labor_cost(employees, punches, JAN_1, JAN_7)
        assert result.total == sum(d.total_cost for d in result.daily_costs)
        for daily in result.daily_costs:
            assert daily.total_cost == (
                daily.hourly_cost + daily.salary_cost + daily.contractor_cost
                + daily.daily_rate_cost
            )
        assert result.total == Decimal("1710.00")

    def test_diagnostics_reported(self):
        punches = [punch("2024-01-01T17:00", "clock_out", punch_id="orphan")]
        result = calculate_actual_labor_cost([make_hourly()], punches, JAN_1, JAN_1)
        assert [d.anomaly for d in result.diagnostics] == [PunchAnomaly.ORPHAN_CLOCK_OUT]
        assert result.to_dict()["diagnostics"][0]["punch_id"] == "orphan"

    def test_deterministic(self):
        employees = [make_hourly(), make_salaried()]
        punches = _shift_punches("2024-01-01T09:00", "2024-01-01T17:00")
        calculator = ActualLaborCostCalculator()
        first = calculator.calculate(
            employees=employees, time_punches=punches, start_date=JAN_1, end_date=JAN_7,
        )
        second = calculator.calculate(
            employees=employees, time_punches=punches, start_date=JAN_1, end_date=JAN_7,
        )
        assert first == second

    def test_trace_and_summary_logged(self, captured_logs):
        calculate_actual_labor_cost(
            [make_hourly()],
            _shift_punches("2024-01-01T09:00", "2024-01-01T17:00"),
            JAN_1, JAN_1,
        )
        logs = captured_logs()
        traces = [r for r in logs if r["message"] == "LABOR_ENGINE_TRACE"]
        assert traces[0]["engine_name"] == "actual_labor_cost"
        summary = [r for r in logs if r["message"] == "actual_labor_cost_calculated"][0]
        assert summary["total_cost"] == "160.00"
        assert summary["day_count"] == 1
