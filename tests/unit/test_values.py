"""
Unit tests for the cents/dollars boundary and hour arithmetic.

Verifies:
- cents_to_dollars is exact and treats None as zero
- Half-up rounding for cents and whole numbers
- Exact hours between timestamps (no float drift)
"""

from datetime import datetime, timedelta, timezone
from decimal import Decimal

from labor_kernel.domain.values import (
    ZERO,
    cents_to_dollars,
    hours_between,
    minutes_to_hours,
    round_cents,
    round_half_up,
    round_hours,
)


class TestCentsToDollars:
    """Tests for cents_to_dollars."""

    def test_whole_dollars(self):
        assert cents_to_dollars(2000) == Decimal("20")

    def test_fractional_dollars(self):
        assert cents_to_dollars(1050) == Decimal("10.50")

    def test_none_is_zero(self):
        assert cents_to_dollars(None) == ZERO

    def test_negative(self):
        assert cents_to_dollars(-125) == Decimal("-1.25")

    def test_result_is_decimal(self):
        assert isinstance(cents_to_dollars(1), Decimal)


class TestRounding:
    """Half-up rounding."""

    def test_round_cents_half_up(self):
        assert round_cents(Decimal("0.005")) == Decimal("0.01")
        assert round_cents(Decimal("0.004")) == Decimal("0.00")

    def test_round_cents_keeps_two_places(self):
        assert str(round_cents(Decimal("160"))) == "160.00"

    def test_round_half_up_integer(self):
        assert round_half_up(Decimal("2.5")) == 3
        assert round_half_up(Decimal("2.4999")) == 2
        assert round_half_up(Decimal("-2.5")) == -3

    def test_round_hours_four_places(self):
        assert str(round_hours(Decimal(1) / Decimal(3))) == "0.3333"
        assert round_hours(Decimal("7.5")) == Decimal("7.5")
        assert round_hours(Decimal("0.00005")) == Decimal("0.0001")

    def test_round_half_up_returns_int(self):
        assert isinstance(round_half_up(Decimal("9198.16")), int)


class TestHoursBetween:
    """Exact elapsed hours."""

    def test_eight_hours(self):
        start = datetime(2024, 1, 1, 9, 0)
        assert hours_between(start, start + timedelta(hours=8)) == Decimal("8")

    def test_partial_hour(self):
        start = datetime(2024, 1, 1, 9, 0)
        assert hours_between(start, start + timedelta(minutes=90)) == Decimal("1.5")

    def test_negative_when_reversed(self):
        start = datetime(2024, 1, 1, 9, 0)
        assert hours_between(start, start - timedelta(hours=2)) == Decimal("-2")

    def test_seconds_precision(self):
        start = datetime(2024, 1, 1, 9, 0)
        assert hours_between(start, start + timedelta(seconds=36)) == Decimal("0.01")

    def test_offset_ignored_on_either_end(self):
        aware = datetime(2024, 1, 1, 9, 0, tzinfo=timezone(timedelta(hours=-5)))
        assert hours_between(aware, datetime(2024, 1, 1, 17, 0)) == Decimal("8")

    def test_minutes_to_hours(self):
        assert minutes_to_hours(30) == Decimal("0.5")
        assert minutes_to_hours(0) == ZERO
