"""
Values -- Money, hour and rounding helpers for the labor engines.

Responsibility:
    Owns the cents-in / dollars-out boundary.  Every input rate or amount
    in this system is an integer number of cents; every produced cost is
    a ``Decimal`` number of dollars.  ``cents_to_dollars`` is the ONE
    sanctioned place where that conversion happens.

Architecture position:
    Kernel > Domain -- pure functional core, zero I/O.

Invariants enforced:
    - Decimal-only arithmetic: monetary values and hours never pass
      through ``float``.
    - Rounding is ROUND_HALF_UP everywhere (cents and whole cents).
    - Hours stay exact in arithmetic; ``round_hours`` is applied only when
      they are reported.

Failure modes:
    - ``decimal.InvalidOperation`` if a non-numeric value is passed in.
"""

from __future__ import annotations

from datetime import datetime, timedelta
from decimal import ROUND_HALF_UP, Decimal

from labor_kernel.domain.dates import wall_clock

ZERO = Decimal("0")
CENT = Decimal("0.01")
HOURS_QUANTUM = Decimal("0.0001")
CENTS_PER_DOLLAR = Decimal("100")
MINUTES_PER_HOUR = Decimal("60")
_MICROSECONDS_PER_HOUR = Decimal(3_600_000_000)


def cents_to_dollars(cents: int | Decimal | None) -> Decimal:
    """
    Convert an integer (or fractional) cents amount to dollars.

    ``None`` is treated as zero, matching the "missing field costs nothing"
    rule of the engines.

    Example:
        cents_to_dollars(2000) -> Decimal("20")
    """
    if cents is None:
        return ZERO
    return Decimal(cents) / CENTS_PER_DOLLAR


def round_cents(dollars: Decimal) -> Decimal:
    """Round a dollar amount to whole cents (half-up)."""
    return dollars.quantize(CENT, rounding=ROUND_HALF_UP)


def round_hours(hours: Decimal) -> Decimal:
    """Round hours to four decimal places (half-up) for reporting."""
    return hours.quantize(HOURS_QUANTUM, rounding=ROUND_HALF_UP)


def round_half_up(value: Decimal) -> int:
    """Round to the nearest integer, halves away from zero."""
    return int(value.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def hours_between(start: datetime, end: datetime) -> Decimal:
    """
    Exact elapsed hours from ``start`` to ``end`` as a Decimal.

    Negative when ``end`` precedes ``start``.  Computed from whole
    microseconds so no float rounding creeps in.  Offsets are ignored:
    both ends are read at their own wall clock.
    """
    micros = (wall_clock(end) - wall_clock(start)) // timedelta(microseconds=1)
    return Decimal(micros) / _MICROSECONDS_PER_HOUR


def minutes_to_hours(minutes: int | Decimal) -> Decimal:
    return Decimal(minutes) / MINUTES_PER_HOUR
