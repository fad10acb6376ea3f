"""
Module: labor_engines.work_periods
Responsibility:
    Turn one employee's raw time-clock punches into work and break periods.
    The punch stream is sorted, double-taps are collapsed, and a small
    state machine is folded over what remains.

Architecture position:
    Engines -- pure calculation layer, zero I/O.
    Depends on ``labor_engines.punches`` and the workforce records.

State machine:
    IDLE        --clock_in-->     CLOCKED_IN
    CLOCKED_IN  --clock_out-->    IDLE        emits work [clock_in, now)
    CLOCKED_IN  --break_start-->  ON_BREAK    emits work [clock_in, now)
    ON_BREAK    --break_end-->    CLOCKED_IN  emits break [break_start, now),
                                              work resumes from ``now``
    ON_BREAK    --clock_out-->    IDLE        emits work [clock_in, now)
    any         --clock_in-->     CLOCKED_IN  open shift or break abandoned

    Every other (state, punch) pair leaves the cursor unchanged.

Invariants enforced:
    - A work period always satisfies ``0 < hours <= max_shift_hours``;
      spans outside that bound are discarded (missed clock-out).
    - Break periods carry no upper bound and are flagged ``is_break``.
    - Diagnostics are additive: they never change the emitted periods.

Failure modes:
    - None.  Unpaired or out-of-order punches are dropped and reported as
      ``PunchDiagnostic`` entries on ``ParseResult.diagnostics``.

Usage:
    from labor_engines.work_periods import WorkPeriodParser, parse_work_periods

    periods = parse_work_periods(punches)

    result = WorkPeriodParser(policy).parse(punches)
    for diagnostic in result.diagnostics:
        ...
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, replace
from datetime import date, datetime
from decimal import Decimal
from enum import Enum

from labor_config.schema import DEFAULT_POLICY, LaborCostPolicy
from labor_engines.punches import collapse_duplicate_punches
from labor_kernel.domain.dates import date_range, wall_clock
from labor_kernel.domain.values import ZERO, hours_between, round_hours
from labor_kernel.logging_config import get_logger
from labor_modules.workforce.models import PunchType, TimePunch

logger = get_logger("engines.work_periods")


class ParserState(str, Enum):
    """Where an employee stands in the punch sequence."""

    IDLE = "idle"
    CLOCKED_IN = "clocked_in"
    ON_BREAK = "on_break"


class PunchAnomaly(str, Enum):
    """Reasons a punch did not produce (or fully close) a period."""

    DUPLICATE_COLLAPSED = "duplicate_collapsed"
    ORPHAN_CLOCK_OUT = "orphan_clock_out"
    ORPHAN_BREAK_START = "orphan_break_start"
    ORPHAN_BREAK_END = "orphan_break_end"
    NESTED_BREAK_START = "nested_break_start"
    ABANDONED_SHIFT = "abandoned_shift"
    ABANDONED_BREAK = "abandoned_break"
    SHIFT_TOO_LONG = "shift_too_long"
    NON_POSITIVE_DURATION = "non_positive_duration"
    CLOCK_OUT_DURING_BREAK = "clock_out_during_break"
    UNCLOSED_SHIFT = "unclosed_shift"


@dataclass(frozen=True)
class WorkPeriod:
    """A closed span of work (or break) time."""

    start: datetime
    end: datetime
    hours: Decimal
    is_break: bool = False

    @property
    def work_day(self) -> date:
        """Calendar day hours are attributed to: the day the period started."""
        return self.start.date()

    def days_spanned(self) -> tuple[date, ...]:
        return date_range(self.start, self.end)


@dataclass(frozen=True)
class PunchDiagnostic:
    """One anomaly found while parsing, tied to the punch that caused it."""

    anomaly: PunchAnomaly
    employee_id: str
    punch_id: str
    punch_time: datetime
    detail: str = ""

    def to_dict(self) -> dict[str, str]:
        return {
            "anomaly": self.anomaly.value,
            "employee_id": self.employee_id,
            "punch_id": self.punch_id,
            "punch_time": self.punch_time.isoformat(),
            "detail": self.detail,
        }


@dataclass(frozen=True)
class ParseResult:
    """
    Periods parsed from a punch stream, plus what was dropped on the way.

    Contract:
        ``periods`` is in emission order (work and break interleaved).
    Guarantees:
        - Every non-break period has ``0 < hours <= max_shift_hours``.
    """

    periods: tuple[WorkPeriod, ...]
    diagnostics: tuple[PunchDiagnostic, ...] = ()

    @property
    def work_periods(self) -> tuple[WorkPeriod, ...]:
        return tuple(p for p in self.periods if not p.is_break)

    @property
    def break_periods(self) -> tuple[WorkPeriod, ...]:
        return tuple(p for p in self.periods if p.is_break)

    @property
    def total_work_hours(self) -> Decimal:
        return sum((p.hours for p in self.work_periods), ZERO)

    @property
    def total_break_hours(self) -> Decimal:
        return sum((p.hours for p in self.break_periods), ZERO)


@dataclass(frozen=True)
class ParserCursor:
    """Fold state: the parser state plus the open timestamps it needs."""

    state: ParserState = ParserState.IDLE
    clock_in_at: datetime | None = None
    break_start_at: datetime | None = None


IDLE_CURSOR = ParserCursor()

_Step = tuple[ParserCursor, tuple[WorkPeriod, ...], tuple[PunchDiagnostic, ...]]


class WorkPeriodParser:
    """
    Punch stream to ``ParseResult``.

    Contract:
        ``parse`` accepts punches for a single employee in any order.
    Guarantees:
        - Deterministic: the same punches always yield the same result.
        - Never raises for malformed streams.
    """

    def __init__(self, policy: LaborCostPolicy | None = None):
        self._policy = policy or DEFAULT_POLICY
        self._transitions = {
            PunchType.CLOCK_IN: self._on_clock_in,
            PunchType.CLOCK_OUT: self._on_clock_out,
            PunchType.BREAK_START: self._on_break_start,
            PunchType.BREAK_END: self._on_break_end,
        }

    def parse(self, punches: Iterable[TimePunch]) -> ParseResult:
        ordered = sorted(map(_at_wall_clock, punches), key=lambda p: p.punch_time)
        if not ordered:
            return ParseResult(periods=())

        kept, dropped = collapse_duplicate_punches(ordered, self._policy.dedup_window)
        diagnostics: list[PunchDiagnostic] = [
            _diagnostic(PunchAnomaly.DUPLICATE_COLLAPSED, punch, "superseded by a later tap")
            for punch in dropped
        ]
        periods: list[WorkPeriod] = []

        cursor = IDLE_CURSOR
        for punch in kept:
            cursor, emitted, notes = self.step(cursor, punch)
            periods.extend(emitted)
            diagnostics.extend(notes)

        if cursor.state != ParserState.IDLE:
            diagnostics.append(
                _diagnostic(
                    PunchAnomaly.UNCLOSED_SHIFT, kept[-1],
                    f"stream ended {cursor.state.value}",
                )
            )

        logger.debug(
            "work_periods_parsed",
            extra={
                "punch_count": len(ordered),
                "period_count": len(periods),
                "diagnostic_count": len(diagnostics),
            },
        )
        return ParseResult(periods=tuple(periods), diagnostics=tuple(diagnostics))

    def step(self, cursor: ParserCursor, punch: TimePunch) -> _Step:
        """Apply one punch.  Returns (next cursor, periods, diagnostics)."""
        return self._transitions[punch.punch_type](cursor, punch)

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def _on_clock_in(self, cursor: ParserCursor, punch: TimePunch) -> _Step:
        notes: tuple[PunchDiagnostic, ...] = ()
        if cursor.state == ParserState.CLOCKED_IN:
            notes = (_diagnostic(PunchAnomaly.ABANDONED_SHIFT, punch, "clock_in while clocked in"),)
        elif cursor.state == ParserState.ON_BREAK:
            notes = (_diagnostic(PunchAnomaly.ABANDONED_BREAK, punch, "clock_in while on break"),)
        return ParserCursor(ParserState.CLOCKED_IN, clock_in_at=punch.punch_time), (), notes

    def _on_clock_out(self, cursor: ParserCursor, punch: TimePunch) -> _Step:
        if cursor.state == ParserState.IDLE:
            return cursor, (), (_diagnostic(PunchAnomaly.ORPHAN_CLOCK_OUT, punch),)

        emitted, notes = self._close_work(cursor, punch)
        if cursor.state == ParserState.ON_BREAK:
            notes += (
                _diagnostic(
                    PunchAnomaly.CLOCK_OUT_DURING_BREAK, punch,
                    "open break counted as work",
                ),
            )
        return IDLE_CURSOR, emitted, notes

    def _on_break_start(self, cursor: ParserCursor, punch: TimePunch) -> _Step:
        if cursor.state == ParserState.IDLE:
            return cursor, (), (_diagnostic(PunchAnomaly.ORPHAN_BREAK_START, punch),)
        if cursor.state == ParserState.ON_BREAK:
            return cursor, (), (_diagnostic(PunchAnomaly.NESTED_BREAK_START, punch),)

        emitted, notes = self._close_work(cursor, punch)
        next_cursor = replace(
            cursor, state=ParserState.ON_BREAK, break_start_at=punch.punch_time,
        )
        return next_cursor, emitted, notes

    def _on_break_end(self, cursor: ParserCursor, punch: TimePunch) -> _Step:
        if cursor.state != ParserState.ON_BREAK or cursor.break_start_at is None:
            return cursor, (), (_diagnostic(PunchAnomaly.ORPHAN_BREAK_END, punch),)

        pause = WorkPeriod(
            start=cursor.break_start_at,
            end=punch.punch_time,
            hours=hours_between(cursor.break_start_at, punch.punch_time),
            is_break=True,
        )
        # Work resumes when the break ends
        next_cursor = ParserCursor(ParserState.CLOCKED_IN, clock_in_at=punch.punch_time)
        return next_cursor, (pause,), ()

    def _close_work(
        self, cursor: ParserCursor, punch: TimePunch,
    ) -> tuple[tuple[WorkPeriod, ...], tuple[PunchDiagnostic, ...]]:
        start = cursor.clock_in_at
        if start is None:
            return (), ()
        hours = hours_between(start, punch.punch_time)

        if hours <= 0:
            return (), (
                _diagnostic(
                    PunchAnomaly.NON_POSITIVE_DURATION, punch, f"{round_hours(hours)} hours",
                ),
            )
        if hours > self._policy.max_shift_hours:
            return (), (
                _diagnostic(
                    PunchAnomaly.SHIFT_TOO_LONG, punch,
                    f"{round_hours(hours)} hours exceeds {self._policy.max_shift_hours}",
                ),
            )
        return (WorkPeriod(start=start, end=punch.punch_time, hours=hours),), ()


def _at_wall_clock(punch: TimePunch) -> TimePunch:
    if punch.punch_time.tzinfo is None:
        return punch
    return replace(punch, punch_time=wall_clock(punch.punch_time))


def _diagnostic(anomaly: PunchAnomaly, punch: TimePunch, detail: str = "") -> PunchDiagnostic:
    return PunchDiagnostic(
        anomaly=anomaly,
        employee_id=punch.employee_id,
        punch_id=punch.id,
        punch_time=punch.punch_time,
        detail=detail,
    )


def parse_work_periods(
    punches: Iterable[TimePunch],
    policy: LaborCostPolicy | None = None,
) -> tuple[WorkPeriod, ...]:
    """Parse punches into periods, discarding diagnostics."""
    return WorkPeriodParser(policy).parse(punches).periods
