"""
Module: labor_engines.punches
Responsibility:
    Collapse time-clock double-taps.  Employees routinely press the same
    button twice; consecutive punches of the same type that land within a
    short window are one event, and the later punch is the one kept.

Architecture position:
    Engines -- pure calculation layer, zero I/O.
    Consumed by ``labor_engines.work_periods`` before state-machine parsing.

Invariants enforced:
    - Output order equals input order (the input is expected to be sorted
      ascending by ``punch_time``).
    - Runs are measured from the last kept punch, so a chain of taps each
      within the window of the previous one collapses to its final tap.
    - Punches of different types never collapse into each other.

Failure modes:
    - None.  An empty or single-punch list is returned unchanged.

Usage:
    from labor_engines.punches import deduplicate_punches

    kept = deduplicate_punches(sorted_punches, window=timedelta(minutes=5))
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import timedelta

from labor_config.schema import DEFAULT_POLICY
from labor_modules.workforce.models import TimePunch


def collapse_duplicate_punches(
    punches: Sequence[TimePunch],
    window: timedelta = DEFAULT_POLICY.dedup_window,
) -> tuple[tuple[TimePunch, ...], tuple[TimePunch, ...]]:
    """Split punches into (kept, dropped).

    A punch is dropped when the next punch has the same type and arrives
    less than ``window`` after it.  Every dropped punch is replaced by a
    later punch of its run.
    """
    kept: list[TimePunch] = []
    dropped: list[TimePunch] = []

    for punch in punches:
        if kept:
            last = kept[-1]
            if (
                punch.punch_type == last.punch_type
                and abs(punch.punch_time - last.punch_time) < window
            ):
                dropped.append(last)
                kept[-1] = punch
                continue
        kept.append(punch)

    return tuple(kept), tuple(dropped)


def deduplicate_punches(
    punches: Sequence[TimePunch],
    window: timedelta = DEFAULT_POLICY.dedup_window,
) -> tuple[TimePunch, ...]:
    """Return ``punches`` with same-type double-taps collapsed.

    Example:
        clock_in 09:00, clock_in 09:02, clock_out 17:00
        -> clock_in 09:02, clock_out 17:00
    """
    kept, _ = collapse_duplicate_punches(punches, window)
    return kept
