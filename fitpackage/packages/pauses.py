"""Pause-interval accounting.

Deterministic, stateless helpers shared by the live client record and by
archived package snapshots:
- Closed pauses count days from pause start up to (not including) resume
- Open pauses count up to the reference "now", never to the package end
- Overlapping intervals are summed as-is, not merged
"""

from collections.abc import Iterable
from datetime import date

from loguru import logger

from fitpackage.packages.types import PauseInterval
from fitpackage.utils.dates import days_between


def paused_days_for(interval: PauseInterval, reference_now: date) -> int:
    """Count the paused days of a single interval.

    Args:
        interval: Pause interval (open when end is None)
        reference_now: Date an open pause is counted up to

    Returns:
        Stored paused_days when the record carries one, otherwise the day
        count from start to end (or to reference_now for an open pause).
        0 when the interval has no start date.
    """
    if interval.paused_days is not None:
        return interval.paused_days

    if interval.start is None:
        return 0

    if interval.end is None:
        return days_between(interval.start, reference_now)

    paused = days_between(interval.start, interval.end)
    if paused < 0:
        logger.warning(
            f"Inverted pause interval {interval.start} -> {interval.end}; counting {paused} days as stored"
        )
    return paused


def total_paused_days(history: Iterable[PauseInterval] | None, reference_now: date) -> int:
    """Sum paused days over every interval in the history (0 when empty)."""
    if not history:
        return 0
    return sum(paused_days_for(interval, reference_now) for interval in history)


def is_date_paused(target_date: date | None, history: Iterable[PauseInterval] | None) -> bool:
    """Check whether a date falls inside a closed pause.

    The pause start day is paused; the resume day is the first active day
    again. Open pauses are ignored: this answers calendar rendering of
    resolved history, not live status.

    Args:
        target_date: Date to check
        history: Pause intervals in any order

    Returns:
        True if target_date is in [start, end) of any closed interval
    """
    if target_date is None or not history:
        return False

    for interval in history:
        if interval.start is None or interval.end is None:
            continue
        if interval.start <= target_date < interval.end:
            return True
    return False


def closed_pauses_resolved_by(target_date: date, history: Iterable[PauseInterval] | None) -> list[PauseInterval]:
    """Closed intervals whose resume day is on or before target_date."""
    if not history:
        return []
    return [
        interval
        for interval in history
        if interval.start is not None and interval.end is not None and interval.end <= target_date
    ]
