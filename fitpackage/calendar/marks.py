"""Calendar cell classification for a package's date range.

One cell per date from package start to end (inclusive):
- paused: inside a resolved pause (pause day struck through, resume day not)
- completed / partial: an activity with that status was logged
- pending: no activity logged yet
Dates with an activity in any other status are left unmarked.
"""

from collections.abc import Iterable
from datetime import date, timedelta
from enum import StrEnum

from loguru import logger
from pydantic import BaseModel

from fitpackage.packages.history import day_number_for
from fitpackage.packages.pauses import is_date_paused
from fitpackage.packages.types import ActivityRecord, PauseInterval
from fitpackage.utils.dates import days_between


class CellState(StrEnum):
    PAUSED = "paused"
    COMPLETED = "completed"
    PARTIAL = "partial"
    PENDING = "pending"


class CalendarCell(BaseModel):
    date: date
    state: CellState
    day_number: int | None = None


def _cell_state(day: date, pause_history: list[PauseInterval], activity: ActivityRecord | None) -> CellState | None:
    if is_date_paused(day, pause_history):
        return CellState.PAUSED
    if activity is None:
        return CellState.PENDING
    if activity.status == CellState.COMPLETED:
        return CellState.COMPLETED
    if activity.status == CellState.PARTIAL:
        return CellState.PARTIAL
    return None


def build_calendar_marks(
    start_date: date | None,
    end_date: date | None,
    pause_history: Iterable[PauseInterval] | None = None,
    activities: Iterable[ActivityRecord] | None = None,
) -> dict[date, CalendarCell]:
    """Classify every date of a package for calendar rendering.

    Args:
        start_date: Package start (Day 1)
        end_date: Package end, inclusive
        pause_history: The package's pause intervals
        activities: Logged activities; a later record for the same date wins

    Returns:
        Mapping of date to cell, in date order. Empty when either bound is
        missing or the range is inverted.
    """
    if start_date is None or end_date is None:
        return {}
    if end_date < start_date:
        logger.warning(f"Calendar range ends before it starts: {start_date} -> {end_date}")
        return {}

    history = list(pause_history or [])
    activity_by_date = {activity.date: activity for activity in activities or [] if activity.date is not None}

    marks: dict[date, CalendarCell] = {}
    for offset in range(days_between(start_date, end_date) + 1):
        current = start_date + timedelta(days=offset)
        state = _cell_state(current, history, activity_by_date.get(current))
        if state is not None:
            marks[current] = CalendarCell(
                date=current,
                state=state,
                day_number=day_number_for(current, start_date, history),
            )
    return marks


def initial_calendar_date(
    start_date: date | None,
    end_date: date | None,
    today: date,
    is_current: bool,
) -> date | None:
    """Date the calendar opens on: today for the current package when in range, else the start."""
    if not is_current:
        return start_date
    if start_date is not None and end_date is not None and start_date <= today <= end_date:
        return today
    return start_date
