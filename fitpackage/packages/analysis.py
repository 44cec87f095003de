"""Client day-state derivation.

Turns a ClientSnapshot into a DayAnalysis. Key rules:
- Start date is Day 1 (not Day 0)
- Paused days are excluded from progress
- Expected end date moves later by the paused days, so the active span
  is always exactly package_days long
- Status is caller-owned truth; dates only decide completion through the
  separate should_complete check
"""

import math
from datetime import date, datetime

from loguru import logger

from fitpackage.packages.pauses import total_paused_days
from fitpackage.packages.types import (
    LIVE_STATUSES,
    ClientSnapshot,
    ClientStatus,
    DayAnalysis,
    DayDisplayText,
)
from fitpackage.utils.dates import add_days, days_between
from fitpackage.utils.timezone import resolve_today


def calculate_progress(effective_days_used: int, package_days: int) -> int:
    """Rounded percentage of the package used, clamped to 0-100."""
    if package_days <= 0:
        return 0
    # Half rounds up (12.5 -> 13), not to even
    progress = math.floor(effective_days_used / package_days * 100 + 0.5)
    return min(100, max(0, progress))


def get_client_day_analysis(
    snapshot: ClientSnapshot,
    now: date | datetime | None = None,
) -> DayAnalysis:
    """Derive the full day analysis for a client.

    This is the entry point for every day-related display. Stopped and
    completed clients still get a fully computed analysis.

    Args:
        snapshot: Client state read from storage
        now: Reference date; today in the configured timezone when None.
            Stopped clients with a recorded stop day are measured at that
            day when it is earlier.

    Returns:
        Freshly built DayAnalysis
    """
    today = resolve_today(now)
    if snapshot.status == ClientStatus.STOPPED and snapshot.stopped_at is not None:
        # A stopped package stops counting on its stop day
        today = min(today, snapshot.stopped_at)
    package_days = snapshot.package_days
    if package_days <= 0:
        logger.warning(f"Client {snapshot.client_id} has non-positive package length {package_days}")

    paused = total_paused_days(snapshot.pause_history, today)
    days_elapsed = max(0, days_between(snapshot.start_date, today))
    effective_days_used = max(0, days_elapsed - paused)

    current_day = min(effective_days_used + 1, package_days)
    if snapshot.status in LIVE_STATUSES:
        # Same-day start shows "Day 1", not "Day 0"
        current_day = max(1, current_day)

    expected_end_date = None
    if snapshot.start_date is not None:
        expected_end_date = add_days(snapshot.start_date, package_days + paused - 1)

    analysis = DayAnalysis(
        current_day=current_day,
        days_elapsed=days_elapsed,
        effective_days_used=effective_days_used,
        days_remaining=max(0, package_days - effective_days_used),
        total_paused_days=paused,
        progress_percent=calculate_progress(effective_days_used, package_days),
        is_completed=effective_days_used >= package_days,
        is_paused=snapshot.status == ClientStatus.PAUSED,
        is_stopped=snapshot.status == ClientStatus.STOPPED,
        is_active=snapshot.status == ClientStatus.ACTIVE,
        expected_end_date=expected_end_date,
        original_end_date=snapshot.end_date,
        status=snapshot.status,
        package_days=package_days,
    )
    logger.debug(
        f"Client {snapshot.client_id}: day {analysis.current_day}/{package_days}, "
        f"used={effective_days_used} paused={paused} remaining={analysis.days_remaining}"
    )
    return analysis


def should_complete(snapshot: ClientSnapshot, now: date | datetime | None = None) -> bool:
    """Check whether an active or paused client should move to completed.

    Returns False for stopped or already completed clients. Persisting the
    new status is the caller's job.
    """
    if snapshot.status not in LIVE_STATUSES:
        return False
    return get_client_day_analysis(snapshot, now).is_completed


def reconcile_status(snapshot: ClientSnapshot, now: date | datetime | None = None) -> ClientStatus:
    """Status a client should carry after its dates or package were edited.

    Only active and completed clients are re-derived from dates; paused
    and stopped are manual states and stay as they are.
    """
    if snapshot.status not in (ClientStatus.ACTIVE, ClientStatus.COMPLETED):
        return snapshot.status
    if get_client_day_analysis(snapshot, now).is_completed:
        return ClientStatus.COMPLETED
    return ClientStatus.ACTIVE


def get_day_display_text(analysis: DayAnalysis) -> DayDisplayText:
    """Build the day, remaining and status labels shown on client cards."""
    if analysis.is_stopped:
        return DayDisplayText(
            day_text=f"Stopped at Day {analysis.current_day}",
            remaining_text="Package stopped",
            status_text="Stopped",
        )
    if analysis.is_completed or analysis.status == ClientStatus.COMPLETED:
        return DayDisplayText(
            day_text=f"Day {analysis.package_days} of {analysis.package_days}",
            remaining_text="Completed",
            status_text="Completed",
        )
    if analysis.is_paused:
        return DayDisplayText(
            day_text=f"Day {analysis.current_day} of {analysis.package_days}",
            remaining_text=f"Paused ({analysis.days_remaining} days left)",
            status_text="Paused",
        )
    return DayDisplayText(
        day_text=f"Day {analysis.current_day} of {analysis.package_days}",
        remaining_text=f"{analysis.days_remaining} days remaining",
        status_text="Active",
    )
