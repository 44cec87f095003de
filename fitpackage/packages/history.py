"""Package-scoped day numbers and package history helpers.

A client may have several packages over time (via renewal). Archived
packages carry a frozen start date and pause history; the same pause
accounting as the live client record applies to both.
"""

import math
from collections.abc import Iterable
from datetime import date, datetime

from fitpackage.packages.pauses import closed_pauses_resolved_by
from fitpackage.packages.types import ActivityRecord, PackageSnapshot, PauseInterval
from fitpackage.utils.dates import days_between

MONTH_ABBREVIATIONS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")
COUNTED_ACTIVITY_STATUSES = frozenset({"completed", "partial"})


def day_number_for(
    target_date: date | None,
    package_start_date: date | None,
    package_pause_history: Iterable[PauseInterval] | None = None,
) -> int | None:
    """Resolve which day of a package a calendar date corresponds to.

    Only pauses fully resolved on or before target_date are subtracted;
    open pauses and pauses resuming later are ignored.

    Args:
        target_date: Calendar date to resolve
        package_start_date: Start date of the package (Day 1)
        package_pause_history: The package's own pause intervals

    Returns:
        1-based day number, or None when either date is missing, the date
        precedes the package start, or the result is not positive
    """
    if target_date is None or package_start_date is None:
        return None
    if target_date < package_start_date:
        return None

    elapsed = days_between(package_start_date, target_date)
    paused_before = sum(
        days_between(interval.start, interval.end)
        for interval in closed_pauses_resolved_by(target_date, package_pause_history)
    )

    day_number = elapsed - paused_before + 1
    return day_number if day_number > 0 else None


def generate_package_id(client_id: str, now: datetime) -> str:
    """Build a package id of the form pkg_{client_id}_{epoch_ms}."""
    return f"pkg_{client_id}_{int(now.timestamp() * 1000)}"


def package_option_label(package: PackageSnapshot, is_current: bool, position: int, total: int) -> str:
    """Label for a package in the history selector.

    Args:
        package: Package to label
        is_current: Whether this is the client's active package
        position: Index in the newest-first package list
        total: Number of packages the client has

    Returns:
        "Current Package", a month range such as "Jan-Feb 2024 (Completed)",
        or "Package N" for packages without snapshot dates
    """
    if is_current:
        return "Current Package"

    if package.start_date is None or package.end_date is None:
        return f"Package {total - position}"

    start_month = MONTH_ABBREVIATIONS[package.start_date.month - 1]
    end_month = MONTH_ABBREVIATIONS[package.end_date.month - 1]
    status_label = f" ({package.status.value.capitalize()})" if package.status else ""

    if start_month == end_month:
        return f"{start_month} {package.start_date.year}{status_label}"
    return f"{start_month}-{end_month} {package.start_date.year}{status_label}"


def package_completion_stats(package_days: int, activities: Iterable[ActivityRecord]) -> tuple[int, int]:
    """Count completed or partial days and the rounded completion rate."""
    completed = sum(1 for activity in activities if activity.status in COUNTED_ACTIVITY_STATUSES)
    if package_days <= 0:
        return completed, 0
    return completed, math.floor(completed / package_days * 100 + 0.5)
