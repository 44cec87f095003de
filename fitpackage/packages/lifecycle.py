"""Client lifecycle transitions: pause, resume, stop, renew.

Each transition takes a snapshot and returns a new one; nothing is
written here. The storage layer persists the result, ideally with a
read-modify-write guard since two trainers may act on the same client.
"""

from datetime import date, datetime

from loguru import logger

from fitpackage.packages.analysis import should_complete
from fitpackage.packages.errors import LifecycleError
from fitpackage.packages.pauses import total_paused_days
from fitpackage.packages.types import (
    LIVE_STATUSES,
    ClientSnapshot,
    ClientStatus,
    PackageSnapshot,
    PauseInterval,
)
from fitpackage.utils.dates import add_days, days_between
from fitpackage.utils.timezone import resolve_today


def _require_status(snapshot: ClientSnapshot, allowed: set[ClientStatus] | frozenset[ClientStatus], action: str) -> None:
    if snapshot.status not in allowed:
        raise LifecycleError(
            "INVALID_TRANSITION",
            [f"Cannot {action} client {snapshot.client_id} with status '{snapshot.status}'"],
        )


def _open_pause_index(history: list[PauseInterval]) -> int | None:
    """Index of the most recent open pause, if any."""
    for index in range(len(history) - 1, -1, -1):
        if history[index].is_open:
            return index
    return None


def _close_pause(interval: PauseInterval, on: date) -> PauseInterval:
    if interval.start is not None and on < interval.start:
        raise LifecycleError(
            "RESUME_BEFORE_PAUSE",
            [f"Resume date {on} precedes pause start {interval.start}"],
        )
    return PauseInterval(start=interval.start, end=on, paused_days=days_between(interval.start, on))


def _close_open_pause(history: list[PauseInterval], on: date) -> list[PauseInterval]:
    index = _open_pause_index(history)
    if index is None:
        return list(history)
    closed = list(history)
    closed[index] = _close_pause(history[index], on)
    return closed


def pause_client(snapshot: ClientSnapshot, on: date | datetime | None = None) -> ClientSnapshot:
    """Pause an active client, opening a new pause interval on the given day."""
    _require_status(snapshot, {ClientStatus.ACTIVE}, "pause")
    pause_day = resolve_today(on)

    history = [*snapshot.pause_history, PauseInterval(start=pause_day)]
    logger.info(f"Pausing client {snapshot.client_id} on {pause_day}")
    return snapshot.model_copy(update={"status": ClientStatus.PAUSED, "pause_history": history})


def resume_client(snapshot: ClientSnapshot, on: date | datetime | None = None) -> ClientSnapshot:
    """Resume a paused client.

    Closes the open pause (the resume day is the first active day again),
    stores its paused-day count, and moves the end date later by the total
    paused days. If the package is used up the client becomes completed.

    Args:
        snapshot: Paused client
        on: Resume day; today when None

    Returns:
        New snapshot with status active or completed

    Raises:
        LifecycleError: If the client is not paused, has no open pause, or
            the resume day precedes the pause start
    """
    _require_status(snapshot, {ClientStatus.PAUSED}, "resume")
    resume_day = resolve_today(on)

    if _open_pause_index(snapshot.pause_history) is None:
        raise LifecycleError("NO_OPEN_PAUSE", [f"Client {snapshot.client_id} is paused without an open pause interval"])

    history = _close_open_pause(snapshot.pause_history, resume_day)
    end_date = snapshot.end_date
    if snapshot.start_date is not None:
        paused = total_paused_days(history, resume_day)
        end_date = add_days(snapshot.start_date, snapshot.package_days + paused - 1) or snapshot.end_date

    resumed = snapshot.model_copy(
        update={"status": ClientStatus.ACTIVE, "pause_history": history, "end_date": end_date}
    )
    if should_complete(resumed, resume_day):
        logger.info(f"Client {snapshot.client_id} used up the package while paused; marking completed")
        resumed = resumed.model_copy(update={"status": ClientStatus.COMPLETED})

    logger.info(f"Resumed client {snapshot.client_id} on {resume_day}, end date now {end_date}")
    return resumed


def stop_client(
    snapshot: ClientSnapshot,
    on: date | datetime | None = None,
    reason: str | None = None,
) -> ClientSnapshot:
    """Stop an active or paused client. An open pause is closed on the stop day."""
    _require_status(snapshot, LIVE_STATUSES, "stop")
    stop_day = resolve_today(on)

    history = _close_open_pause(snapshot.pause_history, stop_day)
    logger.info(f"Stopping client {snapshot.client_id} on {stop_day}")
    return snapshot.model_copy(
        update={
            "status": ClientStatus.STOPPED,
            "pause_history": history,
            "stopped_at": stop_day,
            "stop_reason": reason,
        }
    )


def archive_package(snapshot: ClientSnapshot) -> PackageSnapshot | None:
    """Freeze the client's current package dates and pause history.

    Returns None for clients that predate package tracking (no package id).
    """
    if not snapshot.current_package_id:
        return None
    return PackageSnapshot(
        package_id=snapshot.current_package_id,
        client_id=snapshot.client_id,
        package_days=snapshot.package_days,
        start_date=snapshot.start_date,
        end_date=snapshot.end_date,
        status=snapshot.status,
        pause_history=list(snapshot.pause_history),
    )


def renew_client(
    snapshot: ClientSnapshot,
    package_days: int,
    start: date | datetime | None = None,
    new_package_id: str | None = None,
) -> tuple[ClientSnapshot, PackageSnapshot | None]:
    """Start a new package for a stopped or completed client.

    Args:
        snapshot: Stopped or completed client
        package_days: Length of the new package
        start: First day of the new package; today when None
        new_package_id: Id of the package record created for the renewal

    Returns:
        Tuple of (renewed client snapshot, archived previous package or None)

    Raises:
        LifecycleError: If the client is still live or package_days is not positive
    """
    _require_status(snapshot, {ClientStatus.STOPPED, ClientStatus.COMPLETED}, "renew")
    if package_days <= 0:
        raise LifecycleError("INVALID_PACKAGE_DAYS", [f"Package length must be positive, got {package_days}"])
    start_day = resolve_today(start)

    archived = archive_package(snapshot)
    renewed = snapshot.model_copy(
        update={
            "status": ClientStatus.ACTIVE,
            "start_date": start_day,
            "end_date": add_days(start_day, package_days - 1),
            "package_days": package_days,
            "pause_history": [],
            "current_package_id": new_package_id,
            "stopped_at": None,
            "stop_reason": None,
        }
    )
    logger.info(
        f"Renewed client {snapshot.client_id}: {package_days} days from {start_day}"
        f" (archived package {archived.package_id if archived else 'none'})"
    )
    return renewed, archived
