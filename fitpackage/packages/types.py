"""Client package records and derived views.

Snapshots are read-only copies of stored records, supplied fresh by the
storage layer on every call. They are never mutated here:
- Dates are calendar dates (no time of day); stored DD/MM/YYYY text and
  storage timestamps are coerced at the model boundary
- Unparseable dates become None instead of failing validation
- Live client and archived package pause histories share PauseInterval
"""

from datetime import date, datetime
from enum import StrEnum
from typing import Annotated, Any

from loguru import logger
from pydantic import AliasChoices, BaseModel, BeforeValidator, ConfigDict, Field

from fitpackage.utils.dates import parse_date
from fitpackage.utils.timezone import resolve_today


def coerce_calendar_date(value: Any) -> date | None:
    """Coerce a stored date value (text, date, datetime, timestamp) to a date."""
    if value is None or value == "":
        return None
    if isinstance(value, (date, datetime)):
        return resolve_today(value)
    if isinstance(value, str):
        parsed = parse_date(value)
        if parsed is None:
            logger.warning(f"Unparseable date text '{value}', treating as missing")
        return parsed
    # Storage SDK timestamp objects (protobuf Timestamp and friends)
    for attr in ("to_datetime", "ToDatetime"):
        converter = getattr(value, attr, None)
        if callable(converter):
            return resolve_today(converter())
    logger.warning(f"Unsupported date value of type {type(value).__name__}, treating as missing")
    return None


CalendarDate = Annotated[date | None, BeforeValidator(coerce_calendar_date)]


class ClientStatus(StrEnum):
    ACTIVE = "active"
    PAUSED = "paused"
    COMPLETED = "completed"
    STOPPED = "stopped"


LIVE_STATUSES = frozenset({ClientStatus.ACTIVE, ClientStatus.PAUSED})


class PauseInterval(BaseModel):
    """One pause-to-resume cycle.

    Attributes:
        start: Day the pause began (counted as paused)
        end: Day the client resumed (first active day again); None while still paused
        paused_days: Stored paused-day count, used instead of recomputing when present
    """

    model_config = ConfigDict(frozen=True)

    start: CalendarDate = Field(default=None, validation_alias=AliasChoices("start", "paused_at", "pausedAt"))
    end: CalendarDate = Field(default=None, validation_alias=AliasChoices("end", "resumed_at", "resumedAt"))
    paused_days: int | None = Field(default=None, validation_alias=AliasChoices("paused_days", "pausedDays"))

    @property
    def is_open(self) -> bool:
        return self.end is None


def _none_as_empty(value: Any) -> Any:
    return [] if value is None else value


# Ordered by occurrence, but never assumed sorted
PauseHistory = Annotated[list[PauseInterval], BeforeValidator(_none_as_empty)]


class ClientSnapshot(BaseModel):
    """A client's live package state as read from storage."""

    model_config = ConfigDict(frozen=True)

    client_id: str | None = Field(default=None, validation_alias=AliasChoices("client_id", "clientId", "id"))
    start_date: CalendarDate = Field(validation_alias=AliasChoices("start_date", "startDate"))
    package_days: int = Field(validation_alias=AliasChoices("package_days", "packageDays", "package"))
    end_date: CalendarDate = Field(default=None, validation_alias=AliasChoices("end_date", "endDate"))
    status: ClientStatus
    pause_history: PauseHistory = Field(
        default_factory=list,
        validation_alias=AliasChoices("pause_history", "pauseHistory"),
    )
    current_package_id: str | None = Field(
        default=None,
        validation_alias=AliasChoices("current_package_id", "currentPackageId"),
    )
    stopped_at: CalendarDate = Field(default=None, validation_alias=AliasChoices("stopped_at", "stoppedAt"))
    stop_reason: str | None = Field(default=None, validation_alias=AliasChoices("stop_reason", "stopReason"))


class PackageSnapshot(BaseModel):
    """An archived (or current) package with its frozen dates and pause history.

    The current package stores only metadata; its dates live on the client
    record. Archived packages carry their own snapshot of both.
    """

    model_config = ConfigDict(frozen=True)

    package_id: str = Field(validation_alias=AliasChoices("package_id", "packageId"))
    client_id: str | None = Field(default=None, validation_alias=AliasChoices("client_id", "clientId"))
    package_days: int = Field(validation_alias=AliasChoices("package_days", "packageDays"))
    start_date: CalendarDate = Field(default=None, validation_alias=AliasChoices("start_date", "startDate"))
    end_date: CalendarDate = Field(default=None, validation_alias=AliasChoices("end_date", "endDate"))
    status: ClientStatus | None = None
    pause_history: PauseHistory = Field(
        default_factory=list,
        validation_alias=AliasChoices("pause_history", "pauseHistory"),
    )


class ActivityRecord(BaseModel):
    """A logged training day within a package."""

    model_config = ConfigDict(frozen=True)

    date: CalendarDate = None
    day_number: int | None = Field(default=None, validation_alias=AliasChoices("day_number", "dayNumber"))
    status: str = "pending"


class DayAnalysis(BaseModel):
    """Derived package progress for one client at one point in time.

    Attributes:
        current_day: 1-based day of the package, capped at package_days
        days_elapsed: Calendar days since start (never negative)
        effective_days_used: Elapsed days minus paused days
        days_remaining: Active days left (never negative)
        total_paused_days: Sum of all pause intervals
        progress_percent: Rounded 0-100 share of the package used
        expected_end_date: Inclusive end date shifted by paused days
        original_end_date: End date as stored on the record
    """

    model_config = ConfigDict(frozen=True)

    current_day: int
    days_elapsed: int
    effective_days_used: int
    days_remaining: int
    total_paused_days: int
    progress_percent: int
    is_completed: bool
    is_paused: bool
    is_stopped: bool
    is_active: bool
    expected_end_date: date | None
    original_end_date: date | None
    status: ClientStatus
    package_days: int


class DayDisplayText(BaseModel):
    day_text: str
    remaining_text: str
    status_text: str
