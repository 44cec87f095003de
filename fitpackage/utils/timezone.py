"""Wall-clock helpers for the outermost caller.

Calculation code never reads the clock itself; it takes `now` as an
argument. Entry points that accept `now=None` resolve it here, in the
configured zone.
"""

from datetime import date, datetime
from zoneinfo import ZoneInfo

from fitpackage.config.settings import settings


def get_timezone(name: str | None = None) -> ZoneInfo:
    """Get a ZoneInfo, defaulting to the configured FITPACKAGE_TIMEZONE."""
    return ZoneInfo(name or settings.timezone)


def today(tz_name: str | None = None) -> date:
    """Current calendar date in the given (or configured) zone."""
    return datetime.now(get_timezone(tz_name)).date()


def resolve_today(now: date | datetime | None, tz_name: str | None = None) -> date:
    """Return `now` as a calendar date, reading the clock only when it is None.

    Timezone-aware datetimes are converted into the zone before the date
    is taken, so a UTC storage timestamp lands on the trainer's local day.
    """
    if now is None:
        return today(tz_name)
    if isinstance(now, datetime):
        if now.tzinfo is not None:
            return now.astimezone(get_timezone(tz_name)).date()
        return now.date()
    return now
