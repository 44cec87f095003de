"""Root conftest for all tests.

Shared fixtures: a fixed reference calendar and a client snapshot factory,
so no test depends on the wall clock.
"""

from datetime import date

import pytest

from fitpackage.packages.types import ClientSnapshot, ClientStatus, PauseInterval


@pytest.fixture
def jan_first() -> date:
    return date(2024, 1, 1)


@pytest.fixture
def make_snapshot():
    """Build a ClientSnapshot with sensible defaults for a 30-day January package."""

    def _make(
        start_date: date | str | None = date(2024, 1, 1),
        package_days: int = 30,
        status: ClientStatus | str = ClientStatus.ACTIVE,
        pause_history: list[PauseInterval] | None = None,
        **extra,
    ) -> ClientSnapshot:
        return ClientSnapshot(
            client_id=extra.pop("client_id", "client-1"),
            start_date=start_date,
            package_days=package_days,
            end_date=extra.pop("end_date", "30/01/2024"),
            status=status,
            pause_history=pause_history or [],
            **extra,
        )

    return _make
