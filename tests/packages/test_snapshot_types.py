"""Tests for coercion of stored client and package records."""

from datetime import UTC, date, datetime

import pytest
from pydantic import ValidationError

from fitpackage.packages.types import (
    ActivityRecord,
    ClientSnapshot,
    ClientStatus,
    PackageSnapshot,
    PauseInterval,
    coerce_calendar_date,
)


class _ProtoTimestamp:
    """Stand-in for a storage SDK timestamp exposing ToDatetime()."""

    def __init__(self, value: datetime):
        self._value = value

    def ToDatetime(self) -> datetime:  # noqa: N802
        return self._value


class TestCoerceCalendarDate:
    """Tests for coerce_calendar_date."""

    def test_text(self):
        """Test DD/MM/YYYY text."""
        assert coerce_calendar_date("05/01/2024") == date(2024, 1, 5)

    def test_unparseable_text_is_missing(self):
        """Test that bad text degrades to None."""
        assert coerce_calendar_date("31/04/2024") is None

    def test_empty_and_none(self):
        """Test empty values."""
        assert coerce_calendar_date("") is None
        assert coerce_calendar_date(None) is None

    def test_datetime_truncated(self):
        """Test that time of day is dropped."""
        assert coerce_calendar_date(datetime(2024, 1, 5, 18, 45)) == date(2024, 1, 5)

    def test_sdk_timestamp(self):
        """Test objects exposing ToDatetime()."""
        stamp = _ProtoTimestamp(datetime(2024, 1, 5, 9, 0))
        assert coerce_calendar_date(stamp) == date(2024, 1, 5)

    def test_unsupported_type_is_missing(self):
        """Test that unknown value types degrade to None."""
        assert coerce_calendar_date(20240105) is None


class TestClientSnapshot:
    """Tests for ClientSnapshot validation."""

    def test_validates_stored_camel_case_record(self):
        """Test a record as stored by the document database."""
        snapshot = ClientSnapshot.model_validate(
            {
                "id": "abc",
                "startDate": "01/01/2024",
                "package": "30",
                "endDate": "30/01/2024",
                "status": "paused",
                "pauseHistory": [
                    {"pausedAt": datetime(2024, 1, 5, 10, 0, tzinfo=UTC), "resumedAt": None},
                ],
                "currentPackageId": "pkg_abc_1",
            }
        )
        assert snapshot.client_id == "abc"
        assert snapshot.start_date == date(2024, 1, 1)
        assert snapshot.package_days == 30
        assert snapshot.status == ClientStatus.PAUSED
        assert snapshot.pause_history == [PauseInterval(start=date(2024, 1, 5))]
        assert snapshot.pause_history[0].is_open
        assert snapshot.current_package_id == "pkg_abc_1"

    def test_null_pause_history_is_empty(self):
        """Test that a null pause history becomes an empty list."""
        snapshot = ClientSnapshot(start_date="01/01/2024", package_days=30, status="active", pause_history=None)
        assert snapshot.pause_history == []

    def test_bad_start_date_does_not_fail_validation(self):
        """Test that a malformed start date is kept as None."""
        snapshot = ClientSnapshot(start_date="99/99/2024", package_days=30, status="active")
        assert snapshot.start_date is None

    def test_unknown_status_is_rejected(self):
        """Test that status must be a known lifecycle state."""
        with pytest.raises(ValidationError):
            ClientSnapshot(start_date="01/01/2024", package_days=30, status="archived")

    def test_snapshot_is_read_only(self, make_snapshot):
        """Test that snapshots cannot be mutated in place."""
        snapshot = make_snapshot()
        with pytest.raises(ValidationError):
            snapshot.status = ClientStatus.STOPPED


def test_package_snapshot_from_stored_record():
    """Test archived package fields and pause history aliases."""
    package = PackageSnapshot.model_validate(
        {
            "packageId": "pkg_abc_1",
            "clientId": "abc",
            "packageDays": 30,
            "startDate": "01/01/2024",
            "endDate": "04/02/2024",
            "status": "completed",
            "pauseHistory": [{"pausedAt": "05/01/2024", "resumedAt": "10/01/2024", "pausedDays": 5}],
        }
    )
    assert package.end_date == date(2024, 2, 4)
    assert package.pause_history[0].paused_days == 5


def test_activity_record_aliases():
    """Test activity day number alias and date coercion."""
    activity = ActivityRecord.model_validate({"date": "03/01/2024", "dayNumber": 3, "status": "completed"})
    assert activity.date == date(2024, 1, 3)
    assert activity.day_number == 3
