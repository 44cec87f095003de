"""Tests for package calendar cell classification."""

from datetime import date, timedelta

from fitpackage.calendar.marks import CellState, build_calendar_marks, initial_calendar_date
from fitpackage.packages.types import ActivityRecord, PauseInterval

START = date(2024, 1, 1)
END = date(2024, 1, 5)


class TestBuildCalendarMarks:
    """Tests for build_calendar_marks."""

    def test_classifies_every_day(self):
        """Test paused, completed, partial and pending cells with day numbers."""
        pauses = [PauseInterval(start=date(2024, 1, 2), end=date(2024, 1, 4))]
        activities = [
            ActivityRecord(date=date(2024, 1, 1), day_number=1, status="completed"),
            ActivityRecord(date=date(2024, 1, 5), day_number=3, status="partial"),
        ]
        marks = build_calendar_marks(START, END, pauses, activities)

        assert list(marks) == [date(2024, 1, day) for day in range(1, 6)]
        assert [cell.state for cell in marks.values()] == [
            CellState.COMPLETED,
            CellState.PAUSED,
            CellState.PAUSED,
            CellState.PENDING,
            CellState.PARTIAL,
        ]
        assert marks[date(2024, 1, 4)].day_number == 2
        assert marks[date(2024, 1, 5)].day_number == 3

    def test_paused_wins_over_activity(self):
        """Test that a paused date is struck through even with an activity."""
        pauses = [PauseInterval(start=date(2024, 1, 2), end=date(2024, 1, 3))]
        activities = [ActivityRecord(date=date(2024, 1, 2), status="completed")]
        marks = build_calendar_marks(START, END, pauses, activities)
        assert marks[date(2024, 1, 2)].state == CellState.PAUSED

    def test_other_activity_status_is_unmarked(self):
        """Test that activities in other states leave the date unmarked."""
        activities = [ActivityRecord(date=date(2024, 1, 3), status="missed")]
        marks = build_calendar_marks(START, END, [], activities)
        assert date(2024, 1, 3) not in marks
        assert len(marks) == 4

    def test_open_pause_is_not_struck(self):
        """Test that an open pause leaves dates pending."""
        marks = build_calendar_marks(START, END, [PauseInterval(start=date(2024, 1, 3))], [])
        assert all(cell.state == CellState.PENDING for cell in marks.values())

    def test_missing_or_inverted_range(self):
        """Test that malformed ranges yield no cells."""
        assert build_calendar_marks(None, END) == {}
        assert build_calendar_marks(START, None) == {}
        assert build_calendar_marks(END, START) == {}

    def test_range_ending_on_last_calendar_day(self):
        """Test that a package ending on date.max is classified without overflow."""
        start = date.max - timedelta(days=2)
        marks = build_calendar_marks(start, date.max)
        assert list(marks) == [start, start + timedelta(days=1), date.max]
        assert marks[date.max].day_number == 3


class TestInitialCalendarDate:
    """Tests for initial_calendar_date."""

    def test_current_package_focuses_today(self):
        """Test that today is shown when inside the current package."""
        assert initial_calendar_date(START, END, date(2024, 1, 3), is_current=True) == date(2024, 1, 3)

    def test_current_package_outside_range(self):
        """Test fallback to the start when today is outside the range."""
        assert initial_calendar_date(START, END, date(2024, 2, 1), is_current=True) == START

    def test_archived_package_uses_start(self):
        """Test that archived packages always open on their start."""
        assert initial_calendar_date(START, END, date(2024, 1, 3), is_current=False) == START
