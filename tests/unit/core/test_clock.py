"""
Unit tests for clock and time helpers.
"""
from datetime import datetime, timedelta, timezone

from core.domain.clock import (
    FixedClock,
    SystemClock,
    format_update_time,
    to_epoch_millis,
    truncate_to_millis,
)


class TestClocks:
    """Tests for Clock implementations."""

    def test_system_clock_is_utc(self):
        now = SystemClock().now()
        assert now.tzinfo is not None
        assert now.utcoffset() == timedelta(0)

    def test_fixed_clock_advance(self):
        start = datetime(2024, 1, 1, tzinfo=timezone.utc)
        clock = FixedClock(start)
        assert clock.now() == start

        clock.advance(timedelta(seconds=5))

        assert clock.now() == start + timedelta(seconds=5)


class TestTimeHelpers:
    """Tests for time conversion helpers."""

    def test_truncate_to_millis(self):
        value = datetime(2024, 1, 1, 0, 0, 0, 123456, tzinfo=timezone.utc)
        assert truncate_to_millis(value).microsecond == 123000

    def test_epoch_millis(self):
        value = datetime(1970, 1, 1, 0, 0, 1, 500000, tzinfo=timezone.utc)
        assert to_epoch_millis(value) == 1500

    def test_epoch_millis_naive_is_utc(self):
        naive = datetime(2024, 3, 5, 9, 15, 30)
        aware = naive.replace(tzinfo=timezone.utc)
        assert to_epoch_millis(naive) == to_epoch_millis(aware)

    def test_format_update_time(self):
        value = datetime(2024, 3, 5, 9, 15, 30, 999999, tzinfo=timezone.utc)
        assert format_update_time(value) == "2024/03/05 09:15:30"

    def test_format_update_time_converts_to_utc(self):
        plus_two = timezone(timedelta(hours=2))
        value = datetime(2024, 3, 5, 11, 15, 30, tzinfo=plus_two)
        assert format_update_time(value) == "2024/03/05 09:15:30"
