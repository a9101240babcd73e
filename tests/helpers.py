"""Constants and small helpers shared by the test modules."""

from datetime import date, datetime, timezone

TEST_PASSWORD = "Secret@12345"
TEST_DAY = date(2026, 10, 19)


def at(clock: str, day: date = TEST_DAY) -> datetime:
    """UTC timestamp for HH:MM on the test day."""
    hours, minutes = (int(p) for p in clock.split(":"))
    return datetime(day.year, day.month, day.day, hours, minutes, tzinfo=timezone.utc)
