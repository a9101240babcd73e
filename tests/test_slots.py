"""Tests for business hours and interval -> slot mapping."""

from datetime import datetime

import pytest

from app.core.errors import OutOfRange
from app.scheduling.slots import (
    DEFAULT_BUSINESS_HOURS,
    BusinessHoursConfig,
    SlotRange,
    format_time,
    map_interval,
    parse_clock,
)


def t(clock: str, day: int = 19) -> datetime:
    hours, minutes = (int(p) for p in clock.split(":"))
    return datetime(2026, 10, day, hours, minutes)


@pytest.fixture
def config() -> BusinessHoursConfig:
    return BusinessHoursConfig.from_clock("08:00", "17:00", 30)


class TestBusinessHoursConfig:
    def test_default_is_eighteen_half_hour_slots(self):
        assert DEFAULT_BUSINESS_HOURS.slot_count == 18
        assert DEFAULT_BUSINESS_HOURS.has_partial_last_slot is False

    def test_from_clock(self, config):
        assert config.day_start_minutes == 480
        assert config.day_end_minutes == 1020
        assert config == DEFAULT_BUSINESS_HOURS

    @pytest.mark.parametrize(
        "start, end, slot, expected",
        [
            ("08:00", "17:00", 30, 18),
            ("08:00", "17:00", 60, 9),
            ("07:30", "18:00", 15, 42),
            ("00:00", "24:00", 60, 24),
        ],
    )
    def test_slot_count_for_even_days(self, start, end, slot, expected):
        assert BusinessHoursConfig.from_clock(start, end, slot).slot_count == expected

    def test_partial_last_slot_is_kept(self):
        config = BusinessHoursConfig.from_clock("08:00", "17:10", 30)

        assert config.slot_count == 19
        assert config.has_partial_last_slot is True
        assert config.row_labels()[-1] == "17:00"

    @pytest.mark.parametrize(
        "start, end, slot",
        [
            (600, 600, 30),
            (600, 540, 30),
            (480, 1020, 0),
            (480, 1020, -15),
            (-30, 1020, 30),
            (480, 1500, 30),
        ],
    )
    def test_invalid_configs_are_rejected(self, start, end, slot):
        with pytest.raises(ValueError):
            BusinessHoursConfig(day_start_minutes=start, day_end_minutes=end, slot_duration_minutes=slot)


class TestClockHelpers:
    def test_parse_and_format_round_trip(self):
        assert format_time(parse_clock("09:05")) == "09:05"

    def test_format_pads(self):
        assert format_time(8 * 60) == "08:00"

    @pytest.mark.parametrize("value", ["8", "08:60", "25:00", "ab:cd", "24:01"])
    def test_parse_rejects_garbage(self, value):
        with pytest.raises(ValueError):
            parse_clock(value)


class TestMapInterval:
    def test_half_hour_at_nine_is_slot_two(self, config):
        assert map_interval(t("09:00"), t("09:30"), config) == SlotRange(2, 3)

    def test_zero_duration_gets_one_slot(self, config):
        slot_range = map_interval(t("09:00"), t("09:00"), config)

        assert slot_range == SlotRange(2, 3)
        assert slot_range.span_slots == 1

    def test_starts_before_opening_is_clipped(self, config):
        assert map_interval(t("07:00"), t("08:15"), config) == SlotRange(0, 1)

    def test_entirely_before_opening_is_pinned_to_first_slot(self, config):
        assert map_interval(t("06:00"), t("07:00"), config) == SlotRange(0, 1)

    def test_end_rounds_up_and_start_rounds_down(self, config):
        assert map_interval(t("09:10"), t("10:05"), config) == SlotRange(2, 5)

    def test_runs_past_closing_is_clipped(self, config):
        assert map_interval(t("16:00"), t("18:30"), config) == SlotRange(16, 18)

    def test_last_slot(self, config):
        assert map_interval(t("16:30"), t("17:00"), config) == SlotRange(17, 18)

    @pytest.mark.parametrize("start, end", [("17:00", "17:30"), ("18:00", "19:00"), ("23:59", "23:59")])
    def test_after_closing_is_out_of_range(self, config, start, end):
        with pytest.raises(OutOfRange):
            map_interval(t(start), t(end), config)

    def test_seconds_are_ignored(self, config):
        start = datetime(2026, 10, 19, 9, 29, 59)
        end = datetime(2026, 10, 19, 9, 30, 59)

        assert map_interval(start, end, config) == SlotRange(2, 3)

    def test_whole_day(self, config):
        assert map_interval(t("08:00"), t("17:00"), config) == SlotRange(0, 18)

    def test_partial_last_slot_is_reachable(self):
        config = BusinessHoursConfig.from_clock("08:00", "17:10", 30)

        assert map_interval(t("17:00"), t("17:10"), config) == SlotRange(18, 19)

    def test_start_after_closing_inside_partial_row_is_placed(self):
        config = BusinessHoursConfig.from_clock("08:00", "16:45", 30)

        assert map_interval(t("16:50"), t("17:00"), config) == SlotRange(17, 18)

        with pytest.raises(OutOfRange):
            map_interval(t("17:00"), t("17:10"), config)

    def test_start_index_is_monotonic_in_start_time(self, config):
        starts = ["07:00", "08:00", "08:29", "08:30", "12:15", "16:59"]
        indices = [map_interval(t(s), t("17:00"), config).start_index for s in starts]

        assert indices == sorted(indices)

    def test_result_always_within_grid(self, config):
        for hour in range(0, 17):
            for minute in (0, 15, 45):
                start = datetime(2026, 10, 19, hour, minute)
                for length in (0, 10, 30, 95, 600):
                    end_minutes = min(hour * 60 + minute + length, 23 * 60 + 59)
                    end = datetime(2026, 10, 19, end_minutes // 60, end_minutes % 60)
                    slot_range = map_interval(start, end, config)
                    assert 0 <= slot_range.start_index < slot_range.end_index <= config.slot_count

    def test_slot_range_contains(self):
        slot_range = SlotRange(2, 4)

        assert 2 in slot_range
        assert 3 in slot_range
        assert 4 not in slot_range
