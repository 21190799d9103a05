"""Tests for energy_coins.core.slot_finder — next available slot."""

from datetime import datetime

from energy_coins.core.slot_finder import (
    Slot,
    active_hours,
    active_hours_for,
    find_slot,
    next_available_slot,
)
from energy_coins.data.models import Action, Category, UserSettings


def _action(start, end):
    return Action(id=start, title="Busy", category=Category.WORK, start_time=start, end_time=end)


WAKE_8_SLEEP_22 = UserSettings(sleep_start="22:00", sleep_end="08:00")


class TestActiveHours:
    def test_same_day(self):
        assert active_hours(8, 22) == list(range(8, 23))

    def test_wraps_midnight(self):
        assert active_hours(8, 2) == list(range(8, 24)) + [0, 1, 2]

    def test_equal_hours_wrap_whole_day(self):
        hours = active_hours(8, 8)
        assert hours[0] == 8
        assert len(hours) == 16 + 9

    def test_from_settings_uses_hour_components(self):
        settings = UserSettings(sleep_start="22:30", sleep_end="08:30")
        assert active_hours_for(settings) == list(range(8, 23))


class TestNextAvailableSlot:
    def test_empty_day(self):
        assert next_available_slot([], WAKE_8_SLEEP_22, 60) == Slot("08:00", "09:00")

    def test_after_first_booking(self):
        actions = [_action("08:00", "09:00")]
        assert next_available_slot(actions, WAKE_8_SLEEP_22, 60) == Slot("09:00", "10:00")

    def test_partial_conflict_skips_hour(self):
        # 08:00 + 60 overlaps 08:45; next full hour 09:00 is free
        actions = [_action("08:45", "08:50")]
        assert next_available_slot(actions, WAKE_8_SLEEP_22, 60).start_time == "09:00"

    def test_short_duration_fits_before_conflict(self):
        actions = [_action("08:30", "09:00")]
        assert next_available_slot(actions, WAKE_8_SLEEP_22, 30) == Slot("08:00", "08:30")

    def test_long_duration(self):
        actions = [_action("10:00", "11:00")]
        assert next_available_slot(actions, WAKE_8_SLEEP_22, 120) == Slot("08:00", "10:00")
        assert next_available_slot(actions, WAKE_8_SLEEP_22, 150) == Slot("11:00", "13:30")

    def test_full_day_falls_back_to_first_active_hour(self):
        actions = [_action("00:00", "23:59")]
        assert next_available_slot(actions, WAKE_8_SLEEP_22, 60) == Slot("08:00", "09:00")

    def test_wraps_past_midnight(self):
        settings = UserSettings(sleep_start="02:00", sleep_end="20:00")
        actions = [_action("20:00", "23:59")]
        # hour 23 starts at 1380 which is busy until 1439; 0:00 is next
        assert next_available_slot(actions, settings, 60) == Slot("00:00", "01:00")

    def test_last_hour_may_end_at_24(self):
        settings = UserSettings(sleep_start="23:00", sleep_end="23:00")
        busy = [_action("00:00", "23:00")]
        slot = next_available_slot(busy, settings, 60)
        assert slot == Slot("23:00", "24:00")


class TestFindSlotFallbacks:
    def test_no_active_hours_uses_now(self):
        now = datetime(2026, 3, 10, 14, 37)
        assert find_slot([], [], 60, now=now) == Slot("14:37", "15:37")

    def test_no_active_hours_custom_duration(self):
        now = datetime(2026, 3, 10, 9, 0)
        assert find_slot([], [], 15, now=now) == Slot("09:00", "09:15")
