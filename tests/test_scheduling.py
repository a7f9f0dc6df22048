from datetime import date

import pytest

from treatment_booking.services.scheduling import (
    is_allowed_day,
    is_valid_slot_time,
    next_allowed_day,
    parse_slot,
    plan_cycle,
)


class TestSchedulingRules:

    @pytest.mark.parametrize("day, allowed", [
        (date(2025, 6, 9), False),   # Monday
        (date(2025, 6, 10), True),   # Tuesday
        (date(2025, 6, 11), True),   # Wednesday
        (date(2025, 6, 12), False),  # Thursday
        (date(2025, 6, 13), True),   # Friday
        (date(2025, 6, 14), False),  # Saturday
        (date(2025, 6, 15), False),  # Sunday
    ])
    def test_allowed_days(self, day, allowed):
        assert is_allowed_day(day) is allowed

    def test_next_allowed_day_keeps_allowed_date(self):
        assert next_allowed_day(date(2025, 6, 11)) == date(2025, 6, 11)

    def test_next_allowed_day_rolls_forward(self):
        assert next_allowed_day(date(2025, 6, 14)) == date(2025, 6, 17)
        assert next_allowed_day(date(2025, 6, 12)) == date(2025, 6, 13)

    def test_plan_cycle_tuesday(self):
        """Tuesday plus fourteen days is always a Tuesday."""
        assert plan_cycle(date(2025, 6, 10)) == [
            date(2025, 6, 10),
            date(2025, 6, 24),
            date(2025, 7, 8),
        ]

    def test_plan_cycle_friday_crosses_month(self):
        assert plan_cycle(date(2025, 6, 27)) == [
            date(2025, 6, 27),
            date(2025, 7, 11),
            date(2025, 7, 25),
        ]

    def test_plan_cycle_rolls_follow_ups_to_allowed_day(self):
        """Follow-ups that land on a disallowed day move to the next allowed one."""
        sessions = plan_cycle(date(2025, 6, 14))  # Saturday
        assert sessions == [date(2025, 6, 14), date(2025, 7, 1), date(2025, 7, 15)]

    @pytest.mark.parametrize("first", [
        date(2025, 6, 10), date(2025, 6, 11), date(2025, 6, 13), date(2025, 12, 31),
    ])
    def test_plan_cycle_spacing(self, first):
        sessions = plan_cycle(first)
        assert len(sessions) == 3
        for earlier, later in zip(sessions, sessions[1:]):
            assert (later - earlier).days >= 14
            assert is_allowed_day(later)

    @pytest.mark.parametrize("value, valid", [
        ("00:00", True),
        ("09:00", True),
        ("23:00", True),
        ("10:30", False),
        ("24:00", False),
        ("9:00", False),
        ("noon", False),
    ])
    def test_slot_time_format(self, value, valid):
        assert is_valid_slot_time(value) is valid

    def test_parse_slot(self):
        parsed = parse_slot("2025-06-10", "10:00")
        assert (parsed.year, parsed.month, parsed.day, parsed.hour) == (2025, 6, 10, 10)

    def test_parse_slot_rejects_impossible_date(self):
        with pytest.raises(ValueError):
            parse_slot("2025-02-30", "10:00")
