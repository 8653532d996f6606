import pytest
from datetime import datetime, timezone
from zoneinfo import ZoneInfo

from store_booking.availability import is_open_at, next_opening_after
from store_booking.schemas import DateOverride, WeeklyHours

TZ_UTC = timezone.utc
TZ_LA = ZoneInfo("America/Los_Angeles")

SUNDAY, MONDAY, TUESDAY, WEDNESDAY, THURSDAY, FRIDAY, SATURDAY = range(7)


def hours(day, start, end, is_open=True):
    return WeeklyHours(day_of_week=day, start_time=start, end_time=end, is_open=is_open)


def override(month, day, start="00:00", end="00:00", is_open=False):
    return DateOverride(month=month, day=day, start_time=start, end_time=end, is_open=is_open)


def utc(*args):
    return datetime(*args, tzinfo=TZ_UTC)


MONDAY_HOURS = [hours(MONDAY, "09:00", "17:00")]


# 2025-05-26 is a Monday; New York is on EDT (UTC-4).

def test_open_during_weekly_hours():
    assert is_open_at(utc(2025, 5, 26, 14, 0), MONDAY_HOURS, [])

def test_closed_before_opening():
    assert not is_open_at(utc(2025, 5, 26, 12, 0), MONDAY_HOURS, [])

def test_both_bounds_are_inclusive():
    assert is_open_at(utc(2025, 5, 26, 13, 0), MONDAY_HOURS, [])
    assert is_open_at(utc(2025, 5, 26, 21, 0), MONDAY_HOURS, [])
    assert not is_open_at(utc(2025, 5, 26, 21, 1), MONDAY_HOURS, [])

def test_closed_on_a_day_without_hours():
    assert not is_open_at(utc(2025, 5, 27, 14, 0), MONDAY_HOURS, [])

def test_multiple_intervals_in_one_day():
    weekly = [hours(MONDAY, "09:00", "12:00"), hours(MONDAY, "14:00", "18:00")]
    assert is_open_at(utc(2025, 5, 26, 15, 0), weekly, [])      # 11:00
    assert not is_open_at(utc(2025, 5, 26, 17, 0), weekly, [])  # 13:00
    assert is_open_at(utc(2025, 5, 26, 19, 0), weekly, [])      # 15:00

def test_closed_weekly_rows_are_ignored():
    assert not is_open_at(utc(2025, 5, 26, 14, 0), [hours(MONDAY, "09:00", "17:00", is_open=False)], [])

def test_overnight_interval_before_midnight():
    weekly = [hours(MONDAY, "22:00", "02:00")]
    assert is_open_at(utc(2025, 5, 27, 3, 0), weekly, [])  # Monday 23:00

def test_overnight_interval_after_midnight():
    """1 AM on Tuesday is still inside Monday's 22:00-02:00."""
    weekly = [hours(MONDAY, "22:00", "02:00")]
    assert is_open_at(utc(2025, 5, 27, 5, 0), weekly, [])      # Tuesday 01:00
    assert is_open_at(utc(2025, 5, 27, 6, 0), weekly, [])      # Tuesday 02:00
    assert not is_open_at(utc(2025, 5, 27, 7, 0), weekly, [])  # Tuesday 03:00

def test_overnight_every_day():
    weekly = [hours(day, "22:00", "02:00") for day in range(7)]
    assert is_open_at(utc(2025, 5, 27, 5, 0), weekly, [])

def test_override_today_cuts_off_previous_nights_spill():
    weekly = [hours(MONDAY, "22:00", "02:00")]
    assert not is_open_at(utc(2025, 5, 27, 5, 0), weekly, [override(5, 27)])

def test_christmas_closing_override_beats_thursday_hours():
    """2025-12-25 is a Thursday; New York is on EST (UTC-5)."""
    weekly = [hours(THURSDAY, "09:00", "17:00")]
    assert not is_open_at(utc(2025, 12, 25, 15, 0), weekly, [override(12, 25)])
    assert is_open_at(utc(2025, 12, 25, 15, 0), weekly, [])

def test_open_override_replaces_weekly_hours():
    weekly = [hours(WEDNESDAY, "09:00", "17:00")]
    overrides = [override(12, 24, "10:00", "14:00", is_open=True)]
    assert not is_open_at(utc(2025, 12, 24, 14, 30), weekly, overrides)  # 09:30
    assert is_open_at(utc(2025, 12, 24, 17, 0), weekly, overrides)       # 12:00
    assert not is_open_at(utc(2025, 12, 24, 20, 0), weekly, overrides)   # 15:00

def test_store_zone_is_a_parameter():
    assert is_open_at(utc(2025, 5, 26, 16, 0), MONDAY_HOURS, [], store_tz=TZ_LA)
    assert not is_open_at(utc(2025, 5, 26, 14, 0), MONDAY_HOURS, [], store_tz=TZ_LA)

@pytest.mark.parametrize("weekly, overrides", [(None, []), (MONDAY_HOURS, None), (None, None)])
def test_missing_data_fails_closed(weekly, overrides):
    now = utc(2025, 5, 26, 14, 0)
    assert is_open_at(now, weekly, overrides) is False
    assert next_opening_after(now, weekly, overrides) is None


def test_next_opening_later_today():
    assert next_opening_after(utc(2025, 5, 26, 12, 0), MONDAY_HOURS, []) == utc(2025, 5, 26, 13, 0)

def test_next_opening_is_strictly_after_now():
    """Exactly at opening time, today's opening has already happened."""
    now = utc(2025, 5, 26, 13, 0)
    weekly = MONDAY_HOURS + [hours(WEDNESDAY, "09:00", "17:00")]
    assert next_opening_after(now, weekly, []) == utc(2025, 5, 28, 13, 0)

def test_next_opening_lookahead_stops_before_next_week():
    """Days 0-6 are scanned; next Monday is outside the window once today's opening passed."""
    assert next_opening_after(utc(2025, 5, 26, 13, 0), MONDAY_HOURS, []) is None

def test_next_opening_picks_earliest_interval():
    weekly = [hours(MONDAY, "14:00", "18:00"), hours(MONDAY, "09:00", "12:00")]
    assert next_opening_after(utc(2025, 5, 26, 11, 0), weekly, []) == utc(2025, 5, 26, 13, 0)
    assert next_opening_after(utc(2025, 5, 26, 16, 30), weekly, []) == utc(2025, 5, 26, 18, 0)

def test_next_opening_wraps_the_week():
    assert next_opening_after(utc(2025, 5, 31, 12, 0), MONDAY_HOURS, []) == utc(2025, 6, 2, 13, 0)

def test_next_opening_returns_future_open_override():
    weekly = [hours(WEDNESDAY, "09:00", "17:00")]
    overrides = [override(12, 24, "10:00", "14:00", is_open=True)]
    assert next_opening_after(utc(2025, 12, 24, 13, 0), weekly, overrides) == utc(2025, 12, 24, 15, 0)

def test_started_open_override_skips_todays_weekly_rows():
    weekly = [hours(WEDNESDAY, "09:00", "17:00"), hours(THURSDAY, "09:00", "17:00")]
    overrides = [override(12, 24, "10:00", "14:00", is_open=True)]
    assert next_opening_after(utc(2025, 12, 24, 16, 0), weekly, overrides) == utc(2025, 12, 25, 14, 0)

def test_closing_override_skips_todays_weekly_rows():
    weekly = [hours(THURSDAY, "09:00", "17:00"), hours(FRIDAY, "09:00", "17:00")]
    assert next_opening_after(utc(2025, 12, 25, 12, 0), weekly, [override(12, 25)]) == utc(2025, 12, 26, 14, 0)

def test_next_opening_reads_only_weekly_hours_after_today():
    """Overrides for the following days are not consulted."""
    weekly = [hours(MONDAY, "09:00", "17:00"), hours(TUESDAY, "09:00", "17:00")]
    assert next_opening_after(utc(2025, 5, 26, 22, 0), weekly, [override(5, 27)]) == utc(2025, 5, 27, 13, 0)

def test_no_opening_within_lookahead():
    assert next_opening_after(utc(2025, 5, 26, 12, 0), [], []) is None
    assert next_opening_after(utc(2025, 5, 26, 12, 0), [hours(MONDAY, "09:00", "17:00", is_open=False)], []) is None
    # The only weekly day is today, and today is overridden closed.
    assert next_opening_after(utc(2025, 12, 25, 12, 0), [hours(THURSDAY, "09:00", "17:00")], [override(12, 25)]) is None
