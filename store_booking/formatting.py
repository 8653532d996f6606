from datetime import datetime, time, timedelta
from typing import List
from zoneinfo import ZoneInfo

from .schemas import DateItem
from .time_utils import as_utc, from_zoned, to_zoned

# (first hour, last hour exclusive, greeting)
GREETINGS = [
    (5, 10, "Good Morning,"),
    (10, 12, "Late Morning Vibes!"),
    (12, 17, "Good Afternoon,"),
    (17, 21, "Good Evening,"),
]
NIGHT_GREETING = "Night Owl in"


def format_time_for_display(instant: datetime, tz: ZoneInfo) -> str:
    """Formats an instant as a 12-hour clock reading in tz, e.g. "9:05 AM"."""
    local = to_zoned(instant, tz)
    hour = local.hour % 12 or 12
    return f"{hour}:{local.minute:02d} {'AM' if local.hour < 12 else 'PM'}"


def format_date_for_display(instant: datetime, tz: ZoneInfo) -> str:
    """Formats an instant as e.g. "Friday, May 23, 2025" in tz."""
    local = to_zoned(instant, tz)
    return f"{local:%A}, {local:%B} {local.day}, {local.year}"


def format_date_for_date_list(instant: datetime, tz: ZoneInfo) -> DateItem:
    local = to_zoned(instant, tz)
    return DateItem(
        day=local.date(),
        formatted=local.strftime("%Y-%m-%d"),
        display=f"{local:%b} {local.day}",
        day_name=local.strftime("%A"),
    )


def upcoming_dates(now: datetime, tz: ZoneInfo, days: int = 30) -> List[DateItem]:
    """The booking date strip: today and the following days, as seen in tz."""
    today = to_zoned(now, tz).date()
    items = []
    for offset in range(days):
        midday = datetime.combine(today + timedelta(days=offset), time(12, 0))
        items.append(format_date_for_date_list(from_zoned(midday, tz), tz))
    return items


def convert_timezone(instant: datetime, to_tz: ZoneInfo) -> datetime:
    """Re-expresses an instant as an aware datetime in to_tz without moving it."""
    return as_utc(instant).astimezone(to_tz)


def greeting_for(now: datetime, tz: ZoneInfo) -> str:
    hour = to_zoned(now, tz).hour
    for first, last, message in GREETINGS:
        if first <= hour < last:
            return message
    return NIGHT_GREETING
