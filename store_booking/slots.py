"""
Bookable slot generation.

Hours are authored in store-zone wall-clock time, so every interval is
walked in absolute time starting from its store-zone anchor. When the
caller displays in another zone, each slot keeps its store-zone wall-clock
reading and is relabelled with the display zone (09:00 New York becomes
09:00 in the display zone). That is a relabel, not a shift of the instant.
"""
import logging
from datetime import date, datetime, timedelta
from typing import List, Optional, Sequence, Union
from zoneinfo import ZoneInfo

from .schedule import resolve_rule_for_date
from .schemas import DateOverride, WeeklyHours
from .time_utils import DEFAULT_STORE_TZ, anchor_interval, from_zoned, same_zone, to_zoned

logger = logging.getLogger(__name__)


def requested_date(day: Union[date, datetime], display_tz: ZoneInfo) -> date:
    """The calendar day a caller means, seen from the display zone."""
    if isinstance(day, datetime):
        return to_zoned(day, display_tz).date()
    return day


def generate_slots(
    day: Union[date, datetime],
    weekly_hours: Optional[Sequence[WeeklyHours]],
    overrides: Optional[Sequence[DateOverride]],
    display_tz: ZoneInfo,
    interval_minutes: int,
    store_tz: ZoneInfo = DEFAULT_STORE_TZ,
) -> List[datetime]:
    """
    Enumerates bookable start instants for a calendar day.

    Args:
        day: A calendar date, or an instant that is projected into display_tz
            to find the calendar date.
        weekly_hours: Recurring weekday intervals, or None if not loaded.
        overrides: Month/day exceptions, or None if not loaded.
        display_tz: Zone the caller presents results in.
        interval_minutes: Step between consecutive slots.
        store_tz: Zone the hours are authored in.

    Returns:
        UTC instants. Each interval contributes slots from its opening up to
        but excluding its closing. Separate intervals are emitted in rule
        order, so the list is only sorted within an interval.
    """
    if interval_minutes <= 0:
        raise ValueError(f"interval_minutes must be positive, got {interval_minutes}")
    if weekly_hours is None or overrides is None:
        return []

    local_date = requested_date(day, display_tz)
    rule = resolve_rule_for_date(local_date, weekly_hours, overrides)
    step = timedelta(minutes=interval_minutes)
    relabel = not same_zone(display_tz, store_tz)

    slots = []
    for interval in rule.intervals:
        start_utc, end_utc = anchor_interval(local_date, interval.start, interval.end, store_tz)
        slot = start_utc
        while slot < end_utc:
            if relabel:
                slots.append(from_zoned(to_zoned(slot, store_tz), display_tz))
            else:
                slots.append(slot)
            slot += step

    logger.debug("Generated %d slot(s) for %s (%s)", len(slots), local_date, rule.kind.value)
    return slots


def sorted_slots(slots: Sequence[datetime]) -> List[datetime]:
    return sorted(slots)
