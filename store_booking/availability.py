import logging
from datetime import date, datetime, timedelta
from typing import List, Optional, Sequence, Tuple
from zoneinfo import ZoneInfo

from .schedule import RuleKind, resolve_rule_for_date, weekly_intervals_for_date
from .schemas import DateOverride, WeeklyHours
from .time_utils import DEFAULT_STORE_TZ, anchor_interval, as_utc, from_zoned, to_zoned

logger = logging.getLogger(__name__)

LOOKAHEAD_DAYS = 7


def _open_windows(
    local_date: date,
    weekly_hours: Sequence[WeeklyHours],
    overrides: Sequence[DateOverride],
    tz: ZoneInfo,
) -> List[Tuple[datetime, datetime]]:
    """UTC windows that can contain an instant on local_date.

    Covers the date's own rule plus the part of the previous day's overnight
    intervals that runs past midnight. An override on local_date shuts out
    the previous day's spill.
    """
    rule = resolve_rule_for_date(local_date, weekly_hours, overrides)
    windows = [anchor_interval(local_date, i.start, i.end, tz) for i in rule.intervals]

    if not rule.is_override:
        previous = local_date - timedelta(days=1)
        previous_rule = resolve_rule_for_date(previous, weekly_hours, overrides)
        windows.extend(
            anchor_interval(previous, i.start, i.end, tz)
            for i in previous_rule.intervals
            if i.overnight
        )
    return windows


def is_open_at(
    now: datetime,
    weekly_hours: Optional[Sequence[WeeklyHours]],
    overrides: Optional[Sequence[DateOverride]],
    store_tz: ZoneInfo = DEFAULT_STORE_TZ,
) -> bool:
    """
    Tells whether the store is open at the instant ``now``.

    Both bounds of every interval are inclusive, so the closing minute
    still counts as open. Missing hours or overrides fail closed.
    """
    if weekly_hours is None or overrides is None:
        return False

    now_utc = as_utc(now)
    local_date = to_zoned(now_utc, store_tz).date()

    for start_utc, end_utc in _open_windows(local_date, weekly_hours, overrides, store_tz):
        logger.debug("Checking %s against window %s - %s", now_utc, start_utc, end_utc)
        if start_utc <= now_utc <= end_utc:
            return True
    return False


def next_opening_after(
    now: datetime,
    weekly_hours: Optional[Sequence[WeeklyHours]],
    overrides: Optional[Sequence[DateOverride]],
    store_tz: ZoneInfo = DEFAULT_STORE_TZ,
) -> Optional[datetime]:
    """
    Finds the soonest opening instant strictly after ``now``.

    Today's override is honoured: a future open override is returned
    directly, and any override (closed, or open but already started)
    replaces today's weekly rows. The following six days are read from the
    weekly hours only; overrides on those dates are not consulted.

    Returns None when nothing opens within the seven day lookahead.
    """
    if weekly_hours is None or overrides is None:
        return None

    now_utc = as_utc(now)
    today = to_zoned(now_utc, store_tz).date()

    today_rule = resolve_rule_for_date(today, weekly_hours, overrides)
    if today_rule.kind is RuleKind.OVERRIDE_OPEN:
        opening = from_zoned(datetime.combine(today, today_rule.intervals[0].start), store_tz)
        if opening > now_utc:
            return opening

    for offset in range(LOOKAHEAD_DAYS):
        if offset == 0 and today_rule.is_override:
            continue
        check_date = today + timedelta(days=offset)
        intervals = sorted(weekly_intervals_for_date(check_date, weekly_hours), key=lambda i: i.start)
        for interval in intervals:
            opening = from_zoned(datetime.combine(check_date, interval.start), store_tz)
            if opening <= now_utc:
                continue
            logger.debug("Next opening found %d day(s) ahead: %s", offset, opening)
            return opening

    return None
