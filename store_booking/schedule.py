"""
Resolves which opening rule governs a calendar date.

A date-specific override always wins over the weekly hours for that date,
whether it opens or closes the store. Overrides carry no year and recur
annually on their month/day.
"""
import logging
from dataclasses import dataclass
from datetime import date, time
from enum import Enum
from typing import Optional, Sequence, Tuple

from .schemas import DateOverride, WeeklyHours
from .time_utils import parse_time_string

logger = logging.getLogger(__name__)


class RuleKind(str, Enum):
    OVERRIDE_CLOSED = "override-closed"
    OVERRIDE_OPEN = "override-open"
    WEEKLY = "weekly"


@dataclass(frozen=True)
class Interval:
    start: time
    end: time

    @property
    def overnight(self) -> bool:
        return self.end < self.start


@dataclass(frozen=True)
class ResolvedRule:
    kind: RuleKind
    intervals: Tuple[Interval, ...] = ()

    @property
    def is_override(self) -> bool:
        return self.kind is not RuleKind.WEEKLY

    @property
    def closed_all_day(self) -> bool:
        return not self.intervals


def day_of_week(local_date: date) -> int:
    """Weekday index with 0 = Sunday, as used by the hours records."""
    return local_date.isoweekday() % 7


def interval_from_record(record) -> Interval:
    return Interval(parse_time_string(record.start_time), parse_time_string(record.end_time))


def find_override(local_date: date, overrides: Sequence[DateOverride]) -> Optional[DateOverride]:
    for override in overrides:
        if override.month == local_date.month and override.day == local_date.day:
            return override
    return None


def weekly_intervals_for_date(
    local_date: date, weekly_hours: Sequence[WeeklyHours]
) -> Tuple[Interval, ...]:
    """Every open weekly interval for the weekday of local_date, in input order."""
    weekday = day_of_week(local_date)
    return tuple(
        interval_from_record(hours)
        for hours in weekly_hours
        if hours.day_of_week == weekday and hours.is_open
    )


def resolve_rule_for_date(
    local_date: date,
    weekly_hours: Sequence[WeeklyHours],
    overrides: Sequence[DateOverride],
) -> ResolvedRule:
    """
    Resolves the rule for a calendar date observed in the store zone.

    Args:
        local_date: The store-zone calendar date.
        weekly_hours: Recurring weekday intervals.
        overrides: Month/day exceptions.

    Returns:
        OVERRIDE_CLOSED with no intervals, OVERRIDE_OPEN with exactly the
        override's interval, or WEEKLY with zero or more intervals (zero
        meaning closed all day).
    """
    override = find_override(local_date, overrides)
    if override is not None:
        if not override.is_open:
            rule = ResolvedRule(RuleKind.OVERRIDE_CLOSED)
        else:
            rule = ResolvedRule(RuleKind.OVERRIDE_OPEN, (interval_from_record(override),))
    else:
        rule = ResolvedRule(RuleKind.WEEKLY, weekly_intervals_for_date(local_date, weekly_hours))

    logger.debug("Resolved %s for %s: %s", rule.kind.value, local_date, rule.intervals)
    return rule
