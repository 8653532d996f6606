import re
from datetime import datetime, time, date, timedelta, timezone
from enum import Enum
from typing import Optional, Tuple
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

DEFAULT_STORE_TIMEZONE = "America/New_York"

_TIME_RE = re.compile(r"([01]\d|2[0-3]):([0-5]\d)")


class MalformedTimeError(ValueError):
    """A schedule time string is not a 24-hour HH:MM value."""


class InvalidZoneError(ValueError):
    """An IANA zone key could not be loaded."""


class ZoneMode(str, Enum):
    STORE = "store"
    DEVICE = "device"


def get_zone(timezone_str: str) -> ZoneInfo:
    """Returns a ZoneInfo object, raising InvalidZoneError for unknown keys."""
    try:
        return ZoneInfo(timezone_str)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise InvalidZoneError(f"Unknown timezone: {timezone_str!r}") from exc


def resolve_display_zone(
    mode: ZoneMode, store_tz: ZoneInfo, device_tz: Optional[ZoneInfo] = None
) -> ZoneInfo:
    if mode is ZoneMode.STORE:
        return store_tz
    if device_tz is None:
        raise ValueError("Device timezone is required when displaying in the device zone")
    return device_tz


def same_zone(a: ZoneInfo, b: ZoneInfo) -> bool:
    return a.key == b.key


def as_utc(instant: datetime) -> datetime:
    """Normalizes an instant to UTC; naive datetimes are taken to be UTC already."""
    if instant.tzinfo is None:
        return instant.replace(tzinfo=timezone.utc)
    return instant.astimezone(timezone.utc)


def to_zoned(instant: datetime, tz: ZoneInfo) -> datetime:
    """
    Projects an instant onto the wall clock observed in tz.

    The result is naive. Its ``fold`` attribute records which side of a
    repeated (fall-back) hour the instant sits on, so from_zoned can undo
    the projection exactly.
    """
    return as_utc(instant).astimezone(tz).replace(tzinfo=None)


def from_zoned(civil: datetime, tz: ZoneInfo) -> datetime:
    """
    Resolves a wall-clock time observed in tz into a UTC instant.

    Ambiguous times (the repeated hour when clocks fall back) resolve to the
    first occurrence unless ``civil.fold`` is 1. Nonexistent times (the hour
    skipped when clocks spring forward) are read with the pre-transition
    offset, so 02:30 on a spring-forward day lands on 03:30 local.
    """
    return civil.replace(tzinfo=tz).astimezone(timezone.utc)


def parse_time_string(value: str) -> time:
    """Parses a strict 24-hour "HH:MM" string."""
    if not isinstance(value, str):
        raise MalformedTimeError(f"Expected an HH:MM string, got {value!r}")
    match = _TIME_RE.fullmatch(value)
    if match is None:
        raise MalformedTimeError(f"Malformed time string: {value!r}")
    return time(int(match.group(1)), int(match.group(2)))


def is_overnight(start_time: time, end_time: time) -> bool:
    return end_time < start_time


def anchor_interval(
    local_date: date, start_time: time, end_time: time, tz: ZoneInfo
) -> Tuple[datetime, datetime]:
    """Returns the UTC (start, end) instants of a civil interval opening on local_date.

    When end_time is earlier than start_time the interval runs past local
    midnight and the end is anchored to the following day.
    """
    end_date = local_date + timedelta(days=1) if is_overnight(start_time, end_time) else local_date
    start_utc = from_zoned(datetime.combine(local_date, start_time), tz)
    end_utc = from_zoned(datetime.combine(end_date, end_time), tz)
    return start_utc, end_utc


DEFAULT_STORE_TZ = get_zone(DEFAULT_STORE_TIMEZONE)
