from datetime import date, datetime, time
from typing import List, Optional, Tuple
from zoneinfo import ZoneInfo

from sqlalchemy.orm import Session

from . import models
from .availability import is_open_at, next_opening_after
from .formatting import convert_timezone, format_date_for_display, format_time_for_display, greeting_for
from .schemas import DateOverride, Slot, SlotList, StoreStatus, WeeklyHours
from .slots import generate_slots, sorted_slots
from .time_utils import from_zoned


def load_schedule(db: Session) -> Tuple[Optional[List[WeeklyHours]], List[DateOverride]]:
    """Reads the stored records. Hours come back as None until something has been ingested."""
    hours = [
        WeeklyHours.model_validate(row, from_attributes=True)
        for row in db.query(models.StoreHours).order_by(models.StoreHours.day_of_week).all()
    ]
    overrides = [
        DateOverride.model_validate(row, from_attributes=True)
        for row in db.query(models.StoreOverride).all()
    ]
    return (hours or None), overrides


def store_status(db: Session, now: datetime, display_tz: ZoneInfo, store_tz: ZoneInfo) -> StoreStatus:
    # One "now" for both answers so they cannot disagree.
    hours, overrides = load_schedule(db)
    is_open = is_open_at(now, hours, overrides, store_tz)
    next_opening = None if is_open else next_opening_after(now, hours, overrides, store_tz)
    return StoreStatus(
        now=now,
        timezone=display_tz.key,
        is_open=is_open,
        next_opening=convert_timezone(next_opening, display_tz) if next_opening else None,
        next_opening_display=format_time_for_display(next_opening, display_tz) if next_opening else None,
        greeting=greeting_for(now, display_tz),
    )


def slot_list(
    db: Session, day: date, display_tz: ZoneInfo, store_tz: ZoneInfo, interval_minutes: int
) -> SlotList:
    hours, overrides = load_schedule(db)
    slots = sorted_slots(generate_slots(day, hours, overrides, display_tz, interval_minutes, store_tz))
    midday = from_zoned(datetime.combine(day, time(12, 0)), display_tz)
    return SlotList(
        day=day,
        day_display=format_date_for_display(midday, display_tz),
        timezone=display_tz.key,
        interval_minutes=interval_minutes,
        slots=[Slot(start=s, label=format_time_for_display(s, display_tz)) for s in slots],
    )
