from pydantic import BaseModel, Field, field_validator
from datetime import date, datetime
from typing import List, Optional

from .time_utils import parse_time_string


class WeeklyHours(BaseModel):
    id: Optional[str] = None
    day_of_week: int = Field(ge=0, le=6)  # 0=Sunday, 6=Saturday
    start_time: str
    end_time: str
    is_open: bool

    @field_validator("start_time", "end_time")
    @classmethod
    def check_time(cls, value: str) -> str:
        parse_time_string(value)
        return value


class DateOverride(BaseModel):
    id: Optional[str] = None
    month: int = Field(ge=1, le=12)
    day: int = Field(ge=1, le=31)
    start_time: str
    end_time: str
    is_open: bool

    @field_validator("start_time", "end_time")
    @classmethod
    def check_time(cls, value: str) -> str:
        parse_time_string(value)
        return value


class StoreStatus(BaseModel):
    now: datetime
    timezone: str
    is_open: bool
    next_opening: Optional[datetime] = None
    next_opening_display: Optional[str] = None
    greeting: str


class Slot(BaseModel):
    start: datetime
    label: str


class SlotList(BaseModel):
    day: date
    day_display: str
    timezone: str
    interval_minutes: int
    slots: List[Slot]


class DateItem(BaseModel):
    day: date
    formatted: str
    display: str
    day_name: str
