from datetime import date
from typing import Any, Iterable, Optional

# date.weekday(): Monday is 0
WEEKEND_DAYS = (5, 6)


def is_weekend(day: date) -> bool:
    return day.weekday() in WEEKEND_DAYS


def holiday_reason(day: date, holidays: Iterable[Any] = ()) -> Optional[str]:
    """Return "Weekend", the holiday's name, or None for a working day."""
    if is_weekend(day):
        return "Weekend"
    for holiday in holidays:
        if holiday.date == day:
            return holiday.name
    return None


def is_holiday(day: date, holidays: Iterable[Any] = ()) -> bool:
    return holiday_reason(day, holidays) is not None
