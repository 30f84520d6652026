"""Open/closed status from a tenant's weekly opening hours."""
from datetime import datetime
from typing import Dict, List, Optional, Tuple

from pydantic import BaseModel

from dinedesk.services.pricing.models import OpeningHoursPerDay, TimeMode
from dinedesk.services.pricing.time_slots import WEEKDAYS, parse_time


class RestaurantStatus(BaseModel):
    """Customer-facing open/closed banner."""

    is_open: bool
    message: str
    next_open_time: Optional[str] = None


def display_time(value: str) -> str:
    """``17:30`` -> ``5:30 PM``."""
    minutes = parse_time(value) or 0
    hours, mins = divmod(minutes % (24 * 60), 60)
    period = "PM" if hours >= 12 else "AM"
    shown = 12 if hours == 0 else hours - 12 if hours > 12 else hours
    return f"{shown}:{mins:02d} {period}"


def _configured_windows(day: OpeningHoursPerDay) -> List[Tuple[str, str]]:
    if day.time_mode == TimeMode.SINGLE:
        pairs = [(day.open_time, day.close_time)]
    else:
        pairs = [
            (day.morning_open, day.morning_close),
            (day.evening_open, day.evening_close),
        ]
    return [
        (start, end)
        for start, end in pairs
        if parse_time(start) is not None and parse_time(end) is not None
    ]


def _in_window(current: int, start: str, end: str) -> bool:
    open_at, close_at = parse_time(start), parse_time(end)
    if close_at < open_at:
        # Crosses midnight
        return current >= open_at or current <= close_at
    return open_at <= current <= close_at


def _day(opening_hours: Dict[str, OpeningHoursPerDay], index: int) -> Optional[OpeningHoursPerDay]:
    return opening_hours.get(WEEKDAYS[index % 7])


def is_open(opening_hours: Dict[str, OpeningHoursPerDay], at: datetime) -> bool:
    """Whether the restaurant is open at ``at`` (local time)."""
    day = _day(opening_hours, at.weekday())
    if day is None or day.closed:
        return False
    current = at.hour * 60 + at.minute
    return any(_in_window(current, start, end) for start, end in _configured_windows(day))


def _next_open_time(opening_hours: Dict[str, OpeningHoursPerDay], at: datetime) -> Optional[str]:
    today = _day(opening_hours, at.weekday())
    current = at.hour * 60 + at.minute
    if today is not None and not today.closed:
        for start, _ in _configured_windows(today):
            if current < parse_time(start):
                return f"today at {display_time(start)}"

    for offset in range(1, 8):
        day = _day(opening_hours, at.weekday() + offset)
        if day is None or day.closed:
            continue
        windows = _configured_windows(day)
        if windows:
            label = "tomorrow" if offset == 1 else WEEKDAYS[(at.weekday() + offset) % 7].title()
            return f"{label} at {display_time(windows[0][0])}"
    return None


def restaurant_status(opening_hours: Dict[str, OpeningHoursPerDay], at: datetime) -> RestaurantStatus:
    """Build the open/closed banner shown on the ordering page."""
    if is_open(opening_hours, at):
        day = _day(opening_hours, at.weekday())
        current = at.hour * 60 + at.minute
        for start, end in _configured_windows(day):
            if _in_window(current, start, end):
                return RestaurantStatus(is_open=True, message=f"Open until {display_time(end)}")

    next_open = _next_open_time(opening_hours, at)
    message = f"Closed - Opens {next_open}" if next_open else "Temporarily Closed"
    return RestaurantStatus(is_open=False, message=message, next_open_time=next_open)
