"""Advance-order time slot generation."""
import logging
from datetime import date
from typing import Dict, List, Optional, Tuple

from dinedesk.services.pricing.models import OpeningHoursPerDay, TimeMode

logger = logging.getLogger(__name__)

WEEKDAYS = [
    "monday",
    "tuesday",
    "wednesday",
    "thursday",
    "friday",
    "saturday",
    "sunday",
]

# Fallbacks used by the admin settings form for half-filled days
DEFAULT_SINGLE_WINDOW = ("09:00", "22:00")
DEFAULT_MORNING_WINDOW = ("09:00", "14:00")
DEFAULT_EVENING_WINDOW = ("17:00", "22:00")


def parse_time(value: Optional[str]) -> Optional[int]:
    """Parse ``HH:MM`` into minutes past midnight, None if unusable.

    ``24:00`` is accepted as an end-of-day closing time.
    """
    if not value:
        return None
    try:
        hours, minutes = (int(part) for part in value.strip().split(":")[:2])
    except ValueError:
        return None
    if not (0 <= minutes < 60 and (0 <= hours < 24 or (hours, minutes) == (24, 0))):
        return None
    return hours * 60 + minutes


def format_time(minutes: int) -> str:
    """Format minutes past midnight as ``HH:MM``."""
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def _window(
    open_value: Optional[str],
    close_value: Optional[str],
    defaults: Tuple[str, str],
) -> Tuple[int, int]:
    start = parse_time(open_value)
    end = parse_time(close_value)
    if start is None:
        if open_value:
            logger.warning(f"Unreadable opening time {open_value!r}, using {defaults[0]}")
        start = parse_time(defaults[0])
    if end is None:
        if close_value:
            logger.warning(f"Unreadable closing time {close_value!r}, using {defaults[1]}")
        end = parse_time(defaults[1])
    return start, end


def _windows(day: OpeningHoursPerDay) -> List[Tuple[int, int]]:
    if day.time_mode == TimeMode.SINGLE:
        return [_window(day.open_time, day.close_time, DEFAULT_SINGLE_WINDOW)]

    windows = []
    if day.morning_open or day.morning_close:
        windows.append(_window(day.morning_open, day.morning_close, DEFAULT_MORNING_WINDOW))
    if day.evening_open or day.evening_close:
        windows.append(_window(day.evening_open, day.evening_close, DEFAULT_EVENING_WINDOW))
    return windows


def generate_slots(day: OpeningHoursPerDay, interval_minutes: int = 15) -> List[str]:
    """
    Expand a day's opening hours into bookable ``HH:MM`` slots.

    Each window is half-open: a slot falling exactly on the closing time is
    not offered. Split days list morning slots before evening slots.
    """
    if interval_minutes <= 0:
        raise ValueError("interval_minutes must be positive")
    if day.closed:
        return []

    slots = []
    for start, end in _windows(day):
        current = start
        while current < end:
            slots.append(format_time(current))
            current += interval_minutes
    return slots


def slots_for_date(
    opening_hours: Dict[str, OpeningHoursPerDay],
    on_date: date,
    interval_minutes: int = 15,
) -> List[str]:
    """Slots for the weekday of ``on_date``; an unconfigured day has none."""
    day = opening_hours.get(WEEKDAYS[on_date.weekday()])
    if day is None:
        return []
    return generate_slots(day, interval_minutes)
