"""
Business-hours helpers for the store profile.

Hours are stored as a weekly list:
    [{"day": "monday", "open": "09:00", "close": "17:00", "closed": false}, ...]
Times are "HH:MM" strings in the business's own timezone.
"""
import logging
from datetime import datetime, timezone
from typing import Any, List, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

logger = logging.getLogger(__name__)

DAY_NAMES = ["monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday"]

DAY_CODES = {
    "monday": "Mo",
    "tuesday": "Tu",
    "wednesday": "We",
    "thursday": "Th",
    "friday": "Fr",
    "saturday": "Sa",
    "sunday": "Su",
}


def _valid_hours(business_hours: Any) -> Optional[List[dict]]:
    if not isinstance(business_hours, list):
        return None
    return [
        day for day in business_hours
        if isinstance(day, dict) and str(day.get("day", "")).lower() in DAY_CODES
    ]


def _find_day(hours: List[dict], day_name: str) -> Optional[dict]:
    for day in hours:
        if str(day["day"]).lower() == day_name:
            return day
    return None


def local_now(tz_name: Optional[str], now: Optional[datetime] = None) -> datetime:
    now = now or datetime.now(timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    if not tz_name:
        return now
    try:
        return now.astimezone(ZoneInfo(tz_name))
    except (ZoneInfoNotFoundError, ValueError):
        logger.warning(f"Unknown timezone {tz_name!r}, using UTC")
        return now


def is_open(business_hours: Any, tz_name: Optional[str], now: Optional[datetime] = None) -> bool:
    """Stores without configured hours are always open"""
    hours = _valid_hours(business_hours)
    if hours is None:
        return True

    current = local_now(tz_name, now)
    today = _find_day(hours, DAY_NAMES[current.weekday()])
    if not today or today.get("closed"):
        return False

    current_time = current.strftime("%H:%M")
    return str(today.get("open", "")) <= current_time <= str(today.get("close", ""))


def next_open_time(business_hours: Any, tz_name: Optional[str], now: Optional[datetime] = None) -> Optional[str]:
    """First open day within the coming week, e.g. "Tuesday at 09:00"."""
    hours = _valid_hours(business_hours)
    if hours is None:
        return None

    current = local_now(tz_name, now)
    for offset in range(1, 8):
        day_name = DAY_NAMES[(current.weekday() + offset) % 7]
        day = _find_day(hours, day_name)
        if day and not day.get("closed"):
            return f"{day_name.capitalize()} at {day.get('open')}"
    return None


def opening_hours_schema(business_hours: Any) -> Optional[str]:
    """Group consecutive open days sharing hours: "Mo-Fr 09:00-17:00, Sa 10:00-14:00"."""
    hours = _valid_hours(business_hours)
    if not hours:
        return None

    open_days = [day for day in hours if not day.get("closed")]
    if not open_days:
        return None

    groups = []
    for day in open_days:
        code = DAY_CODES[str(day["day"]).lower()]
        span = f"{day.get('open')}-{day.get('close')}"
        if groups and groups[-1]["hours"] == span:
            groups[-1]["end"] = code
        else:
            groups.append({"start": code, "end": code, "hours": span})

    return ", ".join(
        f"{g['start'] if g['start'] == g['end'] else g['start'] + '-' + g['end']} {g['hours']}"
        for g in groups
    )
