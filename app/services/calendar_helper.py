# Naptár segédfüggvények: ISO hét, hét kezdőnapja, magyar ünnepek és napnevek
from datetime import date, datetime, timedelta
from typing import Optional, Union

import pytz

from app.config import settings

HUNGARIAN_HOLIDAYS_2025 = {
    "2025-01-01": "Újév",
    "2025-03-15": "Nemzeti ünnep",
    "2025-04-18": "Nagypéntek",
    "2025-04-21": "Húsvéthétfő",
    "2025-05-01": "Munka ünnepe",
    "2025-06-09": "Pünkösdhétfő",
    "2025-08-20": "Szent István",
    "2025-10-23": "Nemzeti ünnep",
    "2025-11-01": "Mindenszentek",
    "2025-12-25": "Karácsony",
    "2025-12-26": "Karácsony 2. napja",
}

# date.weekday() sorrendben (hétfő = 0)
HUNGARIAN_WEEKDAYS = ["hétfő", "kedd", "szerda", "csütörtök", "péntek", "szombat", "vasárnap"]

WEEK_DAY_KEYS = ["monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday"]


def local_now() -> datetime:
    """Aktuális idő a bolt időzónájában, naiv datetime-ként."""
    tz = pytz.timezone(settings.TIMEZONE)
    return datetime.now(tz).replace(tzinfo=None)


def local_today() -> date:
    return local_now().date()


def to_local_naive(value: datetime) -> datetime:
    """Időzónás datetime a bolt időzónájára váltva, tzinfo nélkül; a naiv érték marad."""
    if value.tzinfo is None:
        return value
    return value.astimezone(pytz.timezone(settings.TIMEZONE)).replace(tzinfo=None)


def iso_week(day: Union[date, datetime]) -> int:
    """ISO-8601 hét száma (hétfő kezdet, az első hét tartalmazza a csütörtököt)."""
    return day.isocalendar()[1]


def week_start(day: date) -> date:
    return day - timedelta(days=day.weekday())


def holiday_name(day: date) -> Optional[str]:
    return HUNGARIAN_HOLIDAYS_2025.get(day.isoformat())


def is_weekend(day: date) -> bool:
    return day.weekday() >= 5


def weekday_name(day: date) -> str:
    return HUNGARIAN_WEEKDAYS[day.weekday()]
