"""Timezone utilities for America/Sao_Paulo wall-clock time."""

from datetime import date, datetime, time
from typing import Optional, Union

import pytz
from dateutil import parser as date_parser

SAO_PAULO_TZ = pytz.timezone("America/Sao_Paulo")


def now_brt() -> datetime:
    """Return current time in America/Sao_Paulo timezone."""
    return datetime.now(SAO_PAULO_TZ)


def to_brt(dt: datetime) -> datetime:
    """Convert a datetime to America/Sao_Paulo timezone."""
    if dt.tzinfo is None:
        # Assume naive datetime is already local
        return SAO_PAULO_TZ.localize(dt)
    return dt.astimezone(SAO_PAULO_TZ)


def parse_datetime_brt(value: str, default_tz: Optional[pytz.BaseTzInfo] = None) -> datetime:
    """
    Parse a datetime string and return it in America/Sao_Paulo timezone.

    If no timezone is provided in the string, assumes America/Sao_Paulo.
    """
    dt = date_parser.parse(value)
    if dt.tzinfo is None:
        tz = default_tz or SAO_PAULO_TZ
        dt = tz.localize(dt)
    return to_brt(dt)


def start_of_day(value: Union[date, datetime, str]) -> datetime:
    """Return a local datetime bound for the start of a period."""
    if isinstance(value, str):
        return parse_datetime_brt(value)
    if isinstance(value, datetime):
        return to_brt(value)
    return SAO_PAULO_TZ.localize(datetime.combine(value, time.min))


def end_of_day(value: Union[date, datetime, str]) -> datetime:
    """
    Return a local datetime bound for the end of a period.

    Date-only values (including date-only strings) cover the whole day.
    """
    if isinstance(value, str):
        parsed = parse_datetime_brt(value)
        if len(value.strip()) <= 10:
            return SAO_PAULO_TZ.localize(datetime.combine(parsed.date(), time.max))
        return parsed
    if isinstance(value, datetime):
        return to_brt(value)
    return SAO_PAULO_TZ.localize(datetime.combine(value, time.max))
