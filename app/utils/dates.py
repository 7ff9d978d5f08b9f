# app/utils/dates.py
from datetime import date, datetime, timedelta
from typing import Any, Optional

import pytz

from app.models.all_models import clinic_now

EPOCH = datetime(1970, 1, 1, tzinfo=pytz.utc)


def today_iso() -> str:
    """Today's date in the clinic time zone, as YYYY-MM-DD."""
    return clinic_now().date().isoformat()


def days_from_today(days: int) -> str:
    return (clinic_now().date() + timedelta(days=days)).isoformat()


def parse_datetime(value: Any) -> Optional[datetime]:
    """Parse a stored date/datetime value into an aware datetime, or None."""
    if value in (None, ""):
        return None
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime(value.year, value.month, value.day)
    elif isinstance(value, str):
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            return None
    else:
        return None
    if parsed.tzinfo is None:
        parsed = pytz.utc.localize(parsed)
    return parsed


def timestamp_or_epoch(value: Any) -> float:
    """Seconds since the epoch; unparseable or absent values sort as the epoch itself."""
    parsed = parse_datetime(value)
    return (parsed or EPOCH).timestamp()


def to_iso(value: Any) -> Optional[str]:
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    return value or None


def age_on(date_of_birth: Any, today: Optional[date] = None) -> Optional[int]:
    parsed = parse_datetime(date_of_birth)
    if parsed is None:
        return None
    born = parsed.date()
    today = today or clinic_now().date()
    if born > today:
        return None
    return today.year - born.year - ((today.month, today.day) < (born.month, born.day))
