"""
Date helpers shared by the views
SportsMonks timestamps are UTC without an offset ("2024-12-26 15:00:00")
"""

from datetime import date, datetime, timezone
from typing import Optional


def parse_utc_datetime(value: Optional[str]) -> Optional[datetime]:
    """
    Parse a SportsMonks timestamp as an aware UTC datetime.

    Returns None for empty or unparseable input.
    """
    if not value:
        return None
    try:
        parsed = datetime.fromisoformat(value.strip().replace(" ", "T").replace("Z", "+00:00"))
    except ValueError:
        return None
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def parse_date_string(value: Optional[str]) -> Optional[date]:
    """
    Calendar date of "YYYY-MM-DD" or "YYYY-MM-DD HH:MM:SS", without any timezone shift.
    """
    if not value:
        return None
    try:
        return date.fromisoformat(value.strip().split(" ")[0][:10])
    except ValueError:
        return None
