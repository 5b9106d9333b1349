# app/utils/dates.py
from datetime import datetime, timezone
from typing import Optional


def to_naive_utc(value: Optional[datetime]) -> Optional[datetime]:
    """
    Convert an offset-aware datetime to naive UTC.

    Columns are plain TIMESTAMP; naive values are taken to be UTC already.
    """
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)
