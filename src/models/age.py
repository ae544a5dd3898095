"""
Age derivation from a birth date.

Both functions read the wall clock unless ``now`` is given; pass a fixed
``now`` for reproducible results.
"""
import math
from datetime import date, datetime
from typing import Union

from config.settings import MS_PER_MONTH

DateLike = Union[date, datetime]


def _as_datetime(value: DateLike) -> datetime:
    if isinstance(value, datetime):
        return value
    return datetime(value.year, value.month, value.day)


def age_in_months(birth_date: DateLike, now: DateLike = None) -> int:
    """Approximate age in months using an average 30.44-day month."""
    now = _as_datetime(now) if now is not None else datetime.now()
    elapsed_ms = (now - _as_datetime(birth_date)).total_seconds() * 1000
    return math.floor(elapsed_ms / MS_PER_MONTH + 0.5)


def age_in_years(birth_date: DateLike, now: DateLike = None) -> int:
    """Calendar-exact age in whole years."""
    now = _as_datetime(now) if now is not None else datetime.now()
    age = now.year - birth_date.year
    if (now.month, now.day) < (birth_date.month, birth_date.day):
        age -= 1
    return age
