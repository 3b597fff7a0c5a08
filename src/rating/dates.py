# src/rating/dates.py
"""
Date parsing and insurance age.

Provides:
- strict DD/MM/YYYY parsing into a datetime.date
- insurance age derived from a date of birth and an injected reference date

Notes:
- Malformed dates are an expected input (free-text form fields), so parsing
  returns None instead of raising.
- The reference date is always passed in; nothing here reads the wall clock.
"""

from __future__ import annotations

import re
from datetime import date
from typing import Optional

MIN_YEAR = 1900

_DDMMYYYY = re.compile(r"([0-9]{2})/([0-9]{2})/([0-9]{4})")


def parse_ddmmyyyy(text: Optional[str]) -> Optional[date]:
    """
    Parse 'DD/MM/YYYY' into a date.

    Returns None when:
    - text is empty / None / not exactly 10 characters
    - the separators are not '/' or a part is not numeric
    - month is outside 1..12, day outside 1..31, year < 1900
    - the triple is not a real calendar date (31/04, 29/02 in a non-leap year)
    """
    if not text or len(text) != 10:
        return None

    m = _DDMMYYYY.fullmatch(text)
    if not m:
        return None

    day, month, year = (int(g) for g in m.groups())
    if month < 1 or month > 12 or day < 1 or day > 31 or year < MIN_YEAR:
        return None

    try:
        return date(year, month, day)
    except ValueError:
        return None


def insurance_age(dob: Optional[str], today: date) -> int:
    """
    Insurance age of someone born on `dob` as of `today`.

    Completed years, plus one on every day that is not the exact birthday.
    An unparseable dob yields 0, which no rate table row covers.
    """
    born = parse_ddmmyyyy(dob)
    if born is None:
        return 0

    age = today.year - born.year

    # birthday not reached yet this year
    if (today.month, today.day) < (born.month, born.day):
        age -= 1

    if (today.month, today.day) != (born.month, born.day):
        age += 1

    return age
