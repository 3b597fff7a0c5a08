# src/rating/currency.py
from __future__ import annotations

import re
from typing import Any, Optional

# Cell value the published rate table uses for "not sold at this age/package".
NOT_APPLICABLE = "Không áp dụng"

_DIGITS = re.compile(r"[0-9]+")


def parse_vnd(text: Optional[str]) -> int:
    """
    Convert a rate-table cell like '1,350,000' into an integer amount.

    Empty cells and the not-applicable sentinel resolve to 0. Anything else
    that is not comma-grouped digits is corrupt data and raises ValueError.
    """
    if not text or text == NOT_APPLICABLE:
        return 0

    digits = str(text).replace(",", "")
    if not _DIGITS.fullmatch(digits):
        raise ValueError(f"Corrupt rate cell: {text!r} is neither an amount nor '{NOT_APPLICABLE}'")
    return int(digits)


def format_vnd(amount: Any) -> str:
    """Display format used on quotes: thousands grouped with '.' (1.350.000)."""
    return f"{int(amount):,}".replace(",", ".")
