# src/rating/lookup.py
"""
Resolve a premium amount from the rate table.

Two different "zero-ish" outcomes are kept apart:
- None : no row for these coordinates (the product is not offered at all)
- 0    : the row exists but the package cell is 'not applicable'
"""

from __future__ import annotations

from typing import Any, Optional

from src.rating.currency import parse_vnd
from src.rating.table import ContractType, Gender, RateTable

PACKAGE_TIERS = (1, 2, 3, 4, 5)

# Person input marker for male; every other value is priced as female.
MALE = "male"
FEMALE = "female"


def contract_type_for(is_independent: bool) -> ContractType:
    return ContractType.INDEPENDENT if is_independent else ContractType.BUNDLED


def gender_key(gender: Any) -> Gender:
    """
    Map person input gender to the table's gender label.

    Only the exact marker 'male' maps to Nam; anything else (including
    unrecognised values) falls back to Nữ.
    """
    return Gender.MALE if gender == MALE else Gender.FEMALE


def find_rate(
    table: RateTable,
    age: int,
    benefit: Any,
    gender: Any,
    is_independent: bool,
    package_tier: Optional[int],
) -> Optional[int]:
    """
    Amount for one benefit at the given coordinates, or None if not offered.

    A package tier outside 1..5 (or None when unparseable) has no column and
    is reported as None as well.
    """
    record = table.lookup(age, benefit, contract_type_for(is_independent), gender_key(gender))
    if record is None:
        return None

    if isinstance(package_tier, bool) or package_tier not in PACKAGE_TIERS:
        return None

    return parse_vnd(record.package_cell(int(package_tier)))
