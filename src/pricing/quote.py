# src/pricing/quote.py
"""
Premium calculation.

Provides:
- per-person premium breakdown (main benefit + critical illness + maternity)
- household quote (sum of independently computed persons)

Notes:
- Household size only decides the contract type: exactly one person is
  Independent, any other size (0 included) is Bundled.
- Raw amounts keep None for "no rate row"; resolved amounts default to 0 so
  totals are always integers.
"""

from __future__ import annotations

import re
from dataclasses import asdict, dataclass, field
from datetime import date
from typing import Any, Dict, List, Optional, Sequence, Union

from src.pricing.config import PricingConfig
from src.rating.dates import insurance_age
from src.rating.lookup import FEMALE, find_rate
from src.rating.table import Benefit, RateTable

_LEADING_INT = re.compile(r"\s*([+-]?[0-9]+)")


@dataclass(frozen=True)
class PersonInput:
    date_of_birth: Optional[str]
    gender: str
    package: Union[int, str, None]
    critical_illness: bool = False
    maternity: bool = False


@dataclass(frozen=True)
class PremiumBreakdown:
    age: int
    is_independent: bool
    main_premium_raw: Optional[int]
    main_premium: int
    critical_illness_premium_raw: Optional[int]
    critical_illness_premium: int
    maternity_premium: int
    total: int
    package_name: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class HouseholdQuote:
    currency: str
    reference_date: date
    persons: List[PremiumBreakdown] = field(default_factory=list)

    @property
    def household_size(self) -> int:
        return len(self.persons)

    @property
    def total(self) -> int:
        return sum(p.total for p in self.persons)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "currency": self.currency,
            "reference_date": self.reference_date.strftime("%d/%m/%Y"),
            "household_size": self.household_size,
            "total": self.total,
            "persons": [p.to_dict() for p in self.persons],
        }


def parse_package_tier(value: Any) -> Optional[int]:
    """
    Integer package tier from form input (3, '3', ' 3 ', '3.5', 3.7).

    Like a form's integer parse, only the leading integer counts: '3.5' and
    '3abc' are tier 3, floats are truncated. Returns None when there is no
    leading integer; range checking is left to the rate lookup, which has no
    column outside 1..5.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        try:
            return int(value)
        except (ValueError, OverflowError):
            return None
    m = _LEADING_INT.match(str(value))
    return int(m.group(1)) if m else None


def is_maternity_eligible(
    person: PersonInput,
    age: int,
    package_tier: Optional[int],
    cfg: PricingConfig,
) -> bool:
    """
    Maternity needs all of: selected, female, age within the eligible range,
    and a package at or above the minimum tier.
    """
    return (
        bool(person.maternity)
        and person.gender == FEMALE
        and cfg.maternity_min_age <= age <= cfg.maternity_max_age
        and package_tier is not None
        and package_tier >= cfg.maternity_min_package
    )


def package_name(package: Any, package_tier: Optional[int], cfg: PricingConfig) -> str:
    shown = package_tier if package_tier is not None else str(package if package is not None else "").strip()
    return f"{cfg.package_label} {shown}"


def compute_person_premium(
    person: PersonInput,
    household_size: int,
    table: RateTable,
    today: date,
    cfg: Optional[PricingConfig] = None,
) -> PremiumBreakdown:
    """
    Premium breakdown for one insured person.

    today is the reference date for the insurance age; it is never read from
    the clock here so quotes are reproducible.
    """
    cfg = cfg or PricingConfig()

    age = insurance_age(person.date_of_birth, today)
    is_independent = household_size == 1
    tier = parse_package_tier(person.package)

    main_raw = find_rate(table, age, Benefit.MAIN, person.gender, is_independent, tier)
    main = main_raw if main_raw is not None else 0

    # Not selected is a literal 0; selected but not offered stays None
    critical_raw: Optional[int] = 0
    if person.critical_illness:
        critical_raw = find_rate(table, age, Benefit.CRITICAL_ILLNESS, person.gender, is_independent, tier)
    critical = critical_raw if critical_raw is not None else 0

    maternity = cfg.maternity_premium if is_maternity_eligible(person, age, tier, cfg) else 0

    return PremiumBreakdown(
        age=age,
        is_independent=is_independent,
        main_premium_raw=main_raw,
        main_premium=main,
        critical_illness_premium_raw=critical_raw,
        critical_illness_premium=critical,
        maternity_premium=maternity,
        total=main + critical + maternity,
        package_name=package_name(person.package, tier, cfg),
    )


def compute_household_premium(
    persons: Sequence[PersonInput],
    table: RateTable,
    today: date,
    cfg: Optional[PricingConfig] = None,
) -> HouseholdQuote:
    """
    Quote every person in one household.

    The only shared input is the household size (Independent vs Bundled);
    each person is otherwise priced on their own.
    """
    cfg = cfg or PricingConfig()
    size = len(persons)
    breakdowns = [compute_person_premium(p, size, table, today, cfg) for p in persons]
    return HouseholdQuote(currency=cfg.currency, reference_date=today, persons=breakdowns)
