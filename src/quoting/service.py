# src/quoting/service.py
"""
End-to-end quoting service for the premium calculator.

Single source of truth:
- rate dataset -> RateTable (loaded once, cached per process)
- raw person dicts + reference date -> household quote + warnings
"""

from __future__ import annotations

from datetime import date
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from src.data.rates import load_rate_table
from src.pricing.config import PricingConfig
from src.pricing.quote import PersonInput, PremiumBreakdown, compute_household_premium, parse_package_tier
from src.quoting.schemas import QuoteResponse
from src.rating.dates import parse_ddmmyyyy
from src.rating.lookup import PACKAGE_TIERS
from src.rating.table import RateTable

# In-process cache (useful for FastAPI startup + AWS Lambda warm invocations)
_CACHED_TABLE: Optional[RateTable] = None

_TRUE_STRINGS = {"true", "1", "yes", "on"}


def get_rate_table(rates_path: Optional[str] = None, force_reload: bool = False) -> RateTable:
    """
    Load and cache the rate table.
    """
    global _CACHED_TABLE
    if force_reload or _CACHED_TABLE is None:
        _CACHED_TABLE = load_rate_table(rates_path=rates_path)
    return _CACHED_TABLE


def _as_flag(value: Any) -> bool:
    """Rider checkbox; only real booleans and the usual 'true' strings select it."""
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.strip().lower() in _TRUE_STRINGS
    return False


def person_from_dict(raw: Mapping[str, Any]) -> PersonInput:
    return PersonInput(
        date_of_birth=raw.get("date_of_birth"),
        gender=raw.get("gender") or "",
        package=raw.get("package"),
        critical_illness=_as_flag(raw.get("critical_illness")),
        maternity=_as_flag(raw.get("maternity")),
    )


def _person_warnings(idx: int, person: PersonInput, result: PremiumBreakdown) -> List[str]:
    warnings: List[str] = []
    label = f"person {idx}"

    if parse_ddmmyyyy(person.date_of_birth) is None:
        warnings.append(f"Could not parse date_of_birth={person.date_of_birth!r} for {label}; expected DD/MM/YYYY, age set to 0.")

    tier = parse_package_tier(person.package)
    if tier not in PACKAGE_TIERS:
        warnings.append(f"package={person.package!r} for {label} is not one of {list(PACKAGE_TIERS)}; no rate applies.")
    elif result.main_premium_raw is None:
        warnings.append(f"Main benefit is not offered for {label} at age {result.age}.")
    elif result.main_premium_raw == 0:
        warnings.append(f"Package {tier} is not applicable for {label} at age {result.age}.")

    if person.critical_illness and result.critical_illness_premium_raw is None and tier in PACKAGE_TIERS:
        warnings.append(f"Critical illness is not offered for {label} at age {result.age}.")

    return warnings


def quote_household(
    persons: Sequence[Mapping[str, Any]],
    *,
    today: date,
    table: Optional[RateTable] = None,
    rates_path: Optional[str] = None,
    pricing_cfg: Optional[PricingConfig] = None,
) -> Tuple[QuoteResponse, List[str]]:
    """
    Full quote for one household:
      raw person dicts -> PersonInput -> per-person breakdowns -> QuoteResponse
    Returns (QuoteResponse, warnings).

    Pricing constants come from PricingConfig only; request payloads cannot
    change them.
    """
    tbl = table if table is not None else get_rate_table(rates_path=rates_path)
    cfg = pricing_cfg or PricingConfig()

    inputs = [person_from_dict(p) for p in persons]
    quote = compute_household_premium(inputs, tbl, today, cfg)

    warnings: List[str] = []
    for i, (person, result) in enumerate(zip(inputs, quote.persons), start=1):
        warnings.extend(_person_warnings(i, person, result))

    return QuoteResponse(quote=quote), warnings


def quote_household_dict(
    persons: Sequence[Mapping[str, Any]],
    *,
    today: date,
    rates_path: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Convenience: returns a JSON-ready dict and includes warnings.
    """
    resp, warnings = quote_household(persons, today=today, rates_path=rates_path)
    out = resp.to_dict()
    out["warnings"] = warnings
    return out
