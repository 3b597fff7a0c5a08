# src/pricing/config.py
"""
Pricing configuration.

Everything that is not read from the rate table:
- currency: quotes are issued in VND
- maternity rider: a fixed amount gated by age and package
- package_label: prefix of the display label ("Lựa chọn 3")
"""

from __future__ import annotations

from dataclasses import dataclass

MATERNITY_PREMIUM = 2_000_000
MATERNITY_MIN_AGE = 19
MATERNITY_MAX_AGE = 50
MATERNITY_MIN_PACKAGE = 3


@dataclass(frozen=True)
class PricingConfig:
    currency: str = "VND"

    # Maternity is not in the rate table; it is this flat amount when eligible
    maternity_premium: int = MATERNITY_PREMIUM

    # Eligible ages, inclusive on both ends
    maternity_min_age: int = MATERNITY_MIN_AGE
    maternity_max_age: int = MATERNITY_MAX_AGE

    # Lowest package that includes maternity
    maternity_min_package: int = MATERNITY_MIN_PACKAGE

    package_label: str = "Lựa chọn"
