"""
Shared fixtures.

The sample rate sheet in data/raw/premium_rates.csv holds representative
rows for ages 1, 10, 18, 19, 25, 35, 50, 51, 61 and 65. Ages 0 and 66 are
deliberately absent. Reference date for all age-dependent tests: 20/02/2026.
"""

from datetime import date

import pytest

from src.data.rates import load_rate_table
from src.pricing.quote import PersonInput
from src.rating.table import RateRecord
from src.utils.config import get_paths

TODAY = date(2026, 2, 20)

SAMPLE_RATES_PATH = get_paths().raw_dir / "premium_rates.csv"


@pytest.fixture(scope="session")
def today() -> date:
    return TODAY


@pytest.fixture(scope="session")
def rate_table():
    return load_rate_table(SAMPLE_RATES_PATH)


def row(age, benefit, contract_type, gender, p1, p2, p3, p4, p5) -> RateRecord:
    return RateRecord(
        age=age,
        benefit=benefit,
        contract_type=contract_type,
        gender=gender,
        package1=p1,
        package2=p2,
        package3=p3,
        package4=p4,
        package5=p5,
    )


def person(dob="20/02/2001", gender="male", package="1", critical_illness=False, maternity=False) -> PersonInput:
    return PersonInput(
        date_of_birth=dob,
        gender=gender,
        package=package,
        critical_illness=critical_illness,
        maternity=maternity,
    )


def person_at(exact_age: int, **kwargs) -> PersonInput:
    """Born on 20/02 so TODAY is the exact birthday (no round-up)."""
    return person(dob=f"20/02/{TODAY.year - exact_age}", **kwargs)
