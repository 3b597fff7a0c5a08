# src/rating/table.py
"""
Published premium rate table.

One row per (age, benefit, contract type, gender) with five package columns.
The table is built once from the dataset and treated as read-only afterwards,
so a single instance can be shared by any number of concurrent quotes.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Any, Iterable, Mapping, Optional, Tuple


class Benefit(str, Enum):
    """Benefit labels exactly as the published dataset spells them."""

    MAIN = "Quyền lợi chính + ngoại trú"
    CRITICAL_ILLNESS = "Bệnh hiểm nghèo"
    MATERNITY = "Chăm sóc Thai sản"  # fixed amount, never in the table


class ContractType(str, Enum):
    INDEPENDENT = "Độc lập"  # one insured person
    BUNDLED = "Mua kèm"  # two or more in one household


class Gender(str, Enum):
    MALE = "Nam"
    FEMALE = "Nữ"


RateKey = Tuple[int, str, str, str]


def _label(value: Any) -> str:
    # Enum members hash by name, so keys always carry the plain dataset label
    return value.value if isinstance(value, Enum) else str(value)


def rate_key(age: int, benefit: Any, contract_type: Any, gender: Any) -> RateKey:
    return (int(age), _label(benefit), _label(contract_type), _label(gender))


@dataclass(frozen=True)
class RateRecord:
    age: int
    benefit: str
    contract_type: str
    gender: str
    package1: Optional[str] = None
    package2: Optional[str] = None
    package3: Optional[str] = None
    package4: Optional[str] = None
    package5: Optional[str] = None
    age_band: Optional[str] = None

    @property
    def key(self) -> RateKey:
        return rate_key(self.age, self.benefit, self.contract_type, self.gender)

    def package_cell(self, tier: int) -> Optional[str]:
        """Raw cell for package 1..5. Raises KeyError for any other tier."""
        if tier not in (1, 2, 3, 4, 5):
            raise KeyError(f"No package column for tier {tier!r}")
        return getattr(self, f"package{tier}")


class RateTable:
    """Immutable index of RateRecord by (age, benefit, contract type, gender)."""

    __slots__ = ("_rows",)

    def __init__(self, rows: Mapping[RateKey, RateRecord]) -> None:
        self._rows = MappingProxyType(dict(rows))

    def lookup(self, age: int, benefit: Any, contract_type: Any, gender: Any) -> Optional[RateRecord]:
        """Exact match only: an age without a row is simply absent."""
        try:
            key = rate_key(age, benefit, contract_type, gender)
        except (TypeError, ValueError):
            return None
        return self._rows.get(key)

    def __len__(self) -> int:
        return len(self._rows)

    def __contains__(self, key: object) -> bool:
        return key in self._rows

    def ages(self) -> list[int]:
        return sorted({k[0] for k in self._rows})


def build_rate_table(records: Iterable[RateRecord]) -> RateTable:
    """
    Index records in a single pass.

    Duplicate keys are not checked: the later record wins.
    """
    rows: dict[RateKey, RateRecord] = {}
    for r in records:
        rows[r.key] = r
    return RateTable(rows)
