# src/quoting/schemas.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict

from src.pricing.quote import HouseholdQuote
from src.rating.currency import format_vnd


@dataclass(frozen=True)
class QuoteResponse:
    quote: HouseholdQuote

    def to_dict(self) -> Dict[str, Any]:
        out = self.quote.to_dict()
        out["total_display"] = f"{format_vnd(self.quote.total)} {self.quote.currency}"
        return out
