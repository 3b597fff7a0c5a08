# src/api/app.py
"""
FastAPI service for the premium calculator (thin API wrapper).

Endpoints:
- GET  /health
- POST /quote  -> household quote (+ per-person breakdown, warnings)

The API layer stays thin:
- validates input
- resolves the reference date (defaults to today)
- calls src.quoting.service
"""

from __future__ import annotations

from datetime import date
from typing import Dict, List, Optional, Union

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, Field

from src.quoting.service import get_rate_table, quote_household
from src.rating.dates import parse_ddmmyyyy


app = FastAPI(title="Premium Quote Engine", version="0.1.0")


# Load the rate table once at startup (better than module import-time for tests/reload)
@app.on_event("startup")
def _startup() -> None:
    get_rate_table()


# -----------------------------
# Schemas
# -----------------------------
class PersonPayload(BaseModel):
    date_of_birth: Optional[str] = Field(default=None, description="DD/MM/YYYY")
    gender: Optional[str] = Field(default=None, description="'male'; any other value is priced as female")
    package: Optional[Union[int, str]] = None
    critical_illness: bool = False
    maternity: bool = False


class QuoteRequest(BaseModel):
    persons: List[PersonPayload] = Field(min_length=1)
    reference_date: Optional[str] = Field(default=None, description="DD/MM/YYYY; defaults to today")


class PersonResponse(BaseModel):
    age: int
    is_independent: bool
    main_premium_raw: Optional[int]
    main_premium: int
    critical_illness_premium_raw: Optional[int]
    critical_illness_premium: int
    maternity_premium: int
    total: int
    package_name: str


class QuoteResponse(BaseModel):
    currency: str
    reference_date: str
    household_size: int
    total: int
    total_display: str
    persons: List[PersonResponse]
    warnings: list[str] = Field(default_factory=list)


# -----------------------------
# Routes
# -----------------------------
@app.get("/health")
def health() -> Dict[str, str]:
    table = get_rate_table()
    return {"status": "ok", "rates": str(len(table))}


@app.post("/quote", response_model=QuoteResponse)
def quote(req: QuoteRequest) -> QuoteResponse:
    if req.reference_date is None:
        today = date.today()
    else:
        parsed = parse_ddmmyyyy(req.reference_date)
        if parsed is None:
            raise HTTPException(status_code=422, detail=f"reference_date must be DD/MM/YYYY, got: {req.reference_date!r}")
        today = parsed

    resp, warnings = quote_household(
        [p.model_dump() for p in req.persons],
        today=today,
        table=get_rate_table(),
    )

    out = resp.to_dict()
    return QuoteResponse(
        currency=str(out["currency"]),
        reference_date=str(out["reference_date"]),
        household_size=int(out["household_size"]),
        total=int(out["total"]),
        total_display=str(out["total_display"]),
        persons=[PersonResponse(**p) for p in out["persons"]],
        warnings=warnings,
    )
