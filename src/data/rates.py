# src/data/rates.py
"""
Load the published rate dataset into a RateTable.

Accepted sources: CSV (as exported from the rate sheet) or the canonical
Parquet written by src.data.ingest. Package cells are kept as the strings
the insurer publishes ('963,000' or 'Không áp dụng'); they are only turned
into integers at lookup time.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, List, Optional, Union

import pandas as pd

from src.rating.table import RateRecord, RateTable, build_rate_table
from src.utils.config import get_rates_config
from src.utils.io import read_df
from src.utils.rates_store import ensure_rates_downloaded

PACKAGE_COLS = [f"package{i}" for i in range(1, 6)]
KEY_COLS = ["age", "benefit", "contract_type", "gender"]
REQUIRED_COLS = KEY_COLS + PACKAGE_COLS
OPTIONAL_COLS = ["age_band"]

# Column names used by older exports of the rate sheet
COLUMN_ALIASES = {
    "type": "contract_type",
    "ageBand": "age_band",
}


def _cell(val: Any) -> Optional[str]:
    if val is None or (isinstance(val, float) and pd.isna(val)):
        return None
    text = str(val).strip()
    return text or None


def normalise_rates_frame(df: pd.DataFrame) -> pd.DataFrame:
    """
    Canonical rate frame: renamed columns, stripped labels, integer ages,
    string package cells. Raises ValueError on missing columns or bad ages.
    """
    df = df.rename(columns=COLUMN_ALIASES)

    missing = [c for c in REQUIRED_COLS if c not in df.columns]
    if missing:
        raise ValueError(f"Missing required columns: {missing}")

    keep = REQUIRED_COLS + [c for c in OPTIONAL_COLS if c in df.columns]
    out = df[keep].copy()

    ages = pd.to_numeric(out["age"], errors="coerce")
    bad = out.loc[ages.isna() | (ages % 1 != 0), "age"]
    if not bad.empty:
        examples = bad.astype(str).unique().tolist()[:5]
        raise ValueError(f"age must be an integer. Found invalid examples: {examples}")
    out["age"] = ages.astype(int)

    for c in ["benefit", "contract_type", "gender"] + PACKAGE_COLS + [c for c in OPTIONAL_COLS if c in out.columns]:
        out[c] = out[c].map(_cell).astype(object)

    return out


def records_from_frame(df: pd.DataFrame) -> List[RateRecord]:
    df = normalise_rates_frame(df)
    has_band = "age_band" in df.columns

    records: List[RateRecord] = []
    for row in df.itertuples(index=False):
        records.append(
            RateRecord(
                age=int(row.age),
                benefit=str(row.benefit),
                contract_type=str(row.contract_type),
                gender=str(row.gender),
                package1=row.package1,
                package2=row.package2,
                package3=row.package3,
                package4=row.package4,
                package5=row.package5,
                age_band=row.age_band if has_band else None,
            )
        )
    return records


def read_rates_frame(path: Union[str, Path]) -> pd.DataFrame:
    # every CSV column as text; ages are converted in normalise_rates_frame
    return read_df(path, dtype=str)


def load_rate_table(rates_path: Optional[Union[str, Path]] = None) -> RateTable:
    """
    Build the RateTable from a file.

    If rates_path is not provided:
      - Use RATES_PATH (default: data/raw/premium_rates.csv)
      - If that file doesn't exist, download it from RATES_S3_URI
    """
    if rates_path:
        path = Path(rates_path)
    else:
        cfg = get_rates_config()
        path = ensure_rates_downloaded(local_path=cfg.path, rates_s3_uri=cfg.s3_uri, aws_region=cfg.region)

    return build_rate_table(records_from_frame(read_rates_frame(path)))
