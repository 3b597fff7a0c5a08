# src/data/ingest.py
"""
Ingest the published premium rate sheet into a canonical, reproducible artifact.

What it does:
- Reads a source file (CSV or Parquet) exported from the insurer's rate sheet
- Normalises columns (age, benefit, contract_type, gender, package1..5, age_band)
- Writes a canonical Parquet to data/processed/
- Writes an ingest manifest JSON to reports/ (counts, hash, data-quality checks)
- Optionally uploads the canonical artifact + manifest to S3 (if S3_BUCKET is set)

Data-quality checks are reported, never enforced: duplicate keys are resolved
last-write-wins when the RateTable is built.

Usage:
  python -m src.data.ingest --in_path data/raw/premium_rates.csv

Optional:
  python -m src.data.ingest --in_path data/raw/premium_rates.csv \
    --out_path data/processed/premium_rates.parquet \
    --manifest_path reports/rates_manifest.json \
    --upload_s3

Env (optional for S3):
  AWS_REGION=ap-southeast-1
  S3_BUCKET=your-bucket
  S3_PREFIX=premium-quote-engine
"""

from __future__ import annotations

import argparse
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional

import numpy as np
import pandas as pd

from src.data.rates import KEY_COLS, PACKAGE_COLS, normalise_rates_frame, read_rates_frame
from src.rating.currency import NOT_APPLICABLE, parse_vnd
from src.utils.config import get_aws_config, get_paths
from src.utils.io import s3_upload_file, sha256_file, write_df, write_json


@dataclass
class RatesManifest:
    dataset: str
    source_path: str
    canonical_path: str
    created_utc: str
    rows: int
    columns: list[str]
    ages: list[int]
    benefits: Dict[str, int]
    duplicate_keys: int
    not_applicable_cells: int
    non_monotonic_rows: int
    file_size_bytes: int
    sha256: str
    notes: list[str]


def _utc_now_iso() -> str:
    return time.strftime("%Y-%m-%dT%H:%M:%SZ", time.gmtime())


def _default_out_path(in_path: Path) -> Path:
    """
    Canonical artifact: always parquet, placed in data/processed/.
    """
    return get_paths().processed_dir / f"{in_path.stem}.parquet"


def _default_manifest_path() -> Path:
    return get_paths().reports_dir / "rates_manifest.json"


def package_amounts(df: pd.DataFrame) -> np.ndarray:
    """
    Package cells as a float matrix (rows x 5), NaN where not applicable or empty.
    Corrupt cells raise ValueError via parse_vnd.
    """
    def _amount(cell: Optional[str]) -> float:
        if cell is None or cell == NOT_APPLICABLE:
            return np.nan
        return float(parse_vnd(cell))

    return np.array([[_amount(c) for c in row] for row in df[PACKAGE_COLS].itertuples(index=False)], dtype=float).reshape(-1, len(PACKAGE_COLS))


def count_non_monotonic(amounts: np.ndarray) -> int:
    """
    Rows whose priced packages get cheaper as the tier goes up.
    Not-applicable cells are skipped, not treated as zero.
    """
    bad = 0
    for row in amounts:
        priced = row[~np.isnan(row)]
        if priced.size > 1 and np.any(np.diff(priced) < 0):
            bad += 1
    return bad


def build_manifest(
    df: pd.DataFrame,
    source_path: Path,
    canonical_path: Path,
    sha: str,
    file_size: int,
    notes: Optional[List[str]] = None,
) -> RatesManifest:
    if notes is None:
        notes = []

    amounts = package_amounts(df)
    duplicates = int(df.duplicated(subset=KEY_COLS, keep="last").sum())
    non_monotonic = count_non_monotonic(amounts)

    if duplicates:
        notes.append(f"WARNING: {duplicates} duplicate (age, benefit, contract_type, gender) rows; later rows win.")
    if non_monotonic:
        notes.append(f"WARNING: {non_monotonic} rows where a higher package is cheaper than a lower one.")

    return RatesManifest(
        dataset="premium_rates",
        source_path=str(source_path),
        canonical_path=str(canonical_path),
        created_utc=_utc_now_iso(),
        rows=int(df.shape[0]),
        columns=[str(c) for c in df.columns],
        ages=sorted(int(a) for a in df["age"].unique()),
        benefits={str(k): int(v) for k, v in df["benefit"].value_counts().items()},
        duplicate_keys=duplicates,
        not_applicable_cells=int((df[PACKAGE_COLS] == NOT_APPLICABLE).to_numpy().sum()),
        non_monotonic_rows=non_monotonic,
        file_size_bytes=int(file_size),
        sha256=sha,
        notes=notes,
    )


def parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Ingest the premium rate sheet into canonical parquet + manifest.")
    p.add_argument("--in_path", type=str, required=True, help="Input CSV/Parquet path (e.g., data/raw/premium_rates.csv)")
    p.add_argument("--out_path", type=str, default=None, help="Canonical output path (.parquet). Default: data/processed/<stem>.parquet")
    p.add_argument("--manifest_path", type=str, default=None, help="Manifest JSON path. Default: reports/rates_manifest.json")
    p.add_argument("--upload_s3", action="store_true", help="Upload canonical artifact + manifest to S3 (requires env S3_BUCKET)")
    return p.parse_args()


def main() -> None:
    args = parse_args()
    aws = get_aws_config()

    in_path = Path(args.in_path)
    out_path = Path(args.out_path) if args.out_path else _default_out_path(in_path)

    if out_path.suffix.lower() != ".parquet":
        raise ValueError("out_path must end with .parquet (canonical rate artifact should be parquet).")

    manifest_path = Path(args.manifest_path) if args.manifest_path else _default_manifest_path()

    df = normalise_rates_frame(read_rates_frame(in_path))

    notes: list[str] = []
    if df.empty:
        notes.append("WARNING: Input rate sheet is empty.")

    write_df(df, out_path)

    manifest = build_manifest(
        df=df,
        source_path=in_path,
        canonical_path=out_path,
        sha=sha256_file(out_path),
        file_size=out_path.stat().st_size,
        notes=notes,
    )

    write_json(manifest, manifest_path)

    print(f"[OK] Ingested source      : {in_path}")
    print(f"[OK] Canonical rates saved: {out_path}")
    print(f"[OK] Manifest saved       : {manifest_path}")
    print(f"Rows: {manifest.rows} | Ages: {len(manifest.ages)} | SHA256: {manifest.sha256[:12]}...")
    for note in manifest.notes:
        print(note)

    if args.upload_s3:
        if not aws.enabled:
            raise RuntimeError("S3 upload requested but S3_BUCKET is not set in environment.")
        bucket = aws.s3_bucket  # type: ignore[assignment]
        prefix = aws.s3_prefix.rstrip("/")

        # s3://<bucket>/<prefix>/rates/<filename>
        # s3://<bucket>/<prefix>/manifests/rates_manifest.json
        rates_key = f"{prefix}/rates/{out_path.name}"
        manifest_key = f"{prefix}/manifests/{manifest_path.name}"

        s3_upload_file(out_path, bucket=bucket, key=rates_key, region=aws.region)
        s3_upload_file(manifest_path, bucket=bucket, key=manifest_key, region=aws.region)

        print(f"[OK] Uploaded rates to S3 : s3://{bucket}/{rates_key}")
        print(f"[OK] Uploaded manifest    : s3://{bucket}/{manifest_key}")


if __name__ == "__main__":
    main()
