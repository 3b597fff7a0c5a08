from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional


def _env(key: str, default: Optional[str] = None) -> Optional[str]:
    v = os.getenv(key)
    return v if v is not None and v != "" else default


@dataclass(frozen=True)
class ProjectPaths:
    root: Path
    data_dir: Path
    raw_dir: Path
    processed_dir: Path
    reports_dir: Path


def get_project_root() -> Path:
    """
    Resolve repo root robustly.
    Assumes this file lives at: <root>/src/utils/config.py
    """
    return Path(__file__).resolve().parents[2]


def get_paths() -> ProjectPaths:
    root = get_project_root()
    data_dir = root / "data"
    return ProjectPaths(
        root=root,
        data_dir=data_dir,
        raw_dir=data_dir / "raw",
        processed_dir=data_dir / "processed",
        reports_dir=root / "reports",
    )


@dataclass(frozen=True)
class RatesConfig:
    path: Path
    s3_uri: Optional[str]
    region: Optional[str]


def get_rates_config() -> RatesConfig:
    """
    Where the published rate dataset comes from.

    Env:
      RATES_PATH    (default: data/raw/premium_rates.csv)
      RATES_S3_URI  (optional, s3://bucket/key; used when RATES_PATH is missing)
      AWS_REGION / AWS_DEFAULT_REGION (optional)
    """
    default_path = get_paths().raw_dir / "premium_rates.csv"
    return RatesConfig(
        path=Path(_env("RATES_PATH", str(default_path)) or default_path),
        s3_uri=_env("RATES_S3_URI", None),
        region=_env("AWS_REGION", None) or _env("AWS_DEFAULT_REGION", None),
    )


@dataclass(frozen=True)
class AwsConfig:
    region: str
    s3_bucket: Optional[str]
    s3_prefix: str

    @property
    def enabled(self) -> bool:
        return self.s3_bucket is not None


def get_aws_config() -> AwsConfig:
    """
    Configure S3 usage via environment variables.
    Keep it optional so local runs are frictionless.

    Env:
      AWS_REGION (default: ap-southeast-1)
      S3_BUCKET  (optional)
      S3_PREFIX  (default: premium-quote-engine)
    """
    return AwsConfig(
        region=_env("AWS_REGION", "ap-southeast-1") or "ap-southeast-1",
        s3_bucket=_env("S3_BUCKET", None),
        s3_prefix=_env("S3_PREFIX", "premium-quote-engine") or "premium-quote-engine",
    )
