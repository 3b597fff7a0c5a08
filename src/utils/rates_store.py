from __future__ import annotations

from pathlib import Path
from typing import Optional, Tuple
from urllib.parse import urlparse

from src.utils.io import s3_download_file


def parse_s3_uri(uri: str) -> Tuple[str, str]:
    p = urlparse(uri)
    if p.scheme != "s3" or not p.netloc:
        raise ValueError(f"RATES_S3_URI must be s3://bucket/key, got: {uri}")
    return p.netloc, p.path.lstrip("/")


def ensure_rates_downloaded(*, local_path: Path, rates_s3_uri: Optional[str], aws_region: Optional[str] = None) -> Path:
    """
    Ensure the rate dataset exists at local_path. If not, download from S3.
    Returns local_path.
    """
    lp = Path(local_path)
    if lp.exists() and lp.stat().st_size > 0:
        return lp

    if not rates_s3_uri:
        raise FileNotFoundError(f"Rate dataset not found at {lp} and RATES_S3_URI is not set.")

    bucket, key = parse_s3_uri(rates_s3_uri)
    lp.parent.mkdir(parents=True, exist_ok=True)
    s3_download_file(bucket, key, lp, region=aws_region)
    return lp
