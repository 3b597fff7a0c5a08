# src/api/lambda_handler.py
"""
AWS Lambda handler for FastAPI using Mangum (ASGI adapter).

How it works:
- API Gateway invokes Lambda
- Mangum translates the event into an ASGI request
- FastAPI handles routing (/health, /quote)
- Response is returned back to API Gateway

Rate table loading:
- get_rate_table() runs at import time (cold start) so the first quote is fast.
- If RATES_PATH is missing on the Lambda filesystem, the dataset is pulled
  from RATES_S3_URI (point RATES_PATH at /tmp in that case).
"""

from __future__ import annotations

import os

from mangum import Mangum

from src.api.app import app
from src.quoting.service import get_rate_table


_PRELOAD_RATES = os.getenv("PRELOAD_RATES", "true").lower() in {"1", "true", "yes"}

if _PRELOAD_RATES:
    # Caches the RateTable in the service layer; needs s3:GetObject on RATES_S3_URI.
    get_rate_table()


handler = Mangum(app)
