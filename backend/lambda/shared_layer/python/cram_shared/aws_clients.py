"""cram_shared.aws_clients — Lazy-singleton AWS service clients.

The DynamoDB client is created on first use and reused for the lifetime of the
execution environment. Retries are disabled: a request makes at most one
attempt against the table and surfaces the failure to the caller.
"""

from __future__ import annotations

import os
from typing import Optional

import boto3
from botocore.config import Config

DYNAMODB_REGION: str = os.environ.get(
    "DYNAMODB_REGION", os.environ.get("AWS_REGION", "us-east-1")
)

_ddb = None


def _get_ddb(region: Optional[str] = None):
    """Get (or create) the DynamoDB client singleton."""
    global _ddb
    if _ddb is None:
        _ddb = boto3.client(
            "dynamodb",
            region_name=region or DYNAMODB_REGION,
            config=Config(retries={"total_max_attempts": 1, "mode": "standard"}),
        )
    return _ddb
