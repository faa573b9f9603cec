"""config.py — Environment variables, route constants, logging for content_api."""
from __future__ import annotations

import logging
import os

__all__ = [
    "CONTENT_PATH_SUFFIX",
    "CONTENT_TABLE",
    "DYNAMODB_REGION",
    "LOG_LEVEL",
    "logger",
]

# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------

CONTENT_TABLE = os.environ.get("TABLE_NAME", "CramData")
DYNAMODB_REGION = os.environ.get("DYNAMODB_REGION", os.environ.get("AWS_REGION", "us-east-1"))
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()

CONTENT_PATH_SUFFIX = "/content"

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------

logger = logging.getLogger()
logger.setLevel(getattr(logging, LOG_LEVEL, logging.INFO))
