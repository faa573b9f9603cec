"""cram_shared.http_utils — HTTP response helpers with CORS.

Every response leaving a Cram Lambda is built here so the CORS policy is the
same on success, client-error and catch-all 500 paths alike.
"""

from __future__ import annotations

import base64
import json
from decimal import Decimal
from typing import Any, Dict, Tuple

CORS_ORIGIN = "https://cram-ai.com"
CORS_HEADERS = {
    "Access-Control-Allow-Origin": CORS_ORIGIN,
    "Access-Control-Allow-Methods": "GET, POST, PUT, DELETE, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type, Authorization",
    "Access-Control-Max-Age": "3600",
}


def _cors_headers() -> Dict[str, str]:
    return {"Content-Type": "application/json", **CORS_HEADERS}


def _json_default(obj: Any) -> Any:
    if isinstance(obj, Decimal):
        if obj % 1 == 0:
            return int(obj)
        return float(obj)
    raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")


def _response(status_code: int, body: Any) -> Dict[str, Any]:
    """Build an API Gateway proxy response with the fixed header set."""
    return {
        "statusCode": status_code,
        "headers": _cors_headers(),
        "body": json.dumps(body, default=_json_default),
    }


def _error(status_code: int, message: str) -> Dict[str, Any]:
    """Build an error response whose body is exactly {"error": message}."""
    return _response(status_code, {"error": message})


def _json_body(event: Dict[str, Any]) -> Dict[str, Any]:
    """Parse the request body as a JSON object.

    An absent or empty body is treated as an empty object.

    Raises:
        ValueError: the body is not valid JSON, or not a JSON object.
    """
    raw = event.get("body")
    if raw in (None, ""):
        return {}

    if event.get("isBase64Encoded"):
        raw = base64.b64decode(raw).decode("utf-8")

    try:
        parsed = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON body: {exc}") from exc

    if not isinstance(parsed, dict):
        raise ValueError("JSON body must be an object")
    return parsed


def _path_method(event: Dict[str, Any]) -> Tuple[str, str]:
    """Extract HTTP method and path from a REST (v1) or HTTP API (v2) event."""
    rc = event.get("requestContext") or {}
    http = rc.get("http") or {}
    method = (http.get("method") or event.get("httpMethod") or "").upper()
    path = event.get("rawPath") or http.get("path") or event.get("path") or "/"
    return method, path
