"""content_api/lambda_function.py

Per-user content store for Cram. Each authenticated user owns exactly one
opaque text blob, stored in DynamoDB under their Cognito subject.

Routes (API Gateway REST proxy, Cognito user-pool authorizer):
    GET   {basePath}/content   — read the caller's content
    POST  {basePath}/content   — overwrite the caller's content ({"content": str})

CORS preflight is answered by API Gateway; every response from this function
carries the same CORS headers.

Environment variables:
    TABLE_NAME        default: CramData
    DYNAMODB_REGION   default: $AWS_REGION, then us-east-1
    LOG_LEVEL         default: INFO
"""

from __future__ import annotations

import time
from typing import Any, Dict, Optional

from cram_shared.aws_clients import _get_ddb
from cram_shared.http_utils import _error
from cram_shared.serialization import _emit_structured_observability

from config import CONTENT_TABLE, DYNAMODB_REGION, logger
from handlers import ContentRouter
from persistence import ContentStore

# ---------------------------------------------------------------------------
# Bootstrap
# ---------------------------------------------------------------------------

_router: Optional[ContentRouter] = None


def _get_router() -> ContentRouter:
    """Build the router on first use and reuse it across warm invocations."""
    global _router
    if _router is None:
        store = ContentStore(_get_ddb(DYNAMODB_REGION), CONTENT_TABLE)
        _router = ContentRouter(store)
    return _router


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------


def lambda_handler(event: Dict[str, Any], context: Any) -> Dict[str, Any]:
    started = time.monotonic()
    request_id = getattr(context, "aws_request_id", None)

    try:
        resp = _get_router().handle(event or {})
    except Exception as exc:
        logger.exception("[ERROR] Unhandled error in content_api: %s", exc)
        resp = _error(500, f"Internal server error: {exc}")

    status_code = resp["statusCode"]
    _emit_structured_observability(
        component="content_api",
        event="request_handled",
        request_id=request_id,
        status_code=status_code,
        latency_ms=int((time.monotonic() - started) * 1000),
        error_code="" if status_code < 400 else str(status_code),
    )
    return resp
