"""handlers.py — Route dispatch and handlers for the per-user content endpoints.

Routes (behind the API Gateway Cognito authorizer):
    GET  {basePath}/content   — read the caller's content
    POST {basePath}/content   — overwrite the caller's content
"""
from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

from cram_shared.auth import Unauthorized, extract_user_id
from cram_shared.http_utils import _error, _json_body, _path_method, _response
from config import CONTENT_PATH_SUFFIX, logger
from persistence import ContentStore

__all__ = [
    "ContentRouter",
]

NO_CONTENT_MESSAGE = "No content found for user"
SAVED_MESSAGE = "Content saved successfully"
CONTENT_REQUIRED_MESSAGE = "Content is required in request body"
NOT_FOUND_MESSAGE = "Endpoint not found"


def _authenticate(event: Dict[str, Any]) -> Tuple[Optional[str], Optional[Dict[str, Any]]]:
    """Return (user_id, None) on success or (None, error_response) on failure."""
    try:
        return extract_user_id(event), None
    except Unauthorized as exc:
        return None, _error(401, f"Unauthorized: {exc}")


class ContentRouter:
    """Authenticates, routes and answers content API requests."""

    def __init__(self, store: ContentStore):
        self._store = store

    def handle(self, event: Dict[str, Any]) -> Dict[str, Any]:
        user_id, auth_err = _authenticate(event)
        if auth_err:
            logger.info("[INFO] rejected unauthenticated request")
            return auth_err

        method, path = _path_method(event)
        logger.info("[INFO] route method=%s path=%s", method, path)

        if path.endswith(CONTENT_PATH_SUFFIX):
            if method == "GET":
                return self._handle_read(user_id)
            if method == "POST":
                return self._handle_write(user_id, event)

        return _error(404, NOT_FOUND_MESSAGE)

    # -----------------------------------------------------------------------
    # GET /content
    # -----------------------------------------------------------------------

    def _handle_read(self, user_id: str) -> Dict[str, Any]:
        try:
            record = self._store.read_user_content(user_id)
        except Exception as exc:
            logger.exception("[ERROR] Error reading content: %s", exc)
            return _error(500, f"Failed to read content: {exc}")

        payload: Dict[str, Any] = {"userId": user_id}
        if record is None:
            payload["content"] = None
            payload["message"] = NO_CONTENT_MESSAGE
        else:
            payload["content"] = record.content
        return _response(200, payload)

    # -----------------------------------------------------------------------
    # POST /content
    # -----------------------------------------------------------------------

    def _handle_write(self, user_id: str, event: Dict[str, Any]) -> Dict[str, Any]:
        try:
            body = _json_body(event)
            content = body.get("content")
            if not isinstance(content, str):
                return _error(400, CONTENT_REQUIRED_MESSAGE)

            self._store.write_user_content(user_id, content)
        except Exception as exc:
            logger.exception("[ERROR] Error writing content: %s", exc)
            return _error(500, f"Failed to write content: {exc}")

        return _response(200, {"message": SAVED_MESSAGE, "userId": user_id})
