"""cram_shared.auth — Subject extraction from authorizer-verified claims.

API Gateway validates the Cognito bearer token before the Lambda is invoked and
attaches the decoded claims to the request context:

    REST API (Cognito user-pool authorizer):
        event["requestContext"]["authorizer"]["claims"]
    HTTP API (JWT authorizer):
        event["requestContext"]["authorizer"]["jwt"]["claims"]

The claims are trusted as-is. Only the `sub` claim is read; it is unique and
immutable per account and is used as the DynamoDB partition key, so it must
never be taken from anything the caller controls (body, query, headers).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional


class Unauthorized(Exception):
    """No usable subject identifier on the request."""


@dataclass(frozen=True)
class Claims:
    subject: Optional[str] = None
    raw: Mapping[str, Any] = field(default_factory=dict)

    @classmethod
    def from_mapping(cls, raw: Mapping[str, Any]) -> "Claims":
        sub = raw.get("sub")
        return cls(subject=sub if isinstance(sub, str) else None, raw=dict(raw))


def _claims_mapping(event: Dict[str, Any]) -> Optional[Mapping[str, Any]]:
    rc = event.get("requestContext") or {}
    authorizer = rc.get("authorizer") or {}
    if not isinstance(authorizer, Mapping):
        return None

    claims = authorizer.get("claims")
    if isinstance(claims, Mapping):
        return claims

    jwt_ctx = authorizer.get("jwt") or {}
    if isinstance(jwt_ctx, Mapping) and isinstance(jwt_ctx.get("claims"), Mapping):
        return jwt_ctx["claims"]
    return None


def claims_from_event(event: Dict[str, Any]) -> Optional[Claims]:
    """Return the authorizer claims attached to the event, or None."""
    raw = _claims_mapping(event)
    if raw is None:
        return None
    return Claims.from_mapping(raw)


def extract_user_id(event: Dict[str, Any]) -> str:
    """Return the verified subject identifier for the request.

    Raises:
        Unauthorized: the claim set is missing, or carries no non-empty `sub`.
    """
    claims = claims_from_event(event)
    if claims is None:
        raise Unauthorized("missing authorizer claims")
    if not claims.subject or not claims.subject.strip():
        raise Unauthorized("missing subject claim")
    return claims.subject
