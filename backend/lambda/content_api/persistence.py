"""persistence.py — Per-user content records in DynamoDB.

Table layout (one item per user):
    userId     S  partition key, the verified Cognito subject
    content    S  opaque text blob, absent until the first write
    updatedAt  N  epoch milliseconds of the last write
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

from botocore.exceptions import BotoCoreError, ClientError

from cram_shared.serialization import _deserialize, _serialize, _serialize_item, _unix_now_ms
from config import logger

__all__ = [
    "ContentStore",
    "StorageFailure",
    "UserContentRecord",
]


class StorageFailure(Exception):
    """The table could not be reached or rejected the operation."""


@dataclass(frozen=True)
class UserContentRecord:
    user_id: str
    content: Optional[str] = None
    updated_at: Optional[int] = None

    @classmethod
    def from_item(cls, item: Dict[str, Any]) -> "UserContentRecord":
        content = item.get("content")
        updated_at = item.get("updatedAt")
        return cls(
            user_id=str(item["userId"]),
            content=content if isinstance(content, str) else None,
            updated_at=int(updated_at) if updated_at is not None else None,
        )

    def to_item(self) -> Dict[str, Any]:
        return {"userId": self.user_id, "content": self.content, "updatedAt": self.updated_at}


class ContentStore:
    """Reads and upserts the single content record in a user's partition."""

    def __init__(self, ddb: Any, table_name: str, clock: Callable[[], int] = _unix_now_ms):
        self._ddb = ddb
        self._table_name = table_name
        self._clock = clock

    @property
    def table_name(self) -> str:
        return self._table_name

    def read_user_content(self, user_id: str) -> Optional[UserContentRecord]:
        """Return the user's record, or None if they have never written."""
        try:
            resp = self._ddb.query(
                TableName=self._table_name,
                KeyConditionExpression="userId = :userId",
                ExpressionAttributeValues={":userId": _serialize(user_id)},
                ConsistentRead=True,
            )
        except (BotoCoreError, ClientError) as exc:
            raise StorageFailure(f"query on {self._table_name} failed: {exc}") from exc

        items = resp.get("Items") or []
        if not items:
            return None
        if len(items) > 1:
            # One item per partition is expected; keep the first returned.
            logger.warning(
                "[WARNING] %d items in partition for one user on %s; using first",
                len(items),
                self._table_name,
            )
        return UserContentRecord.from_item(_deserialize(items[0]))

    def write_user_content(self, user_id: str, content: str) -> UserContentRecord:
        """Overwrite the user's record with `content`, stamping updatedAt."""
        record = UserContentRecord(user_id=user_id, content=content, updated_at=self._clock())
        try:
            self._ddb.put_item(TableName=self._table_name, Item=_serialize_item(record.to_item()))
        except (BotoCoreError, ClientError) as exc:
            raise StorageFailure(f"put_item on {self._table_name} failed: {exc}") from exc
        return record
