#!/usr/bin/env python3
"""Print the stored content record for one Cram user.

Read-only operator helper for support requests: queries the content table the
same way the content API does (partition key `userId`) and prints the record as
JSON. The user id is the Cognito `sub` of the account.

Exit codes: 0 record found, 1 no record for that user, 2 AWS error.
"""

from __future__ import annotations

import argparse
import datetime as dt
import json
import os
import sys
from typing import Any, Dict, List, Optional

import boto3
from boto3.dynamodb.types import TypeDeserializer
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

DEFAULT_REGION = os.environ.get("AWS_REGION", "us-east-1")
DEFAULT_TABLE = os.environ.get("TABLE_NAME", "CramData")

_DESER = TypeDeserializer()


def _log(tag: str, message: str) -> None:
    print(f"[{tag}] {message}", file=sys.stderr)


def _ddb_deser(item: Dict[str, Any]) -> Dict[str, Any]:
    out = {k: _DESER.deserialize(v) for k, v in item.items()}
    if "updatedAt" in out:
        out["updatedAt"] = int(out["updatedAt"])
    return out


def _iso_from_ms(epoch_ms: int) -> str:
    return dt.datetime.fromtimestamp(epoch_ms / 1000, dt.timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


def lookup_record(ddb: Any, table: str, user_id: str) -> Optional[Dict[str, Any]]:
    resp = ddb.query(
        TableName=table,
        KeyConditionExpression="userId = :userId",
        ExpressionAttributeValues={":userId": {"S": user_id}},
        ConsistentRead=True,
    )
    items: List[Dict[str, Any]] = resp.get("Items") or []
    if not items:
        return None
    if len(items) > 1:
        _log("WARNING", f"{len(items)} items for userId={user_id}; showing first")
    record = _ddb_deser(items[0])
    if "updatedAt" in record:
        record["updatedAtIso"] = _iso_from_ms(record["updatedAt"])
    return record


def _parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("user_id", help="Cognito subject (sub) of the user")
    parser.add_argument("--table", default=DEFAULT_TABLE, help=f"DynamoDB table (default: {DEFAULT_TABLE})")
    parser.add_argument("--region", default=DEFAULT_REGION, help=f"AWS region (default: {DEFAULT_REGION})")
    parser.add_argument("--no-content", action="store_true", help="Omit the content body from the output")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None, ddb: Any = None) -> int:
    args = _parse_args(argv)
    if ddb is None:
        ddb = boto3.client(
            "dynamodb",
            region_name=args.region,
            config=Config(retries={"max_attempts": 3, "mode": "standard"}),
        )

    try:
        record = lookup_record(ddb, args.table, args.user_id)
    except (BotoCoreError, ClientError) as exc:
        _log("ERROR", f"query on {args.table} failed: {exc}")
        return 2

    if record is None:
        _log("INFO", f"no content record for userId={args.user_id} in {args.table}")
        return 1

    if args.no_content:
        record.pop("content", None)
    print(json.dumps(record, indent=2, sort_keys=True))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
