"""test_lambda_function.py — Mock-based integration tests for content_api.

Drives lambda_handler end to end with a mocked DynamoDB client: bootstrap,
routing, request logging and the catch-all error path.

Run: python3 -m pytest test_lambda_function.py -v
"""

from __future__ import annotations

import importlib.util
import json
import os
import sys
import unittest
from types import SimpleNamespace
from unittest.mock import MagicMock, patch

from botocore.exceptions import ClientError

sys.path.insert(0, os.path.dirname(__file__))
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "shared_layer", "python"))

# Load the module via importlib to avoid import conflicts.
_spec = importlib.util.spec_from_file_location(
    "content_api",
    os.path.join(os.path.dirname(__file__), "lambda_function.py"),
)
content_api = importlib.util.module_from_spec(_spec)
_spec.loader.exec_module(content_api)

_CONTEXT = SimpleNamespace(aws_request_id="req-0001")


def _make_event(method="GET", path="/prod/content", body=None, sub="abc-123"):
    """Build a mock API Gateway REST proxy event with authorizer claims."""
    event = {
        "httpMethod": method,
        "path": path,
        "headers": {"Authorization": "Bearer token"},
        "requestContext": {"authorizer": {"claims": {"sub": sub, "email": "a@example.com"}}},
        "body": json.dumps(body) if body is not None else None,
    }
    if sub is None:
        event["requestContext"] = {}
    return event


class LambdaHandlerTests(unittest.TestCase):
    def setUp(self):
        self.ddb = MagicMock()
        content_api._router = None
        patcher = patch.object(content_api, "_get_ddb", return_value=self.ddb)
        self.mock_get_ddb = patcher.start()
        self.addCleanup(patcher.stop)
        self.addCleanup(setattr, content_api, "_router", None)

    def test_get_reads_from_configured_table(self):
        self.ddb.query.return_value = {
            "Items": [{"userId": {"S": "abc-123"}, "content": {"S": "hello"}, "updatedAt": {"N": "5"}}],
        }
        resp = content_api.lambda_handler(_make_event(), _CONTEXT)

        self.assertEqual(resp["statusCode"], 200)
        self.assertEqual(json.loads(resp["body"]), {"userId": "abc-123", "content": "hello"})
        kwargs = self.ddb.query.call_args.kwargs
        self.assertEqual(kwargs["TableName"], content_api.CONTENT_TABLE)
        self.assertEqual(kwargs["ExpressionAttributeValues"], {":userId": {"S": "abc-123"}})

    def test_post_writes_item(self):
        resp = content_api.lambda_handler(_make_event(method="POST", body={"content": "hello"}), _CONTEXT)

        self.assertEqual(resp["statusCode"], 200)
        item = self.ddb.put_item.call_args.kwargs["Item"]
        self.assertEqual(item["userId"], {"S": "abc-123"})
        self.assertEqual(item["content"], {"S": "hello"})
        self.assertIn("N", item["updatedAt"])

    def test_router_is_built_once(self):
        self.ddb.query.return_value = {"Items": []}
        content_api.lambda_handler(_make_event(), _CONTEXT)
        content_api.lambda_handler(_make_event(), _CONTEXT)
        self.mock_get_ddb.assert_called_once_with(content_api.DYNAMODB_REGION)

    def test_unauthenticated_request_makes_no_storage_call(self):
        resp = content_api.lambda_handler(_make_event(sub=None), _CONTEXT)
        self.assertEqual(resp["statusCode"], 401)
        self.ddb.query.assert_not_called()
        self.ddb.put_item.assert_not_called()

    def test_put_item_client_error_returns_500(self):
        self.ddb.put_item.side_effect = ClientError(
            {"Error": {"Code": "AccessDeniedException", "Message": "not allowed"}},
            "PutItem",
        )
        resp = content_api.lambda_handler(_make_event(method="POST", body={"content": "hello"}), _CONTEXT)

        self.assertEqual(resp["statusCode"], 500)
        body = json.loads(resp["body"])
        self.assertTrue(body["error"].startswith("Failed to write content:"))
        self.assertEqual(resp["headers"]["Content-Type"], "application/json")
        self.assertEqual(resp["headers"]["Access-Control-Allow-Origin"], "https://cram-ai.com")
        self.ddb.put_item.assert_called_once()

    def test_unexpected_router_error_still_returns_json_500(self):
        router = MagicMock()
        router.handle.side_effect = RuntimeError("bad wiring")
        content_api._router = router

        resp = content_api.lambda_handler(_make_event(), _CONTEXT)

        self.assertEqual(resp["statusCode"], 500)
        self.assertEqual(json.loads(resp["body"]), {"error": "Internal server error: bad wiring"})
        self.assertIn("Access-Control-Max-Age", resp["headers"])

    def test_request_is_logged_without_content(self):
        with self.assertLogs(level="INFO") as logs:
            content_api.lambda_handler(_make_event(method="POST", body={"content": "top secret"}), _CONTEXT)

        observability = [line for line in logs.output if "[OBSERVABILITY]" in line]
        self.assertEqual(len(observability), 1)
        payload = json.loads(observability[0].split("[OBSERVABILITY] ", 1)[1])
        self.assertEqual(payload["component"], "content_api")
        self.assertEqual(payload["request_id"], "req-0001")
        self.assertEqual(payload["status_code"], 200)
        self.assertNotIn("top secret", "\n".join(logs.output))


if __name__ == "__main__":
    unittest.main()
