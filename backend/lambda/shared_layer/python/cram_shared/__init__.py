"""cram_shared — Shared utilities for Cram Lambda functions.

Provides:
    - Identity extraction from API Gateway authorizer claims
    - DynamoDB client singleton
    - HTTP response helpers with CORS
    - DynamoDB serialization/deserialization and structured log lines
"""

__version__ = "1.0.0"
