"""Shared test fixtures for hubhook."""

from __future__ import annotations

import hashlib
import hmac
import json
from typing import Any
from unittest.mock import MagicMock

import pytest

from hubhook.webhook.models import HookConfig

TEST_SECRET = "foobar"
TEST_PAYLOAD = b'{"foo":"bar"}'
TEST_DELIVERY_ID = "72d3162e-cc78-11e3-81ab-4c9367dc0958"


@pytest.fixture
def on_delivery() -> MagicMock:
    return MagicMock(return_value=None)


@pytest.fixture
def on_error() -> MagicMock:
    return MagicMock(return_value=None)


# --- Factory functions for test data ---


def make_config(**kwargs: Any) -> HookConfig:
    """Factory for HookConfig with no secret and no callbacks by default."""
    return HookConfig(**kwargs)


def github_signature(secret: str, body: bytes) -> str:
    """Sign body independently of the code under test."""
    digest = hmac.new(secret.encode(), body, hashlib.sha1).hexdigest()
    return f"sha1={digest}"


def make_headers(
    event: str | None = "push",
    delivery_id: str | None = TEST_DELIVERY_ID,
    content_type: str | None = "application/json",
    signature: str | None = None,
) -> dict[str, str]:
    """Factory for GitHub delivery headers; pass None to omit a header."""
    headers: dict[str, str] = {}
    if event is not None:
        headers["X-GitHub-Event"] = event
    if delivery_id is not None:
        headers["X-GitHub-Delivery"] = delivery_id
    if content_type is not None:
        headers["Content-Type"] = content_type
    if signature is not None:
        headers["X-Hub-Signature"] = signature
    return headers


def make_push_payload(**kwargs: Any) -> bytes:
    """Factory for a compact push event body."""
    data: dict[str, Any] = {
        "ref": "refs/heads/main",
        "repository": {"full_name": "octo/hello"},
    }
    data.update(kwargs)
    return json.dumps(data, separators=(",", ":")).encode()
