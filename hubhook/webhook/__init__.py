"""GitHub webhook validation for Starlette and FastAPI applications.

This package provides:
- Request validation (method, headers, content type, signature, payload)
- HMAC-SHA1 signing and verification helpers
- Classified error responses with an optional error observer
"""

from hubhook.webhook.errors import RequestError
from hubhook.webhook.handler import (
    DELIVERY_HEADER,
    EVENT_HEADER,
    SIGNATURE_HEADER,
    WebhookHandler,
)
from hubhook.webhook.models import Delivery, HookConfig
from hubhook.webhook.signature import SignatureError, sign_payload, verify_signature

__all__ = [
    # Exceptions
    "RequestError",
    "SignatureError",
    # Components
    "WebhookHandler",
    "sign_payload",
    "verify_signature",
    # Models
    "Delivery",
    "HookConfig",
    # Header names
    "DELIVERY_HEADER",
    "EVENT_HEADER",
    "SIGNATURE_HEADER",
]
