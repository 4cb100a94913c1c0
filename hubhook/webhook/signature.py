"""HMAC-SHA1 signatures for GitHub webhook payloads.

GitHub signs the raw payload bytes with the webhook secret and sends the
result as ``X-Hub-Signature: sha1=<hex digest>``. Comparison is constant-time
via hmac.compare_digest.
"""

from __future__ import annotations

import binascii
import hashlib
import hmac

SIGNATURE_PREFIX = "sha1="


class SignatureError(Exception):
    """Raised when a signature header is malformed or does not match the payload."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(reason)


def _digest(secret: str, raw_payload: bytes) -> bytes:
    return hmac.new(secret.encode(), raw_payload, hashlib.sha1).digest()


def sign_payload(secret: str, raw_payload: bytes) -> str:
    """Return the ``sha1=``-prefixed signature GitHub would send for raw_payload."""
    return SIGNATURE_PREFIX + _digest(secret, raw_payload).hex()


def verify_signature(secret: str, raw_payload: bytes, signature: str) -> None:
    """Check a signature header value against raw_payload.

    Raises SignatureError with reason ``format`` for a missing prefix, the
    hex decoding error for a bad digest, or ``doesn't match secret``.
    """
    if not signature.startswith(SIGNATURE_PREFIX):
        raise SignatureError("format")

    try:
        request_mac = binascii.unhexlify(signature[len(SIGNATURE_PREFIX):])
    except ValueError as exc:  # binascii.Error, or non-ASCII input
        raise SignatureError(str(exc)) from exc

    if not hmac.compare_digest(request_mac, _digest(secret, raw_payload)):
        raise SignatureError("doesn't match secret")
