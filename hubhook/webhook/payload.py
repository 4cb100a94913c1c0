"""Raw payload extraction and decoding."""

from __future__ import annotations

import json
from typing import Any
from urllib.parse import parse_qs

from starlette.requests import Request

from hubhook.webhook.errors import RequestError
from hubhook.webhook.models import PayloadDecoder

JSON_CONTENT_TYPE = "application/json"
FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"
FORM_PAYLOAD_FIELD = "payload"


async def read_raw_payload(request: Request) -> bytes:
    """Return the bytes the sender signed, dispatching on the Content-Type header.

    The header is compared verbatim; parameters such as ``charset`` are not
    parsed, so ``application/json; charset=utf-8`` is rejected.
    """
    content_type = request.headers.get("content-type", "")
    if content_type == JSON_CONTENT_TYPE:
        return await request.body()
    if content_type == FORM_CONTENT_TYPE:
        return form_payload(await request.body())
    raise RequestError(400, f"invalid content type: {content_type}")


def form_payload(body: bytes) -> bytes:
    """Extract the ``payload`` field from a URL-encoded form body.

    Returns b"" when the field is absent. Octets that are not valid UTF-8
    survive the round trip unchanged.

    Parsing is lenient: a ``;`` stays inside the value and a malformed
    escape such as ``%zz`` is kept verbatim, so the signature is checked
    against those bytes. Go's url.ParseQuery drops such pairs instead.
    """
    fields = parse_qs(
        body.decode("utf-8", "surrogateescape"),
        keep_blank_values=True,
        errors="surrogateescape",
    )
    values = fields.get(FORM_PAYLOAD_FIELD)
    if not values:
        return b""
    return values[0].encode("utf-8", "surrogateescape")


def decode_payload(
    event: str, raw_payload: bytes, decoder: PayloadDecoder | None = None,
) -> Any:
    """Decode raw_payload with the custom decoder, or as JSON by default."""
    try:
        if decoder is not None:
            return decoder(event, raw_payload)
        return json.loads(raw_payload)
    except Exception as exc:
        raise RequestError(400, f"payload decode error: {exc}") from exc
