"""GitHub webhook request handler.

Runs the validation pipeline for one inbound request:

1. Method check (POST only)
2. Required headers (X-GitHub-Event, then X-GitHub-Delivery)
3. Raw payload extraction by Content-Type
4. Signature check (only when a secret is configured)
5. Payload decoding
6. Delivery dispatch

The first failing stage ends the pipeline. RequestError failures are reported
with their own status and message; anything else becomes a generic 500.
"""

from __future__ import annotations

import inspect
import logging
from http import HTTPStatus

from starlette.background import BackgroundTask
from starlette.requests import Request
from starlette.responses import PlainTextResponse, Response
from starlette.types import Receive, Scope, Send

from hubhook.webhook.errors import RequestError
from hubhook.webhook.models import Delivery, HookConfig
from hubhook.webhook.payload import decode_payload, read_raw_payload
from hubhook.webhook.signature import SignatureError, verify_signature

logger = logging.getLogger(__name__)

ACCEPTED_METHOD = "POST"
EVENT_HEADER = "X-GitHub-Event"
DELIVERY_HEADER = "X-GitHub-Delivery"
SIGNATURE_HEADER = "X-Hub-Signature"


def check_method(request: Request) -> None:
    if request.method != ACCEPTED_METHOD:
        raise RequestError(405, f"method not allowed: {request.method}")


def require_header(request: Request, name: str) -> str:
    """Return the first value of header ``name``; absent or empty is a 400."""
    value = request.headers.get(name, "")
    if not value:
        raise RequestError(400, f"missing header: {name}")
    return value


class WebhookHandler:
    """ASGI handler that validates GitHub webhook deliveries.

    The handler holds no per-request state, so one instance can serve
    concurrent requests as long as its HookConfig is not replaced.
    """

    def __init__(self, config: HookConfig | None = None) -> None:
        self.config = config or HookConfig()

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            return
        response = await self.handle(Request(scope, receive))
        await response(scope, receive, send)

    async def handle(self, request: Request) -> Response:
        """Run the pipeline and return the response to send.

        Exceptions raised by the delivery callback are not caught here.
        """
        try:
            delivery = await self.validate(request)
        except Exception as exc:
            return self._handle_error(exc, request)

        await self._dispatch(delivery)
        return Response(status_code=200)

    async def validate(self, request: Request) -> Delivery:
        """Run every validation stage and return the decoded delivery."""
        check_method(request)
        event = require_header(request, EVENT_HEADER)
        delivery_id = require_header(request, DELIVERY_HEADER)
        raw_payload = await read_raw_payload(request)
        self._check_signature(request, raw_payload)
        payload = decode_payload(event, raw_payload, self.config.decode_payload)
        return Delivery(event=event, delivery_id=delivery_id, payload=payload)

    def _check_signature(self, request: Request, raw_payload: bytes) -> None:
        if not self.config.verifies_signature:
            return
        signature = require_header(request, SIGNATURE_HEADER)
        try:
            verify_signature(self.config.secret, raw_payload, signature)
        except SignatureError as exc:
            raise RequestError(
                400, f"invalid header {SIGNATURE_HEADER}: {exc.reason}",
            ) from exc

    async def _dispatch(self, delivery: Delivery) -> None:
        logger.debug(
            "Accepted %s delivery %s", delivery.event, delivery.delivery_id,
        )
        if self.config.on_delivery is None:
            return
        result = self.config.on_delivery(
            delivery.event, delivery.delivery_id, delivery.payload,
        )
        if inspect.isawaitable(result):
            await result

    def _handle_error(self, err: Exception, request: Request) -> Response:
        """Build the plain-text error response; on_error runs once it is sent."""
        if isinstance(err, RequestError):
            status_code = err.status_code
            message = err.message
            logger.warning("Rejected webhook request: %s", err)
        else:
            status_code = 500
            message = HTTPStatus(status_code).phrase
            logger.error("Unexpected error handling webhook request", exc_info=err)

        background = None
        if self.config.on_error is not None:
            background = BackgroundTask(self.config.on_error, err, request)
        return PlainTextResponse(
            message,
            status_code=status_code,
            headers={"X-Content-Type-Options": "nosniff"},
            background=background,
        )
