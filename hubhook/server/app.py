"""FastAPI application that serves a webhook handler."""

from __future__ import annotations

import logging
import os
from typing import Any

from fastapi import FastAPI, Request, Response

from hubhook.webhook.handler import WebhookHandler
from hubhook.webhook.models import HookConfig

logger = logging.getLogger(__name__)


def create_app_from_env() -> FastAPI:
    """Factory for uvicorn --factory: reads config from environment variables."""
    path = os.environ.get("WEBHOOK_PATH", "/webhook")
    config = HookConfig.from_env(on_delivery=_log_delivery, on_error=_log_error)
    if not config.verifies_signature:
        logger.warning(
            "GITHUB_WEBHOOK_SECRET is not set; accepting unsigned deliveries on %s",
            path,
        )
    return create_app(WebhookHandler(config), path)


def create_app(handler: WebhookHandler, path: str = "/webhook") -> FastAPI:
    """Create a FastAPI app that routes every method on ``path`` to the handler."""
    app = FastAPI(docs_url=None, redoc_url=None)

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.api_route(
        path,
        methods=["GET", "HEAD", "POST", "PUT", "DELETE", "PATCH", "OPTIONS"],
    )
    async def webhook(request: Request) -> Response:
        return await handler.handle(request)

    return app


def _log_delivery(event: str, delivery_id: str, payload: Any) -> None:
    logger.info("Received %s delivery %s", event, delivery_id)


def _log_error(err: Exception, request: Request) -> None:
    logger.warning(
        "Webhook request %s %s failed: %s", request.method, request.url.path, err,
    )
