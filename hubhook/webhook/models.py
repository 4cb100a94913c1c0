"""Data models for the webhook validation pipeline."""

from __future__ import annotations

import os
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from starlette.requests import Request

PayloadDecoder = Callable[[str, bytes], Any]
DeliveryCallback = Callable[[str, str, Any], Any]
ErrorObserver = Callable[[Exception, Request], Any]


class HookConfig(BaseModel):
    """Validator configuration, built once and shared read-only by every request.

    An empty ``secret`` disables signature verification. ``decode_payload``
    replaces the default JSON decode; ``on_delivery`` receives each validated
    delivery and ``on_error`` observes every rejected request.
    """

    model_config = ConfigDict(frozen=True)

    secret: str = Field(default="", repr=False)
    decode_payload: PayloadDecoder | None = None
    on_delivery: DeliveryCallback | None = None
    on_error: ErrorObserver | None = None

    @classmethod
    def from_env(cls, **kwargs: Any) -> HookConfig:
        """Create a HookConfig with the secret taken from GITHUB_WEBHOOK_SECRET."""
        return cls(secret=os.environ.get("GITHUB_WEBHOOK_SECRET", ""), **kwargs)

    @property
    def verifies_signature(self) -> bool:
        return self.secret != ""


@dataclass(frozen=True)
class Delivery:
    """A validated and decoded webhook delivery."""

    event: str
    delivery_id: str
    payload: Any
