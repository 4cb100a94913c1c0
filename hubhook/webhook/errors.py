"""Classified request errors for the webhook pipeline."""

from __future__ import annotations


class RequestError(Exception):
    """A request failure carrying the HTTP status and message sent to the client."""

    def __init__(self, status_code: int, message: str) -> None:
        self.status_code = status_code
        self.message = message
        super().__init__(f"request error {status_code}: {message}")
