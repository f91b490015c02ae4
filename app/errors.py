"""Gateway error types and shared error-parsing utilities."""

import json


class GatewayError(Exception):
    """Base class for errors raised by the event gateway."""


class DecodeError(GatewayError):
    """Request body is not valid for the vendor format it was posted as."""


class AuthError(GatewayError):
    """Missing or incorrect Basic Auth credentials."""

    def __init__(self, message: str = "Unauthorized", realm: str = "NVR API"):
        super().__init__(message)
        self.message = message
        self.realm = realm


class SinkError(GatewayError):
    """A downstream sink rejected or failed to receive an event."""

    def __init__(self, sink: str, message: str):
        super().__init__(f"{sink}: {message}")
        self.sink = sink
        self.message = message


class ConfigError(GatewayError):
    """Configuration could not be loaded; the service must not start."""


def parse_telegram_error(response_text: str) -> str:
    """Extract a readable message from a Telegram Bot API error response.

    The Bot API returns JSON like {"ok": false, "error_code": 400, "description": "..."}.
    Returns "code: description" when parseable, raw text otherwise.
    """
    try:
        body = json.loads(response_text)
        desc = body.get("description", "")
        code = body.get("error_code")
        if desc:
            return f"{code}: {desc}" if code else desc
    except (ValueError, AttributeError):
        pass
    return response_text
