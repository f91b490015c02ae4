"""
Fan-out Sinks

Best-effort downstream delivery targets for processed events.
"""

import httpx

from app.config import Settings

from .base import BaseSink, SinkResult, fan_out
from .forward import ForwardSink
from .telegram import TelegramSink, format_message


def build_sinks(settings: Settings, transport: httpx.AsyncBaseTransport | None = None) -> list[BaseSink]:
    """Sinks in delivery order."""
    return [
        ForwardSink(settings.notify_url, timeout=settings.forward_timeout, transport=transport),
        TelegramSink(
            settings.telegram_token,
            settings.telegram_chat_id,
            enabled=settings.telegram_enabled,
            timeout=settings.telegram_timeout,
            transport=transport,
        ),
    ]


__all__ = [
    "BaseSink",
    "ForwardSink",
    "SinkResult",
    "TelegramSink",
    "build_sinks",
    "fan_out",
    "format_message",
]
