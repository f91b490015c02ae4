"""Telegram chat notification sink."""

import json
import logging
from html import escape
from typing import Any, Callable

import httpx

from app.errors import SinkError, parse_telegram_error
from app.events.models import EventType, Vendor, VendorEvent

from .base import BaseSink

logger = logging.getLogger(__name__)

TELEGRAM_API_URL = "https://api.telegram.org/bot{token}/sendMessage"
TIME_FORMAT = "%Y-%m-%d %H:%M:%S"

Annotation = Callable[[dict[str, Any]], str]


# ---------------------------------------------------------------------------
# Message templates
# ---------------------------------------------------------------------------


def _vivotek_motion(details: dict[str, Any]) -> str:
    text = "📹 <b>Motion detected!</b>"
    zone = details.get("zoneId")
    if isinstance(zone, str):
        text += f" (Zone: {escape(zone)})"
    return text


def _vivotek_connection(details: dict[str, Any]) -> str:
    if details.get("status") == "disconnected":
        return "❌ <b>Device disconnected!</b> Network issue possible."
    return "✅ <b>Device connected</b> and operating normally."


def _vivotek_fallback(details: dict[str, Any]) -> str:
    dump = json.dumps(details, sort_keys=True, separators=(",", ":"), default=str)
    return f"\n<pre>{escape(dump, quote=False)}</pre>"


def _hik_fallback(details: dict[str, Any]) -> str:
    state = details.get("state")
    if isinstance(state, str):
        return f"\n<b>State:</b> {escape(state)}"
    return ""


def _fixed(text: str) -> Annotation:
    return lambda details: text


VIVOTEK_ANNOTATIONS: dict[str, Annotation] = {
    EventType.MOTION: _vivotek_motion,
    EventType.VIDEO_LOSS: _fixed("⚠️ <b>Video signal lost!</b> Please check camera connection."),
    EventType.DEVICE_CONNECTION: _vivotek_connection,
}

HIKVISION_ANNOTATIONS: dict[str, Annotation] = {
    EventType.MOTION: _fixed("📹 <b>Motion detected!</b>"),
    EventType.LINE_CROSSING: _fixed("🚷 <b>Line crossing detected!</b>"),
    EventType.INTRUSION: _fixed("🚨 <b>Intrusion detected!</b>"),
    EventType.FACE: _fixed("👤 <b>Face detected!</b>"),
    EventType.IO_ALARM: _fixed("🔌 <b>I/O Alarm triggered!</b>"),
    EventType.TAMPER: _fixed("⚠️ <b>Camera tampering detected!</b>"),
    EventType.VIDEO_LOSS: _fixed("⚠️ <b>Video signal lost!</b>"),
    EventType.STORAGE_FAILURE: _fixed("💾 <b>Storage failure!</b> Check NVR hard drive."),
}

_TEMPLATES: dict[Vendor, tuple[str, dict[str, Annotation], Annotation]] = {
    Vendor.VIVOTEK: ("🚨 NVR Alert", VIVOTEK_ANNOTATIONS, _vivotek_fallback),
    Vendor.HIKVISION: ("🔔 HIKVision Alarm", HIKVISION_ANNOTATIONS, _hik_fallback),
}


def format_message(vendor_event: VendorEvent) -> str:
    """Build the HTML chat message for an event."""
    event = vendor_event.event
    title, annotations, fallback = _TEMPLATES[vendor_event.vendor]

    message = (
        f"<b>{title}</b>\n\n"
        f"<b>Event:</b> {escape(event.event_type)}\n"
        f"<b>Time:</b> {event.event_time.strftime(TIME_FORMAT)}\n"
        f"<b>Device:</b> {escape(event.device_id)}\n"
        f"<b>Channel:</b> {escape(event.channel_id)}\n"
    )

    if vendor_event.vendor is Vendor.HIKVISION:
        desc = event.event_details.get("description")
        if isinstance(desc, str) and desc:
            message += f"<b>Description:</b> {escape(desc)}\n"

    annotate = annotations.get(event.event_type, fallback)
    return message + annotate(event.event_details)


# ---------------------------------------------------------------------------
# Sink
# ---------------------------------------------------------------------------


class TelegramSink(BaseSink):
    """Posts formatted event messages to a Telegram chat via the Bot API."""

    def __init__(
        self,
        token: str,
        chat_id: str,
        enabled: bool = True,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        super().__init__(timeout=timeout, transport=transport)
        self.token = token
        self.chat_id = chat_id
        self._enabled = enabled

    @property
    def name(self) -> str:
        return "telegram"

    @property
    def enabled(self) -> bool:
        return self._enabled and bool(self.token and self.chat_id)

    @property
    def api_url(self) -> str:
        return TELEGRAM_API_URL.format(token=self.token)

    async def send(self, vendor_event: VendorEvent) -> None:
        payload = {
            "chat_id": self.chat_id,
            "text": format_message(vendor_event),
            "parse_mode": "HTML",
        }

        async with self._client() as client:
            response = await client.post(self.api_url, data=payload)

        if not response.is_success:
            raise SinkError(
                self.name,
                f"Telegram API error: status={response.status_code}, "
                f"response={parse_telegram_error(response.text)}",
            )

        logger.info(
            "Telegram notification sent successfully for %s event type %s",
            vendor_event.vendor.label, vendor_event.event.event_type,
        )
