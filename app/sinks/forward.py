"""Forward sink: POSTs the canonical event JSON to a configured URL."""

import logging

import httpx

from app.errors import SinkError
from app.events.models import VendorEvent

from .base import BaseSink

logger = logging.getLogger(__name__)


class ForwardSink(BaseSink):
    """Generic webhook forwarder."""

    def __init__(self, url: str, timeout: float = 10.0, transport: httpx.AsyncBaseTransport | None = None):
        super().__init__(timeout=timeout, transport=transport)
        self.url = url

    @property
    def name(self) -> str:
        return "forward"

    @property
    def enabled(self) -> bool:
        return bool(self.url)

    async def send(self, vendor_event: VendorEvent) -> None:
        async with self._client() as client:
            response = await client.post(self.url, json=vendor_event.event.to_wire())

        if not response.is_success:
            raise SinkError(self.name, f"error response from {self.url}: {response.status_code}")

        logger.debug("Forwarded %s event %s to %s", vendor_event.vendor.label, vendor_event.event.event_type, self.url)
