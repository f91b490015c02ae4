"""Base sink interface and best-effort fan-out."""

import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Iterable, Literal

import httpx
from pydantic import BaseModel

from app.events.models import VendorEvent

logger = logging.getLogger(__name__)


class SinkResult(BaseModel):
    """Outcome of one delivery attempt."""
    sink: str
    status: Literal["sent", "skipped", "failed"]
    detail: str | None = None


class BaseSink(ABC):
    """Abstract base class for downstream event sinks.

    ``deliver`` never raises: any error from ``send`` (including its timeout)
    is logged and reported as a failed result.
    """

    def __init__(self, timeout: float = 10.0, transport: httpx.AsyncBaseTransport | None = None):
        self.timeout = timeout
        self._transport = transport

    @property
    @abstractmethod
    def name(self) -> str:
        """Return sink identifier."""
        pass

    @property
    @abstractmethod
    def enabled(self) -> bool:
        """Whether the sink is configured."""
        pass

    @abstractmethod
    async def send(self, vendor_event: VendorEvent) -> None:
        """Deliver the event, raising on failure."""
        pass

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self.timeout, transport=self._transport)

    async def deliver(self, vendor_event: VendorEvent) -> SinkResult:
        if not self.enabled:
            return SinkResult(sink=self.name, status="skipped")

        try:
            await asyncio.wait_for(self.send(vendor_event), timeout=self.timeout)
        except Exception as e:
            detail = str(e) or type(e).__name__
            logger.error(
                "%s sink failed for %s event %s: %s",
                self.name, vendor_event.vendor.label, vendor_event.event.event_type, detail,
            )
            return SinkResult(sink=self.name, status="failed", detail=detail)

        return SinkResult(sink=self.name, status="sent")


async def fan_out(sinks: Iterable[BaseSink], vendor_event: VendorEvent) -> list[SinkResult]:
    """Deliver to each sink in turn; one sink's failure never skips the rest."""
    return [await sink.deliver(vendor_event) for sink in sinks]
