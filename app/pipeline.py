"""Per-request event processing: count, dispatch, fan out."""

import asyncio
import logging
from typing import Sequence

from app.events import Dispatcher, EventCounter, VendorEvent
from app.sinks import BaseSink, SinkResult, fan_out

logger = logging.getLogger(__name__)


class EventPipeline:
    def __init__(self, counter: EventCounter, dispatcher: Dispatcher, sinks: Sequence[BaseSink]):
        self.counter = counter
        self.dispatcher = dispatcher
        self.sinks = list(sinks)

    async def ingest(self, vendor_event: VendorEvent) -> int:
        """Process a decoded event and return its assigned id."""
        event = vendor_event.event
        event_id = self.counter.next()
        logger.info(
            "Received %s event #%d: Type=%s, Device=%s, Channel=%s",
            vendor_event.vendor.label, event_id, event.event_type, event.device_id, event.channel_id,
        )

        self.dispatcher.dispatch(vendor_event)

        # Shielded so a client disconnect does not abort in-flight sink calls
        results: list[SinkResult] = await asyncio.shield(fan_out(self.sinks, vendor_event))
        failed = [r.sink for r in results if r.status == "failed"]
        if failed:
            logger.debug("Event #%d: sink delivery failed for %s", event_id, ", ".join(failed))

        return event_id
