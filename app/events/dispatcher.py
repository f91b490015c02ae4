"""Per-vendor, per-type event handlers.

Handlers are looked up by ``(vendor, event_type)``. Adding support for a new
canonical type only needs a new table entry::

    @dispatcher.register(Vendor.HIKVISION, EventType.FACE)
    def on_face(vendor_event): ...
"""

import logging
from typing import Callable, Mapping

from app.events.models import EventType, Vendor, VendorEvent

logger = logging.getLogger(__name__)

Handler = Callable[[VendorEvent], None]
HandlerKey = tuple[Vendor, str]


def _motion(ve: VendorEvent) -> None:
    logger.info("Motion detected on device %s, channel %s", ve.event.device_id, ve.event.channel_id)


def _video_loss(ve: VendorEvent) -> None:
    logger.info("Video lost on device %s, channel %s", ve.event.device_id, ve.event.channel_id)


def _connection(ve: VendorEvent) -> None:
    logger.info("Connection event for device %s", ve.event.device_id)


def _hik_motion(ve: VendorEvent) -> None:
    logger.info("HIKVision motion detected on device %s, channel %s", ve.event.device_id, ve.event.channel_id)


def _hik_video_loss(ve: VendorEvent) -> None:
    logger.info("HIKVision video lost on device %s, channel %s", ve.event.device_id, ve.event.channel_id)


def _hik_smart(ve: VendorEvent) -> None:
    """Line crossing and intrusion."""
    logger.info(
        "HIKVision smart event %s on device %s, channel %s",
        ve.event.event_type, ve.event.device_id, ve.event.channel_id,
    )


def _hik_io_alarm(ve: VendorEvent) -> None:
    logger.info("HIKVision IO alarm on device %s, channel %s", ve.event.device_id, ve.event.channel_id)


def _hik_connection(ve: VendorEvent) -> None:
    logger.info("HIKVision connection event for device %s", ve.event.device_id)


DEFAULT_HANDLERS: dict[HandlerKey, Handler] = {
    (Vendor.VIVOTEK, EventType.MOTION): _motion,
    (Vendor.VIVOTEK, EventType.VIDEO_LOSS): _video_loss,
    (Vendor.VIVOTEK, EventType.DEVICE_CONNECTION): _connection,
    (Vendor.HIKVISION, EventType.MOTION): _hik_motion,
    (Vendor.HIKVISION, EventType.VIDEO_LOSS): _hik_video_loss,
    (Vendor.HIKVISION, EventType.LINE_CROSSING): _hik_smart,
    (Vendor.HIKVISION, EventType.INTRUSION): _hik_smart,
    (Vendor.HIKVISION, EventType.IO_ALARM): _hik_io_alarm,
    (Vendor.HIKVISION, EventType.DEVICE_CONNECTION): _hik_connection,
}


class Dispatcher:
    """Routes a vendor event to its handler; unmatched events are only logged."""

    def __init__(self, handlers: Mapping[HandlerKey, Handler] | None = None):
        self._handlers: dict[HandlerKey, Handler] = dict(
            DEFAULT_HANDLERS if handlers is None else handlers
        )

    def register(self, vendor: Vendor, *event_types: str) -> Callable[[Handler], Handler]:
        def decorator(handler: Handler) -> Handler:
            for event_type in event_types:
                self._handlers[(vendor, str(event_type))] = handler
            return handler
        return decorator

    def handler_for(self, vendor: Vendor, event_type: str) -> Handler | None:
        return self._handlers.get((vendor, event_type))

    def dispatch(self, vendor_event: VendorEvent) -> bool:
        """Run the matching handler. Returns False when the event was unhandled."""
        vendor = vendor_event.vendor
        event_type = vendor_event.event.event_type
        handler = self.handler_for(vendor, event_type)

        if handler is None:
            logger.info("Unhandled %s event type: %s", vendor.label, event_type)
            return False

        try:
            handler(vendor_event)
        except Exception:
            logger.exception("Handler for %s event type %s failed", vendor.label, event_type)
            return False
        return True
