"""HIKVision alarm server endpoint (EventNotificationAlert XML)."""

import logging

from fastapi import APIRouter, Depends, Request

from app.context import AppContext, get_context
from app.errors import DecodeError
from app.events import Vendor, VendorEvent, convert_hikvision_alarm, decode_hikvision_alarm
from app.routers.events import EventResponse

logger = logging.getLogger(__name__)
router = APIRouter()


@router.api_route("/alarm", methods=["GET", "POST"], response_model=EventResponse)
async def receive_alarm(request: Request, ctx: AppContext = Depends(get_context)):
    """Ingest a HIKVision alarm. Some firmware sends the alert on GET."""
    body = await request.body()
    raw = body.decode("utf-8", errors="replace")
    try:
        alarm = decode_hikvision_alarm(body)
    except DecodeError:
        logger.debug("Raw payload: %s", raw)
        raise

    event = convert_hikvision_alarm(alarm)
    logger.debug("HIKVision alarm %s mapped to %s", alarm.event_type, event.event_type)

    event_id = await ctx.pipeline.ingest(
        VendorEvent(vendor=Vendor.HIKVISION, event=event, raw_payload=raw)
    )
    return EventResponse(message="HIKVision alarm processed successfully", event_id=event_id)
