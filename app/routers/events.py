"""Vivotek-style canonical JSON event ingestion."""

import logging

from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel, ConfigDict, Field

from app.context import AppContext, get_context
from app.errors import DecodeError
from app.events import Vendor, VendorEvent, decode_json_event

logger = logging.getLogger(__name__)
router = APIRouter()


class EventResponse(BaseModel):
    model_config = ConfigDict(validate_by_name=True, validate_by_alias=True)

    status: str = "success"
    message: str
    event_id: int = Field(..., alias="eventId")


@router.post("/event", response_model=EventResponse)
@router.post("/events", response_model=EventResponse)
async def receive_event(request: Request, ctx: AppContext = Depends(get_context)):
    """Ingest a canonical JSON event."""
    body = await request.body()
    try:
        event = decode_json_event(body)
    except DecodeError:
        logger.debug("Raw payload: %s", body.decode("utf-8", errors="replace"))
        raise

    event_id = await ctx.pipeline.ingest(VendorEvent(vendor=Vendor.VIVOTEK, event=event))
    return EventResponse(message="Event processed successfully", event_id=event_id)
