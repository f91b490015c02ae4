"""Vendor decoders: raw request bodies to canonical events."""

import json
import logging
import xml.etree.ElementTree as ET
from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, Field, ValidationError

from app.errors import DecodeError
from app.events.models import CanonicalEvent
from app.events.normalizer import normalize_event_type

logger = logging.getLogger(__name__)

HIK_ROOT_TAG = "EventNotificationAlert"
HIK_DEVICE_PREFIX = "HIK_"
HIK_CHANNEL_PREFIX = "Channel"
HIK_SOURCE = "HIKVision"


# ---------------------------------------------------------------------------
# JSON vendor (Vivotek)
# ---------------------------------------------------------------------------


def decode_json_event(body: bytes | str) -> CanonicalEvent:
    """Parse a canonical JSON event body."""
    try:
        data = json.loads(body)
    except (ValueError, RecursionError) as e:
        raise DecodeError(f"invalid JSON: {e}") from e

    if not isinstance(data, dict):
        raise DecodeError(f"expected a JSON object, got {type(data).__name__}")

    try:
        # camelCase wire names only
        return CanonicalEvent.model_validate(data, by_alias=True, by_name=False)
    except ValidationError as e:
        raise DecodeError(f"invalid event: {e}") from e


# ---------------------------------------------------------------------------
# XML vendor (HIKVision)
# ---------------------------------------------------------------------------


class HikVisionAlarm(BaseModel):
    """Fields of a HIKVision EventNotificationAlert document."""

    ip_address: str = Field("", alias="ipAddress")
    port_no: int = Field(0, alias="portNo")
    protocol_type: str = Field("", alias="protocolType")
    mac_address: str = Field("", alias="macAddress")
    channel_id: int = Field(0, alias="channelID")
    date_time: str = Field("", alias="dateTime")
    active_post_count: int = Field(0, alias="activePostCount")
    event_type: str = Field("", alias="eventType")
    event_state: str = Field("", alias="eventState")
    event_description: str = Field("", alias="eventDescription")
    detection_region_id: int = Field(0, alias="detectionRegionID")


_HIK_FIELDS = frozenset(
    field.alias for field in HikVisionAlarm.model_fields.values() if field.alias
)


def _local_name(tag: str) -> str:
    # "{http://www.hikvision.com/ver20/XMLSchema}ipAddress" -> "ipAddress"
    return tag.rsplit("}", 1)[-1]


def decode_hikvision_alarm(body: bytes | str) -> HikVisionAlarm:
    """Parse an EventNotificationAlert XML body.

    Only direct children of the root are read; namespaces are ignored.
    Empty elements fall back to the field default, and a repeated element
    keeps its last value.
    """
    try:
        root = ET.fromstring(body)
    except ET.ParseError as e:
        raise DecodeError(f"invalid XML: {e}") from e

    if _local_name(root.tag) != HIK_ROOT_TAG:
        raise DecodeError(f"expected <{HIK_ROOT_TAG}> root, got <{_local_name(root.tag)}>")

    fields: dict[str, str] = {}
    for child in root:
        name = _local_name(child.tag)
        if name not in _HIK_FIELDS:
            continue
        text = (child.text or "").strip()
        if text:
            fields[name] = text
        else:
            fields.pop(name, None)

    try:
        return HikVisionAlarm.model_validate(fields)
    except ValidationError as e:
        raise DecodeError(f"invalid HIKVision alarm: {e}") from e


def _parse_offset_time(value: str) -> datetime:
    # RFC3339 with a numeric offset, e.g. 2024-05-01T10:15:00+08:00
    if value.endswith(("Z", "z")):
        raise ValueError("not a numeric offset")
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        raise ValueError("missing offset")
    return parsed


def _parse_utc_time(value: str) -> datetime:
    # RFC3339 in UTC, e.g. 2024-05-01T02:15:00Z
    if not value.endswith(("Z", "z")):
        raise ValueError("missing Z suffix")
    parsed = datetime.fromisoformat(value[:-1])
    if parsed.tzinfo is not None:
        raise ValueError("unexpected offset")
    return parsed.replace(tzinfo=timezone.utc)


def parse_alarm_time(value: str, now: datetime | None = None) -> datetime:
    """Parse a HIKVision dateTime, falling back to the current time.

    Tries RFC3339 with offset, then RFC3339 UTC. Never raises.
    """
    text = value.strip()
    for parser in (_parse_offset_time, _parse_utc_time):
        try:
            return parser(text).astimezone(timezone.utc)
        except (ValueError, OverflowError):
            continue

    logger.warning("Unparsable HIKVision dateTime %r, using current time", value)
    return now or datetime.now(timezone.utc)


def convert_hikvision_alarm(alarm: HikVisionAlarm, now: datetime | None = None) -> CanonicalEvent:
    """Convert a decoded HIKVision alarm into the canonical event shape."""
    if alarm.mac_address:
        device_id = HIK_DEVICE_PREFIX + alarm.mac_address.replace(":", "")
    else:
        device_id = HIK_DEVICE_PREFIX + alarm.ip_address

    details: dict[str, Any] = {
        "source": HIK_SOURCE,
        "ipAddress": alarm.ip_address,
        "description": alarm.event_description,
        "state": alarm.event_state,
        "macAddress": alarm.mac_address,
        "originalType": alarm.event_type,
    }
    if alarm.detection_region_id > 0:
        details["regionId"] = alarm.detection_region_id

    return CanonicalEvent(
        event_type=normalize_event_type(alarm.event_type),
        event_time=parse_alarm_time(alarm.date_time, now=now),
        device_id=device_id,
        channel_id=f"{HIK_CHANNEL_PREFIX}{alarm.channel_id}",
        event_details=details,
    )
