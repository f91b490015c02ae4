"""Canonical event model shared by every vendor decoder and sink."""

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

UNKNOWN_PREFIX = "UnknownEvent_"


class EventType(StrEnum):
    MOTION = "MotionDetection"
    VIDEO_LOSS = "VideoLoss"
    DEVICE_CONNECTION = "DeviceConnection"
    TAMPER = "TamperDetection"
    STORAGE_FAILURE = "StorageFailure"
    LINE_CROSSING = "LineCrossing"
    INTRUSION = "IntrusionDetection"
    FACE = "FaceDetection"
    IO_ALARM = "IOAlarm"


class Vendor(StrEnum):
    VIVOTEK = "vivotek"      # JSON notifications
    HIKVISION = "hikvision"  # XML EventNotificationAlert

    @property
    def label(self) -> str:
        return "Vivotek" if self is Vendor.VIVOTEK else "HIKVision"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class CanonicalEvent(BaseModel):
    """Vendor-neutral event record. Wire names are camelCase."""

    model_config = ConfigDict(validate_by_name=True, validate_by_alias=True)

    event_type: str = Field(..., alias="eventType", min_length=1)
    event_time: datetime = Field(default_factory=_utcnow, alias="eventTime")
    device_id: str = Field("", alias="deviceId")
    channel_id: str = Field("", alias="channelId")
    event_details: dict[str, Any] = Field(default_factory=dict, alias="eventDetails")

    @field_validator("event_time")
    @classmethod
    def _to_utc(cls, value: datetime) -> datetime:
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        try:
            return value.astimezone(timezone.utc)
        except OverflowError as e:
            raise ValueError(f"eventTime out of range: {e}") from e

    @field_validator("event_details", mode="before")
    @classmethod
    def _null_details(cls, value: Any) -> Any:
        return {} if value is None else value

    def to_wire(self) -> dict[str, Any]:
        """JSON-compatible dict in the canonical wire shape."""
        return self.model_dump(mode="json", by_alias=True)


@dataclass(frozen=True)
class VendorEvent:
    """A canonical event tagged with the vendor protocol it arrived on.

    The vendor is used for dispatch and message formatting only and is never
    part of the forwarded payload. ``raw_payload`` keeps the original body for
    diagnostic logging.
    """

    vendor: Vendor
    event: CanonicalEvent
    raw_payload: str | None = None
