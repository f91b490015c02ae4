"""
Event Pipeline Core

Canonical model, vendor decoders, type normalizer, dispatcher and counter.
"""

from .counter import EventCounter
from .decoders import (
    HikVisionAlarm,
    convert_hikvision_alarm,
    decode_hikvision_alarm,
    decode_json_event,
    parse_alarm_time,
)
from .dispatcher import Dispatcher
from .models import CanonicalEvent, EventType, Vendor, VendorEvent
from .normalizer import TYPE_RULES, normalize_event_type

__all__ = [
    "CanonicalEvent",
    "Dispatcher",
    "EventCounter",
    "EventType",
    "HikVisionAlarm",
    "TYPE_RULES",
    "Vendor",
    "VendorEvent",
    "convert_hikvision_alarm",
    "decode_hikvision_alarm",
    "decode_json_event",
    "normalize_event_type",
    "parse_alarm_time",
]
