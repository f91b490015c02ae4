"""HIKVision event type normalization.

HIKVision devices report many free-form type strings (``VMD``, ``videoloss``,
``shelteralarm``, ``linedetection`` ...). They are mapped to canonical tags by
case-insensitive substring rules evaluated in order; the first match wins.

Known imprecision: the IOAlarm rule matches any type containing "io" or
"alarm". Since "connection" itself contains "io", the DeviceConnection rule
below it never matches, and unrelated types such as "regionentrance" end up
as IOAlarm. The order is kept as-is for compatibility with existing consumers.
"""

from typing import NamedTuple

from app.events.models import UNKNOWN_PREFIX, EventType


class TypeRule(NamedTuple):
    keywords: tuple[str, ...]
    event_type: EventType

    def matches(self, lowered: str) -> bool:
        return any(keyword in lowered for keyword in self.keywords)


TYPE_RULES: tuple[TypeRule, ...] = (
    TypeRule(("motion",), EventType.MOTION),
    TypeRule(("videoloss",), EventType.VIDEO_LOSS),
    TypeRule(("tamper", "shelteralarm"), EventType.TAMPER),
    TypeRule(("disk",), EventType.STORAGE_FAILURE),
    TypeRule(("line", "crossing"), EventType.LINE_CROSSING),
    TypeRule(("intrusion",), EventType.INTRUSION),
    TypeRule(("face",), EventType.FACE),
    TypeRule(("io", "alarm"), EventType.IO_ALARM),
    TypeRule(("connection",), EventType.DEVICE_CONNECTION),
)


def normalize_event_type(raw_type: str, rules: tuple[TypeRule, ...] = TYPE_RULES) -> str:
    """Map a vendor type string to a canonical tag, or UnknownEvent_<raw>."""
    lowered = raw_type.lower()
    for rule in rules:
        if rule.matches(lowered):
            return rule.event_type.value
    return UNKNOWN_PREFIX + lowered
