import logging

import httpx
import pytest
from fastapi.testclient import TestClient

from app.config import Settings
from app.main import create_app

MOTION_EVENT = {
    "eventType": "MotionDetection",
    "eventTime": "2024-05-01T02:15:00Z",
    "deviceId": "NVR001",
    "channelId": "Camera01",
    "eventDetails": {"zoneId": "FrontDoor"},
}

HIK_TEMPLATE = """<?xml version="1.0" encoding="UTF-8"?>
<EventNotificationAlert version="2.0" xmlns="http://www.hikvision.com/ver20/XMLSchema">
<ipAddress>{ip}</ipAddress>
<portNo>80</portNo>
<protocolType>HTTP</protocolType>
<macAddress>{mac}</macAddress>
<channelID>{channel}</channelID>
<dateTime>{date_time}</dateTime>
<activePostCount>1</activePostCount>
<eventType>{event_type}</eventType>
<eventState>active</eventState>
<eventDescription>{description}</eventDescription>
{extra}
</EventNotificationAlert>
"""


class Outbound:
    """Records outbound sink requests; responses are configurable per host."""

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.responders = {}

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        responder = self.responders.get(request.url.host)
        if responder is not None:
            return responder(request)
        return httpx.Response(200, json={"ok": True})

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def to_host(self, host: str) -> list[httpx.Request]:
        return [r for r in self.requests if r.url.host == host]


def unreachable(request: httpx.Request) -> httpx.Response:
    raise httpx.ConnectError("connection refused", request=request)


@pytest.fixture
def motion_event():
    return {**MOTION_EVENT, "eventDetails": dict(MOTION_EVENT["eventDetails"])}


@pytest.fixture
def outbound():
    return Outbound()


@pytest.fixture
def make_settings():
    def _make(**overrides) -> Settings:
        overrides.setdefault("log_file", "stdout")
        return Settings(_env_file=None, **overrides)
    return _make


@pytest.fixture
def make_client(make_settings, outbound):
    def _make(**overrides) -> TestClient:
        app = create_app(make_settings(**overrides), transport=outbound.transport)
        return TestClient(app)
    return _make


@pytest.fixture
def client(make_client):
    return make_client()


@pytest.fixture
def hik_xml():
    def _build(
        event_type: str = "VMD",
        mac: str = "00:11:22:33:44:55",
        ip: str = "192.168.1.64",
        channel: str = "1",
        date_time: str = "2024-05-01T10:15:00+08:00",
        description: str = "Motion alarm",
        extra: str = "",
    ) -> bytes:
        return HIK_TEMPLATE.format(
            event_type=event_type,
            mac=mac,
            ip=ip,
            channel=channel,
            date_time=date_time,
            description=description,
            extra=extra,
        ).encode("utf-8")
    return _build


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)
