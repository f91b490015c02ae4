"""Application context built once at startup and shared by request handlers."""

from dataclasses import dataclass, field
from datetime import datetime, timezone

import httpx
from fastapi import Request

from app.config import Settings
from app.events import Dispatcher, EventCounter
from app.pipeline import EventPipeline
from app.sinks import build_sinks


@dataclass
class AppContext:
    settings: Settings
    counter: EventCounter
    pipeline: EventPipeline
    started_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        dispatcher: Dispatcher | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> "AppContext":
        counter = EventCounter()
        pipeline = EventPipeline(
            counter=counter,
            dispatcher=dispatcher or Dispatcher(),
            sinks=build_sinks(settings, transport=transport),
        )
        return cls(settings=settings, counter=counter, pipeline=pipeline)


def get_context(request: Request) -> AppContext:
    return request.app.state.context
