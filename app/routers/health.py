from datetime import datetime, timedelta, timezone

from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict, Field

from app.context import AppContext, get_context


router = APIRouter(tags=["health"])

VERSION = "0.1.0"


class HealthResponse(BaseModel):
    model_config = ConfigDict(validate_by_name=True, validate_by_alias=True)

    status: str
    event_count: int = Field(..., alias="eventCount")
    uptime: str
    uptime_seconds: float = Field(..., alias="uptimeSeconds")
    version: str


def format_uptime(delta: timedelta) -> str:
    """Render a duration like 1h2m3.5s."""
    total = max(delta.total_seconds(), 0.0)
    hours, rest = divmod(total, 3600)
    minutes, seconds = divmod(rest, 60)
    text = f"{seconds:.3f}".rstrip("0").rstrip(".") + "s"
    if hours:
        return f"{int(hours)}h{int(minutes)}m{text}"
    if minutes:
        return f"{int(minutes)}m{text}"
    return text


@router.get("/health", response_model=HealthResponse)
async def health_check(ctx: AppContext = Depends(get_context)):
    uptime = datetime.now(timezone.utc) - ctx.started_at

    return HealthResponse(
        status="ok",
        event_count=ctx.counter.value,
        uptime=format_uptime(uptime),
        uptime_seconds=round(uptime.total_seconds(), 2),
        version=VERSION,
    )
