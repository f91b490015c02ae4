"""NVR Event Gateway - FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

import httpx
import uvicorn
from fastapi import Depends, FastAPI, Request
from fastapi.responses import JSONResponse

from app.config import Settings, load_settings
from app.context import AppContext
from app.dependencies import verify_basic_auth, verify_hikvision_auth
from app.errors import AuthError, DecodeError
from app.logging_config import setup_logging
from app.routers import events, health, hikvision

logger = logging.getLogger(__name__)


async def _decode_error_handler(request: Request, exc: DecodeError) -> JSONResponse:
    logger.warning("Rejected %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=400, content={"detail": f"Malformed request body: {exc}"})


async def _auth_error_handler(request: Request, exc: AuthError) -> JSONResponse:
    logger.warning("Unauthorized %s %s from %s", request.method, request.url.path,
                   request.client.host if request.client else "unknown")
    return JSONResponse(
        status_code=401,
        content={"detail": exc.message},
        headers={"WWW-Authenticate": f'Basic realm="{exc.realm}"'},
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = app.state.context.settings
    handler = setup_logging(settings)
    logger.info("Starting NVR Event Handler API on %s:%s", settings.server_host, settings.server_port)
    yield
    logger.info("Shutting down NVR Event Handler API")
    logging.getLogger().removeHandler(handler)
    handler.close()


def create_app(
    settings: Settings | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> FastAPI:
    settings = settings or load_settings()

    app = FastAPI(
        title="NVR Event Gateway",
        description="Ingests Vivotek and HIKVision event notifications and fans them out",
        version=health.VERSION,
        lifespan=lifespan,
    )
    app.state.context = AppContext.from_settings(settings, transport=transport)

    app.add_exception_handler(DecodeError, _decode_error_handler)
    app.add_exception_handler(AuthError, _auth_error_handler)

    # Routers (health is public)
    app.include_router(health.router)
    app.include_router(events.router, tags=["events"], dependencies=[Depends(verify_basic_auth)])
    app.include_router(
        hikvision.router, prefix="/hikvision", tags=["hikvision"], dependencies=[Depends(verify_hikvision_auth)]
    )

    return app


app = create_app()


def run() -> None:
    settings = app.state.context.settings
    uvicorn.run(app, host=settings.server_host, port=settings.server_port, log_config=None)


if __name__ == "__main__":
    run()
