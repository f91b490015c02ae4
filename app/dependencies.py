"""Route dependencies: HTTP Basic Auth for the ingestion endpoints."""

import secrets

from fastapi import Depends, Request
from fastapi.security import HTTPBasic, HTTPBasicCredentials

from app.context import AppContext, get_context
from app.errors import AuthError

_basic = HTTPBasic(auto_error=False)


def _credentials_match(credentials: HTTPBasicCredentials | None, username: str, password: str) -> bool:
    if credentials is None:
        return False
    user_ok = secrets.compare_digest(credentials.username.encode(), username.encode())
    pass_ok = secrets.compare_digest(credentials.password.encode(), password.encode())
    return user_ok and pass_ok


async def verify_basic_auth(request: Request, ctx: AppContext = Depends(get_context)) -> None:
    """Require the configured credentials on /event(s); no-op when auth is not configured."""
    settings = ctx.settings
    if not settings.basic_auth_enabled:
        return

    credentials = await _basic(request)
    if not _credentials_match(credentials, settings.auth_username, settings.auth_password):
        raise AuthError("Unauthorized", realm="NVR API")


async def verify_hikvision_auth(request: Request, ctx: AppContext = Depends(get_context)) -> None:
    """HIKVision-specific credentials, enforced when hik_enabled and a username is set."""
    settings = ctx.settings
    if not settings.hik_auth_enabled:
        return

    credentials = await _basic(request)
    if not _credentials_match(credentials, settings.hik_username, settings.hik_password):
        raise AuthError("Unauthorized for HIKVision integration", realm="HIKVision")
