"""Request dependencies shared by the API routers."""

from __future__ import annotations

from datetime import date, datetime
from typing import TYPE_CHECKING
from uuid import UUID
from zoneinfo import ZoneInfo

from fastapi import Depends, Header, HTTPException, Request, status

if TYPE_CHECKING:
    from fitness_tracker.containers import AppContainer


def get_container(request: Request) -> AppContainer:
    """Return the container attached to the running app."""
    return request.app.state.container


def _get_api_token(request: Request) -> str:
    return get_container(request).settings.api_token


async def current_user_id(
    x_api_token: str | None = Header(default=None),
    x_user_id: str | None = Header(default=None),
    api_token: str = Depends(_get_api_token),
) -> UUID:
    """Return the caller's user id as asserted by the upstream auth layer."""
    if not x_api_token or x_api_token != api_token or not x_user_id:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)
    try:
        return UUID(x_user_id)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED) from exc


def today(request: Request) -> date:
    """Return today's date in the configured timezone."""
    tz = ZoneInfo(get_container(request).settings.timezone)
    return datetime.now(tz=tz).date()
