"""Shared request dependencies: bearer auth and paging."""

from __future__ import annotations

from dataclasses import dataclass

from fastapi import Depends, Header, HTTPException, Query, Request, status

from fitness_tracker.containers import AppContainer  # noqa: TC001
from fitness_tracker.domain.users import UserRecord  # noqa: TC001

_BEARER_PREFIX = "bearer "


@dataclass(frozen=True)
class PageParams:
    page: int
    limit: int


def get_container(request: Request) -> AppContainer:
    return request.app.state.container


def _bearer_token(authorization: str | None) -> str | None:
    if not authorization or not authorization.lower().startswith(_BEARER_PREFIX):
        return None
    return authorization[len(_BEARER_PREFIX) :].strip() or None


async def get_current_user(
    authorization: str | None = Header(default=None),
    container: AppContainer = Depends(get_container),
) -> UserRecord:
    """Resolve the calling account from its bearer token."""
    token = _bearer_token(authorization)
    if token is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="Access token required"
        )
    user = container.user_service.authenticate(token)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid or inactive user"
        )
    return user


async def get_page_params(
    page: int = Query(default=1, ge=1),
    limit: int | None = Query(default=None, ge=1),
    container: AppContainer = Depends(get_container),
) -> PageParams:
    """Clamp the requested page size to the configured maximum."""
    settings = container.settings
    size = limit or settings.default_page_size
    return PageParams(page=page, limit=min(size, settings.max_page_size))
