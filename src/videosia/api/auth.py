"""Bearer token authentication dependency."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from fastapi import Depends, Header, HTTPException, Request, status

from videosia.services.auth import AuthService, InvalidTokenError

if TYPE_CHECKING:
    from videosia.containers import AppContainer

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CurrentUser:
    """The authenticated caller of a request."""

    id: str
    claims: dict[str, object]


def _get_auth_service(request: Request) -> AuthService:
    container: AppContainer = request.app.state.container
    return container.auth_service


async def require_user(
    authorization: str | None = Header(default=None),
    auth_service: AuthService = Depends(_get_auth_service),
) -> CurrentUser:
    """Resolve the caller from the Authorization header."""
    token = _bearer_token(authorization)
    if not token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)
    try:
        claims = auth_service.verify(token)
    except InvalidTokenError as exc:
        logger.warning("Rejected bearer token: %s", exc)
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN) from exc
    return CurrentUser(id=str(claims["id"]), claims=claims)


def _bearer_token(authorization: str | None) -> str | None:
    if not authorization:
        return None
    parts = authorization.split(maxsplit=1)
    if len(parts) < 2:  # noqa: PLR2004
        return None
    return parts[1].strip() or None
