"""Admin API endpoints with simple token auth."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Header, HTTPException, Query, Request, status

if TYPE_CHECKING:
    from videosia.containers import AppContainer

router = APIRouter(prefix="/admin", tags=["admin"])


def _get_admin_token(request: Request) -> str:
    container: AppContainer = request.app.state.container
    return container.settings.admin_token


async def require_admin(
    x_admin_token: str | None = Header(default=None),
    admin_token: str = Depends(_get_admin_token),
) -> None:
    """Ensure requests include a valid admin token."""
    if not x_admin_token or x_admin_token != admin_token:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)


@router.get("/requests", dependencies=[Depends(require_admin)])
async def list_requests(
    request: Request,
    status_filter: str | None = Query(default=None, alias="status"),
    limit: int = 50,
) -> dict[str, object]:
    """Return recent video requests across all users."""
    container: AppContainer = request.app.state.container
    return {"requests": container.admin_service.list_requests(status_filter, limit)}


@router.post("/requests/clear-pending", dependencies=[Depends(require_admin)])
async def clear_pending(request: Request) -> dict[str, int]:
    """Mark stuck pending requests as failed."""
    container: AppContainer = request.app.state.container
    return {"cleared": container.admin_service.clear_pending()}
