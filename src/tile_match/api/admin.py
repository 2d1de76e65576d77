"""Admin API endpoints with simple token auth."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Depends, Header, HTTPException, Request, status

from tile_match.api.models import MatchOut, NewTileSet, ResolveOut, TileSetOut
from tile_match.domain.tile_sets import TileDraft

if TYPE_CHECKING:
    from tile_match.containers import AppContainer

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


@router.get("/health", dependencies=[Depends(require_admin)])
async def admin_health() -> dict[str, str]:
    """Admin health check endpoint."""
    return {"status": "ok"}


@router.post(
    "/tile-sets", status_code=201, dependencies=[Depends(require_admin)]
)
async def create_tile_set(payload: NewTileSet, request: Request) -> TileSetOut:
    """Create a tile set and its tiles in order."""
    container: AppContainer = request.app.state.container
    tile_set, tiles = container.tile_set_service.publish_tile_set(
        title=payload.title,
        category=payload.category,
        tiles=[
            TileDraft(
                title=tile.title,
                description=tile.description,
                external_link=tile.external_link,
                tags=tuple(tile.tags),
            )
            for tile in payload.tiles
        ],
        description=payload.description,
        expires_date=payload.expires_date,
    )
    return TileSetOut.from_domain(tile_set, tiles)


@router.post(
    "/tile-sets/{tile_set_id}/resolve", dependencies=[Depends(require_admin)]
)
async def resolve_matches(tile_set_id: UUID, request: Request) -> ResolveOut:
    """Recompute matches for a tile set and return the newly created ones."""
    container: AppContainer = request.app.state.container
    container.tile_set_service.get_tile_set(tile_set_id)
    created = container.match_resolver.resolve(tile_set_id)
    tiles = container.tile_set_service.list_tiles(tile_set_id)
    tiles_by_id = {tile.id: tile for tile in tiles}
    return ResolveOut(
        new_matches=[MatchOut.from_domain(match, tiles_by_id) for match in created]
    )
