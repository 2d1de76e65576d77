"""Supabase-backed tile set repository."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from tile_match.adapters.supabase_support import (
    execute,
    parse_timestamp,
    parses_row,
)
from tile_match.domain.errors import StoreError
from tile_match.domain.tile_sets import Tile, TileSet, TileSetCategory, TileTag
from tile_match.services.tile_sets import TileSetRepository

_TILE_SET_COLUMNS = (
    "id, title, description, access_code, category, is_active, expires_date"
)
_TILE_COLUMNS = (
    "id, tile_set_id, title, description, sort_order, external_link, image_url, tags"
)


@dataclass
class SupabaseTileSetRepository(TileSetRepository):
    """Supabase implementation for tile sets and tiles."""

    client: Client

    def get_tile_set(self, tile_set_id: UUID) -> TileSet | None:
        """Return a tile set by id, if present."""
        rows = execute(
            self.client.table("tile_sets")
            .select(_TILE_SET_COLUMNS)
            .eq("id", str(tile_set_id))
            .limit(1),
            "fetch tile set",
        )
        return _parse_tile_set(rows[0]) if rows else None

    def get_by_access_code(self, access_code: str) -> TileSet | None:
        """Return a tile set by access code, if present."""
        rows = execute(
            self.client.table("tile_sets")
            .select(_TILE_SET_COLUMNS)
            .eq("access_code", access_code)
            .limit(1),
            "fetch tile set",
        )
        return _parse_tile_set(rows[0]) if rows else None

    def get_tile(self, tile_id: UUID) -> Tile | None:
        """Return a tile by id, if present."""
        rows = execute(
            self.client.table("tiles")
            .select(_TILE_COLUMNS)
            .eq("id", str(tile_id))
            .limit(1),
            "fetch tile",
        )
        return _parse_tile(rows[0]) if rows else None

    def list_tiles(self, tile_set_id: UUID) -> list[Tile]:
        """Return tiles of a tile set ordered by sort order."""
        rows = execute(
            self.client.table("tiles")
            .select(_TILE_COLUMNS)
            .eq("tile_set_id", str(tile_set_id))
            .order("sort_order"),
            "fetch tiles",
        )
        return [_parse_tile(row) for row in rows]

    def create_tile_set(  # noqa: PLR0913
        self,
        title: str,
        access_code: str,
        category: TileSetCategory,
        description: str | None,
        expires_date: datetime | None,
        created_date: datetime,
    ) -> TileSet:
        """Create a tile set row and return it."""
        rows = execute(
            self.client.table("tile_sets").insert(
                {
                    "title": title,
                    "description": description,
                    "access_code": access_code,
                    "category": category.value,
                    "is_active": True,
                    "expires_date": expires_date.isoformat() if expires_date else None,
                    "created_date": created_date.isoformat(),
                }
            ),
            "create tile set",
        )
        if not rows:
            raise StoreError("Failed to create tile set")
        return _parse_tile_set(rows[0])

    def create_tile(  # noqa: PLR0913
        self,
        tile_set_id: UUID,
        title: str,
        order: int,
        description: str | None,
        external_link: str | None,
        tags: list[TileTag],
    ) -> Tile:
        """Create a tile row and return it."""
        rows = execute(
            self.client.table("tiles").insert(
                {
                    "tile_set_id": str(tile_set_id),
                    "title": title,
                    "description": description,
                    "sort_order": order,
                    "external_link": external_link,
                    "tags": [tag.value for tag in tags],
                }
            ),
            "create tile",
        )
        if not rows:
            raise StoreError("Failed to create tile")
        return _parse_tile(rows[0])

    def set_active(self, tile_set_id: UUID, is_active: bool) -> None:
        """Update the active flag of a tile set."""
        rows = execute(
            self.client.table("tile_sets")
            .update({"is_active": is_active})
            .eq("id", str(tile_set_id)),
            "update tile set",
        )
        if not rows:
            raise StoreError(f"Tile set {tile_set_id} was not updated")


@parses_row("tile_sets")
def _parse_tile_set(row: dict[str, object]) -> TileSet:
    """Parse a tile set row into a domain model."""
    return TileSet(
        id=UUID(str(row["id"])),
        title=str(row.get("title") or ""),
        access_code=str(row["access_code"]),
        category=TileSetCategory(row.get("category") or TileSetCategory.OTHER.value),
        is_active=bool(row.get("is_active", True)),
        expires_date=parse_timestamp(row.get("expires_date")),
        description=row.get("description") or None,
    )


@parses_row("tiles")
def _parse_tile(row: dict[str, object]) -> Tile:
    """Parse a tile row into a domain model."""
    tags = row.get("tags") or []
    return Tile(
        id=UUID(str(row["id"])),
        tile_set_id=UUID(str(row["tile_set_id"])),
        title=str(row.get("title") or ""),
        order=int(row.get("sort_order") or 0),
        description=row.get("description") or None,
        external_link=row.get("external_link") or None,
        image_url=row.get("image_url") or None,
        tags=tuple(TileTag(tag) for tag in tags if isinstance(tag, str)),
    )
