"""Tile set lookup and authoring."""

import logging
import secrets
import string
import time
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Protocol
from uuid import UUID

from tile_match.domain.errors import NotFoundError, TileSetClosedError
from tile_match.domain.tile_sets import (
    Tile,
    TileDraft,
    TileSet,
    TileSetCategory,
    TileTag,
)

ACCESS_CODE_ALPHABET = string.ascii_uppercase + string.digits
_PARTICIPANT_SUFFIX_ALPHABET = string.ascii_lowercase + string.digits

_logger = logging.getLogger(__name__)


class TileSetRepository(Protocol):
    """Read access to tile sets and tiles, plus authoring inserts."""

    def get_tile_set(self, tile_set_id: UUID) -> TileSet | None:
        """Return a tile set by id, if present."""

    def get_by_access_code(self, access_code: str) -> TileSet | None:
        """Return a tile set by access code, if present."""

    def get_tile(self, tile_id: UUID) -> Tile | None:
        """Return a tile by id, if present."""

    def list_tiles(self, tile_set_id: UUID) -> list[Tile]:
        """Return all tiles of a tile set in store order."""

    def create_tile_set(  # noqa: PLR0913
        self,
        title: str,
        access_code: str,
        category: TileSetCategory,
        description: str | None,
        expires_date: datetime | None,
        created_date: datetime,
    ) -> TileSet:
        """Create a tile set and return it."""

    def create_tile(  # noqa: PLR0913
        self,
        tile_set_id: UUID,
        title: str,
        order: int,
        description: str | None,
        external_link: str | None,
        tags: list[TileTag],
    ) -> Tile:
        """Create a tile and return it."""

    def set_active(self, tile_set_id: UUID, is_active: bool) -> None:
        """Open or close a tile set for new participants."""


@dataclass
class TileSetService:
    """Application service for finding and authoring tile sets."""

    repository: TileSetRepository
    access_code_length: int = 8

    def get_tile_set(self, tile_set_id: UUID) -> TileSet:
        """Return a tile set or raise NotFoundError."""
        tile_set = self.repository.get_tile_set(tile_set_id)
        if tile_set is None:
            raise NotFoundError("tile set", tile_set_id)
        return tile_set

    def get_by_access_code(self, access_code: str) -> TileSet:
        """Return the tile set for an access code or raise NotFoundError."""
        code = normalize_access_code(access_code)
        tile_set = self.repository.get_by_access_code(code)
        if tile_set is None:
            raise NotFoundError("tile set", code)
        return tile_set

    def get_open_tile_set(
        self, access_code: str, now: datetime | None = None
    ) -> TileSet:
        """Return a tile set that still accepts participants."""
        tile_set = self.get_by_access_code(access_code)
        if not tile_set.is_active:
            raise TileSetClosedError(tile_set.access_code, "inactive")
        if tile_set.is_expired(now or datetime.now(tz=UTC)):
            raise TileSetClosedError(tile_set.access_code, "expired")
        return tile_set

    def list_tiles(self, tile_set_id: UUID) -> list[Tile]:
        """Return tiles in display order."""
        return sorted(self.repository.list_tiles(tile_set_id), key=lambda t: t.order)

    def get_tile(self, tile_id: UUID) -> Tile:
        """Return a tile or raise NotFoundError."""
        tile = self.repository.get_tile(tile_id)
        if tile is None:
            raise NotFoundError("tile", tile_id)
        return tile

    def create_tile_set(
        self,
        title: str,
        category: TileSetCategory | str,
        description: str | None = None,
        expires_date: datetime | None = None,
    ) -> TileSet:
        """Create an active tile set with a fresh access code."""
        cleaned = title.strip()
        if not cleaned:
            raise ValueError("Tile set title is required")
        return self.repository.create_tile_set(
            title=cleaned,
            access_code=generate_access_code(self.access_code_length),
            category=TileSetCategory(category),
            description=description or None,
            expires_date=expires_date,
            created_date=datetime.now(tz=UTC),
        )

    def add_tile(  # noqa: PLR0913
        self,
        tile_set_id: UUID,
        title: str,
        order: int | None = None,
        description: str | None = None,
        external_link: str | None = None,
        tags: list[TileTag | str] | None = None,
    ) -> Tile:
        """Append a tile to a tile set."""
        cleaned = title.strip()
        if not cleaned:
            raise ValueError("Tile title is required")
        self.get_tile_set(tile_set_id)
        if order is None:
            existing = self.repository.list_tiles(tile_set_id)
            order = max((tile.order for tile in existing), default=0) + 1
        return self.repository.create_tile(
            tile_set_id=tile_set_id,
            title=cleaned,
            order=order,
            description=description or None,
            external_link=external_link or None,
            tags=[TileTag(tag) for tag in tags or []],
        )

    def publish_tile_set(
        self,
        title: str,
        category: TileSetCategory | str,
        tiles: list[TileDraft],
        description: str | None = None,
        expires_date: datetime | None = None,
    ) -> tuple[TileSet, list[Tile]]:
        """Create a tile set together with its tiles, numbered from 1.

        Every tile is checked before anything is written. If storing a
        tile fails, the half-built set is deactivated so nobody can join
        it, and the error is re-raised.
        """
        for draft in tiles:
            if not draft.title.strip():
                raise ValueError("Tile title is required")
        tile_set = self.create_tile_set(
            title, category, description=description, expires_date=expires_date
        )
        stored: list[Tile] = []
        try:
            for order, draft in enumerate(tiles, start=1):
                stored.append(
                    self.repository.create_tile(
                        tile_set_id=tile_set.id,
                        title=draft.title.strip(),
                        order=order,
                        description=draft.description or None,
                        external_link=draft.external_link or None,
                        tags=list(draft.tags),
                    )
                )
        except Exception:
            _logger.exception(
                "Tile set creation failed, deactivating: tile_set_id=%s",
                tile_set.id,
            )
            self.repository.set_active(tile_set.id, False)
            raise
        _logger.info(
            "Tile set published: tile_set_id=%s tiles=%s", tile_set.id, len(stored)
        )
        return tile_set, stored


def normalize_access_code(access_code: str) -> str:
    """Normalize user-entered access codes."""
    return access_code.strip().upper()


def generate_access_code(length: int = 8) -> str:
    """Generate a random shareable access code."""
    return "".join(secrets.choice(ACCESS_CODE_ALPHABET) for _ in range(length))


def generate_participant_id() -> str:
    """Generate an opaque id for an anonymous participant."""
    suffix = "".join(secrets.choice(_PARTICIPANT_SUFFIX_ALPHABET) for _ in range(6))
    return f"participant_{int(time.time() * 1000)}_{suffix}"
