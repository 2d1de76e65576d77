"""Pydantic request and response models for the HTTP API."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field

from tile_match.domain.matches import MatchRecord
from tile_match.domain.sessions import SessionRecord
from tile_match.domain.swipes import SwipeDecision, SwipeResult
from tile_match.domain.tile_sets import Tile, TileSet, TileSetCategory, TileTag


class TileOut(BaseModel):
    """Tile payload."""

    id: UUID
    title: str
    order: int
    description: str | None = None
    external_link: str | None = None
    image_url: str | None = None
    tags: list[TileTag] = Field(default_factory=list)

    @classmethod
    def from_domain(cls, tile: Tile) -> "TileOut":
        return cls(
            id=tile.id,
            title=tile.title,
            order=tile.order,
            description=tile.description,
            external_link=tile.external_link,
            image_url=tile.image_url,
            tags=list(tile.tags),
        )


class TileSetOut(BaseModel):
    """Tile set payload with its tiles in display order."""

    id: UUID
    title: str
    access_code: str
    category: TileSetCategory
    is_active: bool
    expires_date: datetime | None = None
    description: str | None = None
    tiles: list[TileOut] = Field(default_factory=list)

    @classmethod
    def from_domain(cls, tile_set: TileSet, tiles: list[Tile]) -> "TileSetOut":
        return cls(
            id=tile_set.id,
            title=tile_set.title,
            access_code=tile_set.access_code,
            category=tile_set.category,
            is_active=tile_set.is_active,
            expires_date=tile_set.expires_date,
            description=tile_set.description,
            tiles=[TileOut.from_domain(tile) for tile in tiles],
        )


class JoinRequest(BaseModel):
    """Request to open a voting session."""

    participant_id: str | None = None
    participant_name: str | None = None


class SessionOut(BaseModel):
    """Session payload."""

    id: UUID
    tile_set_id: UUID
    participant_id: str
    participant_name: str | None = None
    started_date: datetime
    completed_date: datetime | None = None
    is_complete: bool

    @classmethod
    def from_domain(cls, session: SessionRecord) -> "SessionOut":
        return cls(
            id=session.id,
            tile_set_id=session.tile_set_id,
            participant_id=session.participant_id,
            participant_name=session.participant_name,
            started_date=session.started_date,
            completed_date=session.completed_date,
            is_complete=session.is_complete,
        )


class SwipeRequest(BaseModel):
    """Request to record a decision on a tile."""

    tile_id: UUID
    decision: str


class SwipeOut(BaseModel):
    """Swipe result payload."""

    id: UUID
    session_id: UUID
    tile_id: UUID
    decision: SwipeDecision
    timestamp: datetime

    @classmethod
    def from_domain(cls, swipe: SwipeResult) -> "SwipeOut":
        return cls(
            id=swipe.id,
            session_id=swipe.session_id,
            tile_id=swipe.tile_id,
            decision=swipe.decision,
            timestamp=swipe.timestamp,
        )


class MatchOut(BaseModel):
    """Match payload, with the matched tile when known."""

    id: UUID
    tile_set_id: UUID
    tile_id: UUID
    match_date: datetime
    participant_count: int
    tile: TileOut | None = None

    @classmethod
    def from_domain(
        cls, match: MatchRecord, tiles: dict[UUID, Tile] | None = None
    ) -> "MatchOut":
        tile = (tiles or {}).get(match.tile_id)
        return cls(
            id=match.id,
            tile_set_id=match.tile_set_id,
            tile_id=match.tile_id,
            match_date=match.match_date,
            participant_count=match.participant_count,
            tile=TileOut.from_domain(tile) if tile else None,
        )


class CompletionOut(BaseModel):
    """Result of completing a session."""

    session: SessionOut
    new_matches: list[MatchOut]
    matches_pending: bool


class NewTile(BaseModel):
    """Tile definition for tile set creation."""

    title: str
    description: str | None = None
    external_link: str | None = None
    tags: list[TileTag] = Field(default_factory=list)


class NewTileSet(BaseModel):
    """Request to create a tile set with its tiles."""

    title: str
    category: TileSetCategory = TileSetCategory.OTHER
    description: str | None = None
    expires_date: datetime | None = None
    tiles: list[NewTile] = Field(default_factory=list)


class MatchListOut(BaseModel):
    """Matches of a tile set, oldest first."""

    tile_set_id: UUID
    matches: list[MatchOut]


class ResolveOut(BaseModel):
    """Matches created by an explicit resolver run."""

    new_matches: list[MatchOut]
