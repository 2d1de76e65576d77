"""Domain models for tile sets and their tiles."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from uuid import UUID


class TileSetCategory(str, Enum):
    """Categories a tile set can be filed under."""

    MOVIES = "Movies"
    ACTIVITIES = "Activities"
    RESTAURANTS = "Restaurants"
    DATE_NIGHT = "Date Night"
    TRAVEL = "Travel"
    BOOKS = "Books"
    OTHER = "Other"


class TileTag(str, Enum):
    """Tags that describe a tile."""

    INDOOR = "Indoor"
    OUTDOOR = "Outdoor"
    FREE = "Free"
    PAID = "Paid"
    QUICK = "Quick"
    ALL_DAY = "All Day"
    POPULAR = "Popular"
    NEW = "New"


@dataclass(frozen=True)
class TileSet:
    """A shareable collection of tiles under one access code."""

    id: UUID
    title: str
    access_code: str
    category: TileSetCategory
    is_active: bool
    expires_date: datetime | None = None
    description: str | None = None

    def is_expired(self, now: datetime) -> bool:
        """Return whether the tile set expired before ``now``."""
        return self.expires_date is not None and self.expires_date < now


@dataclass(frozen=True)
class Tile:
    """One option inside a tile set."""

    id: UUID
    tile_set_id: UUID
    title: str
    order: int = 0
    description: str | None = None
    external_link: str | None = None
    image_url: str | None = None
    tags: tuple[TileTag, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class TileDraft:
    """A tile that has not been stored yet."""

    title: str
    description: str | None = None
    external_link: str | None = None
    tags: tuple[TileTag, ...] = field(default_factory=tuple)
