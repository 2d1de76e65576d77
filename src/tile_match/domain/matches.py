"""Domain models for unanimous matches."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True)
class MatchRecord:
    """A tile every completed session approved."""

    id: UUID
    tile_set_id: UUID
    tile_id: UUID
    match_date: datetime
    participant_count: int
    is_notified: bool = False
