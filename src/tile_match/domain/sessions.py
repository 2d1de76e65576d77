"""Domain models for voting sessions."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True)
class SessionRecord:
    """Represents one participant's pass through a tile set."""

    id: UUID
    tile_set_id: UUID
    participant_id: str
    started_date: datetime
    is_complete: bool = False
    completed_date: datetime | None = None
    participant_name: str | None = None
