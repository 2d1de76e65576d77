"""Supabase-backed match repository."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from tile_match.adapters.supabase_support import (
    execute,
    insert_ignoring_duplicates,
    parses_row,
    require_timestamp,
)
from tile_match.domain.errors import InvariantViolation, StoreError
from tile_match.domain.matches import MatchRecord
from tile_match.services.matches import MatchRepository

_COLUMNS = "id, tile_set_id, tile_id, match_date, participant_count, is_notified"


@dataclass
class SupabaseMatchRepository(MatchRepository):
    """Supabase implementation for matches.

    Relies on a unique constraint over ``(tile_set_id, tile_id)``.
    """

    client: Client

    def list_matches(self, tile_set_id: UUID) -> list[MatchRecord]:
        """Return stored matches for a tile set, oldest first."""
        rows = execute(
            self.client.table("matches")
            .select(_COLUMNS)
            .eq("tile_set_id", str(tile_set_id))
            .order("match_date"),
            "fetch matches",
        )
        return [_parse_match(row) for row in rows]

    def insert_if_absent(
        self,
        tile_set_id: UUID,
        tile_id: UUID,
        match_date: datetime,
        participant_count: int,
    ) -> tuple[MatchRecord, bool]:
        """Insert a match or return the one already stored for the pair."""
        rows = insert_ignoring_duplicates(
            self.client,
            "matches",
            {
                "tile_set_id": str(tile_set_id),
                "tile_id": str(tile_id),
                "match_date": match_date.isoformat(),
                "participant_count": participant_count,
                "is_notified": False,
            },
            on_conflict="tile_set_id,tile_id",
            action="create match",
        )
        if rows:
            return _parse_match(rows[0]), True

        existing = execute(
            self.client.table("matches")
            .select(_COLUMNS)
            .eq("tile_set_id", str(tile_set_id))
            .eq("tile_id", str(tile_id))
            .order("match_date"),
            "fetch match",
        )
        if not existing:
            raise StoreError("Failed to create match")
        matches = [_parse_match(row) for row in existing]
        if len(matches) > 1:
            raise InvariantViolation(
                f"Multiple matches stored for tile {tile_id}", existing=list(matches)
            )
        return matches[0], False


@parses_row("matches")
def _parse_match(row: dict[str, object]) -> MatchRecord:
    """Parse a match row into a domain model."""
    return MatchRecord(
        id=UUID(str(row["id"])),
        tile_set_id=UUID(str(row["tile_set_id"])),
        tile_id=UUID(str(row["tile_id"])),
        match_date=require_timestamp(row.get("match_date"), "match_date"),
        participant_count=int(row.get("participant_count") or 0),
        is_notified=bool(row.get("is_notified", False)),
    )
