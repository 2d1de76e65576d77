"""Supabase-backed swipe result repository."""

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
from tile_match.domain.errors import StoreError
from tile_match.domain.swipes import SwipeDecision, SwipeResult
from tile_match.services.swipes import SwipeRepository

_COLUMNS = "id, session_id, tile_id, decision, swiped_at"


@dataclass
class SupabaseSwipeRepository(SwipeRepository):
    """Supabase implementation for swipe results.

    Relies on a unique constraint over ``(session_id, tile_id)``.
    """

    client: Client

    def insert_if_absent(
        self,
        session_id: UUID,
        tile_id: UUID,
        decision: SwipeDecision,
        timestamp: datetime,
    ) -> tuple[SwipeResult, bool]:
        """Insert a swipe or return the one already stored for the pair."""
        rows = insert_ignoring_duplicates(
            self.client,
            "swipe_results",
            {
                "session_id": str(session_id),
                "tile_id": str(tile_id),
                "decision": decision.value,
                "swiped_at": timestamp.isoformat(),
            },
            on_conflict="session_id,tile_id",
            action="record swipe",
        )
        if rows:
            return _parse_swipe(rows[0]), True

        existing = execute(
            self.client.table("swipe_results")
            .select(_COLUMNS)
            .eq("session_id", str(session_id))
            .eq("tile_id", str(tile_id))
            .order("swiped_at")
            .limit(1),
            "fetch swipe",
        )
        if not existing:
            raise StoreError("Failed to record swipe")
        return _parse_swipe(existing[0]), False

    def list_for_sessions(self, session_ids: list[UUID]) -> list[SwipeResult]:
        """Return swipes recorded by any of the sessions."""
        if not session_ids:
            return []
        rows = execute(
            self.client.table("swipe_results")
            .select(_COLUMNS)
            .in_("session_id", [str(session_id) for session_id in session_ids])
            .order("swiped_at")
            .order("id"),
            "fetch swipes",
        )
        return [_parse_swipe(row) for row in rows]


@parses_row("swipe_results")
def _parse_swipe(row: dict[str, object]) -> SwipeResult:
    """Parse a swipe result row into a domain model."""
    return SwipeResult(
        id=UUID(str(row["id"])),
        session_id=UUID(str(row["session_id"])),
        tile_id=UUID(str(row["tile_id"])),
        decision=SwipeDecision.parse(str(row["decision"])),
        timestamp=require_timestamp(row.get("swiped_at"), "swiped_at"),
    )
