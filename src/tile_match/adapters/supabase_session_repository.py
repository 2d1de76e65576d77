"""Supabase-backed session repository."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from tile_match.adapters.supabase_support import (
    execute,
    parse_timestamp,
    parses_row,
    require_timestamp,
)
from tile_match.domain.errors import StoreError
from tile_match.domain.sessions import SessionRecord
from tile_match.services.sessions import SessionRepository

_COLUMNS = (
    "id, tile_set_id, participant_id, participant_name, started_date, "
    "completed_date, is_complete"
)


@dataclass
class SupabaseSessionRepository(SessionRepository):
    """Supabase implementation for voting sessions."""

    client: Client

    def create_session(
        self,
        tile_set_id: UUID,
        participant_id: str,
        participant_name: str | None,
        started_date: datetime,
    ) -> SessionRecord:
        """Create a session row and return it."""
        rows = execute(
            self.client.table("sessions").insert(
                {
                    "tile_set_id": str(tile_set_id),
                    "participant_id": participant_id,
                    "participant_name": participant_name,
                    "started_date": started_date.isoformat(),
                    "is_complete": False,
                }
            ),
            "create session",
        )
        if not rows:
            raise StoreError("Failed to create session")
        return _parse_session(rows[0])

    def get_session(self, session_id: UUID) -> SessionRecord | None:
        """Return a session by id, if present."""
        rows = execute(
            self.client.table("sessions")
            .select(_COLUMNS)
            .eq("id", str(session_id))
            .limit(1),
            "fetch session",
        )
        return _parse_session(rows[0]) if rows else None

    def list_sessions(self, tile_set_id: UUID) -> list[SessionRecord]:
        """Return all sessions of a tile set, oldest first."""
        rows = execute(
            self.client.table("sessions")
            .select(_COLUMNS)
            .eq("tile_set_id", str(tile_set_id))
            .order("started_date"),
            "fetch sessions",
        )
        return [_parse_session(row) for row in rows]

    def mark_complete(
        self, session_id: UUID, completed_date: datetime
    ) -> SessionRecord:
        """Set the completion flag and timestamp."""
        rows = execute(
            self.client.table("sessions")
            .update(
                {
                    "is_complete": True,
                    "completed_date": completed_date.isoformat(),
                }
            )
            .eq("id", str(session_id)),
            "complete session",
        )
        if not rows:
            raise StoreError("Failed to complete session")
        return _parse_session(rows[0])


@parses_row("sessions")
def _parse_session(row: dict[str, object]) -> SessionRecord:
    """Parse a session row into a domain model."""
    return SessionRecord(
        id=UUID(str(row["id"])),
        tile_set_id=UUID(str(row["tile_set_id"])),
        participant_id=str(row["participant_id"]),
        participant_name=row.get("participant_name") or None,
        started_date=require_timestamp(row.get("started_date"), "started_date"),
        completed_date=parse_timestamp(row.get("completed_date")),
        is_complete=bool(row.get("is_complete", False)),
    )
