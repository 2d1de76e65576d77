"""Session lifecycle for participants voting through a tile set."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Protocol
from uuid import UUID

from tile_match.domain.errors import NotFoundError
from tile_match.domain.matches import MatchRecord
from tile_match.domain.sessions import SessionRecord

if TYPE_CHECKING:
    from tile_match.services.matches import MatchResolver
    from tile_match.services.tile_sets import TileSetRepository

_logger = logging.getLogger(__name__)


class SessionRepository(Protocol):
    """Persistence interface for voting sessions."""

    def create_session(
        self,
        tile_set_id: UUID,
        participant_id: str,
        participant_name: str | None,
        started_date: datetime,
    ) -> SessionRecord:
        """Create a new incomplete session and return it."""

    def get_session(self, session_id: UUID) -> SessionRecord | None:
        """Return a session by id, if present."""

    def list_sessions(self, tile_set_id: UUID) -> list[SessionRecord]:
        """Return every session opened against a tile set."""

    def mark_complete(
        self, session_id: UUID, completed_date: datetime
    ) -> SessionRecord:
        """Flag a session complete and return the updated record."""


@dataclass(frozen=True)
class SessionCompletion:
    """Outcome of completing a session."""

    session: SessionRecord
    new_matches: list[MatchRecord] = field(default_factory=list)
    match_error: str | None = None

    @property
    def matches_pending(self) -> bool:
        """Whether match computation failed and will be retried later."""
        return self.match_error is not None


@dataclass
class SessionService:
    """Opens and completes voting sessions."""

    session_repository: SessionRepository
    tile_set_repository: TileSetRepository
    match_resolver: MatchResolver

    def open_session(
        self,
        tile_set_id: UUID,
        participant_id: str,
        participant_name: str | None = None,
    ) -> SessionRecord:
        """Create a fresh session; prior sessions of the participant are kept."""
        if self.tile_set_repository.get_tile_set(tile_set_id) is None:
            raise NotFoundError("tile set", tile_set_id)
        session = self.session_repository.create_session(
            tile_set_id=tile_set_id,
            participant_id=participant_id,
            participant_name=(participant_name or "").strip() or None,
            started_date=datetime.now(tz=UTC),
        )
        _logger.info(
            "Session opened: session_id=%s tile_set_id=%s", session.id, tile_set_id
        )
        return session

    def get_session(self, session_id: UUID) -> SessionRecord:
        """Return a session or raise NotFoundError."""
        session = self.session_repository.get_session(session_id)
        if session is None:
            raise NotFoundError("session", session_id)
        return session

    def complete_session(self, session_id: UUID) -> SessionCompletion:
        """Mark a session complete, then resolve matches for its tile set.

        Completion is durable before matches are computed. A resolver
        failure is logged and reported on the result instead of raised;
        the next completion in the same tile set recomputes from stored
        sessions and swipes.
        """
        self.get_session(session_id)
        session = self.session_repository.mark_complete(
            session_id, completed_date=datetime.now(tz=UTC)
        )
        _logger.info(
            "Session completed: session_id=%s tile_set_id=%s",
            session.id,
            session.tile_set_id,
        )
        try:
            new_matches = self.match_resolver.resolve(session.tile_set_id)
        except Exception as exc:
            _logger.exception(
                "Match resolution failed: tile_set_id=%s", session.tile_set_id
            )
            return SessionCompletion(
                session=session,
                match_error=f"{type(exc).__name__}: {exc}",
            )
        return SessionCompletion(session=session, new_matches=new_matches)
