"""Recording swipe decisions."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Protocol
from uuid import UUID

from tile_match.domain.errors import NotFoundError
from tile_match.domain.swipes import SwipeDecision, SwipeResult

if TYPE_CHECKING:
    from tile_match.services.sessions import SessionRepository
    from tile_match.services.tile_sets import TileSetRepository

_logger = logging.getLogger(__name__)


class SwipeRepository(Protocol):
    """Persistence interface for swipe results."""

    def insert_if_absent(
        self,
        session_id: UUID,
        tile_id: UUID,
        decision: SwipeDecision,
        timestamp: datetime,
    ) -> tuple[SwipeResult, bool]:
        """Store a decision unless one exists for the pair.

        Returns the stored record and whether this call created it.
        """

    def list_for_sessions(self, session_ids: list[UUID]) -> list[SwipeResult]:
        """Return all swipe results recorded by the given sessions."""


@dataclass
class SwipeService:
    """Appends at most one decision per session and tile."""

    swipe_repository: SwipeRepository
    session_repository: SessionRepository
    tile_set_repository: TileSetRepository

    def record_swipe(
        self, session_id: UUID, tile_id: UUID, decision: SwipeDecision | str
    ) -> SwipeResult:
        """Record a decision; a repeated swipe returns the stored one."""
        parsed = SwipeDecision.parse(decision)
        session = self.session_repository.get_session(session_id)
        if session is None:
            raise NotFoundError("session", session_id)
        tile = self.tile_set_repository.get_tile(tile_id)
        if tile is None or tile.tile_set_id != session.tile_set_id:
            raise NotFoundError("tile", tile_id)

        result, created = self.swipe_repository.insert_if_absent(
            session_id=session_id,
            tile_id=tile_id,
            decision=parsed,
            timestamp=datetime.now(tz=UTC),
        )
        if not created and result.decision != parsed:
            _logger.warning(
                "Conflicting swipe ignored: session_id=%s tile_id=%s kept=%s",
                session_id,
                tile_id,
                result.decision.value,
            )
        return result
