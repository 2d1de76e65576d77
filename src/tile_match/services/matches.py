"""Unanimous match resolution and match listing."""

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Protocol
from uuid import UUID

from tile_match.domain.errors import InvariantViolation, NotFoundError
from tile_match.domain.matches import MatchRecord
from tile_match.domain.swipes import SwipeDecision, SwipeResult
from tile_match.services.sessions import SessionRepository
from tile_match.services.swipes import SwipeRepository
from tile_match.services.tile_sets import TileSetRepository, normalize_access_code

MIN_PARTICIPANTS = 2

_logger = logging.getLogger(__name__)


class MatchRepository(Protocol):
    """Persistence interface for matches."""

    def list_matches(self, tile_set_id: UUID) -> list[MatchRecord]:
        """Return every stored match for a tile set."""

    def insert_if_absent(
        self,
        tile_set_id: UUID,
        tile_id: UUID,
        match_date: datetime,
        participant_count: int,
    ) -> tuple[MatchRecord, bool]:
        """Store a match unless one exists for the pair.

        Returns the stored record and whether this call created it.
        """


@dataclass
class MatchResolver:
    """Materializes matches for tiles every completed session approved."""

    session_repository: SessionRepository
    swipe_repository: SwipeRepository
    match_repository: MatchRepository

    def resolve(self, tile_set_id: UUID) -> list[MatchRecord]:
        """Create missing matches and return the ones created by this call.

        Agreement is evaluated against the sessions completed right now.
        Existing matches are never revisited, so later participants can
        only add matches.
        """
        sessions = self.session_repository.list_sessions(tile_set_id)
        completed = {session.id for session in sessions if session.is_complete}
        if len(completed) < MIN_PARTICIPANTS:
            _logger.info(
                "Match resolution skipped: tile_set_id=%s completed=%s",
                tile_set_id,
                len(completed),
            )
            return []

        swipes = self.swipe_repository.list_for_sessions(sorted(completed, key=str))
        decisions = fold_decisions(swipes, completed)
        qualifying = unanimous_tiles(decisions, completed)
        already_matched = {
            match.tile_id for match in self.match_repository.list_matches(tile_set_id)
        }

        created: list[MatchRecord] = []
        for tile_id in qualifying:
            if tile_id in already_matched:
                continue
            try:
                match, was_created = self.match_repository.insert_if_absent(
                    tile_set_id=tile_set_id,
                    tile_id=tile_id,
                    match_date=datetime.now(tz=UTC),
                    participant_count=len(completed),
                )
            except InvariantViolation as exc:
                _logger.warning(
                    "Duplicate matches already stored: tile_set_id=%s tile_id=%s "
                    "count=%s",
                    tile_set_id,
                    tile_id,
                    len(exc.existing),
                )
                continue
            if was_created:
                created.append(match)

        _logger.info(
            "Match resolution: tile_set_id=%s completed=%s qualifying=%s created=%s",
            tile_set_id,
            len(completed),
            len(qualifying),
            len(created),
        )
        return created


def fold_decisions(
    swipes: Iterable[SwipeResult], session_ids: set[UUID]
) -> dict[UUID, dict[UUID, SwipeDecision]]:
    """Group decisions by tile then session, latest timestamp winning.

    Swipes from sessions outside ``session_ids`` are dropped.
    """
    by_tile: dict[UUID, dict[UUID, SwipeDecision]] = {}
    for swipe in sorted(swipes, key=lambda item: item.timestamp):
        if swipe.session_id not in session_ids:
            continue
        by_tile.setdefault(swipe.tile_id, {})[swipe.session_id] = swipe.decision
    return by_tile


def unanimous_tiles(
    decisions: dict[UUID, dict[UUID, SwipeDecision]], session_ids: set[UUID]
) -> list[UUID]:
    """Return tiles where every session in ``session_ids`` said yes."""
    return [
        tile_id
        for tile_id, by_session in decisions.items()
        if set(by_session) == session_ids
        and all(decision is SwipeDecision.YES for decision in by_session.values())
    ]


@dataclass
class MatchReader:
    """Read-only view of stored matches."""

    match_repository: MatchRepository
    tile_set_repository: TileSetRepository

    def list_matches(self, tile_set_id: UUID) -> list[MatchRecord]:
        """Return matches oldest first, one per tile."""
        ordered = sorted(
            self.match_repository.list_matches(tile_set_id),
            key=lambda match: (match.match_date, str(match.id)),
        )
        seen: set[UUID] = set()
        matches = []
        for match in ordered:
            if match.tile_id in seen:
                continue
            seen.add(match.tile_id)
            matches.append(match)
        return matches

    def list_matches_for_code(self, access_code: str) -> list[MatchRecord]:
        """Return matches for the tile set behind an access code."""
        code = normalize_access_code(access_code)
        tile_set = self.tile_set_repository.get_by_access_code(code)
        if tile_set is None:
            raise NotFoundError("tile set", code)
        return self.list_matches(tile_set.id)
