"""FastAPI application factory."""

import logging
from uuid import UUID

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from tile_match.api.admin import router as admin_router
from tile_match.api.models import (
    CompletionOut,
    JoinRequest,
    MatchListOut,
    MatchOut,
    SessionOut,
    SwipeOut,
    SwipeRequest,
    TileSetOut,
)
from tile_match.app_logging import configure_logging
from tile_match.containers import AppContainer
from tile_match.domain.errors import NotFoundError, StoreError, TileSetClosedError
from tile_match.domain.tile_sets import Tile
from tile_match.services.tile_sets import generate_participant_id


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    app = FastAPI()
    app.state.container = container

    app.include_router(admin_router)

    @app.exception_handler(NotFoundError)
    async def not_found_handler(request: Request, exc: NotFoundError) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND, content={"detail": str(exc)}
        )

    @app.exception_handler(TileSetClosedError)
    async def closed_handler(
        request: Request, exc: TileSetClosedError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_409_CONFLICT,
            content={"detail": str(exc), "reason": exc.reason},
        )

    @app.exception_handler(ValueError)
    async def invalid_handler(request: Request, exc: ValueError) -> JSONResponse:
        return JSONResponse(
            status_code=422,
            content={"detail": str(exc)},
        )

    @app.exception_handler(StoreError)
    async def store_handler(request: Request, exc: StoreError) -> JSONResponse:
        logger.error("Store failure on %s: %s", request.url.path, exc)
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"detail": _format_store_error(request, exc)},
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/tile-sets/{access_code}")
    async def get_tile_set(access_code: str, request: Request) -> TileSetOut:
        """Return a joinable tile set with its tiles."""
        state_container: AppContainer = request.app.state.container
        tile_set = state_container.tile_set_service.get_open_tile_set(access_code)
        tiles = state_container.tile_set_service.list_tiles(tile_set.id)
        return TileSetOut.from_domain(tile_set, tiles)

    @app.post("/tile-sets/{access_code}/sessions", status_code=201)
    async def join_tile_set(
        access_code: str, payload: JoinRequest, request: Request
    ) -> SessionOut:
        """Open a new voting session for a participant."""
        state_container: AppContainer = request.app.state.container
        tile_set = state_container.tile_set_service.get_open_tile_set(access_code)
        session = state_container.session_service.open_session(
            tile_set_id=tile_set.id,
            participant_id=payload.participant_id or generate_participant_id(),
            participant_name=payload.participant_name,
        )
        return SessionOut.from_domain(session)

    @app.post("/sessions/{session_id}/swipes", status_code=201)
    async def record_swipe(
        session_id: UUID, payload: SwipeRequest, request: Request
    ) -> SwipeOut:
        """Record one decision for the session."""
        state_container: AppContainer = request.app.state.container
        swipe = state_container.swipe_service.record_swipe(
            session_id=session_id,
            tile_id=payload.tile_id,
            decision=payload.decision,
        )
        return SwipeOut.from_domain(swipe)

    @app.post("/sessions/{session_id}/complete")
    async def complete_session(session_id: UUID, request: Request) -> CompletionOut:
        """Complete a session and report any matches it produced."""
        state_container: AppContainer = request.app.state.container
        completion = state_container.session_service.complete_session(session_id)
        tiles: dict[UUID, Tile] = {}
        if completion.new_matches:
            # The session is already stored as complete; tile details are optional.
            try:
                tiles = _index_tiles(
                    state_container.tile_set_service.list_tiles(
                        completion.session.tile_set_id
                    )
                )
            except StoreError:
                logger.warning(
                    "Tile lookup failed after completion: session_id=%s",
                    session_id,
                    exc_info=True,
                )
        return CompletionOut(
            session=SessionOut.from_domain(completion.session),
            new_matches=[
                MatchOut.from_domain(match, tiles) for match in completion.new_matches
            ],
            matches_pending=completion.matches_pending,
        )

    @app.get("/tile-sets/{access_code}/matches")
    async def list_matches(access_code: str, request: Request) -> MatchListOut:
        """Return the matches of a tile set, oldest first."""
        state_container: AppContainer = request.app.state.container
        tile_set = state_container.tile_set_service.get_by_access_code(access_code)
        matches = state_container.match_reader.list_matches(tile_set.id)
        tiles = _index_tiles(state_container.tile_set_service.list_tiles(tile_set.id))
        return MatchListOut(
            tile_set_id=tile_set.id,
            matches=[MatchOut.from_domain(match, tiles) for match in matches],
        )

    return app


def _index_tiles(tiles: list[Tile]) -> dict[UUID, Tile]:
    return {tile.id: tile for tile in tiles}


def _format_store_error(request: Request, exc: StoreError) -> str:
    """Return a client-facing store error with local debug info."""
    fallback = "Storage is temporarily unavailable. Please retry."
    container: AppContainer = request.app.state.container
    if container.settings.is_local:
        return f"{fallback} (debug: {exc})"
    return fallback
