"""Dependency container wiring for the application."""

from dataclasses import dataclass

from supabase import create_client

from tile_match.adapters.supabase_match_repository import SupabaseMatchRepository
from tile_match.adapters.supabase_session_repository import (
    SupabaseSessionRepository,
)
from tile_match.adapters.supabase_swipe_repository import SupabaseSwipeRepository
from tile_match.adapters.supabase_tile_set_repository import (
    SupabaseTileSetRepository,
)
from tile_match.config import Settings
from tile_match.services.matches import MatchReader, MatchResolver
from tile_match.services.sessions import SessionService
from tile_match.services.swipes import SwipeService
from tile_match.services.tile_sets import TileSetService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    tile_set_service: TileSetService
    session_service: SessionService
    swipe_service: SwipeService
    match_resolver: MatchResolver
    match_reader: MatchReader


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    tile_set_repository = SupabaseTileSetRepository(supabase_client)
    session_repository = SupabaseSessionRepository(supabase_client)
    swipe_repository = SupabaseSwipeRepository(supabase_client)
    match_repository = SupabaseMatchRepository(supabase_client)
    match_resolver = MatchResolver(
        session_repository=session_repository,
        swipe_repository=swipe_repository,
        match_repository=match_repository,
    )
    return AppContainer(
        settings=resolved_settings,
        tile_set_service=TileSetService(
            tile_set_repository,
            access_code_length=resolved_settings.access_code_length,
        ),
        session_service=SessionService(
            session_repository=session_repository,
            tile_set_repository=tile_set_repository,
            match_resolver=match_resolver,
        ),
        swipe_service=SwipeService(
            swipe_repository=swipe_repository,
            session_repository=session_repository,
            tile_set_repository=tile_set_repository,
        ),
        match_resolver=match_resolver,
        match_reader=MatchReader(
            match_repository=match_repository,
            tile_set_repository=tile_set_repository,
        ),
    )
