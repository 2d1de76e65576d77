"""Tests for container wiring."""

from tile_match.containers import build_container


def test_build_container_creates_services(settings) -> None:
    container = build_container(settings)

    assert container.session_service.match_resolver is container.match_resolver
    assert container.tile_set_service.access_code_length == 8
    assert container.settings.is_local
