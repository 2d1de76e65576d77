"""Tests for listing matches."""

from datetime import timedelta
from uuid import UUID, uuid4

import pytest

from tile_match.domain.errors import NotFoundError
from tile_match.domain.matches import MatchRecord
from tests.conftest import BASE_TIME, Store


def _match(tile_set_id: UUID, tile_id: UUID, minutes: int) -> MatchRecord:
    return MatchRecord(
        id=uuid4(),
        tile_set_id=tile_set_id,
        tile_id=tile_id,
        match_date=BASE_TIME + timedelta(minutes=minutes),
        participant_count=2,
    )


def test_list_matches_orders_oldest_first(store: Store) -> None:
    tile_set, (hike, movie) = store.add_tile_set(["Hike", "Movie"])
    newer = _match(tile_set.id, hike.id, 10)
    older = _match(tile_set.id, movie.id, 1)
    store.matches.matches.extend([newer, older])

    assert store.reader().list_matches(tile_set.id) == [older, newer]


def test_list_matches_empty(store: Store) -> None:
    tile_set, _ = store.add_tile_set(["Hike"])

    assert store.reader().list_matches(tile_set.id) == []


def test_list_matches_collapses_legacy_duplicates(store: Store) -> None:
    tile_set, (hike,) = store.add_tile_set(["Hike"])
    first = _match(tile_set.id, hike.id, 1)
    store.matches.matches.extend([_match(tile_set.id, hike.id, 3), first])

    assert store.reader().list_matches(tile_set.id) == [first]


def test_list_matches_for_code(store: Store) -> None:
    tile_set, (hike,) = store.add_tile_set(["Hike"], access_code="WEEKEND1")
    match = _match(tile_set.id, hike.id, 1)
    store.matches.matches.append(match)
    reader = store.reader()

    assert reader.list_matches_for_code(" weekend1 ") == [match]
    with pytest.raises(NotFoundError):
        reader.list_matches_for_code("NOPE0000")
