"""Shared helpers for Supabase repositories."""

import functools
from collections.abc import Callable
from datetime import datetime
from typing import Any, TypeVar

import httpx
from postgrest.exceptions import APIError
from supabase import Client

from tile_match.domain.errors import StoreError

UNIQUE_VIOLATION = "23505"

T = TypeVar("T")
RowParser = Callable[[dict[str, Any]], T]


def execute(query: Any, action: str) -> list[dict[str, Any]]:
    """Run a PostgREST query, translating backend failures to StoreError."""
    try:
        response = query.execute()
    except APIError as exc:
        raise StoreError(f"Failed to {action}: {exc.message or exc}") from exc
    except httpx.HTTPError as exc:
        raise StoreError(f"Failed to {action}: {exc}") from exc
    return response.data or []


def insert_ignoring_duplicates(
    client: Client,
    table: str,
    payload: dict[str, object],
    on_conflict: str,
    action: str,
) -> list[dict[str, Any]]:
    """Insert a row unless the conflict key already exists.

    Returns the inserted row, or an empty list when the row was already
    present.
    """
    query = client.table(table).upsert(
        payload, on_conflict=on_conflict, ignore_duplicates=True
    )
    try:
        response = query.execute()
    except APIError as exc:
        if exc.code == UNIQUE_VIOLATION:
            return []
        raise StoreError(f"Failed to {action}: {exc.message or exc}") from exc
    except httpx.HTTPError as exc:
        raise StoreError(f"Failed to {action}: {exc}") from exc
    return response.data or []


def parse_timestamp(raw: object) -> datetime | None:
    """Parse an ISO timestamp column, if set."""
    if isinstance(raw, datetime):
        return raw
    if isinstance(raw, str) and raw:
        return datetime.fromisoformat(raw)
    return None


def require_timestamp(raw: object, column: str) -> datetime:
    """Parse a timestamp column that must be present."""
    value = parse_timestamp(raw)
    if value is None:
        raise StoreError(f"Row is missing {column}")
    return value


def parses_row(table: str) -> Callable[[RowParser[T]], RowParser[T]]:
    """Report rows that fail to parse as a store fault instead of bad input."""

    def decorator(parse: RowParser[T]) -> RowParser[T]:
        @functools.wraps(parse)
        def wrapper(row: dict[str, Any]) -> T:
            try:
                return parse(row)
            except (KeyError, TypeError, ValueError) as exc:
                raise StoreError(f"Malformed {table} row: {exc}") from exc

        return wrapper

    return decorator
