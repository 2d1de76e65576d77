"""Domain errors shared across services and adapters."""


class TileMatchError(Exception):
    """Base class for tile match errors."""


class NotFoundError(TileMatchError, LookupError):
    """A referenced tile set, tile, or session does not exist."""

    def __init__(self, kind: str, key: object) -> None:
        super().__init__(f"{kind} not found: {key}")
        self.kind = kind
        self.key = key


class StoreError(TileMatchError):
    """The backing store failed to complete an operation."""


class InvariantViolation(TileMatchError):
    """Stored data breaks a uniqueness invariant."""

    def __init__(self, message: str, existing: list[object] | None = None) -> None:
        super().__init__(message)
        self.existing = existing or []


class TileSetClosedError(TileMatchError):
    """The tile set is no longer accepting participants."""

    def __init__(self, access_code: str, reason: str) -> None:
        super().__init__(f"Tile set {access_code} is {reason}")
        self.access_code = access_code
        self.reason = reason
