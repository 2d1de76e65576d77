"""Domain models for swipe decisions."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from uuid import UUID


class SwipeDecision(str, Enum):
    """A participant's verdict on a tile."""

    YES = "Yes"
    NO = "No"

    @classmethod
    def parse(cls, value: "SwipeDecision | str") -> "SwipeDecision":
        """Coerce a decision or its label, ignoring case."""
        if isinstance(value, cls):
            return value
        cleaned = str(value).strip().lower()
        for decision in cls:
            if decision.value.lower() == cleaned:
                return decision
        raise ValueError(f"Unknown swipe decision: {value!r}")


@dataclass(frozen=True)
class SwipeResult:
    """One decision recorded for one tile within one session."""

    id: UUID
    session_id: UUID
    tile_id: UUID
    decision: SwipeDecision
    timestamp: datetime
