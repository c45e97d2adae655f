"""Per-tick status snapshot schemas."""
from datetime import datetime
from typing import List

from pydantic import BaseModel


class TargetStatus(BaseModel):
    """Result of one target's check in a tick."""
    name: str
    kind: str  # http, tcp
    healthy: bool


class TickStatus(BaseModel):
    """Snapshot emitted once per monitoring tick."""
    checked_at: datetime
    results: List[TargetStatus]

    @property
    def failing(self) -> List[str]:
        return [r.name for r in self.results if not r.healthy]
