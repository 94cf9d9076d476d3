from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional


@dataclass(frozen=True)
class ClimbSession:
    """Domain entity: a scheduled climbing session."""

    session_id: str
    date: str
    start: str
    end: str
    location: str
    discipline: str
    capacity: Optional[int] = None
    notes: str = ""
    extra: dict[str, Any] = field(default_factory=dict)

    @property
    def capacity_limit(self) -> Optional[int]:
        """Effective limit; None and 0 both mean unlimited."""
        return self.capacity or None
