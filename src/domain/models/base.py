"""
Base domain model classes for Alchemy Table.

Purpose
-------
Provide the domain event record that services attach to their results so
an application layer can publish state changes (level-ups, quest claims,
crafts) after it has persisted them.

Non-Responsibilities
--------------------
- Publishing (the caller owns any event bus)
- Persistence (callers persist records and events)

Usage Example
-------------
>>> event = DomainEvent("player.leveled_up", {"old_level": 1, "new_level": 2})
>>> event.to_dict()["event_name"]
'player.leveled_up'
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict


# ============================================================================
# DOMAIN EVENTS
# ============================================================================


@dataclass(frozen=True)
class DomainEvent:
    """
    Represents a domain event that has occurred.

    Attributes
    ----------
    event_name : str
        Event name (e.g., "player.leveled_up")
    payload : Dict[str, Any]
        Event payload with relevant data
    occurred_at : datetime
        When the event occurred (UTC)
    """

    event_name: str
    payload: Dict[str, Any]
    occurred_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def to_dict(self) -> Dict[str, Any]:
        """Serialize for logging or publishing."""
        return {
            "event_name": self.event_name,
            "payload": dict(self.payload),
            "occurred_at": self.occurred_at.isoformat(),
        }
