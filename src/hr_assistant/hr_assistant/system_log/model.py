from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional


@dataclass(frozen=True)
class Actor:
    """Who performed an action (taken from the signed-in session)."""

    actor_id: Optional[str] = None
    email: Optional[str] = None
    role: Optional[str] = None


SYSTEM = Actor(actor_id="system", email=None, role="system")


@dataclass(frozen=True)
class SystemLogEntry:
    log_id: str
    action: str
    timestamp: datetime
    actor_id: Optional[str] = None
    actor_email: Optional[str] = None
    actor_role: Optional[str] = None
    details: dict[str, Any] = field(default_factory=dict)
    changes: Optional[dict[str, Any]] = None
