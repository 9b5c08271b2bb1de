from __future__ import annotations

from datetime import datetime
from typing import Any, Optional, Protocol, Sequence

from .model import SystemLogEntry


class SystemLogRepository(Protocol):
    def append(
        self,
        *,
        action: str,
        timestamp: datetime,
        actor_id: Optional[str],
        actor_email: Optional[str],
        actor_role: Optional[str],
        details: dict[str, Any],
        changes: Optional[dict[str, Any]] = None,
    ) -> str:
        raise NotImplementedError

    def list_recent(self, *, limit: int = 100) -> Sequence[SystemLogEntry]:
        raise NotImplementedError

    def get(self, log_id: str) -> Optional[SystemLogEntry]:
        raise NotImplementedError
