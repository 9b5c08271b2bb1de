from __future__ import annotations

import logging
from typing import Any, Optional, Sequence

from ..common.datetime_utils import Clock, now_local
from ..core.constants import DEFAULT_LOG_LIMIT
from ..core.exceptions import NotFoundError
from .model import Actor, SystemLogEntry
from .repository import SystemLogRepository

logger = logging.getLogger(__name__)


class SystemLogService:
    """Append-only audit trail of administrative actions."""

    def __init__(self, logs: SystemLogRepository, *, clock: Clock = now_local):
        self._logs = logs
        self._clock = clock

    def record(
        self,
        action: str,
        actor: Optional[Actor],
        details: Optional[dict[str, Any]] = None,
        *,
        old_data: Optional[dict[str, Any]] = None,
        new_data: Optional[dict[str, Any]] = None,
    ) -> Optional[str]:
        """Append one entry. Failures are logged, never raised."""

        actor = actor or Actor()
        changes = None
        if old_data is not None or new_data is not None:
            changes = {"oldData": old_data or {}, "newData": new_data or {}}
        try:
            return self._logs.append(
                action=action,
                timestamp=self._clock(),
                actor_id=actor.actor_id,
                actor_email=actor.email,
                actor_role=actor.role,
                details=dict(details or {}),
                changes=changes,
            )
        except Exception:
            logger.exception("Failed to write system log entry %r", action)
            return None

    def list_recent(self, *, limit: int = DEFAULT_LOG_LIMIT) -> Sequence[SystemLogEntry]:
        return self._logs.list_recent(limit=max(1, int(limit)))

    def get(self, log_id: str) -> SystemLogEntry:
        entry = self._logs.get(log_id)
        if not entry:
            raise NotFoundError("Log entry not found.")
        return entry
