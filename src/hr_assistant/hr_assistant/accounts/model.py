from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class AuthAccount:
    uid: str
    email: str
    display_name: str
    role: Role
    disabled: bool = False
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class SessionUser:
    """What we store into Flask session after login."""

    uid: str
    email: str
    display_name: str
    role: Role
    employee_doc_id: Optional[str] = None
