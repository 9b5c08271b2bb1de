from __future__ import annotations

from typing import Optional, Protocol

from ..core.enums import Role
from .model import AuthAccount


class AuthProvider(Protocol):
    """Authentication service holding login accounts.

    ``create_user`` raises ``ConflictError`` when the e-mail is taken;
    ``delete_user`` raises ``NotFoundError`` when the account is already gone.
    """

    def create_user(self, *, email: str, password: str, display_name: str, role: Role = Role.EMPLOYEE) -> str:
        raise NotImplementedError

    def delete_user(self, uid: str) -> None:
        raise NotImplementedError

    def verify(self, email: str, password: str) -> Optional[AuthAccount]:
        raise NotImplementedError

    def get_user(self, uid: str) -> Optional[AuthAccount]:
        raise NotImplementedError
