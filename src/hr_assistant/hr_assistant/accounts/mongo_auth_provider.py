from __future__ import annotations

import logging
from typing import Optional

from bson import ObjectId
from pymongo.errors import DuplicateKeyError
from werkzeug.security import check_password_hash, generate_password_hash

from ..common.datetime_utils import Clock, now_local
from ..core.enums import Role
from ..core.exceptions import ConflictError, NotFoundError
from ..database.connection import DatabaseConnection
from .model import AuthAccount
from .provider import AuthProvider

logger = logging.getLogger(__name__)

COLLECTION = "auth_users"


def _role(value) -> Role:
    try:
        return Role(value)
    except ValueError:
        return Role.EMPLOYEE


def _to_account(doc: dict) -> AuthAccount:
    return AuthAccount(
        uid=str(doc["_id"]),
        email=doc.get("email", ""),
        display_name=doc.get("displayName") or "",
        role=_role(doc.get("role")),
        disabled=bool(doc.get("disabled", False)),
        created_at=doc.get("createdAt"),
    )


class MongoAuthProvider(AuthProvider):
    """Login accounts kept in ``auth_users`` with werkzeug password hashes."""

    def __init__(self, conn: DatabaseConnection, *, clock: Clock = now_local):
        self._conn = conn
        self._clock = clock

    @property
    def _col(self):
        return self._conn.collection(COLLECTION)

    def create_user(self, *, email: str, password: str, display_name: str, role: Role = Role.EMPLOYEE) -> str:
        email = email.strip().lower()
        if self._col.find_one({"email": email}, {"_id": 1}):
            raise ConflictError(f'The email address "{email}" is already in use by another account.')
        try:
            res = self._col.insert_one(
                {
                    "email": email,
                    "passwordHash": generate_password_hash(password),
                    "displayName": display_name,
                    "role": role.value,
                    "disabled": False,
                    "createdAt": self._clock(),
                }
            )
        except DuplicateKeyError:
            raise ConflictError(f'The email address "{email}" is already in use by another account.')
        return str(res.inserted_id)

    def delete_user(self, uid: str) -> None:
        if not ObjectId.is_valid(str(uid)):
            raise NotFoundError("The login account was not found.")
        res = self._col.delete_one({"_id": ObjectId(str(uid))})
        if res.deleted_count != 1:
            raise NotFoundError("The login account was not found.")

    def verify(self, email: str, password: str) -> Optional[AuthAccount]:
        doc = self._col.find_one({"email": (email or "").strip().lower()})
        if not doc or doc.get("disabled"):
            return None
        try:
            ok = check_password_hash(doc.get("passwordHash") or "", password or "")
        except ValueError:
            # e.g. placeholder or corrupted hashes
            logger.warning("Unreadable password hash for account %s", doc["_id"])
            ok = False
        return _to_account(doc) if ok else None

    def get_user(self, uid: str) -> Optional[AuthAccount]:
        if not ObjectId.is_valid(str(uid)):
            return None
        doc = self._col.find_one({"_id": ObjectId(str(uid))})
        return _to_account(doc) if doc else None
