"""
Password hashing and cookie-backed login sessions.
"""

from __future__ import annotations

import logging
import secrets
from dataclasses import dataclass
from typing import Optional

import bcrypt
from fastapi import Depends, HTTPException, Request, Response

from storefront.config import get_settings
from storefront.db import UserRecord
from storefront.dependencies import get_session_store
from storefront.sessions import SessionStore

logger = logging.getLogger(__name__)

BCRYPT_ROUNDS = 10


def hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=BCRYPT_ROUNDS)).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        # Stored value is not a bcrypt hash.
        return False


@dataclass
class SessionData:
    user_id: str
    username: str
    is_admin: bool = False

    @classmethod
    def for_user(cls, user: UserRecord) -> "SessionData":
        return cls(user_id=user.user_id, username=user.username, is_admin=user.is_admin)

    @classmethod
    def from_dict(cls, data: dict) -> Optional["SessionData"]:
        if not data.get("user_id"):
            return None
        return cls(
            user_id=data["user_id"],
            username=data.get("username", ""),
            is_admin=bool(data.get("is_admin")),
        )

    def as_dict(self) -> dict:
        return {
            "user_id": self.user_id,
            "username": self.username,
            "is_admin": self.is_admin,
        }


def get_current_session(
    request: Request, store: SessionStore = Depends(get_session_store)
) -> Optional[SessionData]:
    session_id = request.cookies.get(get_settings().session_cookie_name)
    if not session_id:
        return None
    data = store.get(session_id)
    return SessionData.from_dict(data) if data else None


def require_user(
    session: Optional[SessionData] = Depends(get_current_session),
) -> SessionData:
    if session is None:
        raise HTTPException(status_code=401, detail="Unauthorized: Please log in")
    return session


def require_admin(session: SessionData = Depends(require_user)) -> SessionData:
    if not session.is_admin:
        raise HTTPException(status_code=403, detail="Admins only")
    return session


def start_session(response: Response, store: SessionStore, data: SessionData) -> str:
    """Persist ``data`` under a fresh session id and set the cookie."""
    settings = get_settings()
    session_id = secrets.token_urlsafe(32)
    store.set(session_id, data.as_dict(), settings.session_max_age_seconds)
    response.set_cookie(
        key=settings.session_cookie_name,
        value=session_id,
        max_age=settings.session_max_age_seconds,
        httponly=True,
        samesite="lax",
        secure=settings.cookie_secure,
    )
    return session_id


def end_session(request: Request, response: Response, store: SessionStore) -> None:
    settings = get_settings()
    session_id = request.cookies.get(settings.session_cookie_name)
    if session_id:
        store.delete(session_id)
    response.delete_cookie(settings.session_cookie_name)
