"""Accounts and sessions: registration, login and request tokens."""

import os
import secrets
import time
from dataclasses import dataclass, field
from typing import Dict, Mapping, Optional

import database as db
from tripmind.common.errors import AuthenticationError, TripMindError, ValidationError, handles_errors
from tripmind.common.validation import validate_registration_input

SESSION_DURATION = 24 * 60 * 60  # seconds
SESSION_COOKIE_NAME = "tripmind_session"


@dataclass
class Session:
    user_id: int
    username: str
    created: float = field(default_factory=time.time)

    @property
    def expires(self) -> float:
        return self.created + SESSION_DURATION

    def is_expired(self) -> bool:
        return time.time() > self.expires


class SessionStore:
    """Sessions keyed by token. They live only as long as the server process."""

    def __init__(self):
        self._sessions: Dict[str, Session] = {}

    def __contains__(self, token) -> bool:
        return token in self._sessions

    def create(self, user: Dict) -> str:
        token = secrets.token_urlsafe(32)
        self._sessions[token] = Session(user_id=user["id"], username=user["username"])
        return token

    def get(self, token: Optional[str]) -> Optional[Session]:
        """Return the live session for a token, dropping it if expired."""
        session = self._sessions.get(token) if token else None
        if session and session.is_expired():
            del self._sessions[token]
            return None
        return session

    def destroy(self, token: Optional[str]) -> bool:
        return self._sessions.pop(token, None) is not None

    def clear(self):
        self._sessions.clear()


sessions = SessionStore()


# ============ Accounts ============

def register_user(data) -> int:
    """Create an account from a registration body. Returns the new user ID."""
    account = validate_registration_input(data)

    conflicts = []
    if db.username_exists(account["username"]):
        conflicts.append({"field": "username", "message": "Username already taken"})
    if db.email_exists(account["email"]):
        conflicts.append({"field": "email", "message": "Email already registered"})
    if conflicts:
        raise ValidationError("Invalid registration", conflicts)

    user_id = db.create_user(account["username"], account["email"], account["password"])
    if not user_id:
        raise TripMindError("Failed to create user")
    print(f"[AUTH] Registered user: {account['username']}")
    return user_id


def login(username: str, password: str) -> tuple:
    """Check credentials and open a session. Returns ``(user, token)``."""
    if not username or not password:
        raise ValidationError("Username and password required")

    user = db.authenticate_user(username, password)
    if not user:
        raise AuthenticationError("Invalid username or password")
    return user, sessions.create(user)


@handles_errors("AUTH")
def register_handler(data):
    register_user(data)
    return {"success": True}, 200


@handles_errors("AUTH")
def login_handler(data):
    user, token = login(
        str(data.get("username", "")).strip(),
        str(data.get("password", "")).strip(),
    )
    return {"success": True, "username": user["username"], "token": token}, 200


def ensure_default_user():
    """Create the admin account from AUTH_* env vars on first start."""
    username = os.environ.get("AUTH_USERNAME", "admin")
    if db.username_exists(username):
        return

    user_id = db.create_user(
        username,
        os.environ.get("AUTH_EMAIL", "admin@example.com"),
        os.environ.get("AUTH_PASSWORD", "tripmind"),
    )
    if user_id:
        print(f"[AUTH] Created default user: {username}")
    else:
        print(f"[AUTH] Failed to create default user: {username}")


def is_auth_enabled() -> bool:
    return os.environ.get("AUTH_DISABLED", "").lower() != "true"


# ============ Request tokens ============

def _cookie_value(cookie_header: Optional[str], name: str) -> Optional[str]:
    for item in (cookie_header or "").split(";"):
        key, sep, value = item.strip().partition("=")
        if sep and key.strip() == name:
            return value.strip() or None
    return None


def get_request_token(headers: Mapping[str, str]) -> Optional[str]:
    """Session token from the session cookie, else from ``Authorization: Bearer``."""
    token = _cookie_value(headers.get("Cookie"), SESSION_COOKIE_NAME)
    if token:
        return token

    scheme, _, value = (headers.get("Authorization") or "").strip().partition(" ")
    if scheme.lower() == "bearer" and value.strip():
        return value.strip()
    return None


def session_user_id(token: Optional[str]) -> Optional[int]:
    session = sessions.get(token)
    return session.user_id if session else None


def _cookie(value: str, max_age: int, secure: bool) -> str:
    parts = [f"{SESSION_COOKIE_NAME}={value}", "Path=/", "HttpOnly", "SameSite=Strict", f"Max-Age={max_age}"]
    if secure:
        parts.append("Secure")
    return "; ".join(parts)


def session_cookie(token: str, secure: bool = False) -> str:
    """Set-Cookie value carrying a session token."""
    return _cookie(token, SESSION_DURATION, secure)


def logout_cookie() -> str:
    return _cookie("", 0, False)
