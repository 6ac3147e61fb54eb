"""
Session stub - who is "logged in" and as which role.

NOT A SECURITY BOUNDARY. The username and role live in a client-side
key-value store (the browser's cookies when served over HTTP). Nothing is
signed, hashed or verified against a server-side record, so any client can
claim any identity. Use it to route people to the right pages, never to
protect data. Real access control would need credentials and signed
sessions on top of this.
"""

import logging
from dataclasses import dataclass
from typing import MutableMapping, Optional

from lailatov.core.constants import ROLE_COACH, ROLE_PARENT, SESSION_ROLE_KEY, SESSION_USERNAME_KEY
from lailatov.core.settings import settings

logger = logging.getLogger(__name__)

VALID_ROLES = (ROLE_COACH, ROLE_PARENT)


# Used by: Session.current_user(), api/auth.py (GET /auth/me)
@dataclass
class CurrentUser:
    username: Optional[str] = None
    role: Optional[str] = None


# Used by: api/deps.py (one per request), api/auth.py
class Session:
    """Reads and writes the two session keys in whatever mapping it is given."""

    def __init__(self, storage: MutableMapping[str, str]):
        self._storage = storage

    def login(self, username: str, role: str) -> None:
        if role not in VALID_ROLES:
            raise ValueError(f"Unknown role: {role}")
        self._storage[SESSION_USERNAME_KEY] = username
        self._storage[SESSION_ROLE_KEY] = role
        logger.info(f"Session started: {role} '{username}'")

    def logout(self) -> None:
        username = self._storage.get(SESSION_USERNAME_KEY)
        if username is not None:
            logger.info(f"Session ended for '{username}'")
        self._storage.pop(SESSION_USERNAME_KEY, None)
        self._storage.pop(SESSION_ROLE_KEY, None)

    def current_user(self) -> CurrentUser:
        role = self._storage.get(SESSION_ROLE_KEY)
        return CurrentUser(
            username=self._storage.get(SESSION_USERNAME_KEY),
            role=role if role in VALID_ROLES else None,
        )

    def is_coach(self) -> bool:
        return self.current_user().role == ROLE_COACH

    def is_parent(self, expected_username: str) -> bool:
        """Case-sensitive: 'Levi-Family' is not 'levi-family'."""
        user = self.current_user()
        return user.role == ROLE_PARENT and user.username == expected_username


# Used by: api/auth.py (POST /auth/login)
def resolve_login(raw_username: str) -> CurrentUser:
    """
    Map what was typed on the login page to a session identity.

    The coach username matches in any case and is stored lower-cased; any
    other non-empty name is a parent username kept verbatim.
    Raises ValueError on an empty username.
    """
    username = (raw_username or "").strip()
    if not username:
        raise ValueError("Username is required")

    if username.lower() == settings.COACH_USERNAME.lower():
        return CurrentUser(username=settings.COACH_USERNAME.lower(), role=ROLE_COACH)

    return CurrentUser(username=username, role=ROLE_PARENT)
