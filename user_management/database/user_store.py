"""
In-memory user store: ordered list of users guarded by a lock.

Ids: the first user ever inserted gets id_base; every later insert gets the
highest id ever assigned + 1, so ids are never reused after deletes.
All public methods return copies; stored records are never handed out.
"""

from __future__ import annotations

import threading
from dataclasses import replace

from user_management.core.exceptions import UserNotFoundError
from user_management.database.models import User
from user_management.logging import get_logger

logger = get_logger(__name__)


class InMemoryUserStore:
    """Thread-safe ordered collection of User records keyed by integer id."""

    def __init__(self, id_base: int = 0):
        self._lock = threading.RLock()
        self._users: list[User] = []
        self._id_base = id_base
        self._last_id: int | None = None

    def __len__(self) -> int:
        with self._lock:
            return len(self._users)

    def _find(self, user_id: int) -> User | None:
        for user in self._users:
            if user.id == user_id:
                return user
        return None

    def _next_id(self) -> int:
        if self._last_id is None:
            return self._id_base
        return self._last_id + 1

    def list_users(self) -> list[User]:
        """All users in insertion order."""
        with self._lock:
            return [replace(u) for u in self._users]

    def get_user(self, user_id: int) -> User | None:
        with self._lock:
            user = self._find(user_id)
            return replace(user) if user is not None else None

    def insert(self, name: str, email: str) -> User:
        """Append a new user with the next id and return it."""
        with self._lock:
            user = User(id=self._next_id(), name=name, email=email)
            self._users.append(user)
            self._last_id = user.id
            logger.debug("user_store_insert", user_id=user.id, count=len(self._users))
            return replace(user)

    def update(self, user_id: int, name: str, email: str) -> User:
        """Replace name and email in place. Raises UserNotFoundError if absent."""
        with self._lock:
            user = self._find(user_id)
            if user is None:
                raise UserNotFoundError(user_id)
            user.name = name
            user.email = email
            return replace(user)

    def delete(self, user_id: int) -> None:
        """Remove the user. Raises UserNotFoundError if absent."""
        with self._lock:
            user = self._find(user_id)
            if user is None:
                raise UserNotFoundError(user_id)
            self._users.remove(user)
            logger.debug("user_store_delete", user_id=user_id, count=len(self._users))

    def clear(self) -> None:
        """Drop every user and restart id assignment at id_base."""
        with self._lock:
            self._users.clear()
            self._last_id = None


# -----------------------------------------------------------------------------
# Process-wide store
# -----------------------------------------------------------------------------

_store: InMemoryUserStore | None = None
_store_lock = threading.Lock()


def get_user_store() -> InMemoryUserStore:
    """Create or return the process-wide store (USER_ID_BASE from settings)."""
    global _store
    if _store is None:
        with _store_lock:
            if _store is None:
                from user_management.config import get_settings

                id_base = get_settings().user_id_base
                _store = InMemoryUserStore(id_base=id_base)
                logger.info("user_store_created", id_base=id_base)
    return _store


def reset_store_for_test() -> None:
    """Drop the process-wide store so the next get_user_store() builds a fresh one."""
    global _store
    with _store_lock:
        _store = None
