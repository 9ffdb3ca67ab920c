"""
Storage layer: in-memory user store.

Process-wide InMemoryUserStore via get_user_store(); contents live for the
lifetime of the process only.
"""

from user_management.database.models import User
from user_management.database.user_store import (
    InMemoryUserStore,
    get_user_store,
    reset_store_for_test,
)

__all__ = [
    "InMemoryUserStore",
    "User",
    "get_user_store",
    "reset_store_for_test",
]
