"""
Domain models for stored entities.

Plain dataclasses; no framework coupling so the store stays swappable.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any


@dataclass
class User:
    """Stored user record. id is assigned by the store and never changes."""

    id: int
    name: str
    email: str

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
