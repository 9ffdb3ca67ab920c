"""
Environment variable loading and parsing.

- Loads .env from the project root when available (python-dotenv).
- Small typed readers: env_str, env_int, env_bool, env_list.
  Blank values fall back to the default.
"""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

# Project root: config is user_management/config/, root is 2 levels up
_CONFIG_DIR = Path(__file__).resolve().parent
_PACKAGE_DIR = _CONFIG_DIR.parent
_ROOT = _PACKAGE_DIR.parent
_ENV_PATH = _ROOT / ".env"

_TRUE_VALUES = ("1", "true", "yes", "on")
_FALSE_VALUES = ("0", "false", "no", "off")


def load_env() -> None:
    """Load .env from project root. Safe to call multiple times; never overrides real env."""
    if _ENV_PATH.is_file():
        load_dotenv(_ENV_PATH, override=False)


def env_str(name: str, default: str) -> str:
    return (os.getenv(name) or "").strip() or default


def env_int(name: str, default: int) -> int:
    """Integer env var. Raises ValueError naming the variable when unparsable."""
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError as e:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from e


def env_bool(name: str, default: bool) -> bool:
    """Boolean env var: 1/true/yes/on or 0/false/no/off (case-insensitive)."""
    raw = (os.getenv(name) or "").strip().lower()
    if not raw:
        return default
    if raw in _TRUE_VALUES:
        return True
    if raw in _FALSE_VALUES:
        return False
    raise ValueError(f"{name} must be a boolean, got {raw!r}")


def env_list(name: str, default: tuple[str, ...]) -> tuple[str, ...]:
    """Comma-separated env var; empty items dropped."""
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return default
    return tuple(item.strip() for item in raw.split(",") if item.strip())
