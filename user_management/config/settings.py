"""
Application settings.

Typed, immutable settings built from environment variables (after loading
.env). get_settings() is cached; tests call get_settings.cache_clear() after
changing the environment, or build Settings(...) directly.
"""

from __future__ import annotations

import functools
from dataclasses import dataclass

from user_management.config.env import env_bool, env_int, env_list, env_str, load_env

DEFAULT_PUBLIC_PATH_PREFIXES = ("/docs", "/redoc", "/openapi.json", "/swagger", "/health")


@dataclass(frozen=True)
class Settings:
    """Service configuration. Defaults match a local development run."""

    api_title: str = "User Management API"
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    user_id_base: int = 0
    """Id assigned to the first user inserted into an empty store."""
    reject_noop_update: bool = True
    """Reject PUT /users/{id} when name and email are both unchanged."""
    public_path_prefixes: tuple[str, ...] = DEFAULT_PUBLIC_PATH_PREFIXES
    """Path prefixes that bypass the Authorization header check."""
    log_level: str = "INFO"
    log_format: str = "json"

    @classmethod
    def from_env(cls) -> "Settings":
        load_env()
        return cls(
            api_title=env_str("API_TITLE", cls.api_title),
            api_host=env_str("API_HOST", cls.api_host),
            api_port=env_int("API_PORT", cls.api_port),
            user_id_base=env_int("USER_ID_BASE", cls.user_id_base),
            reject_noop_update=env_bool("REJECT_NOOP_UPDATE", cls.reject_noop_update),
            public_path_prefixes=env_list("PUBLIC_PATH_PREFIXES", DEFAULT_PUBLIC_PATH_PREFIXES),
            log_level=env_str("LOG_LEVEL", cls.log_level).upper(),
            log_format=env_str("LOG_FORMAT", cls.log_format).lower(),
        )


@functools.lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the current application settings (read once from env)."""
    return Settings.from_env()
