"""
Configuration management for the User Management API.

Loads settings from environment variables and an optional .env file at the
project root. Exposes a single source of truth for all service configuration.
"""

from user_management.config.settings import Settings, get_settings  # noqa: F401

__all__ = ["Settings", "get_settings"]
