"""
Structured logging for the User Management API.

JSON logs with timestamp, level, logger name and event_type.
Use get_logger() in every module for aggregation-friendly output.
"""

from user_management.logging.logger import configure_structlog, get_logger

__all__ = ["configure_structlog", "get_logger"]
