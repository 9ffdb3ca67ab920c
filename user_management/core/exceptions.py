"""
Application-level exceptions.

The store and validators raise these; route handlers translate them into
status-coded responses (ValidationError -> 400, UserNotFoundError -> 404).
Anything else escaping a handler is an internal fault (500).
"""

from __future__ import annotations


class UserManagementError(Exception):
    """Base class for domain errors."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(UserManagementError):
    """Malformed payload, extra fields, or invalid name/email."""

    status_code = 400


class UserNotFoundError(UserManagementError):
    """No user with the requested id."""

    status_code = 404

    def __init__(self, user_id: int):
        super().__init__(f"User with ID {user_id} not found.")
        self.user_id = user_id


class AuthError(UserManagementError):
    """Missing or blank Authorization credential."""

    status_code = 401

    def __init__(self, message: str = "Unauthorized access. Please provide a valid token."):
        super().__init__(message)
