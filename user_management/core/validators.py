"""
Payload validation for create/update requests.

Pure functions: no I/O, no store access. validate_user_input() is the single
entry point used by the route handlers; the smaller predicates are exposed
for reuse and testing.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic import ValidationError as PydanticValidationError

from user_management.core.exceptions import ValidationError

RECOGNIZED_FIELDS = frozenset({"name", "email"})

# local@domain.tld, no whitespace or extra '@' in any part; not RFC 5322
_EMAIL_RE = re.compile(r"[^@\s]+@[^@\s]+\.[^@\s]+", re.IGNORECASE)

NOT_AN_OBJECT_MESSAGE = "Request body must be a JSON object with name and email fields."
EXTRA_FIELDS_MESSAGE = "Please enter only name and email in JSON format. Extra fields are not allowed."
INVALID_USER_MESSAGE = "Invalid user data. Name must be provided and email must be valid."
NO_CHANGES_MESSAGE = "No changes detected. Please modify user data before updating."


class UserInput(BaseModel):
    """Create/update payload. Strict: name and email must be JSON strings."""

    model_config = ConfigDict(strict=True)

    name: str
    email: str


def is_non_empty(text: Any) -> bool:
    return isinstance(text, str) and bool(text.strip())


def is_valid_email(text: Any) -> bool:
    """True if text looks like local@domain.tld."""
    if not isinstance(text, str):
        return False
    return _EMAIL_RE.fullmatch(text) is not None


def extra_fields(payload: Mapping[str, Any]) -> list[str]:
    """Keys of payload outside the recognized name/email set, sorted."""
    return sorted(str(key) for key in payload if key not in RECOGNIZED_FIELDS)


def has_extra_fields(payload: Mapping[str, Any]) -> bool:
    return bool(extra_fields(payload))


def is_noop_update(current: Any, name: str, email: str) -> bool:
    """True when name and email are both identical to the current user's values."""
    return current.name == name and current.email == email


def validate_user_input(payload: Any) -> UserInput:
    """
    Validate a create/update payload and return the parsed UserInput.

    Rejection order: non-object body, extra fields, then missing / null /
    non-string / blank name or malformed email. Raises ValidationError.
    """
    if not isinstance(payload, Mapping):
        raise ValidationError(NOT_AN_OBJECT_MESSAGE)
    if has_extra_fields(payload):
        raise ValidationError(EXTRA_FIELDS_MESSAGE)
    try:
        data = UserInput.model_validate(dict(payload))
    except PydanticValidationError as e:
        raise ValidationError(INVALID_USER_MESSAGE) from e
    if not is_non_empty(data.name) or not is_valid_email(data.email):
        raise ValidationError(INVALID_USER_MESSAGE)
    return data
