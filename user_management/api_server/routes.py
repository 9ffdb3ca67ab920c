"""
User routes: GET/POST /users, GET/PUT/DELETE /users/{user_id}.

Each handler validates the payload, calls the store, and translates domain
errors into HTTP errors (ValidationError -> 400, UserNotFoundError -> 404).
Unexpected exceptions are left to ExceptionHandlingMiddleware.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException, Request, Response, status
from pydantic import BaseModel, Field

from user_management.config import Settings
from user_management.core.exceptions import UserManagementError, UserNotFoundError, ValidationError
from user_management.core.validators import NO_CHANGES_MESSAGE, is_noop_update, validate_user_input
from user_management.database import InMemoryUserStore, User
from user_management.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(prefix="/users", tags=["users"])


class UserResponse(BaseModel):
    """Serialized user."""

    id: int = Field(..., description="Store-assigned id, immutable")
    name: str = Field(..., description="Non-empty display name")
    email: str = Field(..., description="Email address (local@domain.tld)")

    @classmethod
    def from_user(cls, user: User) -> "UserResponse":
        return cls(**user.to_dict())


# -----------------------------------------------------------------------------
# Dependencies (set on app.state by create_app)
# -----------------------------------------------------------------------------


def get_store(request: Request) -> InMemoryUserStore:
    return request.app.state.user_store


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def _http_error(exc: UserManagementError) -> HTTPException:
    return HTTPException(status_code=exc.status_code, detail=exc.message)


def _validate(payload: Any, user_id: int | None = None):
    try:
        return validate_user_input(payload)
    except ValidationError as e:
        logger.info("user_payload_rejected", user_id=user_id, reason=e.message)
        raise _http_error(e) from e


# -----------------------------------------------------------------------------
# Handlers
# -----------------------------------------------------------------------------


@router.get("", response_model=list[UserResponse])
def list_users(store: InMemoryUserStore = Depends(get_store)) -> list[UserResponse]:
    """Return every user in insertion order."""
    return [UserResponse.from_user(u) for u in store.list_users()]


@router.get("/{user_id}", response_model=UserResponse)
def get_user(user_id: int, store: InMemoryUserStore = Depends(get_store)) -> UserResponse:
    """Return one user. 404 if the id is unknown."""
    user = store.get_user(user_id)
    if user is None:
        raise _http_error(UserNotFoundError(user_id))
    return UserResponse.from_user(user)


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def create_user(
    payload: Any = Body(..., examples=[{"name": "Ann", "email": "ann@example.com"}]),
    store: InMemoryUserStore = Depends(get_store),
) -> UserResponse:
    """
    Create a user from {"name", "email"}.

    400 when the body has fields other than name/email, the name is blank,
    or the email is malformed.
    """
    data = _validate(payload)
    user = store.insert(data.name, data.email)
    logger.info("user_created", user_id=user.id)
    return UserResponse.from_user(user)


@router.put("/{user_id}", response_model=UserResponse)
def update_user(
    user_id: int,
    payload: Any = Body(..., examples=[{"name": "Ann", "email": "ann@example.com"}]),
    store: InMemoryUserStore = Depends(get_store),
    settings: Settings = Depends(get_app_settings),
) -> UserResponse:
    """
    Replace name and email of an existing user.

    404 if the id is unknown (checked before the body), 400 on an invalid
    body, and 400 when nothing changes and reject_noop_update is enabled.
    """
    current = store.get_user(user_id)
    if current is None:
        raise _http_error(UserNotFoundError(user_id))

    data = _validate(payload, user_id=user_id)
    if settings.reject_noop_update and is_noop_update(current, data.name, data.email):
        logger.info("user_update_noop", user_id=user_id)
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=NO_CHANGES_MESSAGE)

    try:
        user = store.update(user_id, data.name, data.email)
    except UserNotFoundError as e:
        raise _http_error(e) from e
    logger.info("user_updated", user_id=user_id)
    return UserResponse.from_user(user)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
def delete_user(user_id: int, store: InMemoryUserStore = Depends(get_store)) -> Response:
    """Remove a user. 204 with no body; 404 if the id is unknown."""
    try:
        store.delete(user_id)
    except UserNotFoundError as e:
        raise _http_error(e) from e
    logger.info("user_deleted", user_id=user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
