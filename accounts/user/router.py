"""User domain router.

User management routes: creation workflow, reads, partial update, soft and
force deletion, restore, and username/email existence checks.
"""

from typing import Annotated, Any

from fastapi import APIRouter, Body, Query, status
from pydantic import EmailStr

from accounts.core.constants import CommonResponses, Routes
from accounts.core.validation import (
    reject_fields,
    require_query_param,
    validate_payload,
    validate_value,
)
from accounts.user.dependencies import UserServiceDep
from accounts.user.exceptions import username_immutable
from accounts.user.schemas import (
    DeletedUserRef,
    DeleteResponse,
    ExistsResponse,
    UserCreate,
    UserRead,
    UserUpdate,
    UserWithProfileRead,
)

router = APIRouter(
    prefix=Routes.USER.prefix,
    tags=[Routes.USER.tag],
    responses={**CommonResponses.INTERNAL_ERROR},
)

IncludeDeleted = Annotated[
    bool,
    Query(alias="includeDeleted", description="Also return soft-deleted users"),
]


@router.post(
    "",
    response_model=UserWithProfileRead,
    status_code=status.HTTP_201_CREATED,
    responses={**CommonResponses.BAD_REQUEST},
)
# Sync handler: bcrypt hashing runs in the threadpool, off the event loop.
def create_user(payload: UserCreate, service: UserServiceDep):
    """Create a user together with its profile.

    Username and email must be unused, including by soft-deleted users.
    """
    user, profile = service.create_user(payload)
    return {"user": user, "profile": profile}


@router.get("", response_model=list[UserRead])
async def list_users(service: UserServiceDep, include_deleted: IncludeDeleted = False):
    """List users. Soft-deleted users are excluded unless requested."""
    return service.list_users(include_deleted=include_deleted)


@router.get(
    "/username-exists",
    response_model=ExistsResponse,
    responses={**CommonResponses.BAD_REQUEST},
)
async def check_username_exists(service: UserServiceDep, username: str | None = None):
    username = require_query_param("username", username)
    return {"exists": service.username_exists(username)}


@router.get(
    "/email-exists",
    response_model=ExistsResponse,
    responses={**CommonResponses.BAD_REQUEST},
)
async def check_email_exists(service: UserServiceDep, email: str | None = None):
    email = require_query_param("email", email)
    email = validate_value(EmailStr, email, "email")
    return {"exists": service.email_exists(email)}


@router.get(
    "/{user_id}",
    response_model=UserRead,
    responses={**CommonResponses.NOT_FOUND},
)
async def get_user(
    user_id: int, service: UserServiceDep, include_deleted: IncludeDeleted = False
):
    """Get a user by ID."""
    return service.get_user(user_id, include_deleted=include_deleted)


@router.get(
    "/{user_id}/profile",
    response_model=UserWithProfileRead,
    responses={**CommonResponses.NOT_FOUND},
)
async def get_user_with_profile(user_id: int, service: UserServiceDep):
    """Get a live user together with its profile."""
    user, profile = service.get_user_with_profile(user_id)
    return {"user": user, "profile": profile}


@router.put(
    "/{user_id}",
    response_model=UserRead,
    responses={**CommonResponses.BAD_REQUEST, **CommonResponses.NOT_FOUND},
)
# Sync handler: bcrypt hashing runs in the threadpool, off the event loop.
def update_user(
    user_id: int,
    service: UserServiceDep,
    body: Annotated[dict[str, Any], Body()],
):
    """Partially update a user.

    Any payload that mentions ``username`` is rejected before the remaining
    fields are validated, since usernames are immutable.
    """
    reject_fields(body, ("username",), username_immutable())
    payload = validate_payload(UserUpdate, body)
    return service.update_user(user_id, payload)


@router.delete(
    "/{user_id}/soft",
    response_model=DeleteResponse,
    responses={**CommonResponses.NOT_FOUND},
)
async def soft_delete_user(user_id: int, service: UserServiceDep):
    """Mark a user and its profile as deleted."""
    user = service.soft_delete_user(user_id)
    return DeleteResponse(
        message="User soft deleted successfully.",
        user=DeletedUserRef(id=user_id, deleted_at=user.deleted_at),
    )


@router.post(
    "/{user_id}/restore",
    response_model=UserRead,
    responses={**CommonResponses.NOT_FOUND},
)
async def restore_user(user_id: int, service: UserServiceDep):
    """Undo a soft delete."""
    return service.restore_user(user_id)


@router.delete(
    "/{user_id}/force",
    response_model=DeleteResponse,
    response_model_exclude_none=True,
    responses={**CommonResponses.NOT_FOUND},
)
async def force_delete_user(user_id: int, service: UserServiceDep):
    """Permanently delete a user and its profile. Irreversible."""
    service.force_delete_user(user_id)
    return DeleteResponse(message="User deleted successfully.")
