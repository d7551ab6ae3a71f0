"""
Users Router

User profile management endpoints.

Endpoints:
- GET    /user/me                  - Caller's profile (token required)
- GET    /user/{user_id}           - Profile
- PUT    /user/{user_id}           - Update name and/or password
- DELETE /user/{user_id}           - Delete account (password required)
- GET    /user/{user_id}/readingLists - Lists owned by the user

Business Rules:
- The password hash is never returned
- A password is only re-hashed when a new one is supplied
- Deleting an account requires the current password and removes the
  user's reading lists
"""

import logging

from fastapi import APIRouter, Request
from sqlalchemy import select

from reading_list_api.config import get_settings
from reading_list_api.dependencies import DbSession, TokenUser, get_user_or_404
from reading_list_api.exceptions import UnauthorizedError
from reading_list_api.models import ReadingList
from reading_list_api.schemas import (
    ReadingListResponse,
    ResourceId,
    UserDeleteRequest,
    UserResponse,
    UserUpdate,
)
from reading_list_api.services.rate_limiter import limiter
from reading_list_api.services.security import hash_password, verify_password

logger = logging.getLogger(__name__)
settings = get_settings()

# =============================================================================
# Router Configuration
# =============================================================================

router = APIRouter(
    prefix="/user",
    tags=["Users"],
    responses={
        404: {"description": "User not found"},
    },
)


# =============================================================================
# Current User Endpoint
# =============================================================================
# Declared before /{user_id} so "me" is not parsed as an id.

@router.get(
    "/me",
    response_model=UserResponse,
    summary="Get current user profile",
    description="Get the profile of the user the token was issued to.",
    responses={
        401: {"description": "Token is not valid"},
        403: {"description": "Not authorized"},
    },
)
@limiter.limit(settings.rate_limit_default)
def get_current_user_profile(
    request: Request,
    db: DbSession,
    user_id: TokenUser,
) -> UserResponse:
    user = get_user_or_404(db, user_id)
    return UserResponse.model_validate(user)


# =============================================================================
# User Endpoints
# =============================================================================

@router.get(
    "/{user_id}",
    response_model=UserResponse,
    summary="Get a user",
)
@limiter.limit(settings.rate_limit_default)
def get_user(
    request: Request,
    user_id: int,
    db: DbSession,
) -> UserResponse:
    user = get_user_or_404(db, user_id)
    return UserResponse.model_validate(user)


@router.put(
    "/{user_id}",
    response_model=ResourceId,
    summary="Update a user",
    description="Update firstName, lastName and/or password. At least one is required.",
)
@limiter.limit(settings.rate_limit_default)
def update_user(
    request: Request,
    user_id: int,
    user_data: UserUpdate,
    db: DbSession,
) -> ResourceId:
    """
    Update a user's profile.

    Omitted fields keep their current value. A supplied password replaces
    the stored hash; without one the hash is left as it is.
    """
    user = get_user_or_404(db, user_id)

    update_data = user_data.model_dump(exclude_unset=True, exclude_none=True)

    password = update_data.pop("password", None)
    if password is not None:
        user.password_hash = hash_password(password)

    for field, value in update_data.items():
        setattr(user, field, value)

    db.commit()

    return ResourceId(id=user.id)


@router.delete(
    "/{user_id}",
    response_model=ResourceId,
    summary="Delete a user",
    description="Delete a user and their reading lists. The current password is required.",
    responses={401: {"description": "Invalid password"}},
)
@limiter.limit(settings.rate_limit_auth)
def delete_user(
    request: Request,
    user_id: int,
    confirmation: UserDeleteRequest,
    db: DbSession,
) -> ResourceId:
    """
    Delete a user after verifying their password.

    Raises:
        NotFoundError: 404 if the user does not exist
        UnauthorizedError: 401 if the password does not match (nothing is deleted)
    """
    user = get_user_or_404(db, user_id)

    if not verify_password(confirmation.password, user.password_hash):
        logger.warning(f"User deletion rejected for {user_id}: invalid password")
        raise UnauthorizedError("Invalid password")

    db.delete(user)
    db.commit()

    logger.info(f"User deleted: {user_id}")

    return ResourceId(id=user_id)


@router.get(
    "/{user_id}/readingLists",
    response_model=list[ReadingListResponse],
    summary="List a user's reading lists",
)
@limiter.limit(settings.rate_limit_default)
def list_user_reading_lists(
    request: Request,
    user_id: int,
    db: DbSession,
) -> list[ReadingListResponse]:
    get_user_or_404(db, user_id)

    stmt = (
        select(ReadingList)
        .where(ReadingList.user_id == user_id)
        .order_by(ReadingList.id)
    )
    reading_lists = db.execute(stmt).scalars().all()

    return [ReadingListResponse.model_validate(rl) for rl in reading_lists]
