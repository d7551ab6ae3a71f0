"""
Authentication Router

Handles user authentication endpoints:
- Registration (invitation key + email/password -> identity token)
- Login (email/password -> identity token)

Security:
=========
- Passwords are hashed with bcrypt before storage
- Plain text passwords and tokens are never logged or stored
- Registration keys are single use: the key is claimed with one
  conditional UPDATE and the claim is committed before the user row is
  written, so a key is never accepted twice, even if creating the user
  fails afterwards
- Login answers an unknown email and a wrong password identically
"""

import logging
from datetime import UTC, datetime

from fastapi import APIRouter, Request
from sqlalchemy import select, update

from reading_list_api.config import get_settings
from reading_list_api.database import commit_or_conflict
from reading_list_api.dependencies import DbSession
from reading_list_api.exceptions import ConflictError, UnauthorizedError
from reading_list_api.models import RegistrationKey, User
from reading_list_api.schemas.user import LoginRequest, RegisterRequest, TokenResponse
from reading_list_api.services.rate_limiter import limiter
from reading_list_api.services.security import (
    create_access_token,
    hash_password,
    verify_password,
)

logger = logging.getLogger(__name__)
settings = get_settings()

router = APIRouter(
    tags=["Authentication"],
    responses={
        400: {"description": "Bad request"},
        401: {"description": "Unauthorized"},
    },
)


def issue_token(user: User) -> TokenResponse:
    return TokenResponse(
        token=create_access_token(user.id),
        token_type="bearer",
        expires_in=settings.access_token_expire_minutes * 60,  # Minutes to seconds
    )


def email_registered(db: DbSession, email: str) -> bool:
    stmt = select(User.id).where(User.email == email)
    return db.execute(stmt.limit(1)).first() is not None


def claim_registration_key(db: DbSession, key_code: str) -> bool:
    """
    Mark a registration key as used if it exists and is still unused.

    The WHERE clause makes check and claim a single statement, so two
    registrations racing for the same key cannot both succeed.

    Returns:
        True if this call claimed the key
    """
    stmt = (
        update(RegistrationKey)
        .where(
            RegistrationKey.key_code == key_code,
            RegistrationKey.used.is_(False),
        )
        .values(used=True, used_at=datetime.now(UTC))
    )
    result = db.execute(stmt)
    return result.rowcount == 1


# -------------------------------------------------------------------------
# Registration Endpoint
# -------------------------------------------------------------------------
@router.post(
    "/register",
    response_model=TokenResponse,
    summary="Register a new user",
    description="""
    Create a new user account. Requires an unused registration key.

    **Returns:** an identity token, as /login does.

    **Errors:**
    - 409 if the email is already registered
    - 401 if the registration key does not exist or was already used
    """,
    responses={409: {"description": "User already exists"}},
)
@limiter.limit(settings.rate_limit_auth)
def register(
    request: Request,
    user_data: RegisterRequest,
    db: DbSession,
) -> TokenResponse:
    """
    Register a new user.

    1. Validates the request body (handled by Pydantic)
    2. Rejects an email that is already registered
    3. Claims the registration key and commits the claim
    4. Hashes the password and creates the user
    5. Returns an identity token for the new user
    """
    if email_registered(db, user_data.email):
        raise ConflictError("User already exists")

    if not claim_registration_key(db, user_data.registration_key):
        logger.warning("Registration rejected: invalid or used registration key")
        raise UnauthorizedError("Invalid registration key or key already used")

    # The claim stands even if creating the user fails below
    db.commit()

    user = User(
        first_name=user_data.first_name,
        last_name=user_data.last_name,
        email=user_data.email,
        password_hash=hash_password(user_data.password),
    )
    db.add(user)
    commit_or_conflict(db, "User already exists")
    db.refresh(user)

    logger.info(f"New user registered: {user.id}")

    return issue_token(user)


# -------------------------------------------------------------------------
# Login Endpoint
# -------------------------------------------------------------------------
@router.post(
    "/login",
    response_model=TokenResponse,
    summary="Login with email and password",
    description="""
    Authenticate with email and password to receive an identity token.

    **Usage:**
    Send the token in the `token` header on protected requests:
    ```
    token: <token>
    ```
    """,
)
@limiter.limit(settings.rate_limit_auth)
def login(
    request: Request,
    credentials: LoginRequest,
    db: DbSession,
) -> TokenResponse:
    """
    Authenticate a user and return an identity token.

    An unknown email and a wrong password produce the same 401, so the
    response does not reveal which emails are registered.
    """
    stmt = select(User).where(User.email == credentials.email)
    user = db.execute(stmt).scalar_one_or_none()

    if user is None or not verify_password(credentials.password, user.password_hash):
        logger.warning("Login failed: invalid email or password")
        raise UnauthorizedError("Invalid email or password")

    logger.info(f"User logged in: {user.id}")

    return issue_token(user)
