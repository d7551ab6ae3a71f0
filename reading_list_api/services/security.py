"""
Security Service

Handles password hashing and identity token operations.

Security Features:
==================
1. Password hashing with bcrypt (passlib), salted per hash
2. Signed, time-limited identity tokens (python-jose, HS256)
3. Constant-time password verification

Usage:
    from reading_list_api.services.security import hash_password, verify_password

    hashed = hash_password("abc123")
    is_valid = verify_password("abc123", hashed)

    token = create_access_token(user_id=42)
    decode_access_token(token)  # -> 42, or raises InvalidTokenError
"""

import logging
from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt
from passlib.context import CryptContext

from reading_list_api.config import get_settings
from reading_list_api.exceptions import InvalidTokenError

logger = logging.getLogger(__name__)
settings = get_settings()

# -------------------------------------------------------------------------
# Password Hashing Configuration
# -------------------------------------------------------------------------
# - schemes: bcrypt generates a fresh salt for every hash
# - deprecated: "auto" means old hashes are automatically upgraded
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def hash_password(password: str) -> str:
    """
    Hash a plain text password using bcrypt.

    Example:
        >>> hashed = hash_password("abc123")
        >>> hashed.startswith("$2b$")
        True
    """
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Verify a plain password against a hashed password.

    Returns False (never raises) for a malformed stored hash, so callers can
    treat every failure as "wrong password".
    """
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except ValueError:
        logger.warning("Stored password hash could not be parsed")
        return False


# -------------------------------------------------------------------------
# Token Configuration
# -------------------------------------------------------------------------
ALGORITHM = "HS256"


def create_access_token(
    user_id: int,
    expires_delta: timedelta | None = None,
) -> str:
    """
    Issue a signed token identifying a user.

    The subject claim carries the user id; the token expires
    access_token_expire_minutes (one hour by default) after issuance.

    Args:
        user_id: Identifier embedded in the token
        expires_delta: Optional custom lifetime

    Returns:
        Encoded JWT token string
    """
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.access_token_expire_minutes)

    now = datetime.now(UTC)
    to_encode = {
        "sub": str(user_id),
        "iat": now,
        "exp": now + expires_delta,
    }

    return jwt.encode(to_encode, settings.secret_key, algorithm=ALGORITHM)


def decode_access_token(token: str) -> int:
    """
    Verify a token and return the user id it carries.

    Args:
        token: The JWT token string

    Returns:
        The user id stored in the subject claim

    Raises:
        InvalidTokenError: If the signature is invalid, the token is
            malformed or expired, or the subject is not a user id
    """
    try:
        payload = jwt.decode(token, settings.secret_key, algorithms=[ALGORITHM])
    except JWTError as e:
        logger.warning(f"Token rejected: {e}")
        raise InvalidTokenError() from e

    try:
        return int(payload.get("sub"))
    except (TypeError, ValueError) as e:
        logger.warning("Token rejected: subject is not a user id")
        raise InvalidTokenError() from e
