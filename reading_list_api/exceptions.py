"""
HTTP Error Taxonomy

Every failure a handler reports on purpose is one of these classes. They
are HTTPException subclasses, so FastAPI renders them as
{"detail": "<message>"} with the right status code and nothing else is
needed at the call site:

    raise NotFoundError("Book not found")

Anything else that escapes a handler is caught by the catch-all handler in
main.py and answered with a generic 500.

| Class                | Status | Used for                                   |
|----------------------|--------|--------------------------------------------|
| InvalidArgumentError | 400    | Well-formed input that names a bad value   |
| UnauthorizedError    | 401    | Bad credentials or registration key        |
| InvalidTokenError    | 401    | Token present but invalid or expired       |
| MissingTokenError    | 403    | Token header absent                        |
| NotFoundError        | 404    | Resource does not exist                    |
| ConflictError        | 409    | Duplicate email, ISBN or pairing           |
"""

from fastapi import HTTPException, status


class APIError(HTTPException):
    """Base class carrying a default status code and message."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail: str = "An internal error occurred."

    def __init__(self, detail: str | None = None, headers: dict | None = None) -> None:
        super().__init__(
            status_code=self.status_code,
            detail=detail or self.default_detail,
            headers=headers,
        )


class InvalidArgumentError(APIError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Invalid argument"


class UnauthorizedError(APIError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = "Unauthorized"


class InvalidTokenError(APIError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = "Token is not valid"


class MissingTokenError(APIError):
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = "Not authorized"


class NotFoundError(APIError):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "Resource not found"


class ConflictError(APIError):
    status_code = status.HTTP_409_CONFLICT
    default_detail = "Resource already exists"
