"""
User and Authentication Schemas

These schemas define the shape of data for registration, login and
profile operations.

Schemas:
- RegisterRequest: Registration data, including the one-time registration key
- LoginRequest: Email and password
- TokenResponse: Identity token returned by register and login
- UserResponse: Public profile (never exposes the password hash)
- UserUpdate: Partial profile update
- UserDeleteRequest: Password re-entry required to delete an account

Pydantic v2 Features Used:
- Field(): Define constraints and metadata
- field_validator / model_validator: Validate and transform values
- EmailStr: Built-in email validation (email-validator)
"""

from pydantic import ConfigDict, EmailStr, Field, field_validator, model_validator

from reading_list_api.schemas.common import (
    MAX_PASSWORD_BYTES,
    CamelModel,
    check_password_length,
    strip_optional,
    strip_required,
)


class RegisterRequest(CamelModel):
    """
    Schema for user registration.

    Example request body:
    {
        "firstName": "Ada",
        "lastName": "Lovelace",
        "email": "ada@example.com",
        "password": "abc123",
        "registrationKey": "WELCOME-2024"
    }
    """

    first_name: str = Field(..., min_length=1, max_length=100, examples=["Ada"])
    last_name: str = Field(..., min_length=1, max_length=100, examples=["Lovelace"])
    email: EmailStr = Field(
        ...,
        description="User's email address",
        examples=["ada@example.com"],
    )
    password: str = Field(
        ...,
        min_length=1,
        max_length=MAX_PASSWORD_BYTES,
        description="Plain text password, hashed before storage",
    )
    registration_key: str = Field(
        ...,
        min_length=1,
        max_length=64,
        description="Single-use invitation code",
        examples=["WELCOME-2024"],
    )

    @field_validator("first_name", "last_name", "registration_key")
    @classmethod
    def must_not_be_blank(cls, v: str) -> str:
        return strip_required(v)

    @field_validator("password")
    @classmethod
    def password_fits_bcrypt(cls, v: str) -> str:
        return check_password_length(v)


class LoginRequest(CamelModel):
    """Schema for login with email and password."""

    email: EmailStr = Field(..., examples=["ada@example.com"])
    password: str = Field(..., min_length=1, max_length=MAX_PASSWORD_BYTES)

    @field_validator("password")
    @classmethod
    def password_fits_bcrypt(cls, v: str) -> str:
        return check_password_length(v)


class TokenResponse(CamelModel):
    """
    Identity token issued on registration and login.

    Send it back in the `token` request header.
    """

    token: str = Field(..., description="Signed identity token")
    token_type: str = Field(default="bearer", description="Token type")
    expires_in: int = Field(..., description="Token lifetime in seconds")


class UserResponse(CamelModel):
    """
    Schema for user responses.

    SECURITY: Never includes the password hash.
    """

    id: int = Field(..., description="Unique user identifier", examples=[1])
    first_name: str = Field(..., description="User's first name")
    last_name: str = Field(..., description="User's last name")
    email: EmailStr = Field(..., description="User's email address")

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": {
                "id": 1,
                "firstName": "Ada",
                "lastName": "Lovelace",
                "email": "ada@example.com",
            }
        },
    )


class UserUpdate(CamelModel):
    """
    Schema for updating a user profile.

    At least one of firstName, lastName or password must be supplied.
    A password, when supplied, is re-hashed; when omitted the stored hash
    is left untouched.
    """

    first_name: str | None = Field(default=None, min_length=1, max_length=100)
    last_name: str | None = Field(default=None, min_length=1, max_length=100)
    password: str | None = Field(default=None, min_length=1, max_length=MAX_PASSWORD_BYTES)

    @field_validator("first_name", "last_name")
    @classmethod
    def names_must_not_be_blank(cls, v: str | None) -> str | None:
        return strip_optional(v)

    @field_validator("password")
    @classmethod
    def password_fits_bcrypt(cls, v: str | None) -> str | None:
        return check_password_length(v)

    @model_validator(mode="after")
    def at_least_one_field(self) -> "UserUpdate":
        if self.first_name is None and self.last_name is None and self.password is None:
            raise ValueError(
                "You must update at least one of the following: "
                "firstName, lastName, password"
            )
        return self


class UserDeleteRequest(CamelModel):
    """Password re-entry required before an account is deleted."""

    password: str = Field(..., min_length=1, max_length=MAX_PASSWORD_BYTES)

    @field_validator("password")
    @classmethod
    def password_fits_bcrypt(cls, v: str) -> str:
        return check_password_length(v)
