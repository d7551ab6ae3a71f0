"""
Shared schema building blocks.

The public JSON contract uses camelCase (firstName, isbn13, pageCount,
statusId, ...) while Python code uses snake_case. CamelModel generates the
camelCase aliases; populate_by_name keeps snake_case input working too.
FastAPI serializes response models by alias, so responses are camelCase.
"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model exposing camelCase aliases for every field."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )


class ResourceId(CamelModel):
    """Identifier of the record a write operation created or touched."""

    id: int = Field(..., description="Identifier of the affected record", examples=[1])


def strip_required(v: str) -> str:
    """Trim a required string and reject blank values."""
    if not v.strip():
        raise ValueError("must not be empty or whitespace")
    return v.strip()


def strip_optional(v: str | None) -> str | None:
    """Trim an optional string; a blank value is rejected like a required one."""
    if v is None:
        return v
    return strip_required(v)


# bcrypt ignores everything past the first 72 bytes of a password
MAX_PASSWORD_BYTES = 72


def check_password_length(v: str | None) -> str | None:
    """Reject passwords bcrypt would silently truncate."""
    if v is not None and len(v.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise ValueError(f"must be at most {MAX_PASSWORD_BYTES} bytes")
    return v
