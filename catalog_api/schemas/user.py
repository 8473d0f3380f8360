"""
User Pydantic Schemas

Schemas:
- UserCreate: Data accepted by the createUser mutation
"""

from typing import Annotated

from pydantic import BaseModel, Field, StringConstraints, field_validator

# bcrypt only uses the first 72 bytes of a password
BCRYPT_MAX_BYTES = 72


class UserCreate(BaseModel):
    """
    Schema for user creation.

    Surrounding whitespace is stripped before lengths are checked. The
    password is optional; users created without one receive the
    configured default credential.
    """

    username: Annotated[
        str, StringConstraints(strip_whitespace=True, min_length=3, max_length=50)
    ] = Field(
        ...,
        description="Unique username (3-50 characters)",
        examples=["mluukkai", "root"],
    )

    favorite_genre: Annotated[
        str, StringConstraints(strip_whitespace=True, min_length=1, max_length=100)
    ] = Field(
        ...,
        description="User's favourite genre",
        examples=["refactoring", "crime"],
    )

    password: str | None = Field(
        default=None,
        min_length=1,
        description="Optional password (at most 72 bytes)",
    )

    @field_validator("password")
    @classmethod
    def password_fits_bcrypt(cls, v: str | None) -> str | None:
        """Reject passwords bcrypt would silently truncate."""
        if v is not None and len(v.encode("utf-8")) > BCRYPT_MAX_BYTES:
            raise ValueError(f"must be at most {BCRYPT_MAX_BYTES} bytes")
        return v
