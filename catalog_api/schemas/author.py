"""
Author Pydantic Schemas

Schemas:
- AuthorBornUpdate: Data accepted by the editAuthor mutation
"""

from pydantic import BaseModel, Field, field_validator


class AuthorBornUpdate(BaseModel):
    """Schema for setting an author's birth year."""

    name: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="Name of the author to edit",
        examples=["Robert Martin"],
    )

    born: int = Field(
        ...,
        description="Year of birth",
        examples=[1952],
    )

    @field_validator("name")
    @classmethod
    def name_must_not_be_empty(cls, v: str) -> str:
        """Validate that name is not just whitespace."""
        if not v.strip():
            raise ValueError("Name cannot be empty or whitespace")
        return v.strip()
