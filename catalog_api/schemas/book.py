"""
Book Pydantic Schemas

Schemas:
- BookCreate: Data accepted by the addBook mutation
"""

from pydantic import BaseModel, Field, field_validator


class BookCreate(BaseModel):
    """
    Schema for adding a book.

    The GraphQL contract declares author and published as nullable, but
    every stored book needs both, so they are required here.
    """

    title: str = Field(
        ...,
        min_length=1,
        max_length=500,
        description="Book title",
        examples=["Clean Code"],
    )

    author: str = Field(
        ...,
        min_length=1,
        max_length=255,
        description="Author name; unknown authors are created",
        examples=["Robert Martin"],
    )

    published: int = Field(
        ...,
        description="Year of publication",
        examples=[2008],
    )

    genres: list[str] = Field(
        default_factory=list,
        description="Ordered list of genre names",
        examples=[["refactoring", "agile"]],
    )

    @field_validator("title", "author")
    @classmethod
    def must_not_be_blank(cls, v: str) -> str:
        """Reject whitespace-only values and strip surrounding whitespace."""
        if not v.strip():
            raise ValueError("must not be empty or whitespace")
        return v.strip()

    @field_validator("genres")
    @classmethod
    def genres_must_be_short_names(cls, v: list[str]) -> list[str]:
        """Each genre must fit the genre column."""
        for genre in v:
            if not genre.strip():
                raise ValueError("genres must not contain empty names")
            if len(genre) > 100:
                raise ValueError("genre names must be at most 100 characters")
        return v
