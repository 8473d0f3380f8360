"""
GraphQL Author Type
"""

import strawberry


@strawberry.type(name="Author", description="A book author")
class AuthorType:
    """
    GraphQL type representing a book author.

    Maps to the Author SQLAlchemy model.
    """

    name: str
    id: strawberry.ID | None = None
    born: int | None = None
    book_count: int | None = None
