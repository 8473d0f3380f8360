"""
GraphQL Book Type
"""

import strawberry

from catalog_api.graphql.types.author import AuthorType


@strawberry.type(name="Book", description="A book in the catalog")
class BookType:
    """
    GraphQL type representing a book with its author populated.
    """

    title: str
    published: int
    author: AuthorType
    id: strawberry.ID
    genres: list[str] | None = None
