"""
GraphQL Query Resolvers

Defines all read operations (queries) for the GraphQL API.
Each resolver reads through the repository on the context.
"""

import strawberry
from strawberry.types import Info

from catalog_api.graphql.context import GraphQLContext
from catalog_api.graphql.types.author import AuthorType
from catalog_api.graphql.types.book import BookType
from catalog_api.graphql.types.user import UserType
from catalog_api.models import Author, Book, User


def author_to_graphql(author: Author) -> AuthorType:
    """Convert SQLAlchemy Author model to GraphQL AuthorType."""
    return AuthorType(
        id=strawberry.ID(str(author.id)),
        name=author.name,
        born=author.born,
        book_count=author.book_count,
    )


def book_to_graphql(book: Book) -> BookType:
    """Convert SQLAlchemy Book model to GraphQL BookType."""
    return BookType(
        id=strawberry.ID(str(book.id)),
        title=book.title,
        published=book.published,
        author=author_to_graphql(book.author),
        genres=list(book.genres),
    )


def user_to_graphql(user: User) -> UserType:
    """Convert SQLAlchemy User model to GraphQL UserType."""
    return UserType(
        id=strawberry.ID(str(user.id)),
        username=user.username,
        favorite_genre=user.favorite_genre,
    )


@strawberry.type
class Query:
    """
    GraphQL Query type containing all read operations.

    All resolvers receive an `info` parameter that contains the
    GraphQL context with the repository and current user.
    """

    @strawberry.field(description="Distinct genres across all books")
    def all_genres(self, info: Info[GraphQLContext, None]) -> list[str]:
        return info.context.repository.list_genres()

    @strawberry.field(description="Get the currently authenticated user")
    def me(self, info: Info[GraphQLContext, None]) -> UserType | None:
        """
        Returns None when the request carries no valid token.
        """
        user = info.context.user
        if user is None:
            return None
        return user_to_graphql(user)

    @strawberry.field(description="Get all authors")
    def all_authors(self, info: Info[GraphQLContext, None]) -> list[AuthorType]:
        authors = info.context.repository.list_authors()
        return [author_to_graphql(a) for a in authors]

    @strawberry.field(description="Get books, optionally filtered by author name and genre")
    def all_books(
        self,
        info: Info[GraphQLContext, None],
        author: str | None = None,
        genre: str | None = None,
    ) -> list[BookType]:
        """
        Get books with their author populated.

        Args:
            author: Exact author name; empty or omitted means all authors
            genre: Genre the book must list; empty or omitted means all genres

        Returns:
            Matching books in insertion order
        """
        books = info.context.repository.list_books(author=author, genre=genre)
        return [book_to_graphql(b) for b in books]

    @strawberry.field(description="Number of stored authors")
    def author_count(self, info: Info[GraphQLContext, None]) -> int:
        return info.context.repository.count_authors()

    @strawberry.field(description="Number of stored books")
    def book_count(self, info: Info[GraphQLContext, None]) -> int:
        return info.context.repository.count_books()
