"""
GraphQL Mutation Resolvers

Defines all write operations (mutations) for the GraphQL API.
createUser and login are open; every other mutation requires an
authenticated user, checked before any side effect.
"""

import logging
from typing import Any

import strawberry
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError
from strawberry.types import Info

from catalog_api.config import get_settings
from catalog_api.graphql.context import GraphQLContext
from catalog_api.graphql.queries import (
    author_to_graphql,
    book_to_graphql,
    user_to_graphql,
)
from catalog_api.graphql.types.author import AuthorType
from catalog_api.graphql.types.book import BookType
from catalog_api.graphql.types.user import TokenType, UserType
from catalog_api.models import Book, User
from catalog_api.schemas import AuthorBornUpdate, BookCreate, UserCreate
from catalog_api.services.repository import PersistenceError, record_book_added
from catalog_api.services.security import TokenIdentity, hash_password, verify_password

logger = logging.getLogger(__name__)
settings = get_settings()


# =============================================================================
# Error classes for GraphQL
# =============================================================================
# graphql-core copies an exception's `extensions` dict into the error it
# reports, so clients receive {"code": ..., "invalidArgs": ...}.


class CatalogError(Exception):
    """Base class for errors reported to GraphQL clients."""

    code = "INTERNAL_SERVER_ERROR"

    def __init__(self, message: str, invalid_args: dict[str, Any] | None = None):
        super().__init__(message)
        self.extensions: dict[str, Any] = {"code": self.code}
        if invalid_args is not None:
            self.extensions["invalidArgs"] = invalid_args


class InvalidInputError(CatalogError):
    """Raised when arguments are rejected by validation or the database."""

    code = "BAD_USER_INPUT"


class AuthenticationError(CatalogError):
    """Raised when authentication is required but not provided."""

    code = "UNAUTHENTICATED"


class NotFoundError(CatalogError):
    """Raised when a referenced record does not exist."""

    code = "NOT_FOUND"


def require_auth(info: Info[GraphQLContext, None]) -> User:
    """Helper to require authentication and return the user."""
    user = info.context.user
    if user is None:
        raise AuthenticationError("not authenticated")
    return user


def validate_input(
    schema: type[BaseModel],
    invalid_args: dict[str, Any],
    **values: Any,
) -> Any:
    """Validate mutation arguments, reporting failures as BAD_USER_INPUT."""
    try:
        return schema(**values)
    except PydanticValidationError as e:
        message = "; ".join(
            f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}"
            for err in e.errors()
        )
        raise InvalidInputError(message, invalid_args=invalid_args) from e


# =============================================================================
# Mutation Type
# =============================================================================


@strawberry.type
class Mutation:
    """
    GraphQL Mutation type containing all write operations.
    """

    # =========================================================================
    # Account Mutations
    # =========================================================================

    @strawberry.mutation(description="Create a new user account")
    def create_user(
        self,
        info: Info[GraphQLContext, None],
        username: str,
        favorite_genre: str,
        password: str | None = None,
    ) -> UserType | None:
        """
        Create a user.

        Users created without a password get the configured default
        credential. Duplicate usernames are rejected.
        """
        invalid_args = {"username": username, "favoriteGenre": favorite_genre}
        data = validate_input(
            UserCreate,
            invalid_args,
            username=username,
            favorite_genre=favorite_genre,
            password=password,
        )
        repository = info.context.repository

        if repository.get_user_by_username(data.username) is not None:
            raise InvalidInputError(
                f"Username '{data.username}' is already taken",
                invalid_args=invalid_args,
            )

        user = User(
            username=data.username,
            favorite_genre=data.favorite_genre,
            hashed_password=hash_password(data.password or settings.default_user_password),
        )
        try:
            user = repository.save(user)
        except PersistenceError as e:
            raise InvalidInputError(str(e), invalid_args=invalid_args) from e

        logger.info(f"Created user '{user.username}' (id={user.id})")
        return user_to_graphql(user)

    @strawberry.mutation(description="Login with username and password")
    def login(
        self,
        info: Info[GraphQLContext, None],
        username: str,
        password: str,
    ) -> TokenType | None:
        """
        Authenticate with username and password.

        Returns a bearer token on success.
        """
        user = info.context.repository.get_user_by_username(username)

        if user is None or not verify_password(password, user.hashed_password):
            logger.info(f"Failed login attempt for '{username}'")
            raise InvalidInputError("wrong credentials")

        token = info.context.token_service.issue(
            TokenIdentity(username=user.username, id=str(user.id))
        )
        return TokenType(value=token)

    # =========================================================================
    # Catalog Mutations
    # =========================================================================

    @strawberry.mutation(description="Set an author's birth year")
    def edit_author(
        self,
        info: Info[GraphQLContext, None],
        name: str,
        set_born_to: int,
    ) -> AuthorType | None:
        """
        Update an existing author.

        Requires authentication.
        """
        require_auth(info)
        invalid_args = {"name": name, "setBornTo": set_born_to}
        data = validate_input(AuthorBornUpdate, invalid_args, name=name, born=set_born_to)
        repository = info.context.repository

        author = repository.get_author_by_name(data.name)
        if author is None:
            raise NotFoundError(f"Author '{data.name}' not found", invalid_args=invalid_args)

        author.born = data.born
        try:
            author = repository.save(author)
        except PersistenceError as e:
            raise InvalidInputError(str(e), invalid_args=invalid_args) from e

        return author_to_graphql(author)

    @strawberry.mutation(description="Add a book, creating its author if needed")
    def add_book(
        self,
        info: Info[GraphQLContext, None],
        title: str,
        author: str | None = None,
        published: int | None = None,
        genres: list[str] | None = None,
    ) -> BookType | None:
        """
        Create a new book.

        Requires authentication. The author's book count is updated by a
        background task after the response is produced.
        """
        require_auth(info)
        invalid_args = {
            "title": title,
            "author": author,
            "published": published,
            "genres": genres,
        }
        values: dict[str, Any] = {"title": title, "author": author, "published": published}
        if genres is not None:
            values["genres"] = genres
        data = validate_input(BookCreate, invalid_args, **values)
        repository = info.context.repository

        try:
            author_obj = repository.get_or_create_author(data.author)
        except PersistenceError as e:
            raise InvalidInputError(str(e), invalid_args=invalid_args) from e
        author_id = author_obj.id

        book = Book(
            title=data.title,
            published=data.published,
            author=author_obj,
            genres=data.genres,
        )
        try:
            book = repository.save(book)
        except PersistenceError as e:
            raise InvalidInputError(str(e), invalid_args=invalid_args) from e

        logger.info(f"Added book '{book.title}' (id={book.id}) by author {author_id}")

        background_tasks = info.context.background_tasks
        if background_tasks is not None:
            background_tasks.add_task(
                record_book_added, info.context.session_factory, author_id
            )
        else:
            # Executed outside an HTTP request (scripts, direct schema calls)
            record_book_added(info.context.session_factory, author_id)

        return book_to_graphql(book)
