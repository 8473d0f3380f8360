"""
GraphQL Types Package

Strawberry type definitions for the catalog schema. Python class names
carry a Type suffix; the GraphQL names are the plain entity names
(Author, Book, User, Token) that clients depend on.
"""

from catalog_api.graphql.types.author import AuthorType
from catalog_api.graphql.types.book import BookType
from catalog_api.graphql.types.user import TokenType, UserType

__all__ = [
    "AuthorType",
    "BookType",
    "UserType",
    "TokenType",
]
