"""
Pydantic Schemas Package

These schemas hold the field rules the persistence layer enforces
(required, non-blank, maximum lengths). Resolvers validate mutation
arguments against them before touching the database, and report a
failure as a BAD_USER_INPUT GraphQL error.

Schema Naming Convention:
- XxxCreate: Fields required when creating a new record
- XxxUpdate: Fields allowed when updating
"""

from catalog_api.schemas.author import AuthorBornUpdate
from catalog_api.schemas.book import BookCreate
from catalog_api.schemas.user import UserCreate

__all__ = [
    "AuthorBornUpdate",
    "BookCreate",
    "UserCreate",
]
