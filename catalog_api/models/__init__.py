"""
SQLAlchemy Models Package

This package contains all database models for the catalog.

Model Relationships:
- Author -> Book: One-to-Many (every book references exactly one author,
                  the author does not own its books)
- Book -> BookGenre: One-to-Many, ordered (the book's genre sequence)

Import all models here to:
1. Make them available as: from catalog_api.models import Book, Author, User
2. Ensure Alembic discovers them for migrations
"""

# The order matters for SQLAlchemy to resolve relationships
from catalog_api.models.author import Author
from catalog_api.models.book import Book, BookGenre
from catalog_api.models.user import User

__all__ = [
    "Author",
    "Book",
    "BookGenre",
    "User",
]
