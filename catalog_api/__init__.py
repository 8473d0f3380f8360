"""
Book Catalog GraphQL API Package

A GraphQL API for a book catalog: authors, books and users, with
token-based authentication for mutations and aggregate queries
(genre listing, counts, filtered book search).

Package Structure:
- config.py: Application configuration using Pydantic Settings
- database.py: SQLAlchemy engine and session management
- main.py: FastAPI application factory and configuration
- models/: SQLAlchemy ORM models (users, authors, books)
- schemas/: Pydantic input validation schemas
- services/: Token service, password hashing, repository adapter
- graphql/: Strawberry schema, context and resolvers
"""

__version__ = "0.1.0"
