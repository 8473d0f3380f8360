"""
GraphQL Package

This package exposes the catalog as a GraphQL API using Strawberry.

Features:
- Author, Book, User and Token types
- Aggregate queries: allGenres, authorCount, bookCount, filtered allBooks
- Mutations: createUser, login, editAuthor, addBook
- Authentication via `Authorization: Bearer <token>` in context

Example Query:
    query {
        allBooks(genre: "refactoring") {
            title
            published
            author { name born }
            genres
        }
    }
"""

import strawberry
from strawberry.fastapi import GraphQLRouter

from catalog_api.config import Settings, get_settings
from catalog_api.graphql.context import get_context
from catalog_api.graphql.mutations import Mutation
from catalog_api.graphql.queries import Query

schema = strawberry.Schema(
    query=Query,
    mutation=Mutation,
)


def create_graphql_router(settings: Settings | None = None) -> GraphQLRouter:
    """
    Create the GraphQL router for FastAPI.

    The Apollo Sandbox IDE is served only when enabled and never in
    production.

    Returns:
        GraphQLRouter configured with schema and context
    """
    settings = settings or get_settings()
    ide_enabled = settings.graphql_playground_enabled and not settings.is_production
    return GraphQLRouter(
        schema,
        context_getter=get_context,
        graphql_ide="apollo-sandbox" if ide_enabled else None,
    )


__all__ = ["schema", "create_graphql_router"]
