"""
GraphQL Context

Provides request context to all GraphQL resolvers including:
- Repository built on the request database session
- Current authenticated user (if any)
- Session factory for background work

The context is created fresh for each GraphQL request and passed
to all resolvers via the `info` parameter.
"""

import logging

from fastapi import Depends, Header
from sqlalchemy.orm import Session, sessionmaker
from strawberry.fastapi import BaseContext

from catalog_api.database import get_db, get_session_factory
from catalog_api.models import User
from catalog_api.services.repository import CatalogRepository
from catalog_api.services.security import (
    InvalidTokenError,
    TokenService,
    get_token_service,
)

logger = logging.getLogger(__name__)

BEARER_PREFIX = "bearer "


class GraphQLContext(BaseContext):
    """
    Context object available to all GraphQL resolvers.

    Strawberry fills in request, response and background_tasks after
    the context getter returns.

    Attributes:
        repository: CatalogRepository over the request session
        user: Currently authenticated user (None if anonymous)
        session_factory: Opens sessions for background tasks
        token_service: Issues tokens on login
    """

    def __init__(
        self,
        repository: CatalogRepository,
        token_service: TokenService,
        session_factory: sessionmaker,
        user: User | None = None,
    ):
        super().__init__()
        self.repository = repository
        self.token_service = token_service
        self.session_factory = session_factory
        self.user = user


def get_user_from_authorization(
    repository: CatalogRepository,
    token_service: TokenService,
    authorization: str | None,
) -> User | None:
    """
    Resolve the current user from a raw Authorization header.

    Anything other than a case-insensitive "Bearer <token>" header is
    treated as anonymous. A token that fails verification is logged and
    also treated as anonymous, as is a valid token whose user no longer
    exists.

    Args:
        repository: Repository used to look up the user
        token_service: Verifies the token signature
        authorization: Header value, or None if absent

    Returns:
        User object if the token is valid and the user exists, None otherwise
    """
    if not authorization or not authorization.lower().startswith(BEARER_PREFIX):
        return None

    token = authorization[len(BEARER_PREFIX):].strip()

    try:
        identity = token_service.verify(token)
    except InvalidTokenError as e:
        logger.warning(f"Rejected bearer token: {e}")
        return None

    return repository.get_user_by_id(identity.id)


async def get_context(
    authorization: str | None = Header(default=None),
    db: Session = Depends(get_db),
    session_factory: sessionmaker = Depends(get_session_factory),
    token_service: TokenService = Depends(get_token_service),
) -> GraphQLContext:
    """
    Create GraphQL context for each request.

    Called by Strawberry for every GraphQL request. FastAPI resolves the
    dependencies, so tests can override get_db and get_session_factory.

    Returns:
        GraphQLContext with repository and optional user
    """
    repository = CatalogRepository(db)
    user = get_user_from_authorization(repository, token_service, authorization)

    return GraphQLContext(
        repository=repository,
        token_service=token_service,
        session_factory=session_factory,
        user=user,
    )
