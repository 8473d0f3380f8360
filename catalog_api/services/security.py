"""
Security Service

Handles password hashing and the signed identity tokens used for
bearer authentication.

Security Features:
==================
1. Password hashing with bcrypt (passlib), one hash per user
2. JWT tokens (python-jose) carrying {username, id}
3. Optional token expiry (disabled unless configured)

Usage:
    from catalog_api.services.security import get_token_service

    tokens = get_token_service()
    token = tokens.issue(TokenIdentity(username="alice", id="1"))
    identity = tokens.verify(token)
"""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from functools import lru_cache

from jose import JWTError, jwt
from passlib.context import CryptContext

from catalog_api.config import Settings, get_settings

logger = logging.getLogger(__name__)

# -------------------------------------------------------------------------
# Password Hashing Configuration
# -------------------------------------------------------------------------
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def hash_password(password: str) -> str:
    """
    Hash a plain text password using bcrypt.

    Example:
        >>> hashed = hash_password("qwer")
        >>> hashed.startswith("$2b$")
        True
    """
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Verify a plain password against a hashed password.

    Uses constant-time comparison to prevent timing attacks.
    """
    return pwd_context.verify(plain_password, hashed_password)


# -------------------------------------------------------------------------
# Identity Tokens
# -------------------------------------------------------------------------
TOKEN_TYPE = "access"


class InvalidTokenError(Exception):
    """Raised when a token fails signature, structure or claim checks."""

    pass


@dataclass(frozen=True)
class TokenIdentity:
    """The identity payload carried by a token."""

    username: str
    id: str


class TokenService:
    """
    Issues and verifies signed identity tokens.

    The signing secret is fixed at construction; build one per process
    with get_token_service() or from explicit settings with from_settings().
    """

    def __init__(
        self,
        secret_key: str,
        algorithm: str = "HS256",
        expire_minutes: int | None = None,
    ):
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.expire_minutes = expire_minutes

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenService":
        return cls(
            secret_key=settings.secret_key,
            algorithm=settings.token_algorithm,
            expire_minutes=settings.token_expire_minutes,
        )

    def issue(self, identity: TokenIdentity) -> str:
        """
        Create a signed token for the given identity.

        Args:
            identity: Username and id to embed

        Returns:
            Encoded JWT token string

        Example:
            >>> token = service.issue(TokenIdentity(username="bob", id="X"))
            >>> token.count(".") == 2  # JWT format: header.payload.signature
            True
        """
        now = datetime.now(UTC)
        to_encode = {
            "username": identity.username,
            "id": str(identity.id),
            "type": TOKEN_TYPE,
            "iat": now,
        }
        if self.expire_minutes is not None:
            to_encode["exp"] = now + timedelta(minutes=self.expire_minutes)

        return jwt.encode(to_encode, self.secret_key, algorithm=self.algorithm)

    def verify(self, token: str) -> TokenIdentity:
        """
        Decode a token and check its signature and claims.

        Args:
            token: The JWT token string

        Returns:
            The identity embedded in the token

        Raises:
            InvalidTokenError: If the signature does not match, the token is
                malformed or expired, or required claims are missing
        """
        try:
            payload = jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
        except JWTError as e:
            raise InvalidTokenError(str(e)) from e

        if payload.get("type") != TOKEN_TYPE:
            raise InvalidTokenError(f"Token type mismatch: expected {TOKEN_TYPE}")

        username = payload.get("username")
        user_id = payload.get("id")
        if not username or user_id is None:
            raise InvalidTokenError("Token is missing identity claims")

        return TokenIdentity(username=username, id=str(user_id))


@lru_cache
def get_token_service() -> TokenService:
    """Token service built from the process-wide settings."""
    return TokenService.from_settings(get_settings())
