"""
GraphQL User Types

Only exposes public/safe fields: the password hash never leaves the
database layer.
"""

import strawberry


@strawberry.type(name="User", description="A registered user")
class UserType:
    username: str
    favorite_genre: str
    id: strawberry.ID


@strawberry.type(name="Token", description="A signed bearer token")
class TokenType:
    """
    Response type for the login mutation.

    Send the value back as `Authorization: Bearer <value>`.
    """

    value: str
