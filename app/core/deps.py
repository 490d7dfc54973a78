"""
FastAPI dependencies for authentication and authorization.

Tokens are optional at the transport level (anonymous users may list and
read companies and jobs); the dependencies below decide who may do what.
"""

from dataclasses import dataclass
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError

from app.core.errors import UnauthorizedError
from app.core.security import decode_token

# HTTP Bearer token scheme (Authorization: Bearer <token>)
security = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class TokenUser:
    """Claims carried by a valid token."""
    username: str
    is_admin: bool = False


def get_optional_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> Optional[TokenUser]:
    """
    Extract the user from the Bearer token if one is present and valid.

    Returns None for anonymous requests or unusable tokens.
    """
    if not credentials:
        return None

    try:
        payload = decode_token(credentials.credentials)
    except JWTError:
        return None

    username = payload.get("sub")
    if username is None:
        return None
    return TokenUser(username=username, is_admin=bool(payload.get("is_admin")))


def get_current_user(user: Optional[TokenUser] = Depends(get_optional_user)) -> TokenUser:
    """
    Require a logged-in user.

    Raises:
        UnauthorizedError: If no valid token was sent
    """
    if user is None:
        raise UnauthorizedError("Unauthorized")
    return user


def get_admin_user(user: TokenUser = Depends(get_current_user)) -> TokenUser:
    """
    Require an admin.

    Raises:
        UnauthorizedError: If the user is not an admin
    """
    if not user.is_admin:
        raise UnauthorizedError("Unauthorized")
    return user


def get_admin_or_same_user(username: str, user: TokenUser = Depends(get_current_user)) -> TokenUser:
    """
    Require an admin, or the user named by the {username} path parameter.

    Raises:
        UnauthorizedError: For anyone else
    """
    if not (user.is_admin or user.username == username):
        raise UnauthorizedError("Unauthorized")
    return user
