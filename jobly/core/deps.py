"""
FastAPI dependencies for authorization and app-scoped resources.

The identity itself is attached by AuthMiddleware; the guards here only read
``request.state.user`` and raise UnauthorizedError when it is not good enough.
"""

from fastapi import Depends, Request
from passlib.context import CryptContext
from typing import Optional

from jobly.core.config import Settings
from jobly.core.exceptions import UnauthorizedError
from jobly.schemas.user import Identity


def get_app_settings(request: Request) -> Settings:
    """Settings instance the app was built with."""
    return request.app.state.settings


def get_pwd_context(request: Request) -> CryptContext:
    return request.app.state.pwd_context


def get_current_identity(request: Request) -> Optional[Identity]:
    """Identity attached by AuthMiddleware, or None for anonymous requests."""
    return getattr(request.state, "user", None)


def ensure_logged_in(identity: Optional[Identity] = Depends(get_current_identity)) -> Identity:
    """
    Require any authenticated identity.

    Raises:
        UnauthorizedError: If no valid token was presented
    """
    if identity is None:
        raise UnauthorizedError("Not logged in")
    return identity


def ensure_admin(identity: Optional[Identity] = Depends(get_current_identity)) -> Identity:
    """
    Require an authenticated admin.

    Raises:
        UnauthorizedError: If anonymous or not an admin
    """
    if identity is None or not identity.is_admin:
        raise UnauthorizedError("Not an admin")
    return identity


def ensure_correct_user_or_admin(
    username: str,
    identity: Optional[Identity] = Depends(get_current_identity)
) -> Identity:
    """
    Require an admin, or the user named by the ``{username}`` path parameter.

    Raises:
        UnauthorizedError: If anonymous, or neither admin nor that user
    """
    if not (identity and (identity.is_admin or identity.username == username)):
        raise UnauthorizedError("Not a valid user or admin")
    return identity
