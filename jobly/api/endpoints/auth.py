"""
Authentication endpoints.

- POST /token: Exchange username/password for a bearer token
- POST /register: Create a (non-admin) account and receive a token
- GET /me: Profile of the user the token belongs to
"""

import logging
from fastapi import APIRouter, Depends
from passlib.context import CryptContext
from sqlalchemy.orm import Session

from jobly.core.config import Settings
from jobly.core.database import get_db
from jobly.core.deps import ensure_logged_in, get_app_settings, get_pwd_context
from jobly.core.security import create_token
from jobly.crud import user as user_crud
from jobly.schemas.user import (
    Identity,
    TokenResponse,
    UserEnvelope,
    UserLoginRequest,
    UserRegisterRequest,
)

router = APIRouter(prefix="/auth", tags=["Authentication"])
logger = logging.getLogger(__name__)


@router.post("/token", response_model=TokenResponse)
def login(
    request: UserLoginRequest,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
    pwd_context: CryptContext = Depends(get_pwd_context)
):
    """Authenticate and return a token for use in the Authorization header."""
    user = user_crud.authenticate(db, request.username, request.password, pwd_context)
    token = create_token(
        {"username": user.username, "isAdmin": user.is_admin},
        settings.SECRET_KEY,
        settings.ALGORITHM,
    )
    logger.info(f"Issued token for {user.username}")
    return TokenResponse(token=token)


@router.post("/register", status_code=201, response_model=TokenResponse)
def register(
    request: UserRegisterRequest,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
    pwd_context: CryptContext = Depends(get_pwd_context)
):
    """
    Register a new user account.

    Self-registered users are never admins. Returns a token for immediate use.
    """
    user = user_crud.register(db, request, pwd_context)
    token = create_token(
        {"username": user.username, "isAdmin": user.is_admin},
        settings.SECRET_KEY,
        settings.ALGORITHM,
    )
    return TokenResponse(token=token)


@router.get("/me", response_model=UserEnvelope)
def get_me(
    identity: Identity = Depends(ensure_logged_in),
    db: Session = Depends(get_db)
):
    """Get the profile of the logged-in user."""
    return {"user": user_crud.get(db, identity.username)}
