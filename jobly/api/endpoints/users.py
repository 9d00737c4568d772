"""
User management endpoints.

Listing and creating users is for admins. A user's own record can be read,
changed and deleted by that user or by an admin.
"""

from fastapi import APIRouter, Depends
from passlib.context import CryptContext
from sqlalchemy.orm import Session

from jobly.core.config import Settings
from jobly.core.database import get_db
from jobly.core.deps import ensure_admin, ensure_correct_user_or_admin, get_app_settings, get_pwd_context
from jobly.core.security import create_token
from jobly.crud import user as user_crud
from jobly.schemas.company import DeletedResponse
from jobly.schemas.user import (
    UserCreatedResponse,
    UserEnvelope,
    UserListEnvelope,
    UserNewRequest,
    UserUpdateRequest,
)

router = APIRouter(prefix="/users", tags=["Users"])


@router.post("", status_code=201, response_model=UserCreatedResponse, dependencies=[Depends(ensure_admin)])
def create_user(
    request: UserNewRequest,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
    pwd_context: CryptContext = Depends(get_pwd_context)
):
    """Add a user, optionally as an admin. Admin only."""
    user = user_crud.register(db, request, pwd_context, is_admin=request.is_admin)
    token = create_token(
        {"username": user.username, "isAdmin": user.is_admin},
        settings.SECRET_KEY,
        settings.ALGORITHM,
    )
    return {"user": user, "token": token}


@router.get("", response_model=UserListEnvelope, dependencies=[Depends(ensure_admin)])
def list_users(db: Session = Depends(get_db)):
    """List all users. Admin only."""
    return {"users": user_crud.find_all(db)}


@router.get("/{username}", response_model=UserEnvelope, dependencies=[Depends(ensure_correct_user_or_admin)])
def get_user(username: str, db: Session = Depends(get_db)):
    return {"user": user_crud.get(db, username)}


@router.patch("/{username}", response_model=UserEnvelope, dependencies=[Depends(ensure_correct_user_or_admin)])
def update_user(
    username: str,
    request: UserUpdateRequest,
    db: Session = Depends(get_db),
    pwd_context: CryptContext = Depends(get_pwd_context)
):
    """
    Partially update a user.

    Body may contain any of { password, firstName, lastName, email }.
    """
    data = request.model_dump(exclude_unset=True, by_alias=True)
    user = user_crud.update(db, username, data, pwd_context)
    return {"user": user}


@router.delete("/{username}", response_model=DeletedResponse, dependencies=[Depends(ensure_correct_user_or_admin)])
def delete_user(username: str, db: Session = Depends(get_db)):
    user_crud.remove(db, username)
    return {"deleted": username}
