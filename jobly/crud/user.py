"""
CRUD operations for the User model, including password checks.
"""

import logging
from typing import Any, Dict, List
from passlib.context import CryptContext
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from jobly.core.database import execute_positional
from jobly.core.exceptions import BadRequestError, NotFoundError, UnauthorizedError
from jobly.core.security import get_password_hash, verify_password
from jobly.core.sql import sql_for_partial_update
from jobly.models.user import User
from jobly.schemas.user import UserRegisterRequest

logger = logging.getLogger(__name__)

JS_TO_SQL = {
    "firstName": "first_name",
    "lastName": "last_name",
}

_USER_COLUMNS = [
    User.__table__.c.username,
    User.__table__.c.first_name,
    User.__table__.c.last_name,
    User.__table__.c.email,
    User.__table__.c.is_admin,
]


def authenticate(db: Session, username: str, password: str, pwd_context: CryptContext) -> User:
    """
    Check a username/password pair.

    Raises:
        UnauthorizedError: If the user is unknown or the password is wrong
    """
    user = db.query(User).filter(User.username == username).first()
    if not user or not verify_password(pwd_context, password, user.password):
        logger.warning(f"Failed login attempt for {username}")
        raise UnauthorizedError("Invalid username/password")
    return user


def register(
    db: Session,
    user_data: UserRegisterRequest,
    pwd_context: CryptContext,
    is_admin: bool = False
) -> User:
    """
    Create a user with a hashed password.

    Raises:
        BadRequestError: If the username is taken
    """
    if db.query(User).filter(User.username == user_data.username).first():
        raise BadRequestError(f"Duplicate username: {user_data.username}")

    db_user = User(
        username=user_data.username,
        password=get_password_hash(pwd_context, user_data.password),
        first_name=user_data.first_name,
        last_name=user_data.last_name,
        email=user_data.email,
        is_admin=is_admin,
    )
    db.add(db_user)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise BadRequestError(f"Duplicate username: {user_data.username}")
    db.refresh(db_user)

    logger.info(f"Registered user {db_user.username} (admin={db_user.is_admin})")
    return db_user


def find_all(db: Session) -> List[User]:
    return db.query(User).order_by(User.username).all()


def get(db: Session, username: str) -> User:
    """
    Raises:
        NotFoundError: If no user has this username
    """
    user = db.query(User).filter(User.username == username).first()
    if not user:
        raise NotFoundError(f"No user: {username}")
    return user


def update(db: Session, username: str, data: Dict[str, Any], pwd_context: CryptContext):
    """
    Partially update a user; a new password is hashed before it is stored.

    Raises:
        BadRequestError: If ``data`` is empty or breaks a column constraint
        NotFoundError: If no user has this username
    """
    data = dict(data)
    if data.get("password"):
        data["password"] = get_password_hash(pwd_context, data["password"])

    set_cols, values = sql_for_partial_update(data, JS_TO_SQL)
    username_var_idx = len(values) + 1

    query_sql = f"""UPDATE users
                    SET {set_cols}
                    WHERE username = ${username_var_idx}
                    RETURNING username, first_name, last_name, email, is_admin"""
    try:
        user = execute_positional(db, query_sql, [*values, username], _USER_COLUMNS).first()
        db.commit()
    except IntegrityError:
        db.rollback()
        raise BadRequestError(f"Invalid user data for {username}")

    if not user:
        raise NotFoundError(f"No user: {username}")

    logger.info(f"Updated user {username}")
    return user


def remove(db: Session, username: str) -> None:
    """
    Raises:
        NotFoundError: If no user has this username
    """
    user = execute_positional(
        db,
        """DELETE
           FROM users
           WHERE username = $1
           RETURNING username""",
        [username],
    ).first()
    db.commit()

    if not user:
        raise NotFoundError(f"No user: {username}")

    logger.info(f"Deleted user {username}")
