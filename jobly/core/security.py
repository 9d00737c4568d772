"""
Security utilities for JWT tokens and password hashing.

Tokens are HS256-signed with the configured secret and carry the username and
admin flag. They have no expiry claim. Passwords are hashed with bcrypt.
"""

import time
from typing import Any, Mapping
from jose import jwt
from passlib.context import CryptContext


def build_password_context(rounds: int = 12) -> CryptContext:
    """Password hashing context (bcrypt) with the configured work factor."""
    return CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=rounds)


def verify_password(pwd_context: CryptContext, plain_password: str, hashed_password: str) -> bool:
    """Verify a plain password against a hashed password."""
    # Bcrypt has a 72-byte limit - truncate if necessary
    password_bytes = plain_password.encode('utf-8')[:72]
    return pwd_context.verify(password_bytes, hashed_password)


def get_password_hash(pwd_context: CryptContext, password: str) -> str:
    """
    Hash a password using bcrypt.

    Note: Bcrypt has a 72-byte limit. Passwords longer than 72 bytes
    are automatically truncated to comply with this limitation.
    """
    password_bytes = password.encode('utf-8')[:72]
    return pwd_context.hash(password_bytes)


def create_token(user: Mapping[str, Any], secret_key: str, algorithm: str = "HS256") -> str:
    """
    Sign a bearer token for a user.

    Args:
        user: Mapping with at least "username"; "isAdmin" defaults to False
        secret_key: Signing secret
        algorithm: JWT signing algorithm

    Returns:
        Encoded JWT as a string
    """
    payload = {
        "username": user["username"],
        "isAdmin": bool(user.get("isAdmin", False)),
        "iat": int(time.time()),
    }
    return jwt.encode(payload, secret_key, algorithm=algorithm)


def decode_token(token: str, secret_key: str, algorithm: str = "HS256") -> dict:
    """
    Decode and validate a JWT token.

    Raises:
        JWTError: If the signature does not verify or the token is malformed
    """
    return jwt.decode(token, secret_key, algorithms=[algorithm])
