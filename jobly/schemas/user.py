"""
Pydantic schemas for users, login and the request identity.
"""

from pydantic import BaseModel, EmailStr, Field, field_validator
from typing import List, Optional

from jobly.schemas.job import reject_null


class Identity(BaseModel):
    """Who is making the request, as read from a verified token."""
    username: str
    is_admin: bool = Field(False, alias="isAdmin")

    class Config:
        populate_by_name = True


class UserLoginRequest(BaseModel):
    """Request schema for POST /auth/token."""
    username: str = Field(..., min_length=1, max_length=25)
    password: str = Field(..., min_length=1)

    class Config:
        extra = "forbid"


class UserRegisterRequest(BaseModel):
    """Request schema for self-registration. New accounts are never admins."""
    username: str = Field(..., min_length=1, max_length=25)
    password: str = Field(..., min_length=5, max_length=72)  # bcrypt limit
    first_name: str = Field(..., alias="firstName", min_length=1)
    last_name: str = Field(..., alias="lastName", min_length=1)
    email: EmailStr

    class Config:
        extra = "forbid"


class UserNewRequest(UserRegisterRequest):
    """Request schema for admins adding a user, possibly another admin."""
    is_admin: bool = Field(False, alias="isAdmin")


class UserUpdateRequest(BaseModel):
    """Partial update of a user's own profile fields."""
    password: Optional[str] = Field(None, min_length=5, max_length=72)
    first_name: Optional[str] = Field(None, alias="firstName", min_length=1)
    last_name: Optional[str] = Field(None, alias="lastName", min_length=1)
    email: Optional[EmailStr] = None

    @field_validator("password", "first_name", "last_name", "email", mode="before")
    @classmethod
    def profile_fields_not_null(cls, v):
        return reject_null(v)

    class Config:
        extra = "forbid"


class UserResponse(BaseModel):
    """User profile response (no password hash)."""
    username: str
    first_name: str = Field(..., serialization_alias="firstName")
    last_name: str = Field(..., serialization_alias="lastName")
    email: str
    is_admin: bool = Field(..., serialization_alias="isAdmin")

    class Config:
        from_attributes = True


class TokenResponse(BaseModel):
    token: str


class UserEnvelope(BaseModel):
    user: UserResponse


class UserCreatedResponse(BaseModel):
    user: UserResponse
    token: str


class UserListEnvelope(BaseModel):
    users: List[UserResponse]
