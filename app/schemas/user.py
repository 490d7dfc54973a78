"""
Pydantic schemas for users and authentication.
"""

from pydantic import BaseModel, EmailStr, Field, field_validator
from typing import List, Optional

from app.schemas.base import CamelModel, CamelUpdateModel


class UserRegisterRequest(CamelModel):
    """Request schema for self-registration."""
    username: str = Field(..., min_length=1, max_length=25)
    password: str = Field(
        ...,
        min_length=5,
        max_length=72,  # bcrypt limit
    )
    first_name: str = Field(..., min_length=1, max_length=25)
    last_name: str = Field(..., min_length=1, max_length=25)
    email: EmailStr


class UserNewRequest(UserRegisterRequest):
    """Request schema for an admin adding a user (who may be an admin)."""
    is_admin: bool = False


class UserLoginRequest(BaseModel):
    """Request schema for obtaining a token."""
    username: str = Field(..., min_length=1, max_length=25)
    password: str = Field(..., min_length=1)


class UserUpdateRequest(CamelUpdateModel):
    """Partial user update. username and isAdmin cannot be changed here."""
    first_name: Optional[str] = Field(None, min_length=1, max_length=25)
    last_name: Optional[str] = Field(None, min_length=1, max_length=25)
    password: Optional[str] = Field(None, min_length=5, max_length=72)
    email: Optional[EmailStr] = None

    @field_validator("first_name", "last_name", "password", "email")
    @classmethod
    def reject_null(cls, v: Optional[str]) -> str:
        """Every user column is required, so none can be set to null."""
        if v is None:
            raise ValueError("Field cannot be null")
        return v


class TokenResponse(BaseModel):
    """JWT token response."""
    token: str


class UserResponse(CamelModel):
    """User profile response (no password)."""
    username: str
    first_name: str
    last_name: str
    email: str
    is_admin: bool


class UserDetailResponse(UserResponse):
    """User profile with the ids of jobs applied to."""
    jobs: List[int] = []


class UserTokenResponse(BaseModel):
    """Newly added user and a token for them."""
    user: UserResponse
    token: str


class ApplicationResponse(BaseModel):
    applied: int
