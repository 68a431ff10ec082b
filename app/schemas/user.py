"""
Pydantic schemas for User model and authentication.
"""
from typing import Optional
from datetime import datetime
import uuid
from pydantic import Field

from app.schemas.base import CamelModel, ORMModel


class UserResponse(ORMModel):
    """Schema for user response."""
    id: uuid.UUID
    username: str
    email: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    role: str
    is_active: bool
    created_at: datetime
    updated_at: datetime


class UserChangePassword(CamelModel):
    """Schema for password change."""
    current_password: str
    new_password: str = Field(..., min_length=8, max_length=72)


# Authentication schemas
class Token(CamelModel):
    """Schema for token response."""
    access_token: str
    refresh_token: str
    token_type: str = "bearer"


class TokenRefresh(CamelModel):
    """Schema for token refresh request."""
    refresh_token: str


class LoginRequest(CamelModel):
    """Schema for login request."""
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class LoginResponse(Token):
    """Schema for login response."""
    user: UserResponse
