"""
Shared Pydantic schemas used across the application.
"""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, EmailStr, Field
from pydantic.alias_generators import to_camel


# =============================================================================
# Common Types
# =============================================================================

Role = Literal["USER", "EMPLOYEE", "ADMIN"]


class CamelModel(BaseModel):
    """
    Base model for API payloads.

    Serializes field names as camelCase and accepts both camelCase
    and snake_case on input.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


# =============================================================================
# Authentication Schemas
# =============================================================================


class LoginRequest(CamelModel):
    """Login request body."""

    email: EmailStr
    password: str = Field(min_length=1)


class RegisterRequest(CamelModel):
    """Self-service account registration (always role USER)."""

    email: EmailStr
    password: str = Field(min_length=8, max_length=128)
    name: str = Field(min_length=1, max_length=100)


class UserInfo(CamelModel):
    """Basic user information included in auth responses."""

    id: str
    email: str
    name: str
    role: Role


class LoginResponse(CamelModel):
    """Login response with JWT token."""

    access_token: str
    token_type: str = "Bearer"
    expires_in: int  # seconds
    user: UserInfo


# =============================================================================
# Error Schemas
# =============================================================================


class ErrorResponse(BaseModel):
    """Standard error response."""

    error: str
    details: Any = None
