from datetime import datetime
from typing import Optional, List

from pydantic import Field

from kc_api.models.enums import Role
from kc_api.schemas.base import CamelModel


class RegisterRequest(CamelModel):
    email: Optional[str] = Field(None, examples=["alice@example.com"], description="Account email, not required to be unique")
    username: Optional[str] = Field(None, examples=["alice"], description="Display name")
    password: Optional[str] = Field(None, examples=["pw1"], description="Stored exactly as sent")


class LoginRequest(CamelModel):
    email: Optional[str] = Field(None, examples=["alice@example.com"])
    password: Optional[str] = Field(None, examples=["pw1"])


class AuthResponse(CamelModel):
    token: str = Field(..., examples=["eyJhbGciOiJIUzI1NiIsInR"], description="Signed bearer token, never expires")
    user_id: str = Field(..., examples=["1"], description="Identifier of the authenticated account")
    message: str = Field(..., examples=["Login success"])


class MessageResponse(CamelModel):
    message: str = Field(..., examples=["Logged out (client-side only, token still valid)"])


class CreateUserRequest(CamelModel):
    email: Optional[str] = None
    username: Optional[str] = None
    password: Optional[str] = None
    role: Optional[str] = None


class UpdateUserRequest(CamelModel):
    email: Optional[str] = None
    username: Optional[str] = None
    password: Optional[str] = None


class UserResponse(CamelModel):
    id: str = Field(..., examples=["1"], description="Account identification number")
    email: str = Field(..., examples=["alice@example.com"])
    username: str = Field(..., examples=["alice"])
    role: Role = Field(..., examples=["user"], description="Stored role, which may differ from a token's role claim")
    created_at: Optional[datetime] = Field(None, examples=["2025-09-03T12:34:56Z"])
    updated_at: Optional[datetime] = Field(None, examples=["2025-09-03T12:34:56Z"])


class UserListResponse(CamelModel):
    users: List[UserResponse]
    count: int


class UpdateRoleRequest(CamelModel):
    role: str = Field("user", examples=["moderator"], description="One of user, moderator, admin")


class DeletedResponse(CamelModel):
    deleted: str = Field(..., examples=["1"])
