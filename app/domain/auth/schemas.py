"""Auth schemas"""

from datetime import datetime
from typing import Optional

from ...shared.schemas import CamelModel


class LoginRequest(CamelModel):
    username: str
    password: str


class RefreshTokenRequest(CamelModel):
    refresh_token: str


class AuthUser(CamelModel):
    id: int
    username: str
    email: str
    full_name: Optional[str] = None
    allowed_tabs: list[str] = []


class LoginResponse(CamelModel):
    access_token: str
    refresh_token: str
    token_type: str = "Bearer"
    expires_at: datetime
    user: AuthUser
    roles: list[str]
    permissions: list[str]


class TokenValidationResponse(CamelModel):
    valid: bool
    user_id: int
    username: str
    expires_at: Optional[datetime] = None


class PermissionsResponse(CamelModel):
    roles: list[str]
    permissions: list[str]
