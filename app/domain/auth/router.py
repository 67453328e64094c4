"""Auth router - Token endpoints"""

from datetime import datetime

from fastapi import APIRouter, Depends
from fastapi.security import HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from ...auth import get_current_user, get_user_permissions, get_user_roles, security
from ...database import get_db
from ...models import User
from ...security_utils import decode_access_token
from ...shared.schemas import MessageResponse
from .schemas import (
    AuthUser,
    LoginRequest,
    LoginResponse,
    PermissionsResponse,
    RefreshTokenRequest,
    TokenValidationResponse,
)
from .service import AuthService

router = APIRouter(prefix="/api/v1/auth", tags=["Authentication"])


def get_auth_service(db: Session = Depends(get_db)) -> AuthService:
    """Dependency injection for AuthService"""
    return AuthService(db)


@router.post("/login", response_model=LoginResponse)
async def login(data: LoginRequest, service: AuthService = Depends(get_auth_service)):
    return service.login(data)


@router.post("/refresh-token", response_model=LoginResponse)
async def refresh_token(data: RefreshTokenRequest, service: AuthService = Depends(get_auth_service)):
    return service.refresh(data.refresh_token)


@router.post("/logout", response_model=MessageResponse)
async def logout(
    current_user: User = Depends(get_current_user),
    service: AuthService = Depends(get_auth_service),
):
    return service.logout(current_user)


@router.get("/validate-token", response_model=TokenValidationResponse)
async def validate_token(
    credentials: HTTPAuthorizationCredentials = Depends(security),
    current_user: User = Depends(get_current_user),
):
    payload = decode_access_token(credentials.credentials) or {}
    exp = payload.get("exp")
    return TokenValidationResponse(
        valid=True,
        user_id=current_user.id,
        username=current_user.username,
        expires_at=datetime.utcfromtimestamp(exp) if exp else None,
    )


@router.get("/user-info", response_model=AuthUser)
async def user_info(current_user: User = Depends(get_current_user)):
    return AuthUser(
        id=current_user.id,
        username=current_user.username,
        email=current_user.email,
        full_name=current_user.full_name,
        allowed_tabs=current_user.allowed_tabs_list,
    )


@router.get("/permissions", response_model=PermissionsResponse)
async def permissions(current_user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    return PermissionsResponse(roles=get_user_roles(current_user), permissions=get_user_permissions(db, current_user))
