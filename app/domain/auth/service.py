"""Auth service - Login, refresh token rotation and logout"""

import logging
from datetime import datetime, timedelta

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ... import config
from ...auth import get_user_permissions, get_user_roles
from ...models import User
from ...security_utils import (
    create_access_token,
    generate_refresh_token,
    hash_refresh_token,
    verify_password,
)
from .repository import AuthRepository
from .schemas import LoginRequest

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid credentials"


class AuthService:
    def __init__(self, db: Session):
        self.db = db
        self.repo = AuthRepository()

    def _issue_tokens(self, user: User) -> dict:
        roles = get_user_roles(user)
        permissions = get_user_permissions(self.db, user)
        access_token, expires_at = create_access_token(
            user_id=user.id,
            username=user.username,
            email=user.email,
            roles=roles,
            permissions=permissions,
        )

        refresh_token = generate_refresh_token()
        self.repo.add_refresh_token(
            self.db,
            user_id=user.id,
            token_hash=hash_refresh_token(refresh_token),
            expires_at=datetime.utcnow() + timedelta(days=config.REFRESH_TOKEN_DAYS),
        )

        return {
            "access_token": access_token,
            "refresh_token": refresh_token,
            "expires_at": expires_at,
            "user": {
                "id": user.id,
                "username": user.username,
                "email": user.email,
                "full_name": user.full_name,
                "allowed_tabs": user.allowed_tabs_list,
            },
            "roles": roles,
            "permissions": permissions,
        }

    def login(self, data: LoginRequest) -> dict:
        user = self.repo.get_user_by_username(self.db, data.username)
        if not user or not verify_password(data.password, user.password):
            logger.warning(f"⚠️ Failed login for {data.username}")
            raise HTTPException(status_code=401, detail=INVALID_CREDENTIALS)

        if not user.is_active:
            logger.warning(f"⚠️ Inactive user {user.username} tried to log in")
            raise HTTPException(status_code=401, detail="User account is inactive")

        logger.info(f"🔐 User {user.username} logged in")
        return self._issue_tokens(user)

    def refresh(self, refresh_token: str) -> dict:
        """Rotate a refresh token: the old one is revoked, a new pair is issued"""
        stored = self.repo.get_refresh_token(self.db, hash_refresh_token(refresh_token))
        if not stored or not stored.is_usable or not stored.user or not stored.user.is_active:
            raise HTTPException(status_code=401, detail="Invalid refresh token")

        stored.revoked_at = datetime.utcnow()
        self.db.commit()
        return self._issue_tokens(stored.user)

    def logout(self, user: User) -> dict:
        revoked = self.repo.revoke_user_tokens(self.db, user.id)
        logger.info(f"👋 User {user.username} logged out ({revoked} refresh tokens revoked)")
        return {"message": "Logged out successfully"}
