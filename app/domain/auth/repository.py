"""Auth repository - Users and refresh tokens"""

from datetime import datetime
from typing import Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from ...models import RefreshToken, User


class AuthRepository:
    @staticmethod
    def get_user_by_username(db: Session, username: str) -> Optional[User]:
        return db.query(User).filter(func.lower(User.username) == username.strip().lower()).first()

    @staticmethod
    def get_refresh_token(db: Session, token_hash: str) -> Optional[RefreshToken]:
        return db.query(RefreshToken).filter(RefreshToken.token_hash == token_hash).first()

    @staticmethod
    def add_refresh_token(db: Session, user_id: int, token_hash: str, expires_at: datetime) -> RefreshToken:
        token = RefreshToken(user_id=user_id, token_hash=token_hash, expires_at=expires_at)
        db.add(token)
        db.commit()
        return token

    @staticmethod
    def revoke_user_tokens(db: Session, user_id: int) -> int:
        """Revoke every open refresh token of the user; returns how many"""
        tokens = (
            db.query(RefreshToken)
            .filter(RefreshToken.user_id == user_id, RefreshToken.revoked_at.is_(None))
            .all()
        )
        now = datetime.utcnow()
        for token in tokens:
            token.revoked_at = now
        db.commit()
        return len(tokens)
