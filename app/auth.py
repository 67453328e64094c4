import logging
from typing import Callable

from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from .database import get_db
from .models import RolFormPermission, User
from .security_utils import CLAIM_USER_ID, decode_access_token

logger = logging.getLogger(__name__)

security = HTTPBearer(auto_error=False)


def get_user_roles(user: User) -> list[str]:
    """Codes of the user's active roles"""
    return [rol.code for rol in user.roles if rol.is_active]


def get_user_permissions(db: Session, user: User) -> list[str]:
    """Permission strings granted through the user's active roles"""
    role_ids = [rol.id for rol in user.roles if rol.is_active]
    if not role_ids:
        return []

    rows = (
        db.query(RolFormPermission)
        .filter(RolFormPermission.rol_id.in_(role_ids), RolFormPermission.is_active == True)  # noqa: E712
        .all()
    )
    permissions: set[str] = set()
    for row in rows:
        if row.form is not None and row.form.is_active:
            permissions.update(row.permission_codes())
    return sorted(permissions)


def user_id_from_token(token: str):
    """Decode a bearer token and return the numeric user id, or None"""
    payload = decode_access_token(token)
    if not payload:
        return None
    try:
        return int(payload.get(CLAIM_USER_ID))
    except (TypeError, ValueError):
        return None


async def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(security),
    db: Session = Depends(get_db),
) -> User:
    """Get current user from the bearer access token"""

    if not credentials:
        raise HTTPException(
            status_code=401,
            detail="Not authenticated. Please provide a valid Bearer token in the Authorization header.",
        )

    user_id = user_id_from_token(credentials.credentials)
    if user_id is None:
        raise HTTPException(status_code=401, detail="Invalid or expired token")

    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        logger.warning(f"⚠️ Token for unknown user id {user_id}")
        raise HTTPException(status_code=401, detail="Invalid or expired token")

    if not user.is_active:
        raise HTTPException(status_code=403, detail="User account is inactive")

    logger.debug(f"✅ User authenticated: {user.username}")
    return user


def require_permission(permission: str) -> Callable:
    """
    Dependency factory guarding a route with a permission string such as
    "appointments.read". Returns the authenticated user.
    """

    async def dependency(
        user: User = Depends(get_current_user),
        db: Session = Depends(get_db),
    ) -> User:
        if permission not in get_user_permissions(db, user):
            logger.warning(f"⚠️ User {user.username} denied: missing permission {permission}")
            raise HTTPException(status_code=403, detail="Permission denied")
        return user

    return dependency


def require_role(*roles: str) -> Callable:
    """Dependency factory admitting users holding any of the given role codes"""
    allowed = {role.upper() for role in roles}

    async def dependency(user: User = Depends(get_current_user)) -> User:
        if not allowed.intersection(get_user_roles(user)):
            logger.warning(f"⚠️ User {user.username} denied: requires one of roles {sorted(allowed)}")
            raise HTTPException(status_code=403, detail="Permission denied")
        return user

    return dependency
