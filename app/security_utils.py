"""
Security utilities: password hashing and JWT issuing/validation
"""

import base64
import hashlib
import logging
import secrets
import uuid
from datetime import datetime, timedelta
from typing import Any, Optional

from cryptography.fernet import Fernet
from jose import JWTError
from jose import jwt as jose_jwt

# Password hashing
from passlib.context import CryptContext

from . import config

logger = logging.getLogger(__name__)

ALGORITHM = "HS256"

# Claim names shared with the frontend
CLAIM_USER_ID = "nameid"
CLAIM_USERNAME = "unique_name"
CLAIM_EMAIL = "email"
CLAIM_ROLE = "role"
CLAIM_PERMISSION = "permission"

# Password hashing context
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


# ============================================================================
# PASSWORD SECURITY
# ============================================================================


def hash_password(password: str) -> str:
    """Hash password using bcrypt"""
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify password against bcrypt hash"""
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except Exception as e:
        logger.error(f"Password verification error: {e}")
        return False


# ============================================================================
# TOKEN GENERATION & VALIDATION
# ============================================================================


def create_access_token(
    user_id: int,
    username: str,
    email: str,
    roles: list[str],
    permissions: list[str],
    expires_delta: Optional[timedelta] = None,
) -> tuple[str, datetime]:
    """
    Create a signed access token

    Returns:
        (token, expires_at)
    """
    expire = datetime.utcnow() + (expires_delta or timedelta(hours=config.JWT_EXPIRATION_HOURS))
    to_encode = {
        CLAIM_USER_ID: str(user_id),
        CLAIM_USERNAME: username,
        CLAIM_EMAIL: email,
        "jti": str(uuid.uuid4()),
        CLAIM_ROLE: list(roles),
        CLAIM_PERMISSION: list(permissions),
        "iss": config.JWT_ISSUER,
        "aud": config.JWT_AUDIENCE,
        "exp": expire,
    }
    encoded_jwt = jose_jwt.encode(to_encode, config.SECRET_KEY, algorithm=ALGORITHM)
    return encoded_jwt, expire


def decode_access_token(token: str) -> Optional[dict[str, Any]]:
    """
    Verify and decode an access token (signature, issuer, audience, expiry)

    Returns:
        Decoded payload if valid, None if invalid or expired
    """
    try:
        return jose_jwt.decode(
            token,
            config.SECRET_KEY,
            algorithms=[ALGORITHM],
            audience=config.JWT_AUDIENCE,
            issuer=config.JWT_ISSUER,
        )
    except JWTError as e:
        logger.warning(f"JWT verification failed: {e}")
        return None


def claim_list(payload: dict[str, Any], claim: str) -> list[str]:
    """Role/permission claims may be a single string or a list"""
    value = payload.get(claim)
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    return list(value)


def generate_refresh_token() -> str:
    """64 random bytes, base64 encoded"""
    return base64.b64encode(secrets.token_bytes(64)).decode("ascii")


def hash_refresh_token(token: str) -> str:
    """Refresh tokens are stored as SHA-256 digests"""
    return hashlib.sha256(token.encode("utf-8")).hexdigest()


# ============================================================================
# SETTING ENCRYPTION
# ============================================================================

# Fernet key derived from SECRET_KEY
cipher_suite = Fernet(base64.urlsafe_b64encode(hashlib.sha256(config.SECRET_KEY.encode()).digest()))


def encrypt_value(value: str) -> str:
    """Encrypt a stored secret (e.g. an encrypted system setting)"""
    return cipher_suite.encrypt(value.encode()).decode()


def decrypt_value(encrypted_value: str) -> str:
    """Decrypt a stored secret"""
    return cipher_suite.decrypt(encrypted_value.encode()).decode()
