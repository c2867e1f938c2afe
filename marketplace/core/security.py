import uuid
from datetime import datetime, timedelta, timezone
from typing import Any

import jwt
from passlib.context import CryptContext

from marketplace.core.config import settings

ISSUER = "marketplace"

# Password hashing context
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a plain password against a hashed password."""
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password: str) -> str:
    """Hash a password."""
    return pwd_context.hash(password)


def build_scope(role_names: list[str]) -> str:
    """Space separated authorities, one ``ROLE_<name>`` per role."""
    return " ".join(f"ROLE_{name}" for name in sorted(role_names))


def create_access_token(
    username: str, scope: str, expires_delta: timedelta | None = None
) -> str:
    """Create a signed JWT access token for a user."""
    issued_at = datetime.now(timezone.utc)
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.access_token_expire_minutes)

    to_encode: dict[str, Any] = {
        "sub": username,
        "iss": ISSUER,
        "iat": issued_at,
        "exp": issued_at + expires_delta,
        "jti": str(uuid.uuid4()),
        "scope": scope,
    }
    return jwt.encode(to_encode, settings.secret_key, algorithm=settings.algorithm)


def decode_token(token: str, verify_exp: bool = True) -> dict[str, Any] | None:
    """Decode and verify a JWT token. Returns None when it is not acceptable."""
    try:
        return jwt.decode(
            token,
            settings.secret_key,
            algorithms=[settings.algorithm],
            options={"verify_exp": verify_exp},
        )
    except jwt.ExpiredSignatureError:
        return None
    except jwt.InvalidTokenError:
        return None
