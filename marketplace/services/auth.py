"""Auth service: token issuing, introspection, refresh, logout and token cleanup."""

import logging
from datetime import datetime, timedelta

from sqlalchemy.orm import Session

import marketplace.repositories.token as token_repo
import marketplace.repositories.user as user_repo
from marketplace.core.config import settings
from marketplace.core.security import (
    build_scope,
    create_access_token,
    decode_token,
    verify_password,
)
from marketplace.errors import AppError, ErrorCode
from marketplace.schemas.auth import AuthenticationResponse, IntrospectResponse

logger = logging.getLogger(__name__)


def _timestamp(value: int | float) -> datetime:
    """JWT numeric date to a naive local datetime, matching the rest of the schema."""
    return datetime.fromtimestamp(value)


def _verify(db: Session, token: str, is_refresh: bool = False) -> dict:
    """
    Decode a token and make sure it is still usable.

    Refresh accepts an expired token as long as it was issued less than
    ``REFRESHABLE_DURATION_MINUTES`` ago.

    Raises:
        AppError(UNAUTHENTICATED): bad signature, expired, or invalidated token.
    """
    payload = decode_token(token, verify_exp=not is_refresh)
    if payload is None:
        raise AppError(ErrorCode.UNAUTHENTICATED)

    if is_refresh:
        refreshable_until = _timestamp(payload["iat"]) + timedelta(
            minutes=settings.refreshable_duration_minutes
        )
        if refreshable_until < datetime.now():
            raise AppError(ErrorCode.UNAUTHENTICATED)

    token_id = payload.get("jti")
    if not token_id or token_repo.is_token_invalidated(db, token_id):
        raise AppError(ErrorCode.UNAUTHENTICATED)

    return payload


def authenticate(db: Session, username: str, password: str) -> AuthenticationResponse:
    """
    Check credentials and issue an access token.

    Raises:
        AppError(USER_NOT_EXIST): unknown username.
        AppError(UNAUTHENTICATED): wrong password.
    """
    user = user_repo.get_user_by_username(db, username)
    if user is None:
        raise AppError(ErrorCode.USER_NOT_EXIST)
    if not verify_password(password, user.password_hash):
        raise AppError(ErrorCode.UNAUTHENTICATED)

    token = create_access_token(user.username, build_scope(user.role_names))
    return AuthenticationResponse(token=token, authenticated=True)


def introspect(db: Session, token: str) -> IntrospectResponse:
    try:
        _verify(db, token)
    except AppError:
        return IntrospectResponse(valid=False)
    return IntrospectResponse(valid=True)


def refresh_token(db: Session, token: str) -> AuthenticationResponse:
    """Invalidate the presented token and issue a fresh one for the same user."""
    payload = _verify(db, token, is_refresh=True)

    token_repo.invalidate_token(db, payload["jti"], _timestamp(payload["exp"]))

    user = user_repo.get_user_by_username(db, payload["sub"])
    if user is None:
        raise AppError(ErrorCode.UNAUTHENTICATED)

    new_token = create_access_token(user.username, build_scope(user.role_names))
    return AuthenticationResponse(token=new_token, authenticated=True)


def logout(db: Session, token: str) -> None:
    try:
        payload = _verify(db, token, is_refresh=True)
    except AppError:
        logger.info("Logout called with a token that is already invalid")
        return
    token_repo.invalidate_token(db, payload["jti"], _timestamp(payload["exp"]))


def cleanup_expired_tokens(db: Session) -> int:
    """Drop invalidated-token rows whose expiry has passed; returns how many."""
    deleted = token_repo.delete_expired_invalidated_tokens(db, datetime.now())
    if deleted:
        logger.info("Removed %d expired invalidated tokens", deleted)
    return deleted
