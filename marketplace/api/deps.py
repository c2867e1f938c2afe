from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

import marketplace.repositories.token as token_repo
from marketplace.core.security import decode_token
from marketplace.core.security_context import ANONYMOUS, Identity, SecurityContext
from marketplace.db import SessionLocal
from marketplace.errors import AppError, ErrorCode

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/v1/auth/token", auto_error=False)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_security_context(
    token: str | None = Depends(oauth2_scheme),
    db: Session = Depends(get_db),
) -> SecurityContext:
    """
    Build the request's security context from the bearer token.

    No token gives the anonymous identity. A token that is expired,
    ill-signed or logged out is rejected with UNAUTHENTICATED.
    """
    if token is None:
        return SecurityContext(identity=ANONYMOUS)

    payload = decode_token(token)
    if payload is None:
        raise AppError(ErrorCode.UNAUTHENTICATED)

    username = payload.get("sub")
    token_id = payload.get("jti")
    if not username or not token_id or token_repo.is_token_invalidated(db, token_id):
        raise AppError(ErrorCode.UNAUTHENTICATED)

    authorities = frozenset((payload.get("scope") or "").split())
    return SecurityContext(identity=Identity(name=username, authorities=authorities))


def require_authenticated(
    ctx: SecurityContext = Depends(get_security_context),
) -> SecurityContext:
    """Protected routes: anonymous callers get UNAUTHENTICATED."""
    if ctx.identity is None or ctx.identity.anonymous:
        raise AppError(ErrorCode.UNAUTHENTICATED)
    return ctx
