from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.orm import Session

from marketplace.api.deps import get_db
from marketplace.schemas.auth import (
    AuthenticationRequest,
    AuthenticationResponse,
    IntrospectResponse,
    TokenRequest,
)
from marketplace.schemas.response import ApiResponse
from marketplace.services import auth as auth_service
from marketplace.services import password_recovery

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post(
    "/token",
    response_model=ApiResponse[AuthenticationResponse],
    response_model_exclude_none=True,
)
def authenticate(
    request: Request,
    credentials: AuthenticationRequest,
    db: Session = Depends(get_db),
):
    """Log in with username and password - returns a bearer token."""
    result = auth_service.authenticate(db, credentials.username, credentials.password)
    return ApiResponse.ok(request, result)


@router.post(
    "/introspect",
    response_model=ApiResponse[IntrospectResponse],
    response_model_exclude_none=True,
)
def introspect(request: Request, body: TokenRequest, db: Session = Depends(get_db)):
    """Tell whether a token is still valid. Never fails for a bad token."""
    return ApiResponse.ok(request, auth_service.introspect(db, body.token))


@router.post(
    "/refresh",
    response_model=ApiResponse[AuthenticationResponse],
    response_model_exclude_none=True,
)
def refresh(request: Request, body: TokenRequest, db: Session = Depends(get_db)):
    """Swap a token for a fresh one; the old one stops working."""
    return ApiResponse.ok(request, auth_service.refresh_token(db, body.token))


@router.post("/logout", response_model=ApiResponse[None], response_model_exclude_none=True)
def logout(request: Request, body: TokenRequest, db: Session = Depends(get_db)):
    auth_service.logout(db, body.token)
    return ApiResponse.ok(request, message="Logged out")


@router.post(
    "/forgot-password", response_model=ApiResponse[str], response_model_exclude_none=True
)
async def forgot_password(
    request: Request,
    email: str = Query(..., description="Email of the account to recover"),
    db: Session = Depends(get_db),
):
    """Email a password reset link to the account owner."""
    await password_recovery.send_reset_email(db, email)
    return ApiResponse.ok(request, "Password reset email sent")


@router.post(
    "/reset-password", response_model=ApiResponse[str], response_model_exclude_none=True
)
def reset_password(
    request: Request,
    token: str = Query(...),
    new_password: str = Query(...),
    db: Session = Depends(get_db),
):
    """Reset password using the token from the email."""
    password_recovery.reset_password(db, token, new_password)
    return ApiResponse.ok(request, "Password has been reset successfully")
