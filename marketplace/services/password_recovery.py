"""Password recovery: one-time reset tokens sent by email."""

import logging
import uuid
from datetime import datetime, timedelta

import aiosmtplib
from sqlalchemy.orm import Session

import marketplace.repositories.token as token_repo
import marketplace.repositories.user as user_repo
from marketplace.core.config import settings
from marketplace.core.security import get_password_hash
from marketplace.errors import AppError, ErrorCode
from marketplace.schemas.user import MIN_PASSWORD_LENGTH
from marketplace.services.email import send_password_reset_email

logger = logging.getLogger(__name__)


async def send_reset_email(db: Session, email: str) -> None:
    """
    Create a reset token for the user owning ``email`` and mail the link.

    Raises:
        AppError(USER_NOT_EXIST): no user has this email.
        AppError(EMAIL_SEND_FAILED): SMTP is missing or refused the message.
    """
    user = user_repo.get_user_by_email(db, email)
    if user is None:
        raise AppError(ErrorCode.USER_NOT_EXIST)

    token = str(uuid.uuid4())
    expiry = datetime.now() + timedelta(minutes=settings.password_reset_token_expire_minutes)
    token_repo.create_password_reset_token(db, user.id, token, expiry)

    try:
        await send_password_reset_email(user.email, user.username, token)
    except (ValueError, OSError, aiosmtplib.SMTPException) as e:
        logger.error("Cannot send password reset email to %s: %s", user.email, e)
        raise AppError(ErrorCode.EMAIL_SEND_FAILED) from e


def reset_password(db: Session, token: str, new_password: str) -> None:
    """
    Set a new password using a reset token; the token is consumed.

    Raises:
        AppError(INVALID_TOKEN): unknown token.
        AppError(TOKEN_EXPIRED): token past its expiry.
        AppError(PASSWORD_INVALID): new password too short.
    """
    reset_token = token_repo.get_password_reset_token(db, token)
    if reset_token is None:
        raise AppError(ErrorCode.INVALID_TOKEN)

    if reset_token.expiry_date < datetime.now():
        raise AppError(ErrorCode.TOKEN_EXPIRED)

    if len(new_password) < MIN_PASSWORD_LENGTH:
        raise AppError(ErrorCode.PASSWORD_INVALID)

    user = user_repo.get_user_by_id(db, reset_token.user_id)
    if user is None:
        raise AppError(ErrorCode.USER_NOT_EXIST)

    user_repo.update_user_password(db, user, get_password_hash(new_password))
    token_repo.delete_password_reset_token(db, reset_token)
    logger.info("Password reset for user %s", user.username)
