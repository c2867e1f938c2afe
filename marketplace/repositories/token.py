from datetime import datetime

from sqlalchemy.orm import Session

from marketplace.db.models.token import InvalidatedToken, PasswordResetToken


def is_token_invalidated(db: Session, token_id: str) -> bool:
    return db.query(InvalidatedToken).filter(InvalidatedToken.id == token_id).first() is not None


def invalidate_token(db: Session, token_id: str, expiry_time: datetime) -> None:
    if is_token_invalidated(db, token_id):
        return
    db.add(InvalidatedToken(id=token_id, expiry_time=expiry_time))
    db.commit()


def delete_expired_invalidated_tokens(db: Session, now: datetime) -> int:
    deleted = (
        db.query(InvalidatedToken)
        .filter(InvalidatedToken.expiry_time < now)
        .delete(synchronize_session=False)
    )
    db.commit()
    return deleted


def create_password_reset_token(
    db: Session, user_id: str, token: str, expiry_date: datetime
) -> PasswordResetToken:
    reset_token = PasswordResetToken(user_id=user_id, token=token, expiry_date=expiry_date)
    db.add(reset_token)
    db.commit()
    db.refresh(reset_token)
    return reset_token


def get_password_reset_token(db: Session, token: str) -> PasswordResetToken | None:
    return db.query(PasswordResetToken).filter(PasswordResetToken.token == token).first()


def delete_password_reset_token(db: Session, reset_token: PasswordResetToken) -> None:
    db.delete(reset_token)
    db.commit()
