from datetime import datetime, timedelta
from unittest.mock import AsyncMock, patch

from sqlalchemy.orm import Session

from marketplace.core.security import verify_password
from marketplace.db.models.token import PasswordResetToken
from marketplace.db.models.user import User as UserModel
from marketplace.repositories.token import create_password_reset_token


def test_forgot_password_sends_email(client, db: Session, buyer: UserModel):
    mock_send = AsyncMock()
    with patch("marketplace.services.password_recovery.send_password_reset_email", new=mock_send):
        response = client.post(
            "/api/v1/auth/forgot-password", params={"email": "buyer@sis.hust.edu.vn"}
        )

    assert response.status_code == 200
    assert response.json()["code"] == 1000

    stored = db.query(PasswordResetToken).filter(PasswordResetToken.user_id == buyer.id).one()
    assert stored.expiry_date > datetime.now() + timedelta(minutes=29)
    mock_send.assert_awaited_once_with("buyer@sis.hust.edu.vn", "buyer", stored.token)


def test_forgot_password_unknown_email(client, db: Session):
    response = client.post(
        "/api/v1/auth/forgot-password", params={"email": "ghost@hust.edu.vn"}
    )
    assert response.status_code == 404
    assert response.json()["code"] == 1203


def test_forgot_password_without_smtp(client, db: Session, buyer: UserModel):
    response = client.post(
        "/api/v1/auth/forgot-password", params={"email": "buyer@sis.hust.edu.vn"}
    )
    assert response.status_code == 400
    assert response.json()["code"] == 1206


def test_reset_password(client, db: Session, buyer: UserModel):
    create_password_reset_token(
        db, buyer.id, "reset-token-1", datetime.now() + timedelta(minutes=30)
    )

    response = client.post(
        "/api/v1/auth/reset-password",
        params={"token": "reset-token-1", "new_password": "BrandNewPass1"},
    )
    assert response.status_code == 200

    db.refresh(buyer)
    assert verify_password("BrandNewPass1", buyer.password_hash)
    assert db.query(PasswordResetToken).count() == 0

    # New password works for login
    response = client.post(
        "/api/v1/auth/token", json={"username": "buyer", "password": "BrandNewPass1"}
    )
    assert response.json()["result"]["authenticated"] is True


def test_reset_password_token_is_single_use(client, db: Session, buyer: UserModel):
    create_password_reset_token(
        db, buyer.id, "reset-token-2", datetime.now() + timedelta(minutes=30)
    )
    params = {"token": "reset-token-2", "new_password": "BrandNewPass1"}
    assert client.post("/api/v1/auth/reset-password", params=params).status_code == 200

    response = client.post("/api/v1/auth/reset-password", params=params)
    assert response.json()["code"] == 1102


def test_reset_password_unknown_token(client, db: Session):
    response = client.post(
        "/api/v1/auth/reset-password",
        params={"token": "nope", "new_password": "BrandNewPass1"},
    )
    assert response.status_code == 400
    assert response.json()["code"] == 1102


def test_reset_password_expired_token(client, db: Session, buyer: UserModel):
    create_password_reset_token(
        db, buyer.id, "stale-token", datetime.now() - timedelta(minutes=1)
    )
    response = client.post(
        "/api/v1/auth/reset-password",
        params={"token": "stale-token", "new_password": "BrandNewPass1"},
    )
    assert response.status_code == 400
    assert response.json()["code"] == 1103


def test_reset_password_too_short(client, db: Session, buyer: UserModel):
    create_password_reset_token(
        db, buyer.id, "short-token", datetime.now() + timedelta(minutes=30)
    )
    response = client.post(
        "/api/v1/auth/reset-password",
        params={"token": "short-token", "new_password": "short"},
    )
    assert response.status_code == 400
    assert response.json()["code"] == 1202

    db.refresh(buyer)
    assert verify_password("BuyerPass123", buyer.password_hash)
