from sqlalchemy.orm import Session

from marketplace.core.security import verify_password
from marketplace.repositories.user import get_user_by_username


def _register(client, **overrides):
    payload = {
        "username": "student",
        "password": "Password123",
        "email": "student@sis.hust.edu.vn",
        "fullname": "Test Student",
    }
    payload.update(overrides)
    return client.post("/api/v1/users", json=payload)


# ============================================================================
# REGISTRATION TESTS
# ============================================================================


def test_register_success(client, db: Session):
    """Test anyone can register and gets the USER role."""
    response = _register(client)
    assert response.status_code == 201
    data = response.json()
    assert data["code"] == 1000
    assert data["path"] == "/api/v1/users"
    user = data["result"]
    assert user["username"] == "student"
    assert user["email"] == "student@sis.hust.edu.vn"
    assert [role["name"] for role in user["roles"]] == ["USER"]
    assert "password" not in user
    assert "password_hash" not in user


def test_register_with_address(client, db: Session, locations):
    response = _register(
        client,
        address={"name": "Home", "phone": "0900", "address_detail": "1 Dai Co Viet", "ward_code": "20308"},
    )
    assert response.status_code == 201
    address = response.json()["result"]["address"]
    assert address["ward_code"] == "20308"
    assert address["district_code"] == "1488"
    assert address["province_code"] == "01"


def test_register_unknown_ward(client, db: Session, locations):
    response = _register(client, address={"ward_code": "99999"})
    assert response.status_code == 400
    assert response.json()["code"] == 1800


def test_register_short_username(client, db: Session):
    response = _register(client, username="ab")
    assert response.status_code == 400
    data = response.json()
    assert data["code"] == 1000
    assert data["message"] == "Username must be at least 3 characters"


def test_register_short_username_and_password(client, db: Session):
    """Test both violations are reported together."""
    response = _register(client, username="ab", password="short")
    assert response.status_code == 400
    assert response.json()["message"] == (
        "Username must be at least 3 characters; Password must be at least 8 characters"
    )


def test_register_duplicate_username(client, db: Session):
    _register(client)
    response = _register(client, email="other@sis.hust.edu.vn")
    assert response.status_code == 400
    assert response.json()["code"] == 1200


def test_register_non_hust_email(client, db: Session):
    response = _register(client, email="student@gmail.com")
    assert response.status_code == 400
    assert response.json()["code"] == 1204
    assert response.json()["message"] == "Your email must be HUST email"


def test_register_duplicate_email(client, db: Session):
    _register(client)
    response = _register(client, username="student2")
    assert response.status_code == 400
    assert response.json()["code"] == 1205


# ============================================================================
# READ TESTS
# ============================================================================


def test_admin_can_list_users(client, db: Session, admin_token: str, buyer):
    response = client.get(
        "/api/v1/users",
        headers={"Authorization": f"Bearer {admin_token}"},
    )
    assert response.status_code == 200
    usernames = {user["username"] for user in response.json()["result"]}
    assert usernames == {"admin", "buyer"}


def test_user_cannot_list_users(client, db: Session, buyer_token: str):
    response = client.get(
        "/api/v1/users",
        headers={"Authorization": f"Bearer {buyer_token}"},
    )
    assert response.status_code == 403
    assert response.json()["code"] == 1101


def test_admin_get_user_not_found(client, db: Session, admin_token: str):
    response = client.get(
        "/api/v1/users/missing",
        headers={"Authorization": f"Bearer {admin_token}"},
    )
    assert response.status_code == 404
    assert response.json()["code"] == 1203


def test_my_info(client, db: Session, buyer, buyer_token: str):
    response = client.get(
        "/api/v1/users/my-info",
        headers={"Authorization": f"Bearer {buyer_token}"},
    )
    assert response.status_code == 200
    assert response.json()["result"]["id"] == buyer.id


# ============================================================================
# UPDATE TESTS
# ============================================================================


def test_user_updates_self(client, db: Session, buyer, buyer_token: str):
    response = client.put(
        f"/api/v1/users/{buyer.id}",
        json={"fullname": "New Name", "password": "NewPassword1"},
        headers={"Authorization": f"Bearer {buyer_token}"},
    )
    assert response.status_code == 200
    assert response.json()["result"]["fullname"] == "New Name"

    db.expire_all()
    assert verify_password("NewPassword1", get_user_by_username(db, "buyer").password_hash)


def test_blank_password_keeps_current(client, db: Session, buyer, buyer_token: str):
    response = client.put(
        f"/api/v1/users/{buyer.id}",
        json={"password": "   "},
        headers={"Authorization": f"Bearer {buyer_token}"},
    )
    assert response.status_code == 200
    db.expire_all()
    assert verify_password("BuyerPass123", get_user_by_username(db, "buyer").password_hash)


def test_user_cannot_update_other_user(client, db: Session, buyer, seller_token: str):
    response = client.put(
        f"/api/v1/users/{buyer.id}",
        json={"fullname": "Hacked"},
        headers={"Authorization": f"Bearer {seller_token}"},
    )
    assert response.status_code == 403
    assert response.json()["code"] == 1101


def test_user_cannot_change_own_roles(client, db: Session, buyer, buyer_token: str):
    response = client.put(
        f"/api/v1/users/{buyer.id}",
        json={"roles": ["ADMIN"]},
        headers={"Authorization": f"Bearer {buyer_token}"},
    )
    assert response.status_code == 403


def test_admin_changes_roles(client, db: Session, buyer, admin_token: str):
    response = client.put(
        f"/api/v1/users/{buyer.id}",
        json={"roles": ["ADMIN", "USER"]},
        headers={"Authorization": f"Bearer {admin_token}"},
    )
    assert response.status_code == 200
    roles = sorted(role["name"] for role in response.json()["result"]["roles"])
    assert roles == ["ADMIN", "USER"]


# ============================================================================
# DELETE TESTS
# ============================================================================


def test_admin_deletes_user(client, db: Session, buyer, admin_token: str):
    response = client.delete(
        f"/api/v1/users/{buyer.id}",
        headers={"Authorization": f"Bearer {admin_token}"},
    )
    assert response.status_code == 200
    db.expire_all()
    assert get_user_by_username(db, "buyer") is None


def test_admin_deletes_seller_referenced_by_buyers(
    client, db: Session, product, buyer, buyer_token: str, seller, admin_token: str
):
    """The seller's products leave other carts; past orders stay readable."""
    buyer_headers = {"Authorization": f"Bearer {buyer_token}"}
    client.post(
        f"/api/v1/cart/{buyer.id}/items",
        json={"product_id": product.id, "quantity": 2},
        headers=buyer_headers,
    )
    order = client.post(
        "/api/v1/orders/buy-now",
        json={"product_id": product.id, "quantity": 1},
        headers=buyer_headers,
    ).json()["result"]

    response = client.delete(
        f"/api/v1/users/{seller.id}",
        headers={"Authorization": f"Bearer {admin_token}"},
    )
    assert response.status_code == 200

    cart = client.get(f"/api/v1/cart/{buyer.id}", headers=buyer_headers).json()["result"]
    assert cart["items"] == []
    assert cart["total_amount"] == 0

    response = client.get(f"/api/v1/orders/{order['id']}", headers=buyer_headers)
    assert response.status_code == 200
    stored = response.json()["result"]
    assert stored.get("shop_id") is None
    assert stored["items"][0]["product_name"] == "calculus textbook"


def test_user_cannot_delete(client, db: Session, seller, buyer_token: str):
    response = client.delete(
        f"/api/v1/users/{seller.id}",
        headers={"Authorization": f"Bearer {buyer_token}"},
    )
    assert response.status_code == 403
