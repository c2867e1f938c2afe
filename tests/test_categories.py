from sqlalchemy.orm import Session

from marketplace.services.category import normalize_name


def test_normalize_name():
    assert normalize_name("  Home   Decor ") == "home decor"
    assert normalize_name("BOOKS") == "books"


def test_admin_creates_category(client, db: Session, admin_token: str):
    response = client.post(
        "/api/v1/categories",
        json={"name": "  Study   Supplies "},
        headers={"Authorization": f"Bearer {admin_token}"},
    )
    assert response.status_code == 201
    assert response.json()["result"]["name"] == "study supplies"


def test_duplicate_category_after_normalization(client, db: Session, admin_token: str):
    headers = {"Authorization": f"Bearer {admin_token}"}
    client.post("/api/v1/categories", json={"name": "Books"}, headers=headers)
    response = client.post("/api/v1/categories", json={"name": " BOOKS "}, headers=headers)
    assert response.status_code == 400
    assert response.json()["code"] == 1400


def test_user_cannot_create_category(client, db: Session, buyer_token: str):
    response = client.post(
        "/api/v1/categories",
        json={"name": "Books"},
        headers={"Authorization": f"Bearer {buyer_token}"},
    )
    assert response.status_code == 403


def test_get_and_search_categories(client, db: Session, admin_token: str):
    headers = {"Authorization": f"Bearer {admin_token}"}
    created = client.post("/api/v1/categories", json={"name": "Books"}, headers=headers)
    client.post("/api/v1/categories", json={"name": "Notebooks"}, headers=headers)
    client.post("/api/v1/categories", json={"name": "Snacks"}, headers=headers)

    category_id = created.json()["result"]["id"]
    response = client.get(f"/api/v1/categories/{category_id}")
    assert response.json()["result"]["name"] == "books"

    response = client.get("/api/v1/categories/search", params={"keyword": "BOOK"})
    assert [c["name"] for c in response.json()["result"]] == ["books", "notebooks"]

    response = client.get("/api/v1/categories")
    assert len(response.json()["result"]) == 3


def test_get_category_not_found(client, db: Session):
    response = client.get("/api/v1/categories/missing")
    assert response.status_code == 400
    assert response.json()["code"] == 1401


def test_delete_category(client, db: Session, admin_token: str):
    headers = {"Authorization": f"Bearer {admin_token}"}
    client.post("/api/v1/categories", json={"name": "Books"}, headers=headers)

    response = client.delete("/api/v1/categories/BOOKS", headers=headers)
    assert response.status_code == 200

    response = client.delete("/api/v1/categories/books", headers=headers)
    assert response.status_code == 400
    assert response.json()["code"] == 1401


def test_delete_category_in_use(
    client, db: Session, admin_token: str, seller_token: str, shop
):
    client.post(
        "/api/v1/products",
        json={"shop_id": shop.id, "name": "Pen", "price": 5000, "category_names": ["Stationery"]},
        headers={"Authorization": f"Bearer {seller_token}"},
    )
    response = client.delete(
        "/api/v1/categories/stationery",
        headers={"Authorization": f"Bearer {admin_token}"},
    )
    assert response.status_code == 400
    assert response.json()["code"] == 1402
