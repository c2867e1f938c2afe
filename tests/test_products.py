from sqlalchemy.orm import Session

from marketplace.db.models.product import Product as ProductModel


def _create(client, token: str, **overrides):
    payload = {
        "shop_id": overrides.pop("shop_id"),
        "name": "Casio FX-580",
        "price": 550000,
        "weight": 150,
        "brand": "Casio",
        "description": "Scientific calculator",
        "category_names": ["Electronics", " Study  Supplies"],
    }
    payload.update(overrides)
    return client.post(
        "/api/v1/products",
        json=payload,
        headers={"Authorization": f"Bearer {token}"},
    )


# ============================================================================
# CREATE PRODUCT TESTS
# ============================================================================


def test_owner_creates_product(client, db: Session, shop, seller_token: str):
    """Test the shop owner can add products; categories are created on demand."""
    response = _create(client, seller_token, shop_id=shop.id)
    assert response.status_code == 201
    product = response.json()["result"]
    assert product["shop_id"] == shop.id
    assert sorted(c["name"] for c in product["categories"]) == ["electronics", "study supplies"]

    categories = client.get("/api/v1/categories").json()["result"]
    assert len(categories) == 2


def test_admin_creates_product_in_any_shop(client, db: Session, shop, admin_token: str):
    response = _create(client, admin_token, shop_id=shop.id)
    assert response.status_code == 201


def test_non_owner_cannot_create_product(client, db: Session, shop, buyer_token: str):
    response = _create(client, buyer_token, shop_id=shop.id)
    assert response.status_code == 403
    assert response.json()["code"] == 1101


def test_create_product_unknown_shop(client, db: Session, seller_token: str):
    response = _create(client, seller_token, shop_id="missing")
    assert response.status_code == 404
    assert response.json()["code"] == 1300


def test_create_product_negative_price(client, db: Session, shop, seller_token: str):
    response = _create(client, seller_token, shop_id=shop.id, price=-1)
    assert response.status_code == 400
    assert response.json()["code"] == 1000


# ============================================================================
# READ PRODUCT TESTS
# ============================================================================


def test_get_product(client, db: Session, product):
    response = client.get(f"/api/v1/products/{product.id}")
    assert response.status_code == 200
    assert response.json()["result"]["name"] == "calculus textbook"


def test_get_product_not_found(client, db: Session):
    response = client.get("/api/v1/products/missing")
    assert response.status_code == 400
    assert response.json()["code"] == 1500


def test_products_by_shop(client, db: Session, shop, product):
    response = client.get(f"/api/v1/products/shop/{shop.id}")
    assert [p["id"] for p in response.json()["result"]] == [product.id]

    response = client.get("/api/v1/products/shop/missing")
    assert response.json()["code"] == 1300


def test_products_by_category_brand_and_keyword(client, db: Session, shop, seller_token: str):
    _create(client, seller_token, shop_id=shop.id)
    _create(
        client,
        seller_token,
        shop_id=shop.id,
        name="Thien Long Pen",
        brand="Thien Long",
        category_names=["Study Supplies"],
    )

    by_category = client.get("/api/v1/products/category/STUDY SUPPLIES").json()["result"]
    assert len(by_category) == 2

    by_brand = client.get("/api/v1/products/brand/casio").json()["result"]
    assert [p["name"] for p in by_brand] == ["Casio FX-580"]

    by_keyword = client.get("/api/v1/products/search", params={"keyword": "PEN"}).json()["result"]
    assert [p["name"] for p in by_keyword] == ["Thien Long Pen"]


# ============================================================================
# UPDATE / DELETE PRODUCT TESTS
# ============================================================================


def test_update_product(client, db: Session, product, seller_token: str):
    response = client.put(
        f"/api/v1/products/{product.id}",
        json={"price": 99000, "category_names": ["Books"]},
        headers={"Authorization": f"Bearer {seller_token}"},
    )
    assert response.status_code == 200
    result = response.json()["result"]
    assert result["price"] == 99000
    assert result["name"] == "calculus textbook"
    assert [c["name"] for c in result["categories"]] == ["books"]


def test_update_product_by_stranger(client, db: Session, product, buyer_token: str):
    response = client.put(
        f"/api/v1/products/{product.id}",
        json={"price": 1},
        headers={"Authorization": f"Bearer {buyer_token}"},
    )
    assert response.status_code == 403


def test_delete_product(client, db: Session, product, seller_token: str):
    response = client.delete(
        f"/api/v1/products/{product.id}",
        headers={"Authorization": f"Bearer {seller_token}"},
    )
    assert response.status_code == 200
    assert client.get(f"/api/v1/products/{product.id}").json()["code"] == 1500


def test_delete_product_held_in_another_users_cart(
    client, db: Session, product, seller_token: str, buyer, buyer_token: str
):
    """Deleting a product drops its cart lines and refreshes the cart total."""
    pen = ProductModel(name="gel pen", price=5000, weight=10, shop_id=product.shop_id)
    db.add(pen)
    db.commit()
    buyer_headers = {"Authorization": f"Bearer {buyer_token}"}
    for product_id, quantity in ((product.id, 2), (pen.id, 3)):
        client.post(
            f"/api/v1/cart/{buyer.id}/items",
            json={"product_id": product_id, "quantity": quantity},
            headers=buyer_headers,
        )

    response = client.delete(
        f"/api/v1/products/{product.id}",
        headers={"Authorization": f"Bearer {seller_token}"},
    )
    assert response.status_code == 200

    response = client.get(f"/api/v1/cart/{buyer.id}", headers=buyer_headers)
    assert response.status_code == 200
    cart = response.json()["result"]
    assert [item["product_id"] for item in cart["items"]] == [pen.id]
    assert cart["total_amount"] == 15000


def test_delete_ordered_product_keeps_order_history(
    client, db: Session, product, seller_token: str, buyer_token: str
):
    buyer_headers = {"Authorization": f"Bearer {buyer_token}"}
    order = client.post(
        "/api/v1/orders/buy-now",
        json={"product_id": product.id, "quantity": 1},
        headers=buyer_headers,
    ).json()["result"]

    response = client.delete(
        f"/api/v1/products/{product.id}",
        headers={"Authorization": f"Bearer {seller_token}"},
    )
    assert response.status_code == 200

    response = client.get(f"/api/v1/orders/{order['id']}", headers=buyer_headers)
    assert response.status_code == 200
    (item,) = response.json()["result"]["items"]
    assert item.get("product_id") is None
    assert item["product_name"] == "calculus textbook"
    assert item["price_at_purchase"] == 120000


# ============================================================================
# IMAGE TESTS
# ============================================================================


def test_add_and_replace_images(client, db: Session, product, seller_token: str):
    headers = {"Authorization": f"Bearer {seller_token}"}

    response = client.post(
        f"/api/v1/products/{product.id}/images",
        json=[
            {"image_url": "https://cdn.example.com/front.jpg", "image_type": "front"},
            {"image_url": "https://cdn.example.com/back.jpg", "image_type": "back"},
        ],
        headers=headers,
    )
    assert response.status_code == 200
    assert len(response.json()["result"]) == 2

    response = client.put(
        f"/api/v1/products/{product.id}/images",
        json=[{"image_url": "https://cdn.example.com/new.jpg", "description": "Cover"}],
        headers=headers,
    )
    assert response.status_code == 200

    images = client.get(f"/api/v1/products/{product.id}").json()["result"]["images"]
    assert images == [{"image_url": "https://cdn.example.com/new.jpg", "description": "Cover"}]


def test_add_images_by_stranger(client, db: Session, product, buyer_token: str):
    response = client.post(
        f"/api/v1/products/{product.id}/images",
        json=[{"image_url": "https://cdn.example.com/x.jpg"}],
        headers={"Authorization": f"Bearer {buyer_token}"},
    )
    assert response.status_code == 403
