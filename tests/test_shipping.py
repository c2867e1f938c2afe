import asyncio
from unittest.mock import AsyncMock, patch

import httpx
import pytest

from marketplace.core.config import settings
from marketplace.services.shipping import calculate_shipping_fee

GHN_URL = "https://ghn.test/fee"


@pytest.fixture
def ghn_configured(monkeypatch):
    monkeypatch.setattr(settings, "ghn_token", "test-token")
    monkeypatch.setattr(settings, "ghn_shop_id", "123")
    monkeypatch.setattr(settings, "ghn_api_url", GHN_URL)


def _response(status_code: int, body) -> httpx.Response:
    return httpx.Response(status_code, json=body, request=httpx.Request("POST", GHN_URL))


def _quote(weight_gram: int = 500):
    return asyncio.run(calculate_shipping_fee("1488", "1489", "20402", weight_gram))


def test_fallback_without_token():
    quote = _quote()
    assert quote.fee == 30000
    assert quote.estimated_days == 3
    assert quote.provider == "GHN (Fallback)"


def test_ghn_success(ghn_configured):
    mock_post = AsyncMock(return_value=_response(200, {"code": 200, "data": {"total": 36500}}))
    with patch("httpx.AsyncClient.post", new=mock_post):
        quote = _quote(750)

    assert quote.fee == 36500
    assert quote.provider == "GHN Express"

    _, kwargs = mock_post.call_args
    assert kwargs["headers"]["token"] == "test-token"
    assert kwargs["headers"]["ShopId"] == "123"
    assert kwargs["json"]["from_district_id"] == 1488
    assert kwargs["json"]["to_ward_code"] == "20402"
    assert kwargs["json"]["weight"] == 750


def test_zero_weight_uses_default(ghn_configured):
    mock_post = AsyncMock(return_value=_response(200, {"data": {"total": 20000}}))
    with patch("httpx.AsyncClient.post", new=mock_post):
        _quote(0)

    assert mock_post.call_args.kwargs["json"]["weight"] == 200


def test_ghn_error_status_falls_back(ghn_configured):
    mock_post = AsyncMock(return_value=_response(400, {"message": "invalid ward"}))
    with patch("httpx.AsyncClient.post", new=mock_post):
        quote = _quote()
    assert quote.provider == "GHN (Fallback)"


def test_ghn_network_error_falls_back(ghn_configured):
    mock_post = AsyncMock(side_effect=httpx.ConnectError("connection refused"))
    with patch("httpx.AsyncClient.post", new=mock_post):
        quote = _quote()
    assert quote.fee == 30000


def test_ghn_missing_data_falls_back(ghn_configured):
    mock_post = AsyncMock(return_value=_response(200, {"code": 200, "data": None}))
    with patch("httpx.AsyncClient.post", new=mock_post):
        quote = _quote()
    assert quote.provider == "GHN (Fallback)"


def test_non_numeric_district_falls_back(ghn_configured):
    quote = asyncio.run(calculate_shipping_fee("HN-01", "1489", "20402", 500))
    assert quote.provider == "GHN (Fallback)"


def test_shipping_fee_endpoint(client, buyer_token: str):
    response = client.post(
        "/api/v1/shipping/fee",
        json={
            "from_district_code": "1488",
            "to_district_code": "1489",
            "to_ward_code": "20402",
            "weight_gram": 300,
        },
        headers={"Authorization": f"Bearer {buyer_token}"},
    )
    assert response.status_code == 200
    assert response.json()["result"] == {
        "fee": 30000,
        "estimated_days": 3,
        "provider": "GHN (Fallback)",
    }


def test_shipping_fee_requires_login(client):
    response = client.post(
        "/api/v1/shipping/fee",
        json={
            "from_district_code": "1488",
            "to_district_code": "1489",
            "to_ward_code": "20402",
            "weight_gram": 300,
        },
    )
    assert response.status_code == 401
