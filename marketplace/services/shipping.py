"""Shipping fee quotes from the GHN API, with a flat fallback."""

import logging

import httpx

from marketplace.core.config import settings
from marketplace.schemas.shipping import ShippingFee

logger = logging.getLogger(__name__)

DEFAULT_WEIGHT_GRAM = 200
DEFAULT_ESTIMATED_DAYS = 3
PROVIDER = "GHN Express"
FALLBACK_PROVIDER = "GHN (Fallback)"

# GHN service type 2: light / e-commerce parcels
SERVICE_TYPE_ID = 2
PARCEL_SIZE_CM = {"length": 20, "width": 15, "height": 10}


def fallback_fee() -> ShippingFee:
    return ShippingFee(
        fee=settings.shipping_fallback_fee,
        estimated_days=DEFAULT_ESTIMATED_DAYS,
        provider=FALLBACK_PROVIDER,
    )


async def calculate_shipping_fee(
    from_district_code: str,
    to_district_code: str,
    to_ward_code: str,
    weight_gram: int,
) -> ShippingFee:
    """
    Ask GHN for the delivery fee of a parcel.

    Never raises: a missing token, a transport error, a non-2xx response or a
    body without ``data.total`` all yield the fallback fee.
    """
    if weight_gram <= 0:
        weight_gram = DEFAULT_WEIGHT_GRAM

    if not settings.ghn_token:
        logger.warning("GHN token not configured - using fallback shipping fee")
        return fallback_fee()

    logger.info(
        "Calling GHN API... From: %s, To: %s, Weight: %s",
        from_district_code,
        to_district_code,
        weight_gram,
    )

    headers = {"token": settings.ghn_token, "Content-Type": "application/json"}
    if settings.ghn_shop_id:
        headers["ShopId"] = settings.ghn_shop_id

    try:
        body = {
            "service_type_id": SERVICE_TYPE_ID,
            "from_district_id": int(from_district_code),
            "to_district_id": int(to_district_code),
            "to_ward_code": to_ward_code,
            "weight": weight_gram,
            "insurance_value": 0,
            "coupon": None,
            **PARCEL_SIZE_CM,
        }
    except ValueError:
        logger.error(
            "District codes must be numeric for GHN: %s -> %s",
            from_district_code,
            to_district_code,
        )
        return fallback_fee()

    try:
        async with httpx.AsyncClient() as client:
            response = await client.post(
                settings.ghn_api_url,
                json=body,
                headers=headers,
                timeout=settings.shipping_timeout_seconds,
            )
            response.raise_for_status()
            data = response.json().get("data") or {}
            total = float(data["total"])
    except httpx.HTTPStatusError as e:
        logger.error(
            "GHN API Error: Status=%s, Body=%s", e.response.status_code, e.response.text
        )
        return fallback_fee()
    except httpx.RequestError as e:
        logger.error("GHN API request failed: %s", e)
        return fallback_fee()
    except (AttributeError, KeyError, TypeError, ValueError) as e:
        logger.warning("GHN response is missing data: %s", e)
        return fallback_fee()

    logger.info("GHN Calculator Success: %s VND", total)
    return ShippingFee(fee=total, estimated_days=DEFAULT_ESTIMATED_DAYS, provider=PROVIDER)
