"""Orders: cart checkout split per shop, buy-now, listing and status changes."""

import logging
from datetime import date, timedelta

from sqlalchemy.orm import Session

import marketplace.repositories.order as order_repo
import marketplace.repositories.product as product_repo
import marketplace.repositories.user as user_repo
from marketplace.core.security_context import (
    SecurityContext,
    get_current_username,
    has_role,
    require_admin,
)
from marketplace.db.models.address import Address as AddressModel
from marketplace.db.models.order import Order as OrderModel
from marketplace.db.models.order import OrderItem as OrderItemModel
from marketplace.db.models.order import OrderStatus
from marketplace.db.models.product import Product as ProductModel
from marketplace.db.models.shop import Shop as ShopModel
from marketplace.errors import AppError, ErrorCode
from marketplace.schemas.order import BuyNowRequest, CheckoutRequest
from marketplace.schemas.shipping import ShippingFee
from marketplace.services.cart import calculate_total
from marketplace.services.shipping import calculate_shipping_fee, fallback_fee
from marketplace.services.user import get_current_user

logger = logging.getLogger(__name__)

SHIPMENT_LEAD_DAYS = 3


async def _quote_shipping(
    shop: ShopModel, destination: AddressModel, weight_gram: int
) -> ShippingFee:
    """Shipping quote from the shop's ward to the buyer's ward; flat fee when either is unknown."""
    origin = shop.address
    if origin is None or origin.ward is None or destination.ward is None:
        return fallback_fee()
    return await calculate_shipping_fee(
        from_district_code=origin.district_code,
        to_district_code=destination.district_code,
        to_ward_code=destination.ward_code,
        weight_gram=weight_gram,
    )


async def _build_shop_order(
    user_id: str,
    shop: ShopModel,
    lines: list[tuple[ProductModel, int]],
    destination: AddressModel,
) -> OrderModel:
    weight = int(sum(product.weight * quantity for product, quantity in lines))
    quote = await _quote_shipping(shop, destination, weight)

    items = [
        OrderItemModel(
            product=product,
            product_name=product.name,
            quantity=quantity,
            price_at_purchase=product.price,
        )
        for product, quantity in lines
    ]
    return order_repo.build_order(
        user_id=user_id,
        shop_id=shop.id,
        items=items,
        shipping_fee=quote.fee,
        shipping_provider=quote.provider,
        estimated_delivery_date=date.today() + timedelta(days=SHIPMENT_LEAD_DAYS),
    )


async def checkout(
    db: Session, request: CheckoutRequest, ctx: SecurityContext
) -> list[OrderModel]:
    """
    Turn the selected cart lines into orders, one per shop.

    Each order gets its own shipment and shipping fee. Checked-out lines
    leave the cart; the remaining lines stay.

    Raises:
        AppError(ADDRESS_NOT_FOUND): caller has no delivery address.
        AppError(CART_EMPTY): caller has no cart or an empty one.
        AppError(CART_ITEM_NOT_EXIST): none of the requested products is in the cart.
    """
    user = get_current_user(db, ctx)

    if user.address is None:
        raise AppError(ErrorCode.ADDRESS_NOT_FOUND)

    cart = user.cart
    if cart is None or not cart.items:
        raise AppError(ErrorCode.CART_EMPTY)

    wanted = set(request.product_ids)
    selected = [item for item in cart.items if item.product_id in wanted]
    if not selected:
        raise AppError(ErrorCode.CART_ITEM_NOT_EXIST)

    by_shop: dict[str, list] = {}
    for item in selected:
        by_shop.setdefault(item.product.shop_id, []).append(item)

    orders = []
    for shop_items in by_shop.values():
        shop = shop_items[0].product.shop
        lines = [(item.product, item.quantity) for item in shop_items]
        orders.append(await _build_shop_order(user.id, shop, lines, user.address))

    for item in selected:
        cart.items.remove(item)
    cart.total_amount = calculate_total(cart)

    saved = order_repo.save_orders(db, orders)
    logger.info("User %s checked out %d order(s)", user.username, len(saved))
    return saved


async def buy_now(db: Session, request: BuyNowRequest, ctx: SecurityContext) -> OrderModel:
    """Order a single product directly; the cart is left untouched."""
    user = get_current_user(db, ctx)

    if user.address is None:
        raise AppError(ErrorCode.ADDRESS_NOT_FOUND)

    product = product_repo.get_product_by_id(db, request.product_id)
    if product is None:
        raise AppError(ErrorCode.PRODUCT_NOT_EXIST)

    order = await _build_shop_order(
        user.id, product.shop, [(product, request.quantity)], user.address
    )
    (saved,) = order_repo.save_orders(db, [order])
    logger.info("User %s bought product %s directly", user.username, product.id)
    return saved


def get_orders_by_user(db: Session, user_id: str, ctx: SecurityContext) -> list[OrderModel]:
    user = user_repo.get_user_by_id(db, user_id)
    if user is None:
        raise AppError(ErrorCode.USER_NOT_EXIST)
    if not has_role(ctx, "ADMIN") and user.username != get_current_username(ctx):
        raise AppError(ErrorCode.UNAUTHORIZED)
    return order_repo.get_orders_by_user_id(db, user.id)


def get_order(db: Session, order_id: str, ctx: SecurityContext) -> OrderModel:
    order = order_repo.get_order_by_id(db, order_id)
    if order is None:
        raise AppError(ErrorCode.ORDER_NOT_EXIST)
    if not has_role(ctx, "ADMIN") and order.user.username != get_current_username(ctx):
        raise AppError(ErrorCode.UNAUTHORIZED)
    return order


def update_order_status(
    db: Session, order_id: str, status: OrderStatus, ctx: SecurityContext
) -> OrderModel:
    """Admin-only status change; cancelling an order cancels its shipment too."""
    require_admin(ctx)
    order = order_repo.get_order_by_id(db, order_id)
    if order is None:
        raise AppError(ErrorCode.ORDER_NOT_EXIST)
    updated = order_repo.update_order_status(db, order, status)
    logger.info("Order %s is now %s", order_id, status.value)
    return updated
