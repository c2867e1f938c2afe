from sqlalchemy.orm import Session

import marketplace.repositories.cart as cart_repo
import marketplace.repositories.product as product_repo
import marketplace.repositories.user as user_repo
from marketplace.core.security_context import SecurityContext, get_current_username, has_role
from marketplace.db.models.cart import Cart as CartModel
from marketplace.db.models.product import Product as ProductModel
from marketplace.db.models.user import User as UserModel
from marketplace.errors import AppError, ErrorCode
from marketplace.schemas.cart import CartItemAdd


def calculate_total(cart: CartModel) -> float:
    return sum(item.product.price * item.quantity for item in cart.items)


def drop_product_from_carts(product: ProductModel) -> None:
    """Remove a product's lines from every cart holding it and refresh those totals.

    Nothing is committed; the caller deletes the product in the same transaction.
    """
    for item in list(product.cart_items):
        cart = item.cart
        cart.items.remove(item)
        cart.total_amount = calculate_total(cart)


def _authorize_cart_access(db: Session, user_id: str, ctx: SecurityContext) -> UserModel:
    """Carts are visible to their owner and to admins."""
    user = user_repo.get_user_by_id(db, user_id)
    if user is None:
        raise AppError(ErrorCode.USER_NOT_EXIST)
    if not has_role(ctx, "ADMIN") and user.username != get_current_username(ctx):
        raise AppError(ErrorCode.UNAUTHORIZED)
    return user


def add_to_cart(
    db: Session, user_id: str, item_data: CartItemAdd, ctx: SecurityContext
) -> CartModel:
    """Add a product to the cart, merging quantities when the product is already in it."""
    user = _authorize_cart_access(db, user_id, ctx)

    if item_data.quantity <= 0:
        raise AppError(ErrorCode.INVALID_VALUE)

    product = product_repo.get_product_by_id(db, item_data.product_id)
    if product is None:
        raise AppError(ErrorCode.PRODUCT_NOT_EXIST)

    cart = user.cart or cart_repo.create_cart(db, user.id)

    existing = next((item for item in cart.items if item.product_id == product.id), None)
    if existing is not None:
        existing.quantity += item_data.quantity
    else:
        cart_repo.add_item(db, cart, product, item_data.quantity)

    cart.total_amount = calculate_total(cart)
    return cart_repo.save_cart(db, cart)


def remove_from_cart(
    db: Session, user_id: str, product_id: str, ctx: SecurityContext
) -> CartModel:
    user = _authorize_cart_access(db, user_id, ctx)

    cart = user.cart
    if cart is None or not cart.items:
        raise AppError(ErrorCode.CART_EMPTY)

    item = next((item for item in cart.items if item.product_id == product_id), None)
    if item is None:
        raise AppError(ErrorCode.CART_ITEM_NOT_EXIST)

    cart.items.remove(item)
    cart.total_amount = calculate_total(cart)
    return cart_repo.save_cart(db, cart)


def clear_cart(db: Session, user_id: str, ctx: SecurityContext) -> CartModel:
    user = _authorize_cart_access(db, user_id, ctx)

    cart = user.cart
    if cart is None:
        raise AppError(ErrorCode.CART_EMPTY)

    cart.items.clear()
    cart.total_amount = 0
    return cart_repo.save_cart(db, cart)


def get_cart(db: Session, user_id: str, ctx: SecurityContext) -> CartModel:
    """The user's cart; an empty one is created on first access."""
    user = _authorize_cart_access(db, user_id, ctx)
    if user.cart is not None:
        return user.cart
    return cart_repo.create_cart(db, user.id)
